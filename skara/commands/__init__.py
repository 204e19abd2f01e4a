"""Subcommands registered with the git-skara dispatcher."""
