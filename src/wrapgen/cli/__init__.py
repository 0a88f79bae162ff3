"""Wrapgen command-line interface."""

from wrapgen.cli.main import cli, main

__all__ = ["cli", "main"]
