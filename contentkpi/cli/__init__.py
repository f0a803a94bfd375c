"""contentkpi command line interface."""

from contentkpi.cli.main import cli, main

__all__ = ["cli", "main"]
