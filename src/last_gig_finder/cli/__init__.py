"""Typer CLI: `setup`, `search` and `doctor`."""
