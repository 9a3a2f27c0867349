"""Shared helpers for CLI commands."""

import sys

import click

from deproot.context import Context, new_context
from deproot.errors import DeprootError


def fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def context_or_exit() -> Context:
    try:
        return new_context()
    except DeprootError as e:
        fail(e)
