"""
deproot.cli — CLI entry point.

Commands:
  deproot root [-C dir]      — Show the project root
  deproot version <root>     — Show the checked-out version of a project
  deproot status [-C dir]    — Show manifest and lock summary
"""

import logging

import click

from deproot.cli.root_cmd import root_cmd
from deproot.cli.version_cmd import version_cmd
from deproot.cli.status_cmd import status_cmd


@click.group()
@click.version_option(package_name="deproot")
@click.option("-v", "--verbose", is_flag=True, default=False,
              help="Enable debug logging")
def main(verbose):
    """deproot — Workspace context for dependency-managed projects."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


main.add_command(root_cmd, "root")
main.add_command(version_cmd, "version")
main.add_command(status_cmd, "status")
