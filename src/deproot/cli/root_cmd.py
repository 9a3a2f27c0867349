"""
deproot.cli.root_cmd — deproot root command.

Prints the project directory and its import root.
"""

import click

from deproot.cli._common import context_or_exit, fail
from deproot.errors import DeprootError


@click.command("root")
@click.option("-C", "--dir", "project_dir", default=None,
              help="Project directory (default: search upward from pwd)")
def root_cmd(project_dir):
    """Show the project root."""
    ctx = context_or_exit()

    try:
        project = ctx.load_project(project_dir, search_up=True)
    except DeprootError as e:
        fail(e)

    click.echo(f"Directory:  {project.abs_root}")
    click.echo(f"Root:       {project.import_root}")
