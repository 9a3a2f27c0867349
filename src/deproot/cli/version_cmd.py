"""
deproot.cli.version_cmd — deproot version command.

Shows which version of a project is checked out in the workspace:

  deproot version github.com/pkg/errors
    → tag v0.8.0 (645ef00459ed84a119197bfb8d8205042c6df63d)
"""

import click

from deproot.cli._common import context_or_exit, fail
from deproot.errors import DeprootError


@click.command("version")
@click.argument("root")
def version_cmd(root):
    """Show the checked-out version of a project root."""
    ctx = context_or_exit()

    try:
        version = ctx.version_in_workspace(root)
    except DeprootError as e:
        fail(e)

    label = version.kind.value
    if version.name:
        click.echo(f"{label} {version.name} ({version.revision})")
    else:
        click.echo(f"{label} {version.revision}")
