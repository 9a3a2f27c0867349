"""
deproot.cli.status_cmd — deproot status command.

Shows project status: root, declared dependencies, lock contents.
"""

import click

from deproot.cli._common import context_or_exit, fail
from deproot.errors import DeprootError


@click.command("status")
@click.option("-C", "--dir", "project_dir", default=None,
              help="Project directory (default: search upward from pwd)")
def status_cmd(project_dir):
    """Show manifest and lock status."""
    ctx = context_or_exit()

    try:
        project = ctx.load_project(project_dir, search_up=True)
    except DeprootError as e:
        fail(e)

    click.echo(f"Project:    {project.import_root}")
    click.echo(f"Directory:  {project.abs_root}")

    deps = project.manifest.dependencies
    click.echo(f"\nDependencies ({len(deps)}):")
    for name in sorted(deps):
        click.echo(f"  {name}")

    click.echo()
    lock = project.lock
    if lock is None:
        click.echo("No lock.json found.")
        return

    click.echo(f"Memo:       {lock.memo or '(none)'}")
    click.echo(f"Locked ({len(lock.projects)}):")
    for lp in lock.projects:
        click.echo(f"  {lp.name} @ {lp.version!r}")
