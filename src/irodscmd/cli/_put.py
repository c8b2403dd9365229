"""The put command."""

from __future__ import annotations

import os

import click

from ..paths import resolve
from ..upload import UploadReport, put_tree
from ._helpers import (
    main,
    _connection_options,
    _handle_errors,
    _logger,
    _open_remote,
    _session_context,
    _status,
)


@main.command()
@_connection_options
@click.argument("args", nargs=-1, required=True)
@click.option("-f", "--force", is_flag=True, help="Overwrite existing data objects.")
@click.option("--ignore-errors", is_flag=True, default=False,
              help="Keep going past entries that fail; exit 1 at the end if any did.")
@click.pass_context
def put(ctx, args, force, ignore_errors):
    """Upload local files or directories into a collection.

    The last argument is the destination collection; all preceding
    arguments are sources.  With a single argument the source goes into
    the current collection.  Directories are uploaded recursively as
    sub-collections named after them.

    \b
    Examples:
        irodscmd put data.csv                   # into current collection
        irodscmd put a.txt b.txt ~/inbox        # several files
        irodscmd put results/ /tempZone/home/alice/projects
    """
    if len(args) == 1:
        sources, dest = args, "."
    else:
        sources, dest = args[:-1], args[-1]

    context = _session_context(ctx)
    target = resolve(context, dest)
    log = _logger(ctx)

    report = UploadReport()
    with _handle_errors(), _open_remote(ctx) as remote:
        for src in sources:
            local = os.path.expanduser(src)
            one = put_tree(remote, local, target, force=force,
                           ignore_errors=ignore_errors, log=log)
            report.extend(one)
            if one.errors:
                _status(ctx, f"Failed {len(one.errors)} of {len(one.outcomes)} entries in {src}")
            else:
                _status(ctx, f"Uploaded {src} -> {target}")

    for outcome in report.errors:
        click.echo(f"ERROR: {outcome.local_path}: {outcome.error}", err=True)
    if report.errors:
        ctx.exit(1)
