"""Basic commands: init, ls, rm."""

from __future__ import annotations

import click

from ..listing import Verbosity, list_path
from ..paths import resolve
from ..remove import remove_path
from ._helpers import (
    main,
    _connection_options,
    _get_config,
    _handle_errors,
    _logger,
    _open_remote,
    _session_context,
    _status,
)


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

@main.command()
@_connection_options
@click.pass_context
def init(ctx):
    """Check the configuration and connection, then show the account.

    Settings are read from the iCommands environment file and the
    connection options; nothing is written.
    """
    context = _session_context(ctx)
    config = _get_config(ctx)
    with _handle_errors(), _open_remote(ctx) as remote:
        remote.stat_collection(context.home)
    _status(ctx, f"Connected to {config.host}:{config.port}")
    click.echo(f"irods_host: {config.host}")
    click.echo(f"irods_port: {config.port}")
    click.echo(f"irods_zone_name: {config.zone}")
    click.echo(f"irods_user_name: {config.user}")
    click.echo(f"irods_home: {context.home}")
    click.echo(f"irods_cwd: {context.cwd}")


# ---------------------------------------------------------------------------
# ls
# ---------------------------------------------------------------------------

@main.command()
@_connection_options
@click.argument("paths", nargs=-1)
@click.option("-l", "--long", "long_", is_flag=True, help="One line per replica with owner, size, and status.")
@click.option("-L", "--verylong", "very_long", is_flag=True,
              help="Like -l, plus checksum and physical path of each replica.")
@click.pass_context
def ls(ctx, paths, long_, very_long):
    """List collections and data objects (default: current collection).

    \b
    Replica status marks in long listings:
        &   good
        X   stale
        ?   unknown
    """
    if very_long:
        verbosity = Verbosity.VERY_LONG
    elif long_:
        verbosity = Verbosity.LONG
    else:
        verbosity = Verbosity.SHORT

    context = _session_context(ctx)
    targets = [resolve(context, p) for p in (paths or (".",))]
    with _handle_errors(), _open_remote(ctx) as remote:
        for target in targets:
            click.echo(list_path(remote, target, verbosity), nl=False)


# ---------------------------------------------------------------------------
# rm
# ---------------------------------------------------------------------------

@main.command()
@_connection_options
@click.argument("paths", nargs=-1, required=True)
@click.option("-r", "--recurse", is_flag=True, help="Remove collections and their contents.")
@click.option("-f", "--force", is_flag=True, help="Remove permanently, bypassing the trash.")
@click.pass_context
def rm(ctx, paths, recurse, force):
    """Remove data objects or collections.

    Collections are only removed with -r, even when empty.
    """
    context = _session_context(ctx)
    targets = [resolve(context, p) for p in paths]
    log = _logger(ctx)
    with _handle_errors(), _open_remote(ctx) as remote:
        for target in targets:
            remove_path(remote, target, force=force, recurse=recurse, log=log)
            _status(ctx, f"Removed {target}")
