"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager

import click

from ..config import Config, env_flag, load_config
from ..exceptions import ConfigError, IRODSCmdError
from ..paths import SessionContext
from ..remote import connect, open_remote


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _logger(ctx) -> logging.Logger:
    """Return the logger handed to the core operations."""
    return ctx.obj.get("logger") or logging.getLogger("irodscmd")


def _store_setting(ctx, param, value):
    """Click callback: store a connection option in the context."""
    ctx.ensure_object(dict)
    if value is not None:
        ctx.obj.setdefault("settings", {})[param.name] = value
    return value


_CONNECTION_OPTIONS = [
    (("--env-file", "env_file"),
     dict(type=click.Path(dir_okay=False), envvar="IRODS_ENVIRONMENT_FILE",
          help="iCommands environment file (default ~/.irods/irods_environment.json).")),
    (("--host", "host"), dict(envvar="IRODS_HOST", help="iRODS server host.")),
    (("--port", "port"), dict(type=int, envvar="IRODS_PORT", help="iRODS server port (default 1247).")),
    (("--user", "user"), dict(envvar="IRODS_USER_NAME", help="iRODS user name.")),
    (("--zone", "zone"), dict(envvar="IRODS_ZONE_NAME", help="iRODS zone name.")),
    (("--password", "password"),
     dict(envvar="IRODS_PASSWORD",
          help="Password (default: the one saved by iinit in ~/.irods/.irodsA).")),
]


def _connection_options(f):
    """Shared connection options for the group and every command.

    Values land in ``ctx.obj["settings"]`` so they may be given before or
    after the command name.
    """
    for decls, kwargs in reversed(_CONNECTION_OPTIONS):
        f = click.option(*decls, expose_value=False, callback=_store_setting,
                         is_eager=True, **kwargs)(f)
    return f


def _get_config(ctx) -> Config:
    """Load (once per invocation) the configuration for this command."""
    config = ctx.obj.get("config")
    if config is None:
        settings = dict(ctx.obj.get("settings", {}))
        env_file = settings.pop("env_file", None)
        try:
            config = load_config(env_file, **settings)
        except ConfigError as exc:
            raise click.ClickException(str(exc))
        ctx.obj["config"] = config
    return config


def _session_context(ctx) -> SessionContext:
    try:
        return _get_config(ctx).session_context()
    except ConfigError as exc:
        raise click.ClickException(str(exc))


@contextmanager
def _open_remote(ctx):
    """Open the remote for one command; the session is always released.

    Tests may put a ``remote_factory`` callable (taking a
    :class:`~irodscmd.config.Config`) into ``ctx.obj``.
    """
    factory = ctx.obj.get("remote_factory") or connect
    with open_remote(_get_config(ctx), factory) as remote:
        yield remote


@contextmanager
def _handle_errors():
    """Turn library errors into a one-line ``Error: ...`` and exit status 1."""
    try:
        yield
    except IRODSCmdError as exc:
        raise click.ClickException(str(exc))
    except OSError as exc:
        raise click.ClickException(str(exc))


def _configure_logging(verbose: bool, debug: bool) -> None:
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("irodscmd").setLevel(level)


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@_connection_options
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr (or set IRODSCMD_VERBOSE).")
@click.option("--debug", is_flag=True, help="Debug logging on stderr (or set IRODSCMD_DEBUG).")
@click.pass_context
def main(ctx, verbose, debug):
    """irodscmd: upload, list, and remove iRODS data.

    \b
    Quick start:
      irodscmd init
      irodscmd put results/ /tempZone/home/alice
      irodscmd ls -l results
      irodscmd rm -r results

    \b
    Remote paths may be absolute (/zone/home/alice/x), relative to the
    current collection (x), or home-relative (~/x).
    Connection settings come from ~/.irods/irods_environment.json and may
    be overridden by options or IRODS_* environment variables.
    """
    ctx.ensure_object(dict)
    try:
        verbose = verbose or env_flag("IRODSCMD_VERBOSE")
        debug = debug or env_flag("IRODSCMD_DEBUG")
    except ConfigError as exc:
        raise click.ClickException(str(exc))
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose, debug)
