"""Client configuration from the iCommands environment file and overrides."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path

from .exceptions import ConfigError
from .paths import SessionContext, normalize

DEFAULT_ENV_FILE = "~/.irods/irods_environment.json"
DEFAULT_PORT = 1247
DEFAULT_AUTH_FILE = "~/.irods/.irodsA"

# environment-file key -> Config field
_ENV_KEYS = {
    "irods_host": "host",
    "irods_port": "port",
    "irods_user_name": "user",
    "irods_zone_name": "zone",
    "irods_cwd": "cwd",
    "irods_home": "home",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Config:
    """Connection and path settings for one invocation."""
    host: str | None = None
    port: int = DEFAULT_PORT
    user: str | None = None
    zone: str | None = None
    password: str | None = None
    cwd: str | None = None
    home: str | None = None
    env_file: str | None = None

    @property
    def home_collection(self) -> str:
        if self.home:
            return normalize(self.home)
        return f"/{self.zone}/home/{self.user}"

    @property
    def cwd_collection(self) -> str:
        if self.cwd:
            return normalize(self.cwd)
        return self.home_collection

    def validate(self) -> None:
        """Raise :class:`ConfigError` if a required field is missing."""
        missing = [name for name in ("host", "user", "zone") if not getattr(self, name)]
        if missing:
            raise ConfigError(
                f"missing configuration: {', '.join(missing)} "
                f"(set them in {self.env_file or DEFAULT_ENV_FILE} or pass options)"
            )

    def session_context(self) -> SessionContext:
        """Build the :class:`SessionContext` used to resolve remote paths."""
        self.validate()
        try:
            return SessionContext(cwd=self.cwd_collection, home=self.home_collection, zone=self.zone)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable.

    Accepts ``1/0``, ``true/false``, ``yes/no`` and ``on/off`` in any case.
    Any other value raises :class:`ConfigError` instead of falling back to
    *default*.
    """
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"invalid boolean value for {name}: {raw!r}")


def _read_env_file(path: Path) -> dict:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        raise ConfigError(f"cannot read environment file: {exc}", path=str(path)) from exc
    if not isinstance(data, dict):
        raise ConfigError("environment file must contain a JSON object", path=str(path))

    values = {}
    for key, attr in _ENV_KEYS.items():
        if data.get(key) not in (None, ""):
            values[attr] = data[key]
    if "port" in values:
        try:
            values["port"] = int(values["port"])
        except (TypeError, ValueError):
            raise ConfigError(f"invalid irods_port: {values['port']!r}", path=str(path))
    return values


def load_config(env_file: str | None = None, **overrides) -> Config:
    """Load configuration.

    Values come from the environment file (*env_file*, else
    ``$IRODS_ENVIRONMENT_FILE``, else ``~/.irods/irods_environment.json``),
    then from *overrides* whose value is not ``None``.  A missing file is
    not an error; a malformed one is.
    """
    env_file = env_file or os.environ.get("IRODS_ENVIRONMENT_FILE") or DEFAULT_ENV_FILE
    path = Path(env_file).expanduser()
    config = Config(env_file=str(path), **_read_env_file(path))
    given = {k: v for k, v in overrides.items() if v is not None}
    unknown = set(given) - set(Config.__dataclass_fields__)
    if unknown:
        raise TypeError(f"Unknown config fields: {sorted(unknown)}")
    return replace(config, **given)


def stored_password(auth_file: str | None = None) -> str:
    """Return the password saved by ``iinit`` in the scrambled auth file.

    The file is *auth_file*, else ``$IRODS_AUTHENTICATION_FILE``, else
    ``~/.irods/.irodsA``.

    Raises:
        ConfigError: the file is missing, unreadable or empty.
    """
    from irods.password_obfuscation import decode

    auth_file = auth_file or os.environ.get("IRODS_AUTHENTICATION_FILE") or DEFAULT_AUTH_FILE
    path = Path(auth_file).expanduser()
    try:
        with open(path, encoding="utf-8") as f:
            scrambled = f.read().rstrip("\n")
    except OSError as exc:
        raise ConfigError(
            f"no stored password ({exc.strerror or exc}); run iinit or pass --password",
            path=str(path),
        ) from exc
    if not scrambled:
        raise ConfigError("stored password file is empty; run iinit or pass --password",
                          path=str(path))
    return decode(scrambled)
