"""Exceptions for irodscmd.

Every error carries the offending remote (or local) ``path`` and the
``operation`` that failed, so the CLI can report one actionable line.
Each class also derives from the closest builtin exception, so callers
may catch ``FileNotFoundError`` and friends without importing this module.
"""

from __future__ import annotations


class IRODSCmdError(Exception):
    """Base class for all irodscmd errors."""

    def __init__(self, message: str, *, path: str | None = None,
                 operation: str | None = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.operation = operation

    def __str__(self) -> str:
        if self.operation and self.path:
            return f"{self.operation} {self.path}: {self.message}"
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class RemoteNotFoundError(IRODSCmdError, FileNotFoundError):
    """The collection or data object does not exist."""


class PermissionDeniedError(IRODSCmdError, PermissionError):
    """The remote rejected the operation for lack of access."""


class AlreadyExistsError(IRODSCmdError, FileExistsError):
    """The target already exists.

    Benign when creating a collection during an upload: mirroring an
    existing remote structure is the normal state of a repeated upload.
    """


class SafetyGateError(IRODSCmdError, IsADirectoryError):
    """A destructive operation was refused because a safety flag is unset."""


class TransportError(IRODSCmdError, ConnectionError):
    """The session or connection to the remote failed."""


class ArgumentError(IRODSCmdError, ValueError):
    """Invalid command arguments (e.g. no paths supplied)."""


class ConfigError(IRODSCmdError):
    """Configuration is missing, malformed, or incomplete."""


class RemoteError(IRODSCmdError):
    """Any other error reported by the remote."""
