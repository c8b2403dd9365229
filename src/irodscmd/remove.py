"""Remove data objects and collections."""

from __future__ import annotations

import logging

from .classify import Collection, DataObject, NotFound, classify
from .exceptions import RemoteNotFoundError, SafetyGateError
from .remote import RemoteFS

logger = logging.getLogger(__name__)


def remove_path(
    remote: RemoteFS,
    path: str,
    *,
    force: bool = False,
    recurse: bool = False,
    log: logging.Logger | None = None,
) -> None:
    """Remove the data object or collection at the resolved *path*.

    The path is classified exactly once.  A collection is refused unless
    *recurse* is set, whether or not it is empty, and the refusal happens
    before any delete is issued.  *force* is passed through unchanged and
    bypasses the trash where the remote supports it.

    Raises:
        RemoteNotFoundError: nothing exists at *path*.
        SafetyGateError: *path* is a collection and *recurse* is not set.
    """
    log = log or logger
    entry = classify(remote, path)

    if isinstance(entry, NotFound):
        raise RemoteNotFoundError("no such data object or collection",
                                  path=path, operation="rm")

    if isinstance(entry, DataObject):
        log.debug("removing data object %s (force=%s)", path, force)
        remote.remove_data_object(path, force=force)
        return

    if isinstance(entry, Collection):
        if not recurse:
            raise SafetyGateError("is a collection (use -r to remove it)",
                                  path=path, operation="rm")
        log.debug("removing collection %s (force=%s)", path, force)
        remote.remove_collection(path, recursive=True, force=force)
        return

    raise TypeError(f"Unknown remote entry: {entry!r}")
