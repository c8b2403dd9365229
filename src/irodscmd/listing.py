"""List collections and describe data objects."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from .exceptions import RemoteNotFoundError
from .paths import basename, parent_of
from .remote import CollectionInfo, DataObjectInfo, RemoteFS


class Verbosity(str, Enum):
    """Listing detail: ``SHORT``, ``LONG`` (per replica), ``VERY_LONG``."""
    SHORT = "short"
    LONG = "long"
    VERY_LONG = "very-long"

    def __str__(self) -> str:
        return self.value


_STATUS_MARKS = {
    "0": "X",  # stale
    "1": "&",  # good
}


def status_mark(status) -> str:
    """Return the one-character mark for a replica status code."""
    return _STATUS_MARKS.get(str(status), "?")


def format_time(value: datetime | None) -> str:
    """Format a modify time as ``YYYY-MM-DD.HH:MM``; ``None`` gives ``""``."""
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d.%H:%M")


def _format_data_object(obj: DataObjectInfo, verbosity: Verbosity) -> list[str]:
    if verbosity == Verbosity.SHORT:
        return [f"  {obj.name}"]

    lines = []
    for r in obj.replicas:
        lines.append(
            f"  {r.owner}\t{r.number}\t{r.resource_hierarchy}\t{obj.size}\t"
            f"{format_time(r.modify_time)}\t{status_mark(r.status)}\t{obj.name}"
        )
        if verbosity == Verbosity.VERY_LONG:
            lines.append(f"    {r.checksum}\t{r.path}")
    return lines


def format_listing(
    data_objects: list[DataObjectInfo],
    collections: list[CollectionInfo],
    verbosity: Verbosity = Verbosity.SHORT,
) -> list[str]:
    """Render a collection's contents: data objects, then sub-collections.

    Each group is sorted by name; the sort is stable.
    """
    lines = []
    for obj in sorted(data_objects, key=lambda o: o.name):
        lines.extend(_format_data_object(obj, verbosity))
    for coll in sorted(collections, key=lambda c: c.name):
        lines.append(f"  C- {coll.path}")
    return lines


def list_path(remote: RemoteFS, path: str, verbosity: Verbosity = Verbosity.SHORT) -> str:
    """Return the listing text for the resolved remote *path*.

    A collection lists its contents.  When the collection lookup says
    not-found, *path* is looked up as a data object in its parent; any
    failure there propagates.  The whole text is built before returning,
    so a failure never leaves partial output behind.
    """
    try:
        collection = remote.stat_collection(path)
    except RemoteNotFoundError:
        collection = None

    if collection is not None:
        collections = remote.list_subcollections(collection)
        data_objects = remote.list_data_objects(collection)
        lines = format_listing(data_objects, collections, verbosity)
    else:
        if path == "/":
            raise RemoteNotFoundError("not found", path=path, operation="ls")
        parent = remote.stat_collection(parent_of(path))
        obj = remote.get_data_object(parent, basename(path))
        lines = _format_data_object(obj, verbosity)

    return "".join(line + "\n" for line in lines)
