"""Classify a remote path as a collection, a data object, or nothing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .exceptions import RemoteNotFoundError
from .paths import basename, parent_of
from .remote import CollectionInfo, DataObjectInfo, RemoteFS


@dataclass(frozen=True)
class Collection:
    """The path is a collection."""
    info: CollectionInfo

    @property
    def path(self) -> str:
        return self.info.path


@dataclass(frozen=True)
class DataObject:
    """The path is a data object."""
    info: DataObjectInfo

    @property
    def path(self) -> str:
        return self.info.path


@dataclass(frozen=True)
class NotFound:
    """Nothing exists at the path."""
    path: str


RemoteEntry = Union[Collection, DataObject, NotFound]


def classify(remote: RemoteFS, path: str) -> RemoteEntry:
    """Classify the normalized remote *path*.

    Looks the path up as a collection first; only a not-found answer
    leads to a second lookup of the base name inside the parent
    collection.  Every other error propagates.  The path string itself
    (e.g. a trailing slash) is never used to guess the type.
    """
    try:
        return Collection(remote.stat_collection(path))
    except RemoteNotFoundError:
        pass

    if path == "/":
        return NotFound(path)
    try:
        parent = remote.stat_collection(parent_of(path))
        return DataObject(remote.get_data_object(parent, basename(path)))
    except RemoteNotFoundError:
        return NotFound(path)
