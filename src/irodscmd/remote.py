"""Remote filesystem interface and its python-irodsclient implementation.

Everything above this module works against :class:`RemoteFS` and the
plain descriptor dataclasses defined here, never against ``irods``
objects directly.
"""

from __future__ import annotations

import abc
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime

from .config import Config, stored_password
from .exceptions import (
    AlreadyExistsError,
    IRODSCmdError,
    PermissionDeniedError,
    RemoteError,
    RemoteNotFoundError,
    TransportError,
)
from .paths import join

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ReplicaInfo:
    """One physical copy of a data object on a storage resource."""
    owner: str
    number: int
    resource_hierarchy: str
    size: int
    modify_time: datetime | None
    status: str
    checksum: str = ""
    path: str = ""


@dataclass(frozen=True)
class DataObjectInfo:
    """A data object and its replica set.

    Attributes:
        path: Absolute remote path.
        name: Base name.
        size: Size in bytes.
        replicas: Replicas in the order the remote reports them.
    """
    path: str
    name: str
    size: int
    replicas: tuple[ReplicaInfo, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CollectionInfo:
    """A collection.  Children are unknown until listed."""
    path: str
    name: str


# ---------------------------------------------------------------------------
# Interface
# ---------------------------------------------------------------------------

class RemoteFS(abc.ABC):
    """Operations the core needs from a remote hierarchical namespace.

    Lookups raise :class:`~irodscmd.exceptions.RemoteNotFoundError` when
    the entry does not exist; other failures raise the matching
    :class:`~irodscmd.exceptions.IRODSCmdError` subclass.
    """

    @abc.abstractmethod
    def create_collection(self, path: str, recursive: bool = True) -> None:
        """Create a collection.  With *recursive*, an existing one is fine."""

    @abc.abstractmethod
    def upload_file(self, local_path: str, collection_path: str, force: bool = False) -> None:
        """Upload *local_path* into *collection_path* under its base name."""

    @abc.abstractmethod
    def remove_data_object(self, path: str, force: bool = False) -> None:
        """Remove one data object; *force* bypasses the trash."""

    @abc.abstractmethod
    def remove_collection(self, path: str, recursive: bool = False, force: bool = False) -> None:
        """Remove a collection."""

    @abc.abstractmethod
    def stat_collection(self, path: str) -> CollectionInfo:
        """Look up a collection by path."""

    @abc.abstractmethod
    def list_subcollections(self, collection: CollectionInfo) -> list[CollectionInfo]:
        """Return the direct sub-collections of *collection*."""

    @abc.abstractmethod
    def list_data_objects(self, collection: CollectionInfo) -> list[DataObjectInfo]:
        """Return the direct data objects of *collection*."""

    @abc.abstractmethod
    def get_data_object(self, parent: CollectionInfo, name: str) -> DataObjectInfo:
        """Look up the data object *name* inside *parent*."""

    def close(self) -> None:
        """Release the session.  Safe to call more than once."""


# ---------------------------------------------------------------------------
# python-irodsclient implementation
# ---------------------------------------------------------------------------

@contextmanager
def _translate_errors(operation: str, path: str) -> Iterator[None]:
    """Map ``irods.exception`` errors onto the irodscmd taxonomy."""
    from irods import exception as ex

    not_found = (
        ex.CollectionDoesNotExist,
        ex.DataObjectDoesNotExist,
        ex.CAT_UNKNOWN_COLLECTION,
        ex.CAT_UNKNOWN_FILE,
    )
    exists = (
        ex.CATALOG_ALREADY_HAS_ITEM_BY_THAT_NAME,
        ex.CAT_NAME_EXISTS_AS_COLLECTION,
        ex.CAT_NAME_EXISTS_AS_DATAOBJ,
        ex.OVERWRITE_WITHOUT_FORCE_FLAG,
    )
    try:
        yield
    except IRODSCmdError:
        raise
    except not_found as exc:
        raise RemoteNotFoundError("not found", path=path, operation=operation) from exc
    except ex.CAT_NO_ACCESS_PERMISSION as exc:
        raise PermissionDeniedError("permission denied", path=path, operation=operation) from exc
    except exists as exc:
        raise AlreadyExistsError("already exists", path=path, operation=operation) from exc
    except (ex.NetworkException, ex.CAT_INVALID_AUTHENTICATION, ex.CAT_INVALID_USER) as exc:
        raise TransportError(str(exc) or type(exc).__name__, path=path, operation=operation) from exc
    except ex.iRODSException as exc:
        raise RemoteError(str(exc) or type(exc).__name__, path=path, operation=operation) from exc
    except (ConnectionError, TimeoutError) as exc:
        raise TransportError(str(exc), path=path, operation=operation) from exc


def _replica_info(obj, replica) -> ReplicaInfo:
    return ReplicaInfo(
        owner=getattr(obj, "owner_name", "") or "",
        number=int(replica.number),
        resource_hierarchy=getattr(replica, "resc_hier", None) or replica.resource_name,
        size=int(getattr(replica, "size", None) or obj.size or 0),
        modify_time=getattr(replica, "modify_time", None),
        status=str(replica.status),
        checksum=getattr(replica, "checksum", None) or "",
        path=replica.path or "",
    )


def _data_object_info(obj) -> DataObjectInfo:
    return DataObjectInfo(
        path=obj.path,
        name=obj.name,
        size=int(obj.size or 0),
        replicas=tuple(_replica_info(obj, r) for r in obj.replicas),
    )


class IRODSRemoteFS(RemoteFS):
    """:class:`RemoteFS` backed by an ``irods.session.iRODSSession``."""

    def __init__(self, session):
        self._session = session
        self._closed = False

    def __repr__(self) -> str:
        return f"IRODSRemoteFS({self._session.host!r}, zone={self._session.zone!r})"

    def _collection(self, path: str):
        with _translate_errors("stat", path):
            return self._session.collections.get(path)

    def create_collection(self, path: str, recursive: bool = True) -> None:
        with _translate_errors("mkdir", path):
            self._session.collections.create(path, recurse=recursive)

    def upload_file(self, local_path: str, collection_path: str, force: bool = False) -> None:
        from irods import keywords as kw

        target = join(collection_path, os.path.basename(local_path))
        options = {kw.FORCE_FLAG_KW: ""} if force else {}
        with _translate_errors("put", target):
            self._session.data_objects.put(local_path, target, **options)

    def remove_data_object(self, path: str, force: bool = False) -> None:
        with _translate_errors("rm", path):
            self._session.data_objects.unlink(path, force=force)

    def remove_collection(self, path: str, recursive: bool = False, force: bool = False) -> None:
        with _translate_errors("rmdir", path):
            self._session.collections.remove(path, recurse=recursive, force=force)

    def stat_collection(self, path: str) -> CollectionInfo:
        coll = self._collection(path)
        return CollectionInfo(path=coll.path, name=coll.name)

    def list_subcollections(self, collection: CollectionInfo) -> list[CollectionInfo]:
        coll = self._collection(collection.path)
        with _translate_errors("ls", collection.path):
            return [CollectionInfo(path=c.path, name=c.name) for c in coll.subcollections]

    def list_data_objects(self, collection: CollectionInfo) -> list[DataObjectInfo]:
        coll = self._collection(collection.path)
        with _translate_errors("ls", collection.path):
            return [_data_object_info(o) for o in coll.data_objects]

    def get_data_object(self, parent: CollectionInfo, name: str) -> DataObjectInfo:
        path = join(parent.path, name)
        with _translate_errors("stat", path):
            return _data_object_info(self._session.data_objects.get(path))

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._session.cleanup()


def connect(config: Config) -> IRODSRemoteFS:
    """Open an iRODS session described by *config*.

    The session always uses the host, port, user and zone in *config*, so
    option and environment overrides reach the server.  Without an explicit
    password the one saved by ``iinit`` is read with
    :func:`~irodscmd.config.stored_password`.
    """
    from irods.session import iRODSSession

    config.validate()
    password = config.password if config.password is not None else stored_password()
    with _translate_errors("connect", f"{config.host}:{config.port}"):
        session = iRODSSession(
            host=config.host,
            port=config.port,
            user=config.user,
            password=password,
            zone=config.zone,
        )
    logger.debug("opened session to %s:%s as %s#%s", config.host, config.port, config.user, config.zone)
    return IRODSRemoteFS(session)


@contextmanager
def open_remote(config: Config, factory=connect) -> Iterator[RemoteFS]:
    """Yield a :class:`RemoteFS` for one command; always close it on exit."""
    remote = factory(config)
    try:
        yield remote
    finally:
        remote.close()
        logger.debug("closed session")
