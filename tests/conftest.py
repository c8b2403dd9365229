"""Shared fixtures for irodscmd tests."""

import os
from datetime import datetime

import pytest
from click.testing import CliRunner

from irodscmd.exceptions import AlreadyExistsError, RemoteError, RemoteNotFoundError
from irodscmd.paths import SessionContext, basename, join, normalize, parent_of
from irodscmd.remote import CollectionInfo, DataObjectInfo, RemoteFS, ReplicaInfo


ZONE = "tempZone"
HOME = "/tempZone/home/alice"


# ---------------------------------------------------------------------------
# In-memory remote
# ---------------------------------------------------------------------------

class FakeRemote(RemoteFS):
    """In-memory :class:`RemoteFS` that records every call in order.

    ``calls`` holds ``(method, *args)`` tuples.  ``fail`` maps
    ``(method, path)`` to an exception raised instead of performing it.
    """

    def __init__(self, collections=(), objects=()):
        self.collections = {"/"}
        self.objects = {}
        self.calls = []
        self.fail = {}
        self.closed = False
        for c in collections:
            self.mkdirs(c)
        for o in objects:
            self.add_object(o)

    # -- setup helpers ------------------------------------------------------

    def mkdirs(self, path):
        path = normalize(path)
        while path != "/":
            self.collections.add(path)
            path = parent_of(path)

    def add_object(self, path, size=0, replicas=None):
        path = normalize(path)
        self.mkdirs(parent_of(path))
        if replicas is None:
            replicas = (ReplicaInfo(owner="alice", number=0, resource_hierarchy="demoResc",
                                    size=size, modify_time=datetime(2024, 1, 15, 14, 30),
                                    status="1", checksum="sha2:abc",
                                    path=f"/var/lib/irods/Vault{path}"),)
        self.objects[path] = DataObjectInfo(path=path, name=basename(path), size=size,
                                            replicas=tuple(replicas))
        return self.objects[path]

    def _record(self, method, *args):
        self.calls.append((method, *args))
        path = args[0] if args else None
        exc = self.fail.get((method, path))
        if exc is not None:
            raise exc

    def deletes(self):
        return [c for c in self.calls if c[0] in ("remove_data_object", "remove_collection")]

    # -- RemoteFS -----------------------------------------------------------

    def create_collection(self, path, recursive=True):
        self._record("create_collection", path, recursive)
        if path in self.collections:
            if recursive:
                return
            raise AlreadyExistsError("already exists", path=path, operation="mkdir")
        if not recursive and parent_of(path) not in self.collections:
            raise RemoteNotFoundError("not found", path=parent_of(path), operation="mkdir")
        self.mkdirs(path)

    def upload_file(self, local_path, collection_path, force=False):
        self._record("upload_file", local_path, collection_path, force)
        if collection_path not in self.collections:
            raise RemoteNotFoundError("not found", path=collection_path, operation="put")
        target = join(collection_path, os.path.basename(local_path))
        if target in self.objects and not force:
            raise AlreadyExistsError("already exists", path=target, operation="put")
        self.add_object(target, size=os.path.getsize(local_path))

    def remove_data_object(self, path, force=False):
        self._record("remove_data_object", path, force)
        if path not in self.objects:
            raise RemoteNotFoundError("not found", path=path, operation="rm")
        del self.objects[path]

    def remove_collection(self, path, recursive=False, force=False):
        self._record("remove_collection", path, recursive, force)
        if path not in self.collections:
            raise RemoteNotFoundError("not found", path=path, operation="rmdir")
        prefix = path + "/"
        children = [p for p in self.collections | set(self.objects) if p.startswith(prefix)]
        if children and not recursive:
            raise RemoteError("collection not empty", path=path, operation="rmdir")
        for p in children:
            self.collections.discard(p)
            self.objects.pop(p, None)
        self.collections.discard(path)

    def stat_collection(self, path):
        self._record("stat_collection", path)
        if path not in self.collections:
            raise RemoteNotFoundError("not found", path=path, operation="stat")
        return CollectionInfo(path=path, name=basename(path))

    def list_subcollections(self, collection):
        self._record("list_subcollections", collection.path)
        return [CollectionInfo(path=p, name=basename(p))
                for p in self.collections if p != "/" and parent_of(p) == collection.path]

    def list_data_objects(self, collection):
        self._record("list_data_objects", collection.path)
        return [o for p, o in self.objects.items() if parent_of(p) == collection.path]

    def get_data_object(self, parent, name):
        path = join(parent.path, name)
        self._record("get_data_object", path)
        if path not in self.objects:
            raise RemoteNotFoundError("not found", path=path, operation="stat")
        return self.objects[path]

    def close(self):
        self.closed = True


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_remote():
    """Factory for an empty (or seeded) :class:`FakeRemote`."""
    return FakeRemote


@pytest.fixture
def context():
    return SessionContext(cwd=f"{HOME}/work", home=HOME, zone=ZONE)


@pytest.fixture
def remote():
    """Remote with a home collection holding a few entries.

    Tree:
        ~/hello.txt, ~/data/b.bin, ~/data/a.bin, ~/data/z/, ~/data/y/, ~/work/
    """
    fake = FakeRemote(collections=[f"{HOME}/work", f"{HOME}/data/z", f"{HOME}/data/y"])
    fake.add_object(f"{HOME}/hello.txt", size=12)
    fake.add_object(f"{HOME}/data/b.bin", size=2)
    fake.add_object(f"{HOME}/data/a.bin", size=1)
    return fake


@pytest.fixture
def local_tree(tmp_path):
    """Local tree ``root/{a.txt, sub/b.txt}``."""
    root = tmp_path / "root"
    root.mkdir()
    (root / "a.txt").write_text("aaa")
    sub = root / "sub"
    sub.mkdir()
    (sub / "b.txt").write_text("bbb")
    return root


# ---------------------------------------------------------------------------
# CLI fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep the user's iRODS settings out of the tests."""
    for name in ("IRODS_HOST", "IRODS_PORT", "IRODS_USER_NAME", "IRODS_ZONE_NAME",
                 "IRODS_PASSWORD", "IRODSCMD_VERBOSE", "IRODSCMD_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("IRODS_ENVIRONMENT_FILE", str(tmp_path / "no_such_env.json"))
    monkeypatch.setenv("IRODS_AUTHENTICATION_FILE", str(tmp_path / "no_such_irodsA"))


@pytest.fixture
def cli_args():
    """Connection options for a CLI invocation against the fake remote."""
    return ["--host", "irods.example.org", "--user", "alice", "--zone", ZONE]


@pytest.fixture
def invoke(runner, remote, cli_args):
    """Invoke the CLI with *remote* injected in place of a real session."""
    from irodscmd.cli import main

    def _invoke(*args):
        return runner.invoke(main, [*cli_args, *args],
                             obj={"remote_factory": lambda config: remote})
    return _invoke
