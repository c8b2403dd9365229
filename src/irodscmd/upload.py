"""Recursive upload of local files and directory trees."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from .exceptions import AlreadyExistsError, IRODSCmdError
from .paths import join
from .remote import RemoteFS

logger = logging.getLogger(__name__)


@dataclass
class OperationOutcome:
    """Result of one upload step.

    Attributes:
        local_path: The local file or directory.
        remote_path: The data object or collection it maps to.
        kind: ``"file"`` or ``"collection"``.
        error: ``None`` on success, else the exception that stopped it.
    """
    local_path: str
    remote_path: str
    kind: str
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class UploadReport:
    """All outcomes of a :func:`put_tree` call, in the order they ran."""
    outcomes: list[OperationOutcome] = field(default_factory=list)

    @property
    def uploaded(self) -> list[OperationOutcome]:
        return [o for o in self.outcomes if o.ok and o.kind == "file"]

    @property
    def errors(self) -> list[OperationOutcome]:
        return [o for o in self.outcomes if not o.ok]

    def extend(self, other: UploadReport) -> None:
        self.outcomes.extend(other.outcomes)


def _remote_name(local_path: str) -> str:
    return os.path.basename(os.path.abspath(local_path))


def _sorted_entries(local_dir: str) -> list[os.DirEntry]:
    with os.scandir(local_dir) as it:
        return sorted(it, key=lambda e: e.name)


def put_tree(
    remote: RemoteFS,
    local_root: str | os.PathLike[str],
    target_collection: str,
    *,
    force: bool = False,
    ignore_errors: bool = False,
    log: logging.Logger | None = None,
) -> UploadReport:
    """Mirror *local_root* into the remote *target_collection*.

    A file is uploaded into *target_collection* under its base name.  A
    directory becomes a sub-collection of the same name, created before
    anything is uploaded into it, and its entries are visited depth-first
    in name order.  Names come from the absolute local path, so ``.`` and
    ``..`` map to the real directory name.

    By default the first failure raises and stops the walk.  With
    *ignore_errors* every failure is recorded in the returned report and
    the walk goes on; a directory whose collection cannot be created is
    skipped as a whole.

    Raises:
        FileNotFoundError: *local_root* does not exist.
        IRODSCmdError: a remote step failed (unless *ignore_errors*).
    """
    log = log or logger
    report = UploadReport()
    local_root = os.path.normpath(os.fspath(local_root))
    if not os.path.exists(local_root):
        raise FileNotFoundError(f"No such file or directory: {local_root}")
    _put_one(remote, local_root, target_collection, report,
             force=force, ignore_errors=ignore_errors, log=log)
    return report


def _put_one(remote, local_path, target_collection, report, *, force, ignore_errors, log):
    if not os.path.isdir(local_path):
        remote_path = join(target_collection, _remote_name(local_path))
        outcome = OperationOutcome(local_path, remote_path, "file")
        report.outcomes.append(outcome)
        log.debug("uploading file %s to collection %s", local_path, target_collection)
        try:
            remote.upload_file(local_path, target_collection, force=force)
        except (IRODSCmdError, OSError) as exc:
            outcome.error = exc
            if not ignore_errors:
                raise
        return

    collection = join(target_collection, _remote_name(local_path))
    outcome = OperationOutcome(local_path, collection, "collection")
    report.outcomes.append(outcome)
    log.debug("creating collection %s", collection)
    try:
        try:
            remote.create_collection(collection, recursive=True)
        except AlreadyExistsError:
            log.debug("collection %s already exists", collection)
        entries = _sorted_entries(local_path)
    except (IRODSCmdError, OSError) as exc:
        outcome.error = exc
        if not ignore_errors:
            raise
        return

    for entry in entries:
        _put_one(remote, entry.path, collection, report,
                 force=force, ignore_errors=ignore_errors, log=log)
