"""Remote path resolution.

Turns user-supplied paths (relative, ``~``-rooted, zone-rooted) into
canonical absolute remote paths.  Pure string logic: no remote calls.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from .exceptions import ArgumentError


@dataclass(frozen=True)
class SessionContext:
    """Per-invocation path context.

    Attributes:
        cwd: Current working collection (absolute).
        home: Home collection (absolute), what ``~`` expands to.
        zone: Zone name, without slashes.
    """
    cwd: str
    home: str
    zone: str


def normalize(path: str) -> str:
    """Lexically normalize an absolute remote path.

    Collapses ``//``, ``.`` and ``..`` segments and strips any trailing
    slash.  ``..`` above the root stays at the root.
    """
    if not path.startswith("/"):
        raise ArgumentError("remote path must be absolute", path=path)
    parts: list[str] = []
    for seg in path.split("/"):
        if seg in ("", "."):
            continue
        if seg == "..":
            if parts:
                parts.pop()
            continue
        parts.append(seg)
    return "/" + "/".join(parts)


def resolve(context: SessionContext, raw: str) -> str:
    """Resolve *raw* into an absolute, normalized remote path.

    Rules, in order: empty or ``.`` is the cwd; a leading ``~`` (or the
    iCommands form ``/<zone>/~``) is replaced by the home collection; any
    other relative path is joined under the cwd.  The result is always
    normalized, so resolving a resolved path returns it unchanged.
    """
    if raw in ("", "."):
        return normalize(context.cwd)

    zone_home = f"/{context.zone}/~"
    if raw == zone_home or raw.startswith(zone_home + "/"):
        return normalize(posixpath.join(context.home, raw[len(zone_home):].lstrip("/")))

    if raw.startswith("~"):
        return normalize(posixpath.join(context.home, raw[1:].lstrip("/")))

    if raw.startswith("/"):
        return normalize(raw)

    return normalize(posixpath.join(context.cwd, raw))


def parent_of(path: str) -> str:
    """Return the parent collection of a normalized remote path."""
    return posixpath.dirname(path) or "/"


def basename(path: str) -> str:
    """Return the final segment of a normalized remote path."""
    return posixpath.basename(path)


def join(collection: str, name: str) -> str:
    """Join a child *name* under a normalized *collection* path."""
    return normalize(f"{collection}/{name}")
