"""Server-owned field policy for synthetic check documents.

The remote API stamps fields onto stored checks that users never author:
timestamps, a revision counter, bookkeeping labels and a permissions block
enriched on every read. Those fields must not make a stored record look stale.

The policy is a static table. A new server-injected field needs a new entry
here and a version bump; nothing is inferred from the documents themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from typing import TYPE_CHECKING, Final, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Iterable

PathSegment: TypeAlias = str
DocumentPath: TypeAlias = tuple[PathSegment, ...]
PathPattern: TypeAlias = tuple[PathSegment, ...]

_NO_DEFAULT: Final = object()


def matches(pattern: PathPattern, path: DocumentPath) -> bool:
    """Return whether ``path`` is matched segment-by-segment by ``pattern``.

    Segments use shell-style wildcards, so ``"*"`` matches any key or sequence
    index and ``"dash0.com/*"`` matches every key with that prefix.
    """

    if len(pattern) != len(path):
        return False
    return all(fnmatchcase(segment, glob) for glob, segment in zip(pattern, path, strict=True))


def _any_match(patterns: Iterable[PathPattern], path: DocumentPath) -> bool:
    return any(matches(pattern, path) for pattern in patterns)


@dataclass(frozen=True, slots=True)
class IgnorePolicy:
    version: int
    ignored: tuple[PathPattern, ...] = ()
    unordered: tuple[PathPattern, ...] = ()
    defaults: tuple[tuple[PathPattern, object], ...] = field(default_factory=tuple)

    def is_ignored(self, path: DocumentPath) -> bool:
        return _any_match(self.ignored, path)

    def is_unordered(self, path: DocumentPath) -> bool:
        return _any_match(self.unordered, path)

    def default_for(self, path: DocumentPath) -> object:
        """Return the documented default at ``path`` or ``NO_DEFAULT``."""

        for pattern, default in self.defaults:
            if matches(pattern, path):
                return default
        return _NO_DEFAULT

    def has_default(self, path: DocumentPath) -> bool:
        return self.default_for(path) is not _NO_DEFAULT


NO_DEFAULT: Final = _NO_DEFAULT

DEFAULT_POLICY: Final = IgnorePolicy(
    version=1,
    ignored=(
        ("metadata", "createdAt"),
        ("metadata", "updatedAt"),
        ("metadata", "version"),
        ("metadata", "labels", "dash0.com/*"),
        ("metadata", "annotations", "dash0.com/*"),
        # stored in a separate table and merged into every read
        ("spec", "permissions"),
    ),
    unordered=(
        ("spec", "plugin", "spec", "assertions", "*"),
        ("spec", "notifications", "channels"),
    ),
    defaults=(
        (("metadata", "labels"), {}),
        (("metadata", "annotations"), {}),
    ),
)


__all__ = [
    "DEFAULT_POLICY",
    "NO_DEFAULT",
    "DocumentPath",
    "IgnorePolicy",
    "PathPattern",
    "matches",
]
