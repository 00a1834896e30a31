"""Semantic comparison of normalized check documents."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .policy import DEFAULT_POLICY

if TYPE_CHECKING:
    from collections.abc import Iterator

    from checkstate.domain.model import NormalizedDocument

    from .policy import DocumentPath, IgnorePolicy


@dataclass(frozen=True, slots=True)
class Difference:
    path: DocumentPath
    reason: str

    def __str__(self) -> str:
        location = ".".join(self.path) or "<root>"
        return f"{location}: {self.reason}"


def equivalent(
    a: NormalizedDocument,
    b: NormalizedDocument,
    *,
    policy: IgnorePolicy = DEFAULT_POLICY,
) -> bool:
    """Return whether two normalized documents carry the same user-owned content."""

    _require_same_policy(a, b)
    return values_equivalent(a.root, b.root, path=(), policy=policy)


def differences(
    a: NormalizedDocument,
    b: NormalizedDocument,
    *,
    policy: IgnorePolicy = DEFAULT_POLICY,
) -> list[Difference]:
    """List every path at which ``a`` and ``b`` disagree."""

    _require_same_policy(a, b)
    return list(_iter_differences(a.root, b.root, (), policy))


def values_equivalent(
    a: object,
    b: object,
    *,
    path: DocumentPath = (),
    policy: IgnorePolicy = DEFAULT_POLICY,
) -> bool:
    return next(_iter_differences(a, b, path, policy), None) is None


def _require_same_policy(a: NormalizedDocument, b: NormalizedDocument) -> None:
    if a.policy_version != b.policy_version:
        msg = (
            "Cannot compare documents normalized under different policies "
            f"({a.policy_version} != {b.policy_version})"
        )
        raise ValueError(msg)


def _iter_differences(
    a: object,
    b: object,
    path: DocumentPath,
    policy: IgnorePolicy,
) -> Iterator[Difference]:
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        yield from _mapping_differences(a, b, path, policy)
    elif isinstance(a, list) and isinstance(b, list):
        if policy.is_unordered(path):
            yield from _unordered_differences(a, b, path, policy)
        else:
            yield from _ordered_differences(a, b, path, policy)
    elif isinstance(a, Mapping | list) or isinstance(b, Mapping | list):
        yield Difference(path, f"{_kind(a)} != {_kind(b)}")
    elif not _scalars_equal(a, b):
        yield Difference(path, f"{a!r} != {b!r}")


def _mapping_differences(
    a: Mapping[str, object],
    b: Mapping[str, object],
    path: DocumentPath,
    policy: IgnorePolicy,
) -> Iterator[Difference]:
    for key in sorted(a.keys() | b.keys()):
        child_path = (*path, key)
        if key not in b:
            yield Difference(child_path, "removed")
        elif key not in a:
            yield Difference(child_path, "added")
        else:
            yield from _iter_differences(a[key], b[key], child_path, policy)


def _ordered_differences(
    a: list[object],
    b: list[object],
    path: DocumentPath,
    policy: IgnorePolicy,
) -> Iterator[Difference]:
    if len(a) != len(b):
        yield Difference(path, f"length {len(a)} != {len(b)}")
        return
    for index, (left, right) in enumerate(zip(a, b, strict=True)):
        yield from _iter_differences(left, right, (*path, str(index)), policy)


def _unordered_differences(
    a: list[object],
    b: list[object],
    path: DocumentPath,
    policy: IgnorePolicy,
) -> Iterator[Difference]:
    if len(a) != len(b):
        yield Difference(path, f"length {len(a)} != {len(b)}")
        return
    unmatched = list(b)
    for index, item in enumerate(a):
        item_path = (*path, str(index))
        for position, candidate in enumerate(unmatched):
            if values_equivalent(item, candidate, path=item_path, policy=policy):
                del unmatched[position]
                break
        else:
            yield Difference(item_path, "no matching element")


def _scalars_equal(a: object, b: object) -> bool:
    # bool is an int subclass; keep true/false distinct from 1/0
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, int | float) and isinstance(b, int | float):
        # two NaNs denote the same document value
        if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
            return True
        return a == b
    if type(a) is not type(b):
        return False
    return a == b


def _kind(value: object) -> str:
    if isinstance(value, Mapping):
        return "mapping"
    if isinstance(value, list):
        return "sequence"
    return type(value).__name__


__all__ = ["Difference", "differences", "equivalent", "values_equivalent"]
