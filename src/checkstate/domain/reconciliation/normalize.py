"""Normalization stage: parse a check document into a canonical tree.

Responsibilities of this stage:
- accept both the indentation-based (YAML) and bracket-delimited (JSON)
  serializations and produce the same tree for equivalent content
- drop server-owned paths listed in the ignore policy
- fold documented defaults away so "absent" and "set to default" agree
- never raise on malformed input; report a ``ParseError`` value instead
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping, Set
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Final

import yaml

from checkstate.domain.model import NormalizedDocument, ParseError

from .compare import values_equivalent
from .policy import DEFAULT_POLICY

if TYPE_CHECKING:
    from .policy import DocumentPath, IgnorePolicy

log = logging.getLogger(__name__)

_TIMESTAMP_TAG: Final = "tag:yaml.org,2002:timestamp"
_BOOL_TAG: Final = "tag:yaml.org,2002:bool"
_BOOL_PATTERN: Final = re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$")
_DROP: Final = object()

TOO_DEEP_REASON: Final = "document nests too deeply or recursively"


class _DocumentLoader(yaml.SafeLoader):
    """Safe loader whose implicit types match what JSON can express.

    Unquoted timestamps stay strings, and only ``true``/``false`` are
    booleans, so ``on``, ``yes`` and friends stay strings as in YAML 1.2.
    """


_DocumentLoader.yaml_implicit_resolvers = {
    first_char: [
        (tag, regexp) for tag, regexp in resolvers if tag not in {_TIMESTAMP_TAG, _BOOL_TAG}
    ]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_DocumentLoader.add_implicit_resolver(_BOOL_TAG, _BOOL_PATTERN, list("tTfF"))


class _DocumentSyntaxError(ValueError):
    def __init__(self, reason: str, offset: int | None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.offset = offset

    def as_parse_error(self) -> ParseError:
        return ParseError(reason=self.reason, offset=self.offset)


@dataclass(frozen=True, slots=True)
class NormalizeResult:
    document: NormalizedDocument | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def normalize(raw: str, *, policy: IgnorePolicy = DEFAULT_POLICY) -> NormalizeResult:
    """Parse ``raw`` and return its canonical, policy-filtered form."""

    try:
        tree = _parse(raw)
        if tree is None:
            tree = {}
        if not isinstance(tree, Mapping):
            kind = type(tree).__name__
            return NormalizeResult(
                error=ParseError(
                    reason=f"expected a mapping at the top level, got {kind}", offset=0
                )
            )
        root = normalize_tree(tree, policy=policy)
    except _DocumentSyntaxError as exc:
        log.debug("Document failed to parse: %s", exc.reason)
        return NormalizeResult(error=exc.as_parse_error())
    except RecursionError:
        # deeply nested input, or an alias that refers to its own ancestor
        log.debug("Document nests too deeply to normalize")
        return NormalizeResult(error=ParseError(reason=TOO_DEEP_REASON, offset=None))

    return NormalizeResult(document=NormalizedDocument(root=root, policy_version=policy.version))


def normalize_tree(
    tree: Mapping[object, object],
    *,
    policy: IgnorePolicy = DEFAULT_POLICY,
) -> dict[str, object]:
    """Canonicalize an already parsed mapping.

    Applying this to its own output returns an equal tree.
    """

    return _canonical_mapping(tree, (), policy)


def _parse(raw: str) -> object:
    stripped = raw.lstrip()
    if not stripped:
        return {}
    if stripped[0] in "{[":
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            # flow-style YAML also starts with a bracket
            json_error = _DocumentSyntaxError(exc.msg, exc.pos)
        try:
            return _load_yaml(raw)
        except _DocumentSyntaxError:
            raise json_error from None
    return _load_yaml(raw)


def _load_yaml(raw: str) -> object:
    try:
        return yaml.load(raw, Loader=_DocumentLoader)  # noqa: S506
    except yaml.MarkedYAMLError as exc:
        mark = exc.problem_mark or exc.context_mark
        reason = exc.problem or exc.context or str(exc)
        raise _DocumentSyntaxError(reason, mark.index if mark is not None else None) from exc
    except yaml.YAMLError as exc:
        raise _DocumentSyntaxError(str(exc), None) from exc


def _canonical(value: object, path: DocumentPath, policy: IgnorePolicy) -> object:
    if isinstance(value, Mapping):
        return _canonical_mapping(value, path, policy)
    if isinstance(value, list | tuple):
        return _canonical_sequence(value, path, policy)
    if isinstance(value, Set):
        return _canonical_sequence(sorted(value, key=repr), path, policy)
    return _canonical_scalar(value)


def _canonical_mapping(
    mapping: Mapping[object, object],
    path: DocumentPath,
    policy: IgnorePolicy,
) -> dict[str, object]:
    items = {str(key): child for key, child in mapping.items()}
    result: dict[str, object] = {}
    for key in sorted(items):
        child_path = (*path, key)
        child = _canonical_child(items[key], child_path, policy)
        if child is not _DROP:
            result[key] = child
    return result


def _canonical_sequence(
    sequence: list[object] | tuple[object, ...],
    path: DocumentPath,
    policy: IgnorePolicy,
) -> list[object]:
    result: list[object] = []
    for index, item in enumerate(sequence):
        child = _canonical_child(item, (*path, str(index)), policy)
        if child is not _DROP:
            result.append(child)
    return result


def _canonical_child(value: object, path: DocumentPath, policy: IgnorePolicy) -> object:
    if policy.is_ignored(path):
        return _DROP
    canonical = _canonical(value, path, policy)
    if policy.has_default(path) and values_equivalent(
        canonical, policy.default_for(path), path=path, policy=policy
    ):
        return _DROP
    return canonical


def _canonical_scalar(value: object) -> object:
    if value is None or isinstance(value, bool | int | float | str):
        return value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


__all__ = ["TOO_DEEP_REASON", "NormalizeResult", "normalize", "normalize_tree"]
