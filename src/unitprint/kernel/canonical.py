"""Canonicalization of compilation records.

Rules:
- required_inputs, source_files, environment and details are order-insensitive
- A required input whose identifier has only empty fields is stored with
  no identifier, since both encode the same
- Structurally identical elements are collapsed (first occurrence kept)
- Remaining elements are sorted by the UTF-8 bytes of their key (lone
  surrogates pass through)
- Elements that share a key but differ elsewhere are kept; they are ordered
  by their encoded bytes so the result does not depend on input order
- arguments and scalar fields are never touched

canonicalize() returns a new record; the input is left as it was.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Tuple, TypeVar

from pydantic import BaseModel

from .fingerprint import Element, encode_element, utf8
from .record import (
    CompilationRecord,
    EnvironmentVariable,
    ExtensibleDetail,
    Identifier,
    RequiredInput,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Element)

_EMPTY_IDENTIFIER = Identifier()


def _input_key(required: RequiredInput) -> str:
    return required.descriptor.digest


def _source_key(source: str) -> str:
    return source


def _env_key(env: EnvironmentVariable) -> str:
    return env.name


def _detail_key(detail: ExtensibleDetail) -> str:
    return detail.type_url


def _normalize_input(required: RequiredInput) -> RequiredInput:
    # An all-empty identifier encodes like an absent one; keep one spelling.
    if required.identifier == _EMPTY_IDENTIFIER:
        return required.model_copy(update={"identifier": None})
    return required


def _as_is(item: T) -> T:
    return item


# field name -> (key function, normalizer), in record field order
_COLLECTIONS: Dict[str, Tuple[Callable, Callable]] = {
    "required_inputs": (_input_key, _normalize_input),
    "source_files": (_source_key, _as_is),
    "environment": (_env_key, _as_is),
    "details": (_detail_key, _as_is),
}


@dataclass(frozen=True)
class KeyConflict:
    """Elements of one collection that share a key but not a payload."""
    field: str
    key: str
    count: int  # distinct payloads under this key


def _field_values(value: Any) -> Any:
    """Nested tuple of every field value; None becomes ()."""
    if value is None:
        return ()
    if isinstance(value, BaseModel):
        return tuple(_field_values(getattr(value, name)) for name in type(value).model_fields)
    return value


def _dedup(items: Iterable[T]) -> List[T]:
    seen = set()
    unique: List[T] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        unique.append(item)
    return unique


def sort_and_dedup(items: Iterable[T], key: Callable[[T], str]) -> Tuple[T, ...]:
    """Collapse duplicates and sort by key bytes.

    Ties on key are ordered by the encoded element, then by its field
    values, so distinct elements always have a fixed relative order.

    Args:
        items: Elements of one order-insensitive collection
        key: Function returning the canonical key of an element

    Returns:
        Tuple of unique elements in canonical order
    """
    unique = _dedup(items)
    unique.sort(key=lambda item: (utf8(key(item)), encode_element(item), _field_values(item)))
    return tuple(unique)


def find_key_conflicts(record: CompilationRecord) -> List[KeyConflict]:
    """Report keys that map to more than one distinct element.

    Canonicalization keeps all of them; this is the hook for producers that
    want to treat such records as suspect.
    """
    conflicts: List[KeyConflict] = []
    for field, (key, normalize) in _COLLECTIONS.items():
        by_key: Dict[str, set] = {}
        for item in getattr(record, field):
            by_key.setdefault(key(item), set()).add(normalize(item))
        for k in sorted(by_key, key=utf8):
            if len(by_key[k]) > 1:
                conflicts.append(KeyConflict(field=field, key=k, count=len(by_key[k])))
    return conflicts


def canonicalize(record: CompilationRecord) -> CompilationRecord:
    """Return the canonical form of a compilation record.

    Idempotent: canonicalize(canonicalize(r)) == canonicalize(r).
    """
    conflicts = find_key_conflicts(record)
    for conflict in conflicts:
        logger.warning(
            "%s has %d distinct entries for key %r; keeping all of them",
            conflict.field, conflict.count, conflict.key,
        )

    update = {
        field: sort_and_dedup((normalize(item) for item in getattr(record, field)), key)
        for field, (key, normalize) in _COLLECTIONS.items()
    }
    return record.model_copy(update=update)


def is_canonical(record: CompilationRecord) -> bool:
    """True if canonicalize() would return an equal record."""
    return canonicalize(record) == record
