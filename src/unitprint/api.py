"""Public API for unitprint.

High-level functions over compilation records. Callers should use these
instead of importing from _internal.
"""

import os
from pathlib import Path
from typing import Optional, Union

from unitprint.kernel.canonical import KeyConflict, canonicalize, find_key_conflicts
from unitprint.kernel.details import DetailRegistry
from unitprint.kernel.fingerprint import encode
from unitprint.kernel.record import CompilationRecord
from unitprint.kernel.summary import UnitSummary, lookup_identifier, summarize
from unitprint._internal.canonical_json import canonical_dumps
from unitprint._internal.io import load_record_from_path

__all__ = [
    "KeyConflict",
    "UnitSummary",
    "canonicalize",
    "encode",
    "find_key_conflicts",
    "load_record",
    "lookup_identifier",
    "preimage",
    "record_to_json",
    "summarize",
    "summary_to_json",
]


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


def load_record(path: Union[str, os.PathLike, Path]) -> CompilationRecord:
    """Load a compilation record from a JSON file."""
    return load_record_from_path(_normalize_path(path))


def preimage(record: CompilationRecord, canonical: bool = True) -> bytes:
    """Fingerprint preimage of a record.

    Args:
        record: Record to encode
        canonical: Canonicalize before encoding (what a cache layer wants)

    Returns:
        Bytes to feed to the caller's hash function
    """
    if canonical:
        record = canonicalize(record)
    return encode(record)


def record_to_json(record: CompilationRecord) -> str:
    """Byte-stable JSON for a record (detail payloads as base64)."""
    return canonical_dumps(record.model_dump(mode="json"))


def summary_to_json(record: CompilationRecord, registry: Optional[DetailRegistry] = None) -> str:
    """Byte-stable JSON for the summary of a record."""
    return canonical_dumps(summarize(record, registry).model_dump(mode="json"))
