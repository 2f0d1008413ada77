"""Tests for the public API."""

import hashlib
import json

import pytest

from unitprint.api import (
    canonicalize,
    load_record,
    preimage,
    record_to_json,
    summary_to_json,
)
from unitprint.kernel.fingerprint import encode


def test_preimage_canonicalizes_by_default(shuffled_record):
    assert preimage(shuffled_record) == encode(canonicalize(shuffled_record))
    assert preimage(shuffled_record, canonical=False) == encode(shuffled_record)


def test_cache_key_stable_across_permutations(shuffled_record):
    """What a cache layer does: canonicalize, encode, hash."""
    reordered = shuffled_record.model_copy(update={
        "source_files": tuple(reversed(shuffled_record.source_files)),
        "environment": tuple(reversed(shuffled_record.environment)),
    })
    key_a = hashlib.sha256(preimage(shuffled_record)).hexdigest()
    key_b = hashlib.sha256(preimage(reordered)).hexdigest()
    assert key_a == key_b


def test_load_record(tmp_path, shuffled_record):
    path = tmp_path / "record.json"
    path.write_text(shuffled_record.model_dump_json(), encoding="utf-8")
    assert load_record(path) == shuffled_record
    assert load_record(str(path)) == shuffled_record


def test_load_record_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_record(tmp_path / "missing.json")


def test_record_to_json_is_byte_stable(shuffled_record):
    text = record_to_json(shuffled_record)
    assert text == record_to_json(shuffled_record.model_copy())
    assert ", " not in text
    assert json.loads(text)["output_key"] == "a.o"


def test_summary_to_json(indexed_record):
    assert summary_to_json(indexed_record) == (
        '{"inputs":["d1","d2"],"language":"c++","output":"O","sources":["S"],"target":"T"}'
    )
