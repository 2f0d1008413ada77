"""Tests for record summaries."""

import logging

from unitprint.kernel.details import (
    BUILD_DETAILS_TYPE_URL,
    BuildDetails,
    DetailRegistry,
    model_decoder,
    pack_build_details,
)
from unitprint.kernel.record import (
    CompilationRecord,
    ExtensibleDetail,
    FileDescriptor,
    Identifier,
    RequiredInput,
)
from unitprint.kernel.summary import UnitSummary, lookup_identifier, summarize


def test_summary_fields(indexed_record):
    summary = summarize(indexed_record)
    assert summary.language == "c++"
    assert summary.output == "O"
    assert sorted(summary.inputs) == ["d1", "d2"]
    assert summary.sources == ["S"]
    assert summary.target == "T"


def test_summary_of_empty_record():
    assert summarize(CompilationRecord()) == UnitSummary()


def test_inputs_follow_record_order():
    record = CompilationRecord(required_inputs=(
        RequiredInput(descriptor=FileDescriptor(digest="z")),
        RequiredInput(descriptor=FileDescriptor(digest="a")),
    ))
    assert summarize(record).inputs == ["z", "a"]


def test_no_build_details_means_empty_target():
    record = CompilationRecord(details=(ExtensibleDetail(type_url="other", value=b"x"),))
    assert summarize(record).target == ""


def test_first_build_details_wins():
    record = CompilationRecord(details=(
        ExtensibleDetail(type_url="other", value=b"x"),
        pack_build_details("first"),
        pack_build_details("second"),
    ))
    assert summarize(record).target == "first"


def test_malformed_build_details_skipped(caplog):
    record = CompilationRecord(details=(
        ExtensibleDetail(type_url=BUILD_DETAILS_TYPE_URL, value=b"\x08\x01garbage"),
        pack_build_details("good"),
    ))
    with caplog.at_level(logging.DEBUG, logger="unitprint.kernel.summary"):
        assert summarize(record).target == "good"
    assert "Skipping undecodable detail" in caplog.text


def test_only_malformed_build_details_gives_empty_target():
    record = CompilationRecord(details=(
        ExtensibleDetail(type_url=BUILD_DETAILS_TYPE_URL, value=b"{"),
    ))
    assert summarize(record).target == ""


def test_empty_registry_skips_everything(indexed_record):
    assert summarize(indexed_record, DetailRegistry()).target == ""


def test_custom_registry_type_url(indexed_record):
    registry = DetailRegistry({"example.com/Build": model_decoder(BuildDetails)})
    record = indexed_record.model_copy(update={
        "details": (ExtensibleDetail(type_url="example.com/Build", value=b'{"build_target":"X"}'),),
    })
    assert summarize(record, registry).target == "X"


def test_summarize_does_not_mutate(indexed_record):
    before = indexed_record.model_copy()
    summarize(indexed_record)
    assert indexed_record == before


class TestLookupIdentifier:

    def test_found(self, indexed_record):
        assert lookup_identifier(indexed_record, "../p1") == Identifier(path="p1")

    def test_input_without_identifier(self, indexed_record):
        assert lookup_identifier(indexed_record, "p2") is None

    def test_missing_path(self, indexed_record):
        assert lookup_identifier(indexed_record, "nope") is None
