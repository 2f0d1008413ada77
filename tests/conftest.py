"""Pytest configuration and shared record fixtures.

No sys.path hacks - tests import from the installed unitprint package.
"""

import pytest

from unitprint.kernel.details import pack_build_details
from unitprint.kernel.record import (
    CompilationRecord,
    EnvironmentVariable,
    ExtensibleDetail,
    FileDescriptor,
    Identifier,
    RequiredInput,
)


def pytest_addoption(parser):
    """Add gated perf test option."""
    parser.addoption(
        "--run-perf",
        action="store_true",
        default=False,
        help="Run performance sentinel benchmarks (gated)."
    )


def pytest_collection_modifyitems(config, items):
    """Skip perf-marked tests unless --run-perf is set."""
    if config.getoption("--run-perf"):
        return
    skip_perf = pytest.mark.skip(reason="perf tests gated; pass --run-perf")
    for item in items:
        if "perf" in item.keywords:
            item.add_marker(skip_perf)


@pytest.fixture
def shuffled_record():
    """Record whose order-insensitive collections are out of order, with duplicates."""
    return CompilationRecord(
        identifier=Identifier(signature="//pkg:lib", corpus="corpus", language="c++"),
        required_inputs=(
            RequiredInput(descriptor=FileDescriptor(path="b.h", digest="B")),
            RequiredInput(descriptor=FileDescriptor(path="c.h", digest="C")),
            RequiredInput(descriptor=FileDescriptor(path="a.h", digest="A")),
            RequiredInput(descriptor=FileDescriptor(path="c.h", digest="C")),
            RequiredInput(descriptor=FileDescriptor(path="a.h", digest="A")),
        ),
        source_files=("C", "A", "B"),
        arguments=("-c", "b.cc", "-o", "a.o"),
        output_key="a.o",
        environment=(
            EnvironmentVariable(name="B"),
            EnvironmentVariable(name="A"),
            EnvironmentVariable(name="C"),
        ),
        details=(
            ExtensibleDetail(type_url="C"),
            ExtensibleDetail(type_url="B"),
            ExtensibleDetail(type_url="A"),
        ),
    )


@pytest.fixture
def indexed_record():
    """Record with a build-details payload, for summary tests."""
    return CompilationRecord(
        identifier=Identifier(signature="false target", language="c++"),
        required_inputs=(
            RequiredInput(
                identifier=Identifier(path="p1"),
                descriptor=FileDescriptor(path="../p1", digest="d1"),
            ),
            RequiredInput(descriptor=FileDescriptor(path="p2", digest="d2")),
        ),
        source_files=("S",),
        output_key="O",
        details=(pack_build_details("T"),),
    )
