"""Performance sentinel budgets and synthetic workloads."""

from __future__ import annotations

import os
from time import perf_counter
from typing import Tuple

from unitprint.kernel.canonical import canonicalize
from unitprint.kernel.details import pack_build_details
from unitprint.kernel.fingerprint import encode
from unitprint.kernel.record import (
    CompilationRecord,
    EnvironmentVariable,
    FileDescriptor,
    Identifier,
    RequiredInput,
)


def _budget_from_env(var_name: str, default_ms: float) -> float:
    raw = os.getenv(var_name)
    if not raw:
        return default_ms
    try:
        return float(raw)
    except ValueError:
        return default_ms


MAX_ENCODE_MS = _budget_from_env("UNITPRINT_MAX_ENCODE_MS", 200.0)
MAX_CANONICALIZE_MS = _budget_from_env("UNITPRINT_MAX_CANONICALIZE_MS", 1000.0)


def build_wide_record(n_inputs: int = 5000, n_env: int = 200) -> CompilationRecord:
    """A large record with inputs in reverse digest order and some duplicates."""
    inputs = []
    for i in reversed(range(n_inputs)):
        digest = f"{i:064x}"
        inputs.append(RequiredInput(
            identifier=Identifier(corpus="bench", path=f"src/file_{i}.cc", language="c++"),
            descriptor=FileDescriptor(path=f"src/file_{i}.cc", digest=digest),
        ))
    inputs.extend(inputs[: n_inputs // 10])
    return CompilationRecord(
        identifier=Identifier(signature="//bench:wide", corpus="bench", language="c++"),
        required_inputs=tuple(inputs),
        source_files=tuple(f"src/file_{i}.cc" for i in reversed(range(0, n_inputs, 7))),
        arguments=tuple(f"-I/include/{i}" for i in range(100)),
        output_key="out/wide.o",
        working_directory="/build",
        environment=tuple(EnvironmentVariable(name=f"VAR_{i}", value=str(i)) for i in reversed(range(n_env))),
        details=(pack_build_details("//bench:wide", rule_type="cc_library"),),
    )


def run_sentinel_case(case: str) -> Tuple[float, int]:
    """Run a sentinel case and return elapsed ms plus preimage length."""
    record = build_wide_record()
    start = perf_counter()
    if case == "encode":
        data = encode(record)
    elif case == "canonicalize":
        data = encode(canonicalize(record))
    else:
        raise ValueError(f"Unknown sentinel case: {case}")
    elapsed_ms = (perf_counter() - start) * 1000.0
    return elapsed_ms, len(data)
