"""unitprint: canonical forms and fingerprint preimages for compilation records."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("unitprint")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
# Note: the CLI lives in unitprint.cli and is not re-exported here
from unitprint.api import canonicalize, encode, summarize, preimage, load_record
from unitprint.kernel.record import (
    CompilationRecord,
    EnvironmentVariable,
    ExtensibleDetail,
    FileDescriptor,
    Identifier,
    RequiredInput,
)
from unitprint.kernel.summary import UnitSummary
from unitprint.kernel.details import DetailRegistry, BuildDetails, BUILD_DETAILS_TYPE_URL

__all__ = [
    "__version__",
    "canonicalize",
    "encode",
    "summarize",
    "preimage",
    "load_record",
    "CompilationRecord",
    "EnvironmentVariable",
    "ExtensibleDetail",
    "FileDescriptor",
    "Identifier",
    "RequiredInput",
    "UnitSummary",
    "DetailRegistry",
    "BuildDetails",
    "BUILD_DETAILS_TYPE_URL",
]
