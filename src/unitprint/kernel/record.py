"""Pydantic models for compilation records.

Every model is frozen: a record is built once by its producer and never
mutated afterwards. Repeated fields are tuples that default to empty, and
string fields default to "" so the encoder never sees a missing value.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Identifier(BaseModel):
    """Five-part name of an artifact (a file or a build target)."""
    signature: str = ""
    corpus: str = ""
    root: str = ""
    path: str = ""
    language: str = ""

    model_config = ConfigDict(frozen=True, extra="forbid")


class FileDescriptor(BaseModel):
    """Path and opaque content digest of one file."""
    path: str = ""
    digest: str = ""  # computed upstream, never validated here

    model_config = ConfigDict(frozen=True, extra="forbid")


class RequiredInput(BaseModel):
    """A file consumed by the compilation."""
    identifier: Optional[Identifier] = None
    descriptor: FileDescriptor = Field(default_factory=FileDescriptor)

    model_config = ConfigDict(frozen=True, extra="forbid")


class EnvironmentVariable(BaseModel):
    name: str = ""
    value: str = ""

    model_config = ConfigDict(frozen=True, extra="forbid")


class ExtensibleDetail(BaseModel):
    """Schema-tagged binary blob.

    The payload is raw bytes; in JSON it travels as base64.
    """
    type_url: str = ""
    value: bytes = b""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )


class CompilationRecord(BaseModel):
    """Everything needed to reproduce one compilation step."""
    identifier: Identifier = Field(default_factory=Identifier)
    required_inputs: Tuple[RequiredInput, ...] = ()
    source_files: Tuple[str, ...] = ()
    arguments: Tuple[str, ...] = Field(
        default=(),
        description="Command-line argument vector; order is significant and never canonicalized"
    )
    output_key: str = ""
    working_directory: str = ""
    entry_context: str = ""
    environment: Tuple[EnvironmentVariable, ...] = ()
    details: Tuple[ExtensibleDetail, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def from_json_bytes(cls, data: bytes) -> "CompilationRecord":
        """Load a compilation record from JSON bytes (pure, no I/O)."""
        return cls.model_validate_json(data)
