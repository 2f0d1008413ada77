"""Fingerprint preimage encoding for compilation records.

The preimage is a literal, order-preserving serialization of a record. It
does not sort or deduplicate anything: callers that want order-independent
fingerprints run `canonicalize` first.

Grammar (each section tag is ASCII followed by a newline, each field is
terminated by a single NUL byte; sections through CTX are always present,
ENV and DET only when they have elements):

    CU\\n   signature corpus root path language
    RI\\n   input identifier (5 fields)        } once per required input
    IN\\n   input path, input digest           }
    ARG\\n  arguments...
    OUT\\n  output key
    SRC\\n  source files...
    CWD\\n  working directory
    CTX\\n  entry context
    ENV\\n  name value, per variable
    DET\\n  type url value, per detail

ENV and DET each carry a single tag for the whole section; the variables
and details follow it back to back with no per-element tag. Preimages from
an encoder that tags every element differ from these as soon as a section
holds two or more elements, so the two are not interchangeable.

Strings are UTF-8 with lone surrogates passed through, so every string a
record can hold is encodable. Field values are copied verbatim. A value
containing NUL makes the preimage ambiguous; that is a known property of
the format and is not escaped.
"""

from typing import BinaryIO, Optional, Union

from .record import (
    CompilationRecord,
    EnvironmentVariable,
    ExtensibleDetail,
    Identifier,
    RequiredInput,
)


_EMPTY_IDENTIFIER = Identifier()
_NUL = b"\x00"

Element = Union[str, RequiredInput, EnvironmentVariable, ExtensibleDetail]


def utf8(value: str) -> bytes:
    """UTF-8 bytes of a string; lone surrogates are encoded, not rejected."""
    return value.encode("utf-8", "surrogatepass")


def _put(buf: bytearray, value: Union[str, bytes]) -> None:
    if isinstance(value, str):
        value = utf8(value)
    buf += value
    buf += _NUL


def _put_identifier(buf: bytearray, identifier: Optional[Identifier]) -> None:
    if identifier is None:
        identifier = _EMPTY_IDENTIFIER
    _put(buf, identifier.signature)
    _put(buf, identifier.corpus)
    _put(buf, identifier.root)
    _put(buf, identifier.path)
    _put(buf, identifier.language)


def _put_required_input(buf: bytearray, required: RequiredInput) -> None:
    buf += b"RI\n"
    _put_identifier(buf, required.identifier)
    buf += b"IN\n"
    _put(buf, required.descriptor.path)
    _put(buf, required.descriptor.digest)


def _put_environment(buf: bytearray, env: EnvironmentVariable) -> None:
    _put(buf, env.name)
    _put(buf, env.value)


def _put_detail(buf: bytearray, detail: ExtensibleDetail) -> None:
    _put(buf, detail.type_url)
    _put(buf, detail.value)


def encode_element(element: Element) -> bytes:
    """Encode one element of a repeated field exactly as `encode` writes it."""
    buf = bytearray()
    if isinstance(element, str):
        _put(buf, element)
    elif isinstance(element, RequiredInput):
        _put_required_input(buf, element)
    elif isinstance(element, EnvironmentVariable):
        _put_environment(buf, element)
    elif isinstance(element, ExtensibleDetail):
        _put_detail(buf, element)
    else:
        raise TypeError(f"Cannot encode element of type {type(element).__name__}")
    return bytes(buf)


def encode(record: Optional[CompilationRecord]) -> bytes:
    """Encode a record into its fingerprint preimage.

    Args:
        record: The record to encode. None encodes like an all-default record.

    Returns:
        The preimage bytes, ready to be fed to a hash function.
    """
    if record is None:
        record = CompilationRecord()

    buf = bytearray()
    buf += b"CU\n"
    _put_identifier(buf, record.identifier)
    for required in record.required_inputs:
        _put_required_input(buf, required)
    buf += b"ARG\n"
    for arg in record.arguments:
        _put(buf, arg)
    buf += b"OUT\n"
    _put(buf, record.output_key)
    buf += b"SRC\n"
    for source in record.source_files:
        _put(buf, source)
    buf += b"CWD\n"
    _put(buf, record.working_directory)
    buf += b"CTX\n"
    _put(buf, record.entry_context)
    if record.environment:
        buf += b"ENV\n"
        for env in record.environment:
            _put_environment(buf, env)
    if record.details:
        buf += b"DET\n"
        for detail in record.details:
            _put_detail(buf, detail)
    return bytes(buf)


def write_preimage(record: Optional[CompilationRecord], stream: BinaryIO) -> int:
    """Write the preimage of `record` to a binary stream.

    Returns:
        Number of bytes written.
    """
    data = encode(record)
    stream.write(data)
    return len(data)
