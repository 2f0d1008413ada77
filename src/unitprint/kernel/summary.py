"""Queryable summary of a compilation record."""

import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .details import BuildDetails, DetailDecodeError, DetailRegistry, default_registry
from .record import CompilationRecord, Identifier

logger = logging.getLogger(__name__)


class UnitSummary(BaseModel):
    """Lightweight projection of a record for indexing."""
    language: str = ""
    output: str = ""
    inputs: List[str] = Field(
        default_factory=list,
        description="Digests of required inputs in record order (order is not guaranteed; sort before comparing)"
    )
    sources: List[str] = Field(default_factory=list)
    target: str = ""

    model_config = ConfigDict(frozen=True)


def _build_target(record: CompilationRecord, registry: DetailRegistry) -> str:
    for detail in record.details:
        try:
            decoded = registry.decode(detail)
        except DetailDecodeError as e:
            logger.debug("Skipping undecodable detail: %s", e)
            continue
        if isinstance(decoded, BuildDetails):
            return decoded.build_target
    return ""


def summarize(record: CompilationRecord, registry: Optional[DetailRegistry] = None) -> UnitSummary:
    """Build the summary of a record.

    The build target comes from the first detail that decodes to
    BuildDetails. Details with unknown type urls, and details whose payload
    fails to decode, are skipped.

    Args:
        record: Record to summarize (canonical or not)
        registry: Detail decoders to use; defaults to default_registry()

    Returns:
        UnitSummary for the record
    """
    if registry is None:
        registry = default_registry()
    return UnitSummary(
        language=record.identifier.language,
        output=record.output_key,
        inputs=[required.descriptor.digest for required in record.required_inputs],
        sources=list(record.source_files),
        target=_build_target(record, registry),
    )


def lookup_identifier(record: CompilationRecord, path: str) -> Optional[Identifier]:
    """Identifier of the first required input whose descriptor path is `path`.

    Returns None when no input matches or the matching input has no
    identifier.
    """
    for required in record.required_inputs:
        if required.descriptor.path == path:
            return required.identifier
    return None
