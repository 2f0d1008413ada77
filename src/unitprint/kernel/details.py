"""Extensible-detail decoding: type url -> decoder registry.

Details carry metadata the record does not model directly. A registry maps
a type url to a decoder; type urls without a decoder are simply skipped by
consumers, which keeps older readers working against newer producers.

Registries are plain values passed to whoever needs them. There is no
module-level registry to mutate.
"""

import json
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .record import ExtensibleDetail


BUILD_DETAILS_TYPE_URL = "kythe.io/proto/kythe.proto.BuildDetails"

Decoder = Callable[[bytes], BaseModel]


class DetailDecodeError(ValueError):
    """Raised when a detail payload cannot be decoded by its decoder."""

    def __init__(self, type_url: str, reason: str):
        self.type_url = type_url
        self.reason = reason
        super().__init__(f"Cannot decode detail {type_url!r}: {reason}")


class DuplicateDecoderError(ValueError):
    """Raised when a type url is registered twice."""
    pass


class BuildDetails(BaseModel):
    """Build-system facts attached to a compilation record."""
    build_target: str = ""
    rule_type: str = ""
    build_config: str = ""

    model_config = ConfigDict(frozen=True, extra="ignore")


def pack_detail(model: BaseModel, type_url: str) -> ExtensibleDetail:
    """Wrap a model as an ExtensibleDetail with a canonical JSON payload."""
    payload = json.dumps(
        model.model_dump(mode="json"),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return ExtensibleDetail(type_url=type_url, value=payload.encode("utf-8"))


def pack_build_details(build_target: str, rule_type: str = "", build_config: str = "") -> ExtensibleDetail:
    """Shorthand for packing a BuildDetails payload under its type url."""
    details = BuildDetails(build_target=build_target, rule_type=rule_type, build_config=build_config)
    return pack_detail(details, BUILD_DETAILS_TYPE_URL)


def model_decoder(model_cls: type) -> Decoder:
    """Build a decoder that validates a JSON payload into `model_cls`."""
    def decode(payload: bytes) -> BaseModel:
        return model_cls.model_validate_json(payload)
    decode.__name__ = f"decode_{model_cls.__name__}"
    return decode


class DetailRegistry:
    """Mapping from detail type url to decoder."""

    def __init__(self, decoders: Optional[Dict[str, Decoder]] = None):
        self._decoders: Dict[str, Decoder] = {}
        for type_url, decoder in (decoders or {}).items():
            self.register(type_url, decoder)

    def register(self, type_url: str, decoder: Decoder) -> None:
        """Register a decoder for a type url.

        Raises:
            DuplicateDecoderError: If the type url already has a decoder
        """
        if type_url in self._decoders:
            raise DuplicateDecoderError(
                f"Decoder already registered for type url {type_url!r}"
            )
        self._decoders[type_url] = decoder

    def get(self, type_url: str) -> Optional[Decoder]:
        return self._decoders.get(type_url)

    def __contains__(self, type_url: str) -> bool:
        return type_url in self._decoders

    def __len__(self) -> int:
        return len(self._decoders)

    def type_urls(self) -> List[str]:
        """Registered type urls, sorted."""
        return sorted(self._decoders)

    def decode(self, detail: ExtensibleDetail) -> Optional[BaseModel]:
        """Decode a detail payload.

        Returns:
            The decoded model, or None if no decoder is registered for the
            detail's type url.

        Raises:
            DetailDecodeError: If the registered decoder rejects the payload
        """
        decoder = self._decoders.get(detail.type_url)
        if decoder is None:
            return None
        try:
            return decoder(detail.value)
        except (ValidationError, ValueError) as e:
            raise DetailDecodeError(detail.type_url, str(e)) from e


def default_registry() -> DetailRegistry:
    """A fresh registry that knows the build-details schema."""
    return DetailRegistry({BUILD_DETAILS_TYPE_URL: model_decoder(BuildDetails)})
