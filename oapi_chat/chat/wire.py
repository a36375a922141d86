"""Shared pydantic base for wire-level request and response models.

Serialization uses canonical wire names (aliases) and never emits ``None``.
Deserialization ignores unknown fields so vendor additions do not break
parsing; any decoding failure surfaces as ``ClientError(DESERIALIZATION)``
carrying the parser message.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from ..base.errors import ClientError

_M = TypeVar("_M", bound="WireModel")


class WireModel(BaseModel):
    """Base class for every JSON entity exchanged with the API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-ready mapping sent on the wire."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def parse(cls: Type[_M], text: Union[str, bytes]) -> _M:
        """Decode a JSON document into this model.

        Raises:
            ClientError: ``DESERIALIZATION`` on malformed JSON or when the
                document matches no accepted shape.
        """
        try:
            return cls.model_validate_json(text)
        except ValidationError as exc:
            raise ClientError.deserialization(str(exc), raw=exc) from exc

    @classmethod
    def from_mapping(cls: Type[_M], data: Mapping[str, Any]) -> _M:
        """Validate an already-decoded mapping (same error contract as ``parse``)."""
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ClientError.deserialization(str(exc), raw=exc) from exc


__all__ = ["WireModel"]
