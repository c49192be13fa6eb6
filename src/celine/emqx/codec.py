"""JSON codec between API records and HTTP bodies."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import BaseModel, TypeAdapter


@lru_cache(maxsize=64)
def _adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


class JsonCodec:
    """Serialize request records and deserialize response bodies.

    Pass a subclass (or any object with the same ``encode``/``decode`` pair)
    to the builder to change how payloads are written or read.

    Args:
        exclude_none: Omit unset (``None``) fields from request bodies
    """

    def __init__(self, exclude_none: bool = True):
        self.exclude_none = exclude_none

    def encode(self, record: BaseModel) -> bytes:
        """Serialize a record to a JSON body."""
        return record.model_dump_json(exclude_none=self.exclude_none).encode("utf-8")

    def decode(self, data: bytes | str, type_: Any) -> Any:
        """Deserialize a JSON body into ``type_``.

        ``type_`` is a model class or a generic such as ``list[User]``.
        Malformed JSON and shape mismatches raise ``pydantic.ValidationError``.
        """
        return _adapter(type_).validate_json(data)
