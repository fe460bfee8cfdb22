"""Cache payload encoding."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError

from neba_pipeline.errors import PayloadDecodeError


@lru_cache(maxsize=256)
def _type_adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


class PayloadSerializer:
    """Encode handler values to JSON bytes and rebuild them on read.

    ``response_type`` is the declared type of the cached value; dataclasses
    and pydantic models are rebuilt as instances of that type.
    """

    def encode(self, value: Any, response_type: Any = Any) -> bytes:
        return _type_adapter(response_type).dump_json(value)

    def decode(self, payload: bytes, response_type: Any = Any) -> Any:
        try:
            return _type_adapter(response_type).validate_json(payload)
        except (ValidationError, ValueError) as e:
            raise PayloadDecodeError(
                f"Cannot decode cached payload as {response_type!r}: {e}"
            ) from e
