"""
Codec configuration.
"""

from __future__ import annotations
from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

from .codec.scalar import ByteOrder
from .tags import TAG_KEY


class CodecOptions(BaseModel):
    """
    Options shared by every call made through a Codec.

    ``byte_order`` is the global default, used when neither the call nor the
    writer/reader names one.
    """
    byte_order: ByteOrder = Field(default=ByteOrder.LITTLE, description="Default byte order")
    tag_key: str = Field(default=TAG_KEY, min_length=1, description="Dataclass metadata key holding field tags")
    strict: bool = Field(default=False, description="Reject trailing bytes in unpack()")
    debug: bool = Field(default=False, description="Log each encode/decode call at DEBUG level")

    model_config = {"frozen": True}

    @field_validator("byte_order", mode="before")
    @classmethod
    def _coerce_byte_order(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.lower()
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary."""
        return {
            "byteOrder": self.byte_order.value,
            "tagKey": self.tag_key,
            "strict": self.strict,
            "debug": self.debug,
        }


DEFAULT_OPTIONS = CodecOptions()

__all__ = ["CodecOptions", "DEFAULT_OPTIONS"]
