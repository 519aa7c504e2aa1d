"""
Serialization utilities for docstore storage.

Provides converters between stored values (document lists, single
values) and their on-disk text or binary form:
- JSON (human readable, the default)
- MessagePack (compact binary)
"""

from __future__ import annotations

import json
from typing import Any, Optional, Protocol

import msgpack

from ..core.exceptions import SerializationError


class DataConverter(Protocol):
    """Converts a value to and from its text form."""

    def parse(self, string: str) -> Any:
        ...

    def stringify(self, data: Any) -> str:
        ...


class JSONConverter:
    """
    JSON text converter.

    Args:
        indent: Indentation for pretty printing (None = compact)
        sort_keys: Whether to sort object keys on output
    """

    def __init__(self, indent: Optional[int] = 2, sort_keys: bool = False):
        self.indent = indent
        self.sort_keys = sort_keys

    def parse(self, string: str) -> Any:
        try:
            return json.loads(string)
        except ValueError as e:
            raise SerializationError(f"Invalid JSON data: {e}") from e

    def stringify(self, data: Any) -> str:
        try:
            return json.dumps(
                data,
                indent=self.indent,
                sort_keys=self.sort_keys,
                ensure_ascii=False,
            )
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Value is not JSON serializable: {e}") from e


def pack(data: Any) -> bytes:
    """Serialize a value with MessagePack."""
    try:
        return msgpack.packb(data, use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as e:
        raise SerializationError(f"Value is not MessagePack serializable: {e}") from e


def unpack(data: bytes) -> Any:
    """Deserialize a MessagePack value."""
    try:
        # Documents may be keyed by non-string values (e.g. int fields)
        return msgpack.unpackb(data, raw=False, strict_map_key=False)
    except ValueError as e:
        raise SerializationError(f"Invalid MessagePack data: {e}") from e
