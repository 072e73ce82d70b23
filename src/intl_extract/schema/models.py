"""Pydantic models for extracted message descriptors.

The JSON shape matches what react-intl tooling consumes: camelCase keys,
absent fields omitted, key order id/description/defaultMessage/file/start/end.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, JsonValue


class Position(BaseModel):
    """A point in a source file: 1-based line, 0-based character column."""

    line: int
    column: int


class MessageDescriptor(BaseModel):
    """A single translatable message extracted from source."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | int | float
    description: JsonValue = None
    default_message: str | None = Field(default=None, alias="defaultMessage")
    file: str | None = None
    start: Position | None = None
    end: Position | None = None

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


def dump_catalog(descriptors: list[MessageDescriptor]) -> str:
    """Serialize descriptors as a 2-space indented JSON array."""
    return json.dumps(
        [d.to_json_dict() for d in descriptors],
        indent=2,
        ensure_ascii=False,
    )


def load_catalog(text: str) -> list[MessageDescriptor]:
    """Parse a catalog produced by dump_catalog."""
    return [MessageDescriptor.model_validate(item) for item in json.loads(text)]
