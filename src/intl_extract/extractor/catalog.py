"""Per-file message catalog with duplicate and policy checks."""

from __future__ import annotations

from typing import Any

import tree_sitter

from intl_extract.config import ExtractionOptions
from intl_extract.errors import DuplicateIdConflict, InvalidMessageId, MissingDescription
from intl_extract.schema.models import MessageDescriptor, Position
from intl_extract.tools.source import SourceFile


def _is_missing(description: Any) -> bool:
    if isinstance(description, dict):
        return len(description) < 1
    return not description


class Catalog:
    """Insertion-ordered mapping of message id to descriptor for one file."""

    def __init__(self, source: SourceFile, options: ExtractionOptions):
        self._source = source
        self._options = options
        self._messages: dict[str | int | float, MessageDescriptor] = {}
        self._origins: dict[str | int | float, Position] = {}

    def __len__(self) -> int:
        return len(self._messages)

    def __contains__(self, msg_id: object) -> bool:
        return msg_id in self._messages

    def get(self, msg_id: str | int | float) -> MessageDescriptor | None:
        return self._messages.get(msg_id)

    def values(self) -> list[MessageDescriptor]:
        """Descriptors in the order they were first declared."""
        return list(self._messages.values())

    def put(self, descriptor: dict[str, Any], node: tree_sitter.Node) -> MessageDescriptor:
        """Record a resolved descriptor declared at ``node``.

        Identical redeclarations are coalesced into the first one.

        Raises:
            DuplicateIdConflict: the id exists with a different description
                or defaultMessage.
            MissingDescription: descriptions are enforced and this one has none.
            InvalidMessageId: the id is absent or not a string/number.
        """
        msg_id = descriptor.get("id")
        description = descriptor.get("description")
        default_message = descriptor.get("defaultMessage")

        if isinstance(msg_id, bool) or not isinstance(msg_id, (str, int, float)) or msg_id == "":
            raise self._source.error(
                InvalidMessageId,
                node,
                "[React Intl] Message Descriptors require a string or number `id`.",
            )

        existing = self._messages.get(msg_id)
        if existing is not None and (
            existing.description != description
            or existing.default_message != default_message
        ):
            first = self._origins[msg_id]
            raise self._source.error(
                DuplicateIdConflict,
                node,
                f'[React Intl] Duplicate message id: "{msg_id}", '
                "but the `description` and/or `defaultMessage` are different. "
                f"First declared at {self._source.rel_path}:{first.line}:{first.column}.",
            )

        if self._options.enforce_descriptions and _is_missing(description):
            raise self._source.error(
                MissingDescription,
                node,
                "[React Intl] Message must have a `description`.",
            )

        if existing is not None:
            return existing

        start, end = self._source.span(node)
        location: dict[str, Any] = {}
        if self._options.extract_source_location:
            location = {"file": self._source.rel_path, "start": start, "end": end}

        stored = MessageDescriptor(
            id=msg_id,
            description=description,
            default_message=default_message,
            **location,
        )
        self._messages[msg_id] = stored
        self._origins[msg_id] = start
        return stored
