"""Recognizer registry and shared protocol.

Each declaration shape (tagged JSX element, formatIntlMessage call) has its
own module that registers a recognizer against the tree-sitter node types it
handles. The coordinator dispatches every visited node through this registry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Protocol

import tree_sitter

if TYPE_CHECKING:
    from intl_extract.extractor.coordinator import FileExtraction


class Recognizer(Protocol):
    """Contract for a recognizer function.

    Each recognizer module must expose a function matching this signature.
    """

    def __call__(
        self,
        node: tree_sitter.Node,
        extraction: "FileExtraction",
    ) -> None: ...


# Registry populated by register_recognizer() calls at module load time.
RECOGNIZER_REGISTRY: dict[str, list[Recognizer]] = {}


def register_recognizer(node_types: Iterable[str], recognizer: Recognizer) -> None:
    """Register a recognizer for one or more node types."""
    for node_type in node_types:
        handlers = RECOGNIZER_REGISTRY.setdefault(node_type, [])
        if recognizer not in handlers:
            handlers.append(recognizer)


def get_recognizers(node_type: str) -> list[Recognizer]:
    """Look up the recognizers for a node type."""
    return RECOGNIZER_REGISTRY.get(node_type, [])
