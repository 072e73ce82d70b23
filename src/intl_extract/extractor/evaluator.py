"""Descriptor evaluation: turns raw attribute nodes into descriptor values."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import tree_sitter

from intl_extract.errors import EscapingMismatch, NotStaticallyEvaluable, TemplateSyntaxError
from intl_extract.tools.evaluate import UNDEFINED, StaticEvaluator
from intl_extract.tools.helpers import IDENTIFIER_TYPES, named_children, node_text
from intl_extract.tools.icu import MessageSyntaxError, print_icu_message
from intl_extract.tools.source import SourceFile

DESCRIPTOR_PROPS = frozenset({"id", "description", "defaultMessage"})

SYNTAX_GUIDE_URL = "http://formatjs.io/guides/message-syntax/"
JSX_GOTCHAS_URL = "http://facebook.github.io/react/docs/jsx-gotchas.html"


def _json_value(value: Any) -> Any:
    """Convert a folded value to what JSON.stringify would keep.

    ``undefined`` object members are dropped, ``undefined`` array items and
    non-finite numbers become null.
    """
    if value is UNDEFINED:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _json_value(v) for k, v in value.items() if v is not UNDEFINED}
    if isinstance(value, list):
        return [_json_value(v) for v in value]
    return value


@dataclass(frozen=True)
class FieldRef:
    """An unresolved descriptor field: the attribute name node and its value node.

    ``value`` is None for a JSX boolean attribute such as ``<X description />``.
    """

    key: tree_sitter.Node
    value: tree_sitter.Node | None

    @property
    def anchor(self) -> tree_sitter.Node:
        return self.value if self.value is not None else self.key


class DescriptorEvaluator:
    """Resolves descriptor keys, values and ICU templates for one source file."""

    def __init__(self, source: SourceFile, evaluator: StaticEvaluator):
        self._source = source
        self._static = evaluator

    def _evaluate(self, node: tree_sitter.Node) -> Any:
        result = self._static.evaluate(node)
        if result.confident:
            return result.value
        raise self._source.error(
            NotStaticallyEvaluable,
            node,
            "[React Intl] Messages must be statically evaluate-able for extraction.",
        )

    def resolve_key(self, node: tree_sitter.Node) -> Any:
        """Name of an attribute or property; identifiers are taken literally."""
        if node.type in IDENTIFIER_TYPES or node.type == "jsx_namespace_name":
            return node_text(node)
        return self._evaluate(node)

    def resolve_value(self, node: tree_sitter.Node | None) -> Any:
        """Fold a field value to a constant. Strings are always trimmed."""
        if node is None:
            return True
        if node.type == "jsx_expression":
            inner = named_children(node)
            if len(inner) != 1:
                raise self._source.error(
                    NotStaticallyEvaluable,
                    node,
                    "[React Intl] Messages must be statically evaluate-able for extraction.",
                )
            node = inner[0]

        value = _json_value(self._evaluate(node))
        if isinstance(value, str):
            return value.strip()
        return value

    def resolve_template(
        self,
        node: tree_sitter.Node | None,
        *,
        source_is_tag_attribute: bool = False,
        anchor: tree_sitter.Node | None = None,
    ) -> str:
        """Resolve a defaultMessage and return its canonical ICU form."""
        where = node if node is not None else anchor
        message = self.resolve_value(node)

        if not isinstance(message, str):
            raise self._source.error(
                TemplateSyntaxError,
                where,
                f"[React Intl] Message failed to parse. See: {SYNTAX_GUIDE_URL}"
                f"\nExpected a string message, got {message!r}.",
            )

        try:
            return print_icu_message(message)
        except MessageSyntaxError as exc:
            if source_is_tag_attribute and node is not None and node.type == "string" and "\\\\" in message:
                raise self._source.error(
                    EscapingMismatch,
                    node,
                    "[React Intl] Message failed to parse. "
                    "It looks like `\\`s were used for escaping, "
                    "this won't work with JSX string literals. "
                    f"Wrap with `{{}}`. See: {JSX_GOTCHAS_URL}",
                ) from exc
            raise self._source.error(
                TemplateSyntaxError,
                where,
                f"[React Intl] Message failed to parse. See: {SYNTAX_GUIDE_URL}\n{exc}",
            ) from exc

    def collect_fields(self, pairs: list[FieldRef]) -> dict[str, FieldRef]:
        """Keep only the recognized descriptor fields, keyed by resolved name."""
        fields: dict[str, FieldRef] = {}
        for ref in pairs:
            key = self.resolve_key(ref.key)
            if key in DESCRIPTOR_PROPS:
                fields[key] = ref
        return fields

    def evaluate_descriptor(
        self,
        fields: dict[str, FieldRef],
        *,
        source_is_tag_attribute: bool = False,
    ) -> dict[str, Any]:
        """Resolve every field; defaultMessage is validated as an ICU message."""
        descriptor: dict[str, Any] = {}
        for key, ref in fields.items():
            if key == "defaultMessage":
                descriptor[key] = self.resolve_template(
                    ref.value,
                    source_is_tag_attribute=source_is_tag_attribute,
                    anchor=ref.anchor,
                )
            else:
                descriptor[key] = self.resolve_value(ref.value)
        return descriptor
