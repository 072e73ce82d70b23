"""Recognizer for ``<FormattedMessage id=... defaultMessage=... />`` elements."""

from __future__ import annotations

from typing import TYPE_CHECKING

import tree_sitter

from intl_extract.extractor.evaluator import FieldRef
from intl_extract.tools.helpers import named_children

if TYPE_CHECKING:
    from intl_extract.extractor.coordinator import FileExtraction

COMPONENT_NAMES = frozenset({"FormattedMessage", "FormattedHTMLMessage"})

# Components that take messages but whose defaults are not extracted.
UNSUPPORTED_COMPONENTS = frozenset({"FormattedPlural"})

ELEMENT_TYPES = ("jsx_opening_element", "jsx_self_closing_element")


def _field_refs(element: tree_sitter.Node) -> list[FieldRef]:
    """Name/value pairs of the plain attributes; spread attributes are skipped."""
    refs: list[FieldRef] = []
    for attr in named_children(element):
        if attr.type != "jsx_attribute":
            continue
        parts = named_children(attr)
        if not parts:
            continue
        value = parts[1] if len(parts) > 1 else None
        refs.append(FieldRef(parts[0], value))
    return refs


def extract_tagged_element(node: tree_sitter.Node, extraction: "FileExtraction") -> None:
    """Extract a message declared as a react-intl JSX component."""
    if extraction.marks.is_marked(node):
        return

    name = node.child_by_field_name("name")
    if name is None:
        return

    resolved = extraction.scope.resolve_import(name)
    if resolved is None:
        return
    source, component = resolved
    if source != extraction.options.module_source_name:
        return

    if component in UNSUPPORTED_COMPONENTS:
        start, _ = extraction.source.span(node)
        extraction.warn(
            f"[React Intl] Line {start.line}: "
            f"Default messages are not extracted from <{component}>, "
            "use <FormattedMessage> instead.",
            node,
        )
        return

    if component not in COMPONENT_NAMES:
        return

    fields = extraction.evaluator.collect_fields(_field_refs(node))

    # `<FormattedMessage {...descriptor} />` and `<FormattedMessage id={dynamicId} />`
    # are valid at runtime; they are only extracted when a defaultMessage is written out.
    if "defaultMessage" not in fields:
        return

    descriptor = extraction.evaluator.evaluate_descriptor(
        fields, source_is_tag_attribute=True
    )
    extraction.catalog.put(descriptor, node)

    # description has no runtime role
    description = fields.get("description")
    if description is not None and description.key.parent is not None:
        extraction.remove_node(description.key.parent)

    extraction.marks.mark(node)


from intl_extract.extractor.recognizers import register_recognizer  # noqa: E402

register_recognizer(ELEMENT_TYPES, extract_tagged_element)
