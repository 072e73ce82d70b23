"""Recognizer for ``formatIntlMessage('message.id')`` calls."""

from __future__ import annotations

from typing import TYPE_CHECKING

import tree_sitter

from intl_extract.errors import ExpectedLiteralArgument
from intl_extract.tools.helpers import named_children, node_text, parse_number, string_value, unwrap

if TYPE_CHECKING:
    from intl_extract.extractor.coordinator import FileExtraction

FUNCTION_NAME = "formatIntlMessage"

LITERAL_TYPES = frozenset({"string", "number"})


def _is_target_callee(callee: tree_sitter.Node) -> bool:
    callee = unwrap(callee)
    if callee.type == "identifier":
        return node_text(callee) == FUNCTION_NAME
    if callee.type == "member_expression":
        prop = callee.child_by_field_name("property")
        return prop is not None and node_text(prop) == FUNCTION_NAME
    return False


def extract_function_call(node: tree_sitter.Node, extraction: "FileExtraction") -> None:
    """Extract the message id passed to formatIntlMessage().

    Only the id is recorded; description and defaultMessage are expected to
    exist elsewhere.
    """
    callee = node.child_by_field_name("function")
    if callee is None or not _is_target_callee(callee):
        return

    args_node = node.child_by_field_name("arguments")
    args = named_children(args_node) if args_node is not None and args_node.type == "arguments" else []
    if not args:
        raise extraction.source.error(
            ExpectedLiteralArgument,
            node,
            f"[React Intl] `{FUNCTION_NAME}()` must be called with a literal message id.",
        )

    first = args[0]
    if extraction.marks.is_marked(first):
        return

    if first.type not in LITERAL_TYPES:
        raise extraction.source.error(
            ExpectedLiteralArgument,
            first,
            f"[React Intl] The first argument of `{FUNCTION_NAME}()` must be "
            "a string or number literal.",
        )

    if first.type == "string":
        msg_id = string_value(first)
    else:
        msg_id = parse_number(node_text(first))

    extraction.catalog.put({"id": msg_id}, first)
    extraction.marks.mark(first)


from intl_extract.extractor.recognizers import register_recognizer  # noqa: E402

register_recognizer(("call_expression",), extract_function_call)
