"""Shared tree-sitter AST helpers used across the extractor."""

from __future__ import annotations

import html
import re

import tree_sitter

IDENTIFIER_TYPES = frozenset({
    "identifier",
    "property_identifier",
    "shorthand_property_identifier",
    "jsx_identifier",
    "type_identifier",
})

# Wrappers that do not change the runtime value of their operand.
TRANSPARENT_WRAPPERS = frozenset({
    "parenthesized_expression",
    "as_expression",
    "satisfies_expression",
    "non_null_expression",
    "type_assertion",
})

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_HEX_ESCAPE = re.compile(r"\\(?:x([0-9a-fA-F]{2})|u([0-9a-fA-F]{4})|u\{([0-9a-fA-F]+)\})")


def find_child(node: tree_sitter.Node, child_type: str) -> tree_sitter.Node | None:
    """Find the first child of a given type."""
    for child in node.children:
        if child.type == child_type:
            return child
    return None


def node_text(node: tree_sitter.Node) -> str:
    """Get the text content of a node."""
    return node.text.decode("utf-8") if node.text else ""


def named_children(node: tree_sitter.Node) -> list[tree_sitter.Node]:
    """Named children of a node, without comments."""
    return [c for c in node.named_children if c.type != "comment"]


def unwrap(node: tree_sitter.Node) -> tree_sitter.Node:
    """Strip parentheses and TypeScript-only wrappers around an expression."""
    while node.type in TRANSPARENT_WRAPPERS:
        inner = named_children(node)
        if not inner:
            break
        node = inner[0]
    return node


def decode_escape(text: str) -> str:
    """Decode a single JavaScript escape sequence such as ``\\n`` or ``\\u00e9``."""
    if len(text) < 2:
        return text
    match = _HEX_ESCAPE.fullmatch(text)
    if match:
        digits = match.group(1) or match.group(2) or match.group(3)
        return chr(int(digits, 16))
    body = text[1:]
    if body[0] in "\r\n\u2028\u2029":
        # Line continuation
        return ""
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    return body


def string_value(node: tree_sitter.Node) -> str:
    """Return the runtime value of a ``string`` node.

    Strings inside JSX attributes take no backslash escapes but do decode
    HTML character references.
    """
    in_jsx = node.parent is not None and node.parent.type == "jsx_attribute"
    parts: list[str] = []
    for child in node.children:
        if child.type in ('"', "'"):
            continue
        text = node_text(child)
        if child.type == "escape_sequence" and not in_jsx:
            parts.append(decode_escape(text))
        elif child.type == "html_character_reference":
            parts.append(html.unescape(text))
        else:
            parts.append(text)
    return "".join(parts)


def parse_number(text: str) -> int | float:
    """Parse a JavaScript numeric literal."""
    text = text.replace("_", "")
    if text.endswith("n"):
        return int(text[:-1], 0)
    lowered = text.lower()
    if lowered.startswith(("0x", "0o", "0b")):
        return int(lowered, 0)
    if len(text) > 1 and text[0] == "0" and text.isdigit() and set(text) <= set("01234567"):
        # Legacy octal; 08 and 09 are decimal
        return int(text, 8)
    value = float(text)
    if value.is_integer():
        return int(value)
    return value


def iter_nodes(root: tree_sitter.Node):
    """Yield every node under ``root`` in pre-order (document order)."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
