"""Static constant folding over JavaScript expressions.

Reduces literal expressions, string concatenation, template literals without
dynamic parts, object/array literals and references to never-reassigned
variables to Python values. Anything else is reported as not confident.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import tree_sitter

from intl_extract.tools.helpers import (
    decode_escape,
    named_children,
    node_text,
    parse_number,
    string_value,
    unwrap,
)
from intl_extract.tools.scope import ScopeResolver


class _Undefined:
    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()

GLOBAL_CONSTANTS: dict[str, Any] = {
    "undefined": UNDEFINED,
    "NaN": math.nan,
    "Infinity": math.inf,
}


@dataclass(frozen=True)
class Evaluation:
    """Outcome of static evaluation; ``value`` is meaningful only when confident."""

    confident: bool
    value: Any = None


class _Deopt(Exception):
    """Raised internally when an expression cannot be folded."""


def to_js_string(value: Any) -> str:
    """Convert a folded value to a string the way JavaScript's String() does."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, list):
        return ",".join("" if v is None or v is UNDEFINED else to_js_string(v) for v in value)
    return "[object Object]"


def is_truthy(value: Any) -> bool:
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def _normalize(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class StaticEvaluator:
    """Folds expressions to constants, following constant bindings through scope."""

    def __init__(self, scope: ScopeResolver):
        self._scope = scope
        self._resolving: set[int] = set()

    def evaluate(self, node: tree_sitter.Node) -> Evaluation:
        try:
            return Evaluation(True, self._eval(node))
        except _Deopt:
            return Evaluation(False)

    def _eval(self, node: tree_sitter.Node) -> Any:
        node = unwrap(node)
        kind = node.type

        if kind == "string":
            return string_value(node)
        if kind == "template_string":
            return self._eval_template(node)
        if kind == "number":
            return parse_number(node_text(node))
        if kind == "true":
            return True
        if kind == "false":
            return False
        if kind == "null":
            return None
        if kind == "undefined":
            return UNDEFINED
        if kind == "identifier":
            return self._eval_identifier(node)
        if kind == "jsx_expression":
            inner = named_children(node)
            if len(inner) != 1:
                raise _Deopt
            return self._eval(inner[0])
        if kind == "binary_expression":
            return self._eval_binary(node)
        if kind == "unary_expression":
            return self._eval_unary(node)
        if kind == "ternary_expression":
            condition = self._eval(node.child_by_field_name("condition"))
            branch = "consequence" if is_truthy(condition) else "alternative"
            return self._eval(node.child_by_field_name(branch))
        if kind == "object":
            return self._eval_object(node)
        if kind == "array":
            items = []
            for child in named_children(node):
                if child.type == "spread_element":
                    raise _Deopt
                items.append(self._eval(child))
            return items
        raise _Deopt

    def _eval_template(self, node: tree_sitter.Node) -> str:
        parts: list[str] = []
        for child in node.children:
            if child.type == "`":
                continue
            if child.type == "escape_sequence":
                parts.append(decode_escape(node_text(child)))
            elif child.type == "template_substitution":
                inner = named_children(child)
                if len(inner) != 1:
                    raise _Deopt
                parts.append(to_js_string(self._eval(inner[0])))
            else:
                parts.append(node_text(child))
        return "".join(parts)

    def _eval_identifier(self, node: tree_sitter.Node) -> Any:
        name = node_text(node)
        binding = self._scope.lookup(node, name)
        if binding is None:
            if name in GLOBAL_CONSTANTS:
                return GLOBAL_CONSTANTS[name]
            raise _Deopt
        if binding.value is None or not self._scope.is_constant(binding):
            raise _Deopt

        key = binding.node.id
        if key in self._resolving:
            raise _Deopt
        self._resolving.add(key)
        try:
            return self._eval(binding.value)
        finally:
            self._resolving.discard(key)

    def _eval_binary(self, node: tree_sitter.Node) -> Any:
        operator = node.child_by_field_name("operator")
        left_node = node.child_by_field_name("left")
        right_node = node.child_by_field_name("right")
        if operator is None or left_node is None or right_node is None:
            raise _Deopt
        op = operator.type

        left = self._eval(left_node)
        if op == "&&":
            return self._eval(right_node) if is_truthy(left) else left
        if op == "||":
            return left if is_truthy(left) else self._eval(right_node)
        if op == "??":
            return self._eval(right_node) if left is None or left is UNDEFINED else left

        right = self._eval(right_node)
        if op == "+":
            if isinstance(left, str) or isinstance(right, str):
                return to_js_string(left) + to_js_string(right)
            if _is_number(left) and _is_number(right):
                return _normalize(left + right)
            raise _Deopt
        if op == "===":
            return type(left) is type(right) and left == right
        if op == "!==":
            return not (type(left) is type(right) and left == right)
        if not (_is_number(left) and _is_number(right)):
            raise _Deopt
        if op == "-":
            return _normalize(left - right)
        if op == "*":
            return _normalize(left * right)
        if op == "/":
            if right == 0:
                raise _Deopt
            return _normalize(left / right)
        if op == "%":
            if right == 0:
                raise _Deopt
            return _normalize(math.fmod(left, right))
        if op == "**":
            return _normalize(left ** right)
        raise _Deopt

    def _eval_unary(self, node: tree_sitter.Node) -> Any:
        operator = node.child_by_field_name("operator")
        argument = node.child_by_field_name("argument")
        if operator is None or argument is None:
            raise _Deopt
        op = operator.type
        if op == "void":
            return UNDEFINED
        value = self._eval(argument)
        if op == "!":
            return not is_truthy(value)
        if op in ("-", "+") and _is_number(value):
            return -value if op == "-" else value
        raise _Deopt

    def _eval_object(self, node: tree_sitter.Node) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for child in named_children(node):
            if child.type == "pair":
                key_node = child.child_by_field_name("key")
                value_node = child.child_by_field_name("value")
                if key_node is None or value_node is None:
                    raise _Deopt
                if key_node.type in ("property_identifier", "private_property_identifier"):
                    key = node_text(key_node)
                elif key_node.type == "string":
                    key = string_value(key_node)
                elif key_node.type == "number":
                    key = to_js_string(parse_number(node_text(key_node)))
                else:
                    raise _Deopt
                result[key] = self._eval(value_node)
            elif child.type == "shorthand_property_identifier":
                result[node_text(child)] = self._eval_identifier(child)
            else:
                raise _Deopt
        return result
