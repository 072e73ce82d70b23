"""Tests for static evaluation and scope resolution."""

import pytest

from intl_extract.tools.evaluate import UNDEFINED, StaticEvaluator, to_js_string
from intl_extract.tools.helpers import iter_nodes, node_text
from intl_extract.tools.parser import ParserFactory
from intl_extract.tools.scope import ScopeResolver

FACTORY = ParserFactory(["javascript"])


def _probe(code: str):
    """Evaluate the initializer of the `__probe` variable in ``code``."""
    tree = FACTORY.parse_bytes(code.encode("utf-8"), "javascript")
    root = tree.root_node
    for node in iter_nodes(root):
        if node.type == "variable_declarator":
            name = node.child_by_field_name("name")
            if name is not None and node_text(name) == "__probe":
                return StaticEvaluator(ScopeResolver(root)).evaluate(node.child_by_field_name("value"))
    raise AssertionError("no __probe declaration")


def _first(code: str, node_type: str):
    tree = FACTORY.parse_bytes(code.encode("utf-8"), "javascript")
    root = tree.root_node
    for node in iter_nodes(root):
        if node.type == node_type:
            return root, node
    raise AssertionError(f"no {node_type} node")


class TestLiterals:
    def test_string(self):
        assert _probe("const __probe = 'hello';").value == "hello"

    def test_string_escapes(self):
        result = _probe('const __probe = "a\\nb\\u00e9\\x41";')
        assert result.confident
        assert result.value == "a\nbéA"

    def test_numbers(self):
        assert _probe("const __probe = 42;").value == 42
        assert _probe("const __probe = 0x1F;").value == 31
        assert _probe("const __probe = 1.5;").value == 1.5

    def test_keywords(self):
        assert _probe("const __probe = true;").value is True
        assert _probe("const __probe = null;").value is None
        assert _probe("const __probe = undefined;").value is UNDEFINED

    def test_object(self):
        result = _probe("const __probe = {context: 'nav', 'max-length': 20, nested: {a: [1, 'b']}};")
        assert result.confident
        assert result.value == {"context": "nav", "max-length": 20, "nested": {"a": [1, "b"]}}

    def test_object_with_spread_not_confident(self):
        assert not _probe("const __probe = {...other};").confident


class TestExpressions:
    def test_concatenation(self):
        assert _probe("const __probe = 'a' + 'b' + 1;").value == "ab1"

    def test_arithmetic(self):
        assert _probe("const __probe = (1 + 2) * 3;").value == 9
        assert _probe("const __probe = 1 / 2;").value == 0.5

    def test_template_literal(self):
        assert _probe("const __probe = `Hello ${'wor' + 'ld'}!`;").value == "Hello world!"

    def test_template_with_dynamic_part(self):
        assert not _probe("const __probe = `Hello ${user.name}`;").confident

    def test_ternary(self):
        assert _probe("const __probe = true ? 'yes' : 'no';").value == "yes"

    def test_logical(self):
        assert _probe("const __probe = '' || 'fallback';").value == "fallback"
        assert _probe("const __probe = null ?? 'default';").value == "default"

    def test_unary(self):
        assert _probe("const __probe = -5;").value == -5
        assert _probe("const __probe = !0;").value is True

    def test_call_not_confident(self):
        assert not _probe("const __probe = getMessage();").confident

    def test_member_access_not_confident(self):
        assert not _probe("const __probe = messages.greeting;").confident


class TestBindings:
    def test_const_reference(self):
        result = _probe("const GREETING = 'Hi'; const __probe = GREETING + ' there';")
        assert result.value == "Hi there"

    def test_chained_constants(self):
        result = _probe("const A = 'a'; const B = A + 'b'; const __probe = B;")
        assert result.value == "ab"

    def test_let_never_reassigned(self):
        assert _probe("let A = 'a'; const __probe = A;").value == "a"

    def test_reassigned_let_not_confident(self):
        assert not _probe("let A = 'a'; A = 'b'; const __probe = A;").confident

    def test_incremented_var_not_confident(self):
        assert not _probe("var n = 1; n++; const __probe = n;").confident

    def test_unknown_identifier_not_confident(self):
        assert not _probe("const __probe = somethingGlobal;").confident

    def test_parameter_shadows_outer_constant(self):
        code = "const A = 'outer'; function f(A) { const __probe = A; }"
        assert not _probe(code).confident

    def test_inner_constant_shadows_outer(self):
        code = "const A = 'outer'; function f() { const A = 'inner'; const __probe = A; }"
        assert _probe(code).value == "inner"

    def test_cycle_not_confident(self):
        assert not _probe("const a = b; const b = a; const __probe = a;").confident


class TestScopeImports:
    def test_named_import(self):
        root, element = _first(
            "import { FormattedMessage } from 'react-intl';\n<FormattedMessage />;",
            "jsx_self_closing_element",
        )
        name = element.child_by_field_name("name")
        assert ScopeResolver(root).resolve_import(name) == ("react-intl", "FormattedMessage")

    def test_aliased_import(self):
        root, element = _first(
            "import { FormattedMessage as FM } from 'react-intl';\n<FM />;",
            "jsx_self_closing_element",
        )
        name = element.child_by_field_name("name")
        assert ScopeResolver(root).references_import(name, "react-intl", "FormattedMessage")

    def test_namespace_import(self):
        root, element = _first(
            "import * as Intl from 'react-intl';\n<Intl.FormattedMessage />;",
            "jsx_self_closing_element",
        )
        name = element.child_by_field_name("name")
        assert ScopeResolver(root).resolve_import(name) == ("react-intl", "FormattedMessage")

    def test_parameter_shadows_import(self):
        root, element = _first(
            "import { FormattedMessage } from 'react-intl';\n"
            "function render(FormattedMessage) { return <FormattedMessage />; }",
            "jsx_self_closing_element",
        )
        name = element.child_by_field_name("name")
        assert ScopeResolver(root).resolve_import(name) is None

    def test_local_variable_shadows_import(self):
        root, element = _first(
            "import { FormattedMessage } from 'react-intl';\n"
            "const render = () => { const FormattedMessage = Custom; return <FormattedMessage />; };",
            "jsx_self_closing_element",
        )
        name = element.child_by_field_name("name")
        assert ScopeResolver(root).resolve_import(name) is None

    def test_global_name_is_not_an_import(self):
        root, element = _first("<FormattedMessage />;", "jsx_self_closing_element")
        name = element.child_by_field_name("name")
        assert ScopeResolver(root).resolve_import(name) is None


class TestToJsString:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("a", "a"),
            (True, "true"),
            (None, "null"),
            (UNDEFINED, "undefined"),
            (3, "3"),
            (2.0, "2"),
            (0.25, "0.25"),
            ([1, "a"], "1,a"),
            ({}, "[object Object]"),
        ],
    )
    def test_conversion(self, value, expected):
        assert to_js_string(value) == expected
