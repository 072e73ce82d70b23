"""Lexical binding resolution over tree-sitter JavaScript trees.

Answers "what does this identifier refer to?" by walking outward through the
enclosing scopes and consulting a per-scope declaration table. This is what
lets the recognizers match components by import identity rather than by name:
a parameter or local variable called ``FormattedMessage`` shadows the import.
"""

from __future__ import annotations

from dataclasses import dataclass

import tree_sitter

from intl_extract.tools.helpers import find_child, iter_nodes, named_children, node_text, string_value

FUNCTION_TYPES = frozenset({
    "function_declaration",
    "function_expression",
    "function",
    "generator_function_declaration",
    "generator_function",
    "arrow_function",
    "method_definition",
})

BLOCK_TYPES = frozenset({
    "statement_block",
    "switch_body",
    "class_static_block",
})

SCOPE_TYPES = FUNCTION_TYPES | BLOCK_TYPES | {
    "program",
    "for_statement",
    "for_in_statement",
    "catch_clause",
}


@dataclass(frozen=True)
class Binding:
    """A declared name and where it came from."""

    name: str
    kind: str  # import, namespace, const, let, var, param, function, class, catch
    node: tree_sitter.Node
    value: tree_sitter.Node | None = None
    source: str | None = None
    imported: str | None = None


def pattern_identifiers(node: tree_sitter.Node) -> list[tree_sitter.Node]:
    """Return the identifiers bound by a declaration or parameter pattern."""
    kind = node.type
    if kind in ("identifier", "shorthand_property_identifier_pattern"):
        return [node]
    if kind in ("assignment_pattern", "object_assignment_pattern"):
        left = node.child_by_field_name("left")
        return pattern_identifiers(left) if left is not None else []
    if kind == "pair_pattern":
        value = node.child_by_field_name("value")
        return pattern_identifiers(value) if value is not None else []
    if kind in ("required_parameter", "optional_parameter"):
        pattern = node.child_by_field_name("pattern")
        return pattern_identifiers(pattern) if pattern is not None else []
    if kind in ("object_pattern", "array_pattern", "rest_pattern", "formal_parameters"):
        found: list[tree_sitter.Node] = []
        for child in named_children(node):
            found.extend(pattern_identifiers(child))
        return found
    return []


class ScopeResolver:
    """Resolves identifiers to their bindings within one syntax tree."""

    def __init__(self, root: tree_sitter.Node):
        self._root = root
        self._tables: dict[int, dict[str, Binding]] = {}
        self._reassigned: set[str] | None = None

    def lookup(self, node: tree_sitter.Node, name: str | None = None) -> Binding | None:
        """Find the binding an identifier node refers to, or None for globals."""
        if name is None:
            name = node_text(node)
        current = node.parent
        while current is not None:
            if current.type in SCOPE_TYPES:
                binding = self._declarations(current).get(name)
                if binding is not None:
                    return binding
            current = current.parent
        return None

    def resolve_import(self, node: tree_sitter.Node) -> tuple[str, str] | None:
        """Return ``(module source, imported name)`` if ``node`` refers to an import.

        Handles plain identifiers (named and default imports) and member
        expressions on a namespace import, e.g. ``Intl.FormattedMessage``.
        """
        if node.type in ("identifier", "jsx_identifier"):
            binding = self.lookup(node)
            if binding is not None and binding.kind == "import":
                return binding.source or "", binding.imported or ""
            return None

        if node.type in ("member_expression", "nested_identifier"):
            obj = node.child_by_field_name("object")
            prop = node.child_by_field_name("property")
            if obj is None or prop is None:
                parts = named_children(node)
                if len(parts) != 2:
                    return None
                obj, prop = parts
            if obj.type not in ("identifier", "jsx_identifier"):
                return None
            binding = self.lookup(obj)
            if binding is None:
                return None
            if binding.kind == "namespace" or (
                binding.kind == "import" and binding.imported == "default"
            ):
                return binding.source or "", node_text(prop)
        return None

    def references_import(self, node: tree_sitter.Node, source: str, imported: str) -> bool:
        """True if ``node`` refers to ``imported`` from module ``source``."""
        return self.resolve_import(node) == (source, imported)

    def is_constant(self, binding: Binding) -> bool:
        """True if a variable binding is never reassigned after initialization."""
        if binding.kind == "const":
            return True
        if binding.kind in ("let", "var"):
            return binding.name not in self._reassigned_names()
        return False

    # --- declaration tables ---

    def _declarations(self, scope: tree_sitter.Node) -> dict[str, Binding]:
        table = self._tables.get(scope.id)
        if table is not None:
            return table

        table = {}
        if scope.type in FUNCTION_TYPES:
            self._collect_function(scope, table)
        elif scope.type == "program":
            self._collect_block(scope, table)
            self._collect_vars(scope, table)
        elif scope.type in BLOCK_TYPES:
            self._collect_block(scope, table)
        elif scope.type == "for_statement":
            init = scope.child_by_field_name("initializer")
            if init is not None and init.type == "lexical_declaration":
                self._collect_declaration(init, table)
        elif scope.type == "for_in_statement":
            left = scope.child_by_field_name("left")
            kind = next(
                (c.type for c in scope.children if c.type in ("const", "let")),
                None,
            )
            if left is not None and kind is not None:
                for ident in pattern_identifiers(left):
                    self._add(table, Binding(node_text(ident), kind, ident))
        elif scope.type == "catch_clause":
            param = scope.child_by_field_name("parameter")
            if param is not None:
                for ident in pattern_identifiers(param):
                    self._add(table, Binding(node_text(ident), "catch", ident))

        self._tables[scope.id] = table
        return table

    @staticmethod
    def _add(table: dict[str, Binding], binding: Binding) -> None:
        table.setdefault(binding.name, binding)

    def _collect_function(self, scope: tree_sitter.Node, table: dict[str, Binding]) -> None:
        params = scope.child_by_field_name("parameters")
        if params is None:
            params = scope.child_by_field_name("parameter")
        if params is not None:
            for ident in pattern_identifiers(params):
                self._add(table, Binding(node_text(ident), "param", ident))

        if scope.type in ("function_expression", "function", "generator_function"):
            name = scope.child_by_field_name("name")
            if name is not None:
                self._add(table, Binding(node_text(name), "function", name))

        body = scope.child_by_field_name("body")
        if body is not None and body.type == "statement_block":
            self._collect_vars(body, table)

    def _collect_block(self, block: tree_sitter.Node, table: dict[str, Binding]) -> None:
        for child in named_children(block):
            if child.type == "export_statement":
                decl = child.child_by_field_name("declaration")
                if decl is None:
                    continue
                child = decl

            if child.type == "import_statement":
                self._collect_import(child, table)
            elif child.type == "lexical_declaration":
                self._collect_declaration(child, table)
            elif child.type in ("function_declaration", "generator_function_declaration"):
                name = child.child_by_field_name("name")
                if name is not None:
                    self._add(table, Binding(node_text(name), "function", name))
            elif child.type in ("class_declaration", "abstract_class_declaration"):
                name = child.child_by_field_name("name")
                if name is not None:
                    self._add(table, Binding(node_text(name), "class", name))

    def _collect_declaration(self, decl: tree_sitter.Node, table: dict[str, Binding]) -> None:
        kind = decl.children[0].type if decl.children else "var"
        if decl.type == "variable_declaration":
            kind = "var"
        for declarator in named_children(decl):
            if declarator.type != "variable_declarator":
                continue
            name = declarator.child_by_field_name("name")
            if name is None:
                continue
            if name.type == "identifier":
                value = declarator.child_by_field_name("value")
                self._add(table, Binding(node_text(name), kind, name, value=value))
            else:
                for ident in pattern_identifiers(name):
                    self._add(table, Binding(node_text(ident), kind, ident))

    def _collect_vars(self, root: tree_sitter.Node, table: dict[str, Binding]) -> None:
        """Collect hoisted ``var`` declarations without entering nested functions."""
        stack = list(root.children)
        while stack:
            node = stack.pop()
            if node.type in FUNCTION_TYPES:
                continue
            if node.type == "variable_declaration":
                self._collect_declaration(node, table)
            stack.extend(node.children)

    def _collect_import(self, stmt: tree_sitter.Node, table: dict[str, Binding]) -> None:
        source_node = stmt.child_by_field_name("source")
        clause = find_child(stmt, "import_clause")
        if source_node is None or clause is None:
            return
        source = string_value(source_node)

        for child in named_children(clause):
            if child.type == "identifier":
                self._add(table, Binding(node_text(child), "import", child, source=source, imported="default"))
            elif child.type == "namespace_import":
                ident = find_child(child, "identifier")
                if ident is not None:
                    self._add(table, Binding(node_text(ident), "namespace", ident, source=source))
            elif child.type == "named_imports":
                for spec in named_children(child):
                    if spec.type != "import_specifier":
                        continue
                    name = spec.child_by_field_name("name")
                    if name is None:
                        continue
                    alias = spec.child_by_field_name("alias")
                    imported = string_value(name) if name.type == "string" else node_text(name)
                    local = alias if alias is not None else name
                    self._add(table, Binding(node_text(local), "import", local, source=source, imported=imported))

    def _reassigned_names(self) -> set[str]:
        if self._reassigned is None:
            names: set[str] = set()
            for node in iter_nodes(self._root):
                target = None
                if node.type in ("assignment_expression", "augmented_assignment_expression"):
                    target = node.child_by_field_name("left")
                elif node.type == "update_expression":
                    target = node.child_by_field_name("argument")
                if target is not None and target.type == "identifier":
                    names.add(node_text(target))
            self._reassigned = names
        return self._reassigned
