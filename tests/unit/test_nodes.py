"""
Unit tests for node wrapping, the schema table and scope assignment.
"""

import pytest

from jsinfer.engine import NODE_CLASSES, NODE_SCHEMA, Program
from jsinfer.engine.functions import FunctionDeclaration, FunctionExpression
from jsinfer.engine.schema import EXPRESSION_KINDS, child_selectors, is_expression_kind
from jsinfer.utils.errors import UnknownNodeKind


class TestSchema:
    """Tests for the kind table and the wrapper registry."""

    def test_every_schema_kind_has_a_wrapper(self):
        assert set(NODE_SCHEMA) == set(NODE_CLASSES)

    def test_child_selectors(self):
        assert child_selectors("IfStatement") == ("test", "consequent", "alternate")
        assert child_selectors("Identifier") == ()

    def test_unknown_selector_kind(self):
        with pytest.raises(KeyError):
            child_selectors("ArrowFunctionExpression")

    def test_expression_kinds(self):
        assert is_expression_kind("CallExpression")
        assert not is_expression_kind("IfStatement")
        assert "FunctionExpression" in EXPRESSION_KINDS


class TestWrapping:
    """Tests for building the wrapper tree."""

    def test_children_follow_schema_order(self, program_factory):
        program = program_factory("var x = a + 1;")
        declaration = program.body[0]
        declarator = declaration.declarations[0]
        assert declarator.id.name == "x"
        assert declarator.init.kind == "BinaryExpression"
        assert [child.kind for child in declarator.init.children] == ["Identifier", "Literal"]

    def test_data_copied_verbatim(self, program_factory):
        program = program_factory("var s = 'x'; s += 'y';")
        assert program.body[0].data["kind"] == "var"
        assignment = program.body[1].expression
        assert assignment.data["operator"] == "+="
        assert "left" not in assignment.data

    def test_absent_children_are_none(self, program_factory):
        program = program_factory("if (a) b();")
        assert program.body[0].alternate is None

    def test_parent_links_and_program(self, program_factory):
        program = program_factory("f(1);")
        call = program.body[0].expression
        assert call.parent is program.body[0]
        assert call.arguments[0].program is program
        assert call.arguments[0].slot == "arguments"

    def test_node_count(self, program_factory):
        # Program, ExpressionStatement, CallExpression, Identifier, Literal
        assert program_factory("f(1);").node_count == 5

    def test_location(self, program_factory):
        program = program_factory("\n  foo();")
        call = program.body[0].expression
        assert call.location.line == 2
        assert call.location.column == 3

    def test_outline(self, program_factory):
        program = program_factory("var x = 1;")
        assert program.outline() == [
            ["VariableDeclaration", [["VariableDeclarator", [["Identifier"], ["Literal"]]]]]
        ]

    def test_each_descendant_filters_by_kind(self, program_factory):
        program = program_factory("a = b + c;")
        names = [node.name for node in program.each_descendant("Identifier")]
        assert names == ["a", "b", "c"]


class TestUnknownKinds:
    """Tests for schema gaps."""

    def test_unknown_kind_in_source(self, program_factory):
        with pytest.raises(UnknownNodeKind) as exc_info:
            program_factory("var f = (x) => x;")
        assert exc_info.value.kind == "ArrowFunctionExpression"
        assert "params" in exc_info.value.keys
        assert "Unknown node kind: ArrowFunctionExpression" in str(exc_info.value)

    def test_unknown_kind_in_raw_tree(self):
        raw = {
            "type": "Program",
            "body": [{"type": "Foo", "bar": 1}],
        }
        with pytest.raises(UnknownNodeKind) as exc_info:
            Program(raw)
        assert exc_info.value.keys == ["type", "bar"]
        assert "Program: Unknown node kind: Foo" in str(exc_info.value)
        assert '"bar": 1' in str(exc_info.value)

    def test_root_must_be_program(self):
        with pytest.raises(UnknownNodeKind):
            Program({"type": "Identifier", "name": "x"})


class TestScopes:
    """Tests for scope assignment during wrapping."""

    def test_functions_open_scopes(self, program_factory):
        program = program_factory("function f(a) { var b; }")
        function = program.body[0]
        assert isinstance(function, FunctionDeclaration)
        assert function.scope is program.scope
        assert function.child_scope is not program.scope
        assert function.child_scope.parent is program.scope

    def test_function_name_belongs_to_enclosing_scope(self, program_factory):
        program = program_factory("function f(a) { var b; }")
        function = program.body[0]
        assert program.scope.is_declared_locally("f")
        assert function.child_scope.is_declared_locally("a")
        assert function.child_scope.is_declared_locally("b")
        assert not program.scope.is_declared_locally("b")

    def test_declarations_hoisted(self, program_factory):
        """Test that a use before the declaration resolves to the declaring scope."""
        program = program_factory("function f() { x = 1; var x; }")
        function = program.body[0]
        use = function.body.body[0].expression.left
        assert use.defining_scope() is function.child_scope

    def test_undeclared_names_are_global(self, program_factory):
        program = program_factory("function f() { y = 1; }")
        use = program.body[0].body.body[0].expression.left
        assert use.defining_scope() is program.scope

    def test_catch_parameter_is_declared(self, program_factory):
        program = program_factory("try { a(); } catch (err) { b(err); }")
        assert program.scope.is_declared_locally("err")

    def test_each_child_in_scope_skips_nested_functions(self, program_factory):
        program = program_factory("var a; function f() { var b; }")
        kinds = [node.kind for node in program.each_child_in_scope()]
        assert "FunctionDeclaration" in kinds
        names = [node.name for node in program.each_child_in_scope(kind="Identifier")]
        assert names == ["a"]

    def test_anonymous_function_names(self, program_factory):
        program = program_factory("var g = function () {}; run(function () {});")
        named = program.body[0].declarations[0].init
        anonymous = program.body[1].expression.arguments[0]
        assert isinstance(named, FunctionExpression)
        assert named.display_name == "g"
        assert anonymous.display_name == "(anonymous)"

    def test_function_expression_name_is_local(self, program_factory):
        program = program_factory("var f = function g(a) { return g; };")
        function = program.body[0].declarations[0].init
        assert function.id.scope is function.child_scope
        assert function.child_scope.is_declared_locally("g")
        assert not program.scope.is_declared_locally("g")
        assert function.display_name == "f"


class TestReferences:
    """Tests for identifiers that are names rather than variable uses."""

    def test_member_property_is_not_a_reference(self, program_factory):
        program = program_factory("a.length;")
        member = program.body[0].expression
        assert member.object.is_reference()
        assert not member.property.is_reference()

    def test_computed_member_property_is_a_reference(self, program_factory):
        program = program_factory("a[i];")
        assert program.body[0].expression.property.is_reference()

    def test_object_keys_and_labels(self, program_factory):
        program = program_factory("var o = {key: value}; outer: for (;;) { break outer; }")
        prop = program.body[0].declarations[0].init.properties[0]
        assert not prop.key.is_reference()
        assert prop.value.is_reference()
        labeled = program.body[1]
        assert not labeled.label.is_reference()
