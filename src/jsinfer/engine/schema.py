"""
Node-kind schema for ESTree input.

Maps every supported node kind to the ordered property names that hold child
nodes. Every other property of a raw node is plain data (names, literal
values, operators, flags) and is copied through verbatim. Supporting a new
kind takes a schema entry plus a wrapper class with an ``infer_type`` rule.
"""

from __future__ import annotations

SCHEMA_VERSION = 2

STATEMENT_KINDS: dict[str, tuple[str, ...]] = {
    "Program": ("body",),
    "BlockStatement": ("body",),
    "EmptyStatement": (),
    "DebuggerStatement": (),
    "FunctionDeclaration": ("id", "params", "body"),
    "VariableDeclaration": ("declarations",),
    "VariableDeclarator": ("id", "init"),
    "ExpressionStatement": ("expression",),
    "IfStatement": ("test", "consequent", "alternate"),
    "WhileStatement": ("test", "body"),
    "DoWhileStatement": ("body", "test"),
    "ForStatement": ("init", "test", "update", "body"),
    "ForInStatement": ("left", "right", "body"),
    "SwitchStatement": ("discriminant", "cases"),
    "SwitchCase": ("test", "consequent"),
    "ReturnStatement": ("argument",),
    "BreakStatement": ("label",),
    "ContinueStatement": ("label",),
    "LabeledStatement": ("label", "body"),
    "ThrowStatement": ("argument",),
    "TryStatement": ("block", "handler", "finalizer"),
    "CatchClause": ("param", "body"),
    "Property": ("key", "value"),
}

EXPRESSION_KINDS: dict[str, tuple[str, ...]] = {
    "Identifier": (),
    "Literal": (),
    "ThisExpression": (),
    "AssignmentExpression": ("left", "right"),
    "UnaryExpression": ("argument",),
    "BinaryExpression": ("left", "right"),
    "LogicalExpression": ("left", "right"),
    "ConditionalExpression": ("test", "consequent", "alternate"),
    "UpdateExpression": ("argument",),
    "MemberExpression": ("object", "property"),
    "CallExpression": ("callee", "arguments"),
    "NewExpression": ("callee", "arguments"),
    "SequenceExpression": ("expressions",),
    "ArrayExpression": ("elements",),
    "ObjectExpression": ("properties",),
    "FunctionExpression": ("id", "params", "body"),
}

NODE_SCHEMA: dict[str, tuple[str, ...]] = {**STATEMENT_KINDS, **EXPRESSION_KINDS}


def child_selectors(kind: str) -> tuple[str, ...]:
    """Child-holding property names for ``kind`` (raises ``KeyError`` if unknown)."""
    return NODE_SCHEMA[kind]


def is_expression_kind(kind: str) -> bool:
    return kind in EXPRESSION_KINDS
