"""
Function declarations and expressions.

Both kinds share ``FunctionLike``: they open a scope for their parameters
and body, derive a ``func<R>`` type from the ``return`` statements in that
scope, and record it on the name they are bound to.
"""

from __future__ import annotations

from typing import Optional

from jsinfer.engine.nodes import Expression, Node, node_kind
from jsinfer.engine.scope import Scope
from jsinfer.engine.types import (
    VOID_TYPE,
    DataType,
    FunctionType,
    Ordering,
    compare_types,
    unify_types,
)

ANONYMOUS = "(anonymous)"


class FunctionLike(Node):
    """
    Behaviour shared by ``FunctionDeclaration`` and ``FunctionExpression``.

    Parameters and body belong to ``inner_scope``. Where the function's own
    name lives depends on the kind.
    """

    defining_slots = frozenset({"id", "params"})

    def initialize(self) -> None:
        self.inner_scope = Scope(self, self.scope, self.program.config.max_type_depth)

    def finalize(self) -> None:
        for identifier in (getattr(self, "id", None), self.declarator_identifier):
            if identifier is not None:
                identifier.scope.function_bindings[identifier.name] = self

    @property
    def child_scope(self) -> Scope:
        return self.inner_scope

    def scope_for_child(self, slot: Optional[str]) -> Scope:
        return self.inner_scope

    @property
    def declarator_identifier(self):
        """The name of the ``var`` declarator this function initializes, if any."""
        if self.slot == "init" and self.parent is not None and self.parent.kind == "VariableDeclarator":
            return getattr(self.parent, "id", None)
        return None

    @property
    def binding_identifier(self):
        """The identifier this function is listed under, if any."""
        declarator = self.declarator_identifier
        if declarator is not None:
            return declarator
        return getattr(self, "id", None)

    @property
    def display_name(self) -> str:
        binding = self.binding_identifier
        return binding.name if binding is not None else ANONYMOUS

    def infer_type(self) -> DataType:
        return_types = [
            statement.argument.get_data_type() if statement.argument is not None else VOID_TYPE
            for statement in self.each_child_in_scope(kind="ReturnStatement")
        ]
        if not return_types:
            return FunctionType(VOID_TYPE)
        return FunctionType(unify_types(return_types))

    def register_binding(self, identifier) -> bool:
        """
        Record this function's derived type for ``identifier``.

        Only the last function bound to the name records it. A re-derivation
        incomparable with the function type already recorded replaces it
        instead of making the name ambiguous.
        """
        scope = identifier.defining_scope()
        if scope.function_bindings.get(identifier.name) is not self:
            return False
        derived = self.get_data_type()
        current = scope.type_for(identifier.name)
        if isinstance(current, FunctionType) and compare_types(derived, current) is Ordering.INCOMPARABLE:
            return scope.replace_candidates(identifier.name, derived)
        return scope.register_candidate(identifier.name, derived)

    def reconcile(self) -> bool:
        # Anonymous functions bound by a declarator are recorded by it.
        if self.id is None:
            return False
        return self.register_binding(self.id)


@node_kind("FunctionDeclaration")
class FunctionDeclaration(FunctionLike):
    def scope_for_child(self, slot: Optional[str]) -> Scope:
        # The declared name is visible in the enclosing scope.
        if slot == "id":
            return self.scope
        return self.inner_scope

    def __repr__(self) -> str:
        return f"FunctionDeclaration {self.display_name}"


@node_kind("FunctionExpression")
class FunctionExpression(FunctionLike, Expression):
    def __repr__(self) -> str:
        return f"FunctionExpression {self.display_name}"
