"""
Statement wrappers.

Statements have no value of their own (their type is ``void``). A few of
them take part in inference: declarators record the type of their
initializer, ``for ... in`` loops mark their loop variable as a string, and
label and key slots hold names that are not variable references.
"""

from __future__ import annotations

from typing import Optional

from jsinfer.engine.functions import FunctionLike
from jsinfer.engine.nodes import Node, node_kind
from jsinfer.engine.types import STRING_TYPE


# -----------------------------------------------------------------------------
# Blocks and simple statements
# -----------------------------------------------------------------------------


@node_kind("BlockStatement")
class BlockStatement(Node):
    pass


@node_kind("EmptyStatement")
class EmptyStatement(Node):
    pass


@node_kind("DebuggerStatement")
class DebuggerStatement(Node):
    pass


@node_kind("ExpressionStatement")
class ExpressionStatement(Node):
    pass


@node_kind("ReturnStatement")
class ReturnStatement(Node):
    """``return`` with an optional argument; collected by the enclosing function."""

    pass


@node_kind("ThrowStatement")
class ThrowStatement(Node):
    pass


# -----------------------------------------------------------------------------
# Declarations
# -----------------------------------------------------------------------------


@node_kind("VariableDeclaration")
class VariableDeclaration(Node):
    @property
    def declaration_kind(self) -> str:
        """``var``, ``let`` or ``const``."""
        return self.data.get("kind", "var")


@node_kind("VariableDeclarator")
class VariableDeclarator(Node):
    """
    A single ``name = init`` binding.

    Each fixpoint pass re-derives the initializer's type and offers it as a
    candidate for the declared name.
    """

    defining_slots = frozenset({"id"})

    def reconcile(self) -> bool:
        if self.init is None:
            return False
        if isinstance(self.init, FunctionLike):
            return self.init.register_binding(self.id)
        return self.id.probable_type(self.init.get_data_type())


# -----------------------------------------------------------------------------
# Control flow
# -----------------------------------------------------------------------------


@node_kind("IfStatement")
class IfStatement(Node):
    pass


@node_kind("WhileStatement")
class WhileStatement(Node):
    pass


@node_kind("DoWhileStatement")
class DoWhileStatement(Node):
    pass


@node_kind("ForStatement")
class ForStatement(Node):
    pass


@node_kind("ForInStatement")
class ForInStatement(Node):
    """``for (key in object)``: the loop variable receives property names."""

    def propagate(self) -> bool:
        target = self.left
        if isinstance(target, VariableDeclaration) and target.declarations:
            target = target.declarations[0].id
        probable_type = getattr(target, "probable_type", None)
        if probable_type is None:
            return False
        return probable_type(STRING_TYPE)


@node_kind("SwitchStatement")
class SwitchStatement(Node):
    pass


@node_kind("SwitchCase")
class SwitchCase(Node):
    """A ``case``; ``test`` is None for ``default``."""

    pass


@node_kind("TryStatement")
class TryStatement(Node):
    pass


@node_kind("CatchClause")
class CatchClause(Node):
    defining_slots = frozenset({"param"})


# -----------------------------------------------------------------------------
# Labels and object keys
# -----------------------------------------------------------------------------


class LabelHolder(Node):
    """Statements whose ``label`` slot names a label, not a variable."""

    def holds_reference(self, slot: Optional[str]) -> bool:
        return slot != "label"


@node_kind("BreakStatement")
class BreakStatement(LabelHolder):
    pass


@node_kind("ContinueStatement")
class ContinueStatement(LabelHolder):
    pass


@node_kind("LabeledStatement")
class LabeledStatement(LabelHolder):
    pass


@node_kind("Property")
class Property(Node):
    """An object literal entry. Non-computed keys are names, not references."""

    @property
    def computed(self) -> bool:
        return bool(self.data.get("computed"))

    def holds_reference(self, slot: Optional[str]) -> bool:
        return slot != "key" or self.computed
