"""
Read-only queries over an inferred program.

These are the only entry points consumers of inference results need:
node types, the identifiers each scope defines and declaration lookup.
None of them mutate scope tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from jsinfer.engine.expressions import Identifier
from jsinfer.engine.functions import FunctionLike
from jsinfer.engine.nodes import Node
from jsinfer.engine.scope import Scope
from jsinfer.engine.types import DataType


@dataclass
class IdentifierInfo:
    """
    The type of one defined name.

    ``identifiers`` holds the names defined inside a function's own scope,
    present only for functions listed recursively.
    """

    data_type: DataType
    identifiers: Optional[dict[str, IdentifierInfo]] = None

    def as_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"dataType": str(self.data_type)}
        if self.identifiers is not None:
            result["identifiers"] = {
                name: info.as_dict() for name, info in self.identifiers.items()
            }
        return result


def get_data_type(node: Node) -> DataType:
    """Current type of ``node`` (identifiers resolve through their scope chain)."""
    return node.get_data_type()


def get_identifiers(node: Node, recursive: bool = False) -> dict[str, IdentifierInfo]:
    """
    Collect the names defined in ``node``'s child scope with their types.

    Functions are listed under their display name; with ``recursive`` the
    names defined inside each function are nested under its entry.
    """
    scope = node.child_scope
    result: dict[str, IdentifierInfo] = {}

    for child in node.each_child_in_scope(scope):
        if isinstance(child, FunctionLike):
            binding = child.binding_identifier
            data_type = binding.get_data_type() if binding is not None else child.get_data_type()
            nested = get_identifiers(child, recursive) if recursive else None
            result[child.display_name] = IdentifierInfo(data_type, nested)
        elif child.parent is node and child.slot == "id":
            # A function expression's own name is listed on its entry.
            continue
        elif isinstance(child, Identifier) and child.is_defined_here():
            result.setdefault(child.name, IdentifierInfo(child.get_data_type()))

    return result


def get_identifier(scope: Scope, name: str) -> Node:
    """
    Look up the node declaring ``name`` directly in ``scope``.

    Raises:
        UnknownIdentifier: If ``scope`` does not declare ``name``
    """
    return scope.get_identifier(name)
