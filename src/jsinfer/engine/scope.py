"""
Lexical scopes and their candidate-type tables.

A scope is opened by the program and by every function. It records which
node declares each name and the growing, deduplicated list of candidate
descriptors inferred for that name. Scopes form a chain from inner to outer;
names that are never declared anywhere (implicit globals) live in the root.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from jsinfer.engine.types import (
    OBJECT_TYPE,
    DataType,
    Ordering,
    ambiguous,
    compare_types,
)
from jsinfer.utils.diagnostics import suggest_similar
from jsinfer.utils.errors import UnknownIdentifier

if TYPE_CHECKING:
    from jsinfer.engine.nodes import Node

logger = logging.getLogger(__name__)


class Scope:
    """
    A single scope level with its identifier and candidate-type tables.

    ``identifiers`` maps each name to its declaring node (last declaration
    wins). ``identifier_types`` maps each name to its candidate descriptors;
    exactly one candidate means the type is unambiguous.
    """

    def __init__(
        self,
        owner: Node,
        parent: Optional[Scope] = None,
        max_type_depth: int = 4,
    ) -> None:
        self.owner = owner
        self.parent = parent
        self.max_type_depth = max_type_depth
        self.identifiers: dict[str, Node] = {}
        # Last function bound to each name; only it records the name's type.
        self.function_bindings: dict[str, Node] = {}
        self.identifier_types: dict[str, list[DataType]] = {}

    def __repr__(self) -> str:
        return f"Scope({self.owner!r})"

    # -------------------------------------------------------------------------
    # Declarations and lookup
    # -------------------------------------------------------------------------

    @property
    def root(self) -> Scope:
        scope = self
        while scope.parent is not None:
            scope = scope.parent
        return scope

    def declare(self, identifier: Node) -> None:
        """Record ``identifier`` as the declaring node for its name."""
        self.identifiers[identifier.name] = identifier

    def is_declared_locally(self, name: str) -> bool:
        return name in self.identifiers

    def defining_scope(self, name: str) -> Scope:
        """
        Walk the chain outward to the scope that declares ``name``.

        Undeclared names resolve to the root scope.
        """
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope.identifiers:
                return scope
            scope = scope.parent
        return self.root

    def get_identifier(self, name: str) -> Node:
        """
        Return the node declaring ``name`` in this scope.

        Raises:
            UnknownIdentifier: If ``name`` is not declared here
        """
        try:
            return self.identifiers[name]
        except KeyError:
            raise UnknownIdentifier(name, suggest_similar(name, self.get_all_names())) from None

    def get_all_names(self) -> list[str]:
        """Get all declared names visible from this scope, innermost first."""
        names = list(self.identifiers)
        if self.parent is not None:
            names.extend(n for n in self.parent.get_all_names() if n not in names)
        return names

    # -------------------------------------------------------------------------
    # Candidate types
    # -------------------------------------------------------------------------

    def candidates(self, name: str) -> tuple[DataType, ...]:
        return tuple(self.identifier_types.get(name, ()))

    def type_for(self, name: str) -> Optional[DataType]:
        """The candidate for ``name`` if there is exactly one, else ``None``."""
        candidates = self.identifier_types.get(name)
        if candidates and len(candidates) == 1:
            return candidates[0]
        return None

    def resolve_type(self, name: str) -> DataType:
        """
        Current best type for ``name`` in this table.

        One candidate is returned as-is, several become an ambiguous union,
        none at all is ``object``.
        """
        candidates = self.identifier_types.get(name)
        if not candidates:
            return OBJECT_TYPE
        if len(candidates) == 1:
            return candidates[0]
        return ambiguous(*candidates)

    def register_candidate(self, name: str, type_: DataType) -> bool:
        """
        Offer ``type_`` as a candidate for ``name``.

        A candidate weaker than what is already known is ignored, a stronger
        one replaces the candidates it refines, and an incomparable one is
        appended (building toward ambiguity). ``object`` carries no
        information and is never recorded.

        Returns:
            True if the table changed
        """
        if type_ == OBJECT_TYPE or type_.depth > self.max_type_depth:
            return False

        candidates = self.identifier_types.setdefault(name, [])
        if type_ in candidates:
            return False
        if not candidates:
            candidates.append(type_)
            logger.debug("%s: %s is %s", self, name, type_)
            return True

        orderings = [compare_types(type_, existing) for existing in candidates]
        if any(order is Ordering.LESS for order in orderings):
            return False

        refined = [c for c, order in zip(candidates, orderings) if order is Ordering.GREATER]
        if refined:
            position = candidates.index(refined[0])
            candidates[:] = [c for c in candidates if c not in refined]
            candidates.insert(position, type_)
        else:
            candidates.append(type_)

        logger.debug("%s: %s now %s", self, name, self.resolve_type(name))
        return True

    def replace_candidates(self, name: str, type_: DataType) -> bool:
        """
        Discard every candidate for ``name`` and record ``type_`` alone.

        Only for re-derivations that supersede an older structured type of
        the same family; everything else goes through ``register_candidate``.
        """
        if self.identifier_types.get(name) == [type_]:
            return False
        self.clear(name)
        return self.register_candidate(name, type_)

    def clear(self, name: str) -> None:
        self.identifier_types.pop(name, None)
