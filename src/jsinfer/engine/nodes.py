"""
AST node wrappers.

Every raw ESTree node is wrapped in a ``Node`` subclass chosen by its kind.
A wrapper links to its parent, its owning ``Scope`` and the program root,
materializes its child wrappers from the schema table and copies every other
raw property into ``data``.

Wrapping is depth-first and parent-before-children: a node's ``initialize``
hook runs once its ancestors are fully linked and its own data is copied, but
before any of its children exist. ``finalize`` runs after all children are
wrapped.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Iterator, Optional

from jsinfer.engine.schema import child_selectors
from jsinfer.engine.types import VOID_TYPE, DataType
from jsinfer.utils.errors import SourceLocation, UnimplementedInferenceRule, UnknownNodeKind

if TYPE_CHECKING:
    from jsinfer.engine.program import Program
    from jsinfer.engine.scope import Scope


# =============================================================================
# Kind Registry
# =============================================================================

NODE_CLASSES: dict[str, type[Node]] = {}


def node_kind(kind: str):
    """
    Class decorator binding a wrapper class to an ESTree node kind.

    The kind must have an entry in the schema table.
    """

    def decorate(cls: type[Node]) -> type[Node]:
        cls.kind = kind
        cls.child_selectors = child_selectors(kind)
        NODE_CLASSES[kind] = cls
        return cls

    return decorate


def as_raw_node(raw: Any) -> Any:
    """Convert parser objects exposing ``toDict`` (esprima) to plain mappings."""
    to_dict = getattr(raw, "toDict", None)
    if callable(to_dict):
        return to_dict()
    return raw


def wrap_node(raw: Any, parent: Optional[Node] = None, slot: Optional[str] = None) -> Node:
    """
    Wrap a raw node in the wrapper class registered for its kind.

    Raises:
        UnknownNodeKind: If the raw node has no kind or an unsupported one
    """
    raw = as_raw_node(raw)
    kind = raw.get("type") if isinstance(raw, Mapping) else None
    cls = NODE_CLASSES.get(kind) if isinstance(kind, str) else None
    if cls is None:
        raise UnknownNodeKind(kind, raw, context=repr(parent) if parent is not None else "")
    return cls(raw, parent, slot)


# =============================================================================
# Base Wrappers
# =============================================================================


class Node:
    """
    Base class for all wrapped nodes.

    Attributes:
        raw: The raw ESTree mapping this node wraps
        parent: The wrapping parent, None only for the program
        slot: The parent property holding this node ("body", "left", ...)
        program: The program root
        scope: The scope this node belongs to
        data: Raw scalar properties (names, values, operators, flags)
        children: Child wrappers in schema order

    Child wrappers are also reachable as attributes named after their schema
    property (``node.left``, ``node.params``); absent children are None.
    """

    kind: ClassVar[str] = ""
    child_selectors: ClassVar[tuple[str, ...]] = ()
    # Child slots whose identifiers declare a name rather than use one.
    defining_slots: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, raw: Mapping[str, Any], parent: Optional[Node] = None,
                 slot: Optional[str] = None) -> None:
        self.raw = raw
        self.parent = parent
        self.slot = slot
        self.program: Program = parent.program if parent is not None else self
        self.scope: Scope = self._enter_scope()
        self.data: dict[str, Any] = {
            key: value for key, value in raw.items()
            if key != "type" and key not in self.child_selectors
        }
        self.location = SourceLocation.from_raw(raw)
        self._data_type: Optional[DataType] = None
        self.program.node_count += 1

        self.initialize()

        children: list[Node] = []
        for selector in self.child_selectors:
            value = raw.get(selector)
            if isinstance(value, list):
                wrapped = [self.wrap_child(item, selector) for item in value if item is not None]
                setattr(self, selector, wrapped)
                children.extend(wrapped)
            elif value is None:
                setattr(self, selector, None)
            else:
                child = self.wrap_child(value, selector)
                setattr(self, selector, child)
                children.append(child)
        self.children = children

        self.finalize()

    def __repr__(self) -> str:
        return self.kind

    # -------------------------------------------------------------------------
    # Construction hooks
    # -------------------------------------------------------------------------

    def _enter_scope(self) -> Scope:
        return self.parent.scope_for_child(self.slot)

    def initialize(self) -> None:
        """Called after linking, before any child is wrapped."""
        pass

    def finalize(self) -> None:
        """Called once every child is wrapped."""
        pass

    def wrap_child(self, raw: Any, slot: str) -> Node:
        return wrap_node(raw, self, slot)

    # -------------------------------------------------------------------------
    # Scopes
    # -------------------------------------------------------------------------

    @property
    def child_scope(self) -> Scope:
        """The scope this node's children belong to."""
        return self.scope

    def scope_for_child(self, slot: Optional[str]) -> Scope:
        return self.child_scope

    def holds_reference(self, slot: Optional[str]) -> bool:
        """Whether an identifier in ``slot`` names a variable (not a label or key)."""
        return True

    # -------------------------------------------------------------------------
    # Types
    # -------------------------------------------------------------------------

    def get_data_type(self) -> DataType:
        """The inferred type of this node, computed once and cached."""
        if self._data_type is None:
            self._data_type = self.infer_type()
        return self._data_type

    def forget_data_type(self) -> None:
        self._data_type = None

    def infer_type(self) -> DataType:
        """Derive this node's type from its children. Statements are void."""
        return VOID_TYPE

    def propagate(self) -> bool:
        """
        Push type hints from this node onto related operands.

        Returns:
            True if any scope table changed
        """
        return False

    def reconcile(self) -> bool:
        """One fixpoint step for this node. Returns True if anything changed."""
        return self.propagate()

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------

    def each_descendant(self, kind: Optional[str] = None) -> Iterator[Node]:
        """Yield every descendant depth-first, parents before children."""
        for child in self.children:
            if kind is None or child.kind == kind:
                yield child
            yield from child.each_descendant(kind)

    def each_descendant_post_order(self) -> Iterator[Node]:
        """Yield every descendant depth-first, children before parents."""
        for child in self.children:
            yield from child.each_descendant_post_order()
            yield child

    def each_child_in_scope(self, scope: Optional[Scope] = None,
                            kind: Optional[str] = None) -> Iterator[Node]:
        """
        Yield the descendants belonging to ``scope`` without entering nested scopes.

        ``scope`` defaults to this node's child scope. A node that opens a new
        scope is yielded itself, but its contents are not.
        """
        if scope is None:
            scope = self.child_scope
        for child in self.children:
            if child.scope is not scope:
                continue
            if kind is None or child.kind == kind:
                yield child
            if child.child_scope is scope:
                yield from child.each_child_in_scope(scope, kind)

    def outline(self) -> list:
        """
        Nested list of child kinds, e.g. ``[["ExpressionStatement", [...]]]``.

        Leaf children appear as one-element lists.
        """
        result = []
        for child in self.children:
            nested = child.outline()
            result.append([child.kind, nested] if nested else [child.kind])
        return result


class Expression(Node):
    """A node that evaluates to a value and therefore has a type rule."""

    def infer_type(self) -> DataType:
        raise UnimplementedInferenceRule(self.kind, raw=self.raw)

    def probable_type(self, type_: DataType) -> bool:
        """
        Hint that this expression probably has type ``type_``.

        Only expressions that name storage (identifiers, indexed elements)
        can record the hint.

        Returns:
            True if any scope table changed
        """
        return False
