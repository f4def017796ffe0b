"""
Type descriptors and their specificity ordering.

Descriptors are immutable values with structural equality:

- ``PrimitiveType``: an opaque name (``int``, ``double``, ``string``, ``bool``,
  ``object``, ``void``) or a bare category (``array``, ``function``)
- ``FunctionType``: a function with a known return type
- ``CollectionType``: a collection with a known element type
- ``AmbiguousType``: genuine uncertainty between two or more descriptors

``compare_types`` answers "is ``a`` strictly more specific than ``b``?". The
ordering is partial: ``object`` is the bottom, a bare category is beaten by
any structured refinement of it, structured types of the same family compare
by their inner descriptor, and an ambiguous union is beaten by any of its
options or by a union over a strict subset of them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional


# =============================================================================
# Type Descriptors
# =============================================================================


class DataType(ABC):
    """Base class for every inferred type descriptor."""

    @abstractmethod
    def __str__(self) -> str:
        """Return the textual rendering used by emitters and tests."""
        pass

    @property
    def depth(self) -> int:
        """Nesting depth of structured types (0 for primitives)."""
        return 0


@dataclass(frozen=True)
class PrimitiveType(DataType):
    """A named type with no inner structure."""

    name: str

    def __str__(self) -> str:
        return self.name


INT_TYPE = PrimitiveType("int")
DOUBLE_TYPE = PrimitiveType("double")
STRING_TYPE = PrimitiveType("string")
BOOL_TYPE = PrimitiveType("bool")
OBJECT_TYPE = PrimitiveType("object")
VOID_TYPE = PrimitiveType("void")
ARRAY_TYPE = PrimitiveType("array")
FUNCTION_TYPE = PrimitiveType("function")


@dataclass(frozen=True)
class FunctionType(DataType):
    """
    A function along with its return type.

    Renders as ``func<R>``, or as bare ``function`` when nothing is returned.
    """

    return_type: Optional[DataType] = None

    def __str__(self) -> str:
        if self.return_type is None or self.return_type == VOID_TYPE:
            return "function"
        return f"func<{self.return_type}>"

    @property
    def depth(self) -> int:
        inner = self.return_type.depth if self.return_type is not None else 0
        return inner + 1


@dataclass(frozen=True)
class CollectionType(DataType):
    """A collection along with the type of elements it holds."""

    element_type: Optional[DataType] = None
    kind: str = "array"

    def __str__(self) -> str:
        if self.element_type is None:
            return self.kind
        return f"{self.kind}<{self.element_type}>"

    @property
    def depth(self) -> int:
        inner = self.element_type.depth if self.element_type is not None else 0
        return inner + 1


@dataclass(frozen=True)
class AmbiguousType(DataType):
    """A union of candidate descriptors that inference could not narrow."""

    options: frozenset[DataType]

    def __str__(self) -> str:
        return "|".join(sorted(str(option) for option in self.options))

    @property
    def depth(self) -> int:
        return max((option.depth for option in self.options), default=0)


def ambiguous(*options: DataType) -> DataType:
    """
    Build the union of ``options``.

    Nested unions are flattened and duplicates removed. ``object`` is dropped
    when anything more specific is present. A single surviving option is
    returned as-is rather than wrapped.
    """
    flat: set[DataType] = set()
    for option in options:
        if isinstance(option, AmbiguousType):
            flat.update(option.options)
        else:
            flat.add(option)

    if len(flat) > 1:
        flat.discard(OBJECT_TYPE)
    if not flat:
        return OBJECT_TYPE
    if len(flat) == 1:
        return next(iter(flat))
    return AmbiguousType(frozenset(flat))


INT_OR_STRING = ambiguous(INT_TYPE, STRING_TYPE)


# =============================================================================
# Ordering
# =============================================================================


class Ordering(Enum):
    """Result of comparing the specificity of two descriptors."""

    LESS = auto()
    EQUAL = auto()
    GREATER = auto()
    INCOMPARABLE = auto()

    def reverse(self) -> Ordering:
        if self is Ordering.LESS:
            return Ordering.GREATER
        if self is Ordering.GREATER:
            return Ordering.LESS
        return self


def compare_types(a: DataType, b: DataType) -> Ordering:
    """
    Compare how specific ``a`` is relative to ``b``.

    Returns ``GREATER`` when ``a`` should replace ``b``, ``LESS`` when ``b``
    should be kept over ``a``, ``EQUAL`` for identical descriptors and
    ``INCOMPARABLE`` when neither subsumes the other.
    """
    if a == b:
        return Ordering.EQUAL

    # object is the bottom of the lattice
    if b == OBJECT_TYPE:
        return Ordering.GREATER
    if a == OBJECT_TYPE:
        return Ordering.LESS

    if isinstance(a, AmbiguousType) or isinstance(b, AmbiguousType):
        return _compare_ambiguous(a, b)

    # Bare categories lose to any structured refinement of the same family
    if a == ARRAY_TYPE and isinstance(b, CollectionType):
        return Ordering.LESS
    if isinstance(a, CollectionType) and b == ARRAY_TYPE:
        return Ordering.GREATER
    if a == FUNCTION_TYPE and isinstance(b, FunctionType):
        return Ordering.LESS
    if isinstance(a, FunctionType) and b == FUNCTION_TYPE:
        return Ordering.GREATER

    if isinstance(a, CollectionType) and isinstance(b, CollectionType):
        if a.kind != b.kind:
            return Ordering.INCOMPARABLE
        return _compare_inner(a.element_type, b.element_type)
    if isinstance(a, FunctionType) and isinstance(b, FunctionType):
        return _compare_inner(a.return_type, b.return_type)

    return Ordering.INCOMPARABLE


def _compare_inner(a: Optional[DataType], b: Optional[DataType]) -> Ordering:
    if a is None and b is None:
        return Ordering.EQUAL
    if a is None:
        return Ordering.LESS
    if b is None:
        return Ordering.GREATER
    return compare_types(a, b)


def _compare_ambiguous(a: DataType, b: DataType) -> Ordering:
    if isinstance(a, AmbiguousType) and isinstance(b, AmbiguousType):
        if a.options < b.options:
            return Ordering.GREATER
        if b.options < a.options:
            return Ordering.LESS
        return Ordering.INCOMPARABLE
    if isinstance(b, AmbiguousType):
        return Ordering.GREATER if a in b.options else Ordering.INCOMPARABLE
    return Ordering.LESS if b in a.options else Ordering.INCOMPARABLE


def is_more_specific(a: DataType, b: DataType) -> bool:
    """Shorthand for ``compare_types(a, b) is Ordering.GREATER``."""
    return compare_types(a, b) is Ordering.GREATER


# =============================================================================
# Unification
# =============================================================================


def unify_types(types: Iterable[DataType]) -> DataType:
    """
    Merge the types flowing into one place (branches, return statements).

    Duplicates are removed, then every type strictly less specific than
    another one is dropped. A single survivor is returned; several survivors
    become an ambiguous union. An empty input unifies to ``object``.
    """
    unique: list[DataType] = []
    for type_ in types:
        if type_ not in unique:
            unique.append(type_)

    survivors = [
        type_ for type_ in unique
        if not any(compare_types(type_, other) is Ordering.LESS for other in unique)
    ]
    if not survivors:
        return OBJECT_TYPE
    if len(survivors) == 1:
        return survivors[0]
    return ambiguous(*survivors)


# =============================================================================
# Predicates
# =============================================================================


def is_collection_type(type_: Optional[DataType]) -> bool:
    """Check whether a descriptor is bare ``array`` or a structured collection."""
    return type_ == ARRAY_TYPE or isinstance(type_, CollectionType)


def is_function_type(type_: Optional[DataType]) -> bool:
    """Check whether a descriptor is bare ``function`` or a structured function."""
    return type_ == FUNCTION_TYPE or isinstance(type_, FunctionType)


def element_type_of(type_: Optional[DataType]) -> DataType:
    """Element type of a structured collection, ``object`` when unknown."""
    if isinstance(type_, CollectionType) and type_.element_type is not None:
        return type_.element_type
    return OBJECT_TYPE


def return_type_of(type_: Optional[DataType]) -> DataType:
    """Return type of a structured function, ``object`` when unknown."""
    if isinstance(type_, FunctionType) and type_.return_type is not None:
        return type_.return_type
    return OBJECT_TYPE
