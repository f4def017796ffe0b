"""
Expression wrappers and their per-kind inference rules.

Every expression kind implements ``infer_type``, a pure function of its
children's current types. Kinds that can teach their operands something also
implement ``propagate``, which pushes "this operand is probably of type T"
hints onto identifiers and indexed elements through ``probable_type``.
"""

from __future__ import annotations

from typing import Optional

from jsinfer.engine.nodes import Expression, node_kind
from jsinfer.engine.operators import (
    ASSIGNMENT_OPERATORS,
    LOGICAL_OPERATORS,
    UNARY_OPERATORS,
    UPDATE_OPERATORS,
    OperatorKind,
    classify_binary_operator,
    is_numeric_only,
)
from jsinfer.engine.scope import Scope
from jsinfer.engine.types import (
    ARRAY_TYPE,
    BOOL_TYPE,
    DOUBLE_TYPE,
    INT_OR_STRING,
    INT_TYPE,
    OBJECT_TYPE,
    STRING_TYPE,
    AmbiguousType,
    CollectionType,
    DataType,
    Ordering,
    compare_types,
    element_type_of,
    is_collection_type,
    return_type_of,
    unify_types,
)
from jsinfer.utils.errors import UnimplementedInferenceRule, UnimplementedOperator


# =============================================================================
# Method Result Tables
# =============================================================================

STRING_METHOD_TYPES: dict[str, DataType] = {
    "charAt": STRING_TYPE,
    "substring": STRING_TYPE,
    "substr": STRING_TYPE,
    "slice": STRING_TYPE,
    "concat": STRING_TYPE,
    "toLowerCase": STRING_TYPE,
    "toUpperCase": STRING_TYPE,
    "trim": STRING_TYPE,
    "replace": STRING_TYPE,
    "charCodeAt": INT_TYPE,
    "indexOf": INT_TYPE,
    "lastIndexOf": INT_TYPE,
    "localeCompare": INT_TYPE,
    "split": CollectionType(STRING_TYPE),
}


def collection_method_type(receiver: DataType, method: str) -> Optional[DataType]:
    """Result type of calling ``method`` on a collection, if known."""
    if method in ("push", "unshift", "indexOf", "lastIndexOf"):
        return INT_TYPE
    if method in ("pop", "shift"):
        return element_type_of(receiver)
    if method == "join":
        return STRING_TYPE
    if method in ("slice", "concat", "reverse", "sort"):
        return receiver
    return None


# =============================================================================
# Shared Operator Rules
# =============================================================================

MATCHABLE_TYPES = (INT_TYPE, STRING_TYPE)


def is_concrete(type_: DataType) -> bool:
    """A type that is neither unknown (``object``) nor an ambiguous union."""
    return type_ != OBJECT_TYPE and not isinstance(type_, AmbiguousType)


def binary_result_type(kind: OperatorKind, left: DataType, right: DataType) -> DataType:
    """Result type of a binary operator of ``kind`` given its operand types."""
    operands = (left, right)
    if kind is OperatorKind.PLUS:
        if STRING_TYPE in operands:
            return STRING_TYPE
        if DOUBLE_TYPE in operands:
            return DOUBLE_TYPE
        if INT_TYPE in operands:
            return INT_TYPE
        return INT_OR_STRING
    if kind is OperatorKind.ARITHMETIC:
        return DOUBLE_TYPE if DOUBLE_TYPE in operands else INT_TYPE
    if kind is OperatorKind.BITWISE:
        return INT_TYPE
    return BOOL_TYPE


def constrain_operands(kind: OperatorKind, left: Expression, right: Expression) -> bool:
    """
    Push operand hints implied by a binary operator.

    ``+`` and ordering comparisons make an unknown side match a side already
    known to be ``int`` or ``string``; when neither side is known, both are
    marked ``int|string``. Numeric-only operators mark both sides ``int``.
    """
    if kind in (OperatorKind.PLUS, OperatorKind.RELATIONAL):
        left_type = left.get_data_type()
        right_type = right.get_data_type()
        if left_type in MATCHABLE_TYPES and not is_concrete(right_type):
            return right.probable_type(left_type)
        if right_type in MATCHABLE_TYPES and not is_concrete(left_type):
            return left.probable_type(right_type)
        if not is_concrete(left_type) and not is_concrete(right_type):
            changed = left.probable_type(INT_OR_STRING)
            return right.probable_type(INT_OR_STRING) or changed
        return False

    if is_numeric_only(kind):
        changed = False
        for operand in (left, right):
            if operand.get_data_type() != DOUBLE_TYPE:
                changed = operand.probable_type(INT_TYPE) or changed
        return changed

    return False


# =============================================================================
# Names and Literals
# =============================================================================


@node_kind("Identifier")
class Identifier(Expression):
    """
    A name occurrence.

    Defining occurrences (function names, parameters, declarator ids, catch
    parameters) declare themselves in their scope as they are wrapped. Every
    other occurrence resolves by walking the scope chain outward.
    """

    def __repr__(self) -> str:
        return f'Identifier "{self.name}"'

    @property
    def name(self) -> str:
        return self.data["name"]

    def initialize(self) -> None:
        if self.is_defined_here():
            self.scope.declare(self)

    def is_defined_here(self) -> bool:
        return self.parent is not None and self.slot in self.parent.defining_slots

    def is_reference(self) -> bool:
        """False for labels, non-computed member names and object keys."""
        return self.parent is None or self.parent.holds_reference(self.slot)

    def defining_scope(self) -> Scope:
        return self.scope.defining_scope(self.name)

    def get_data_type(self) -> DataType:
        # Scope tables are the source of truth for names; never cached.
        return self.infer_type()

    def infer_type(self) -> DataType:
        if not self.is_reference():
            return OBJECT_TYPE
        return self.defining_scope().resolve_type(self.name)

    def probable_type(self, type_: DataType) -> bool:
        if not self.is_reference():
            return False
        return self.defining_scope().register_candidate(self.name, type_)


@node_kind("Literal")
class Literal(Expression):
    @property
    def value(self):
        return self.data.get("value")

    def infer_type(self) -> DataType:
        if "regex" in self.data or self.value is None:
            return OBJECT_TYPE
        value = self.value
        # bool is a subclass of int, test it first
        if isinstance(value, bool):
            return BOOL_TYPE
        if isinstance(value, str):
            return STRING_TYPE
        if isinstance(value, (int, float)):
            if isinstance(value, float) and not value.is_integer():
                return DOUBLE_TYPE
            return INT_TYPE
        raise UnimplementedInferenceRule(
            self.kind, f"literal of type {type(value).__name__}", raw=self.raw
        )


@node_kind("ThisExpression")
class ThisExpression(Expression):
    def infer_type(self) -> DataType:
        return OBJECT_TYPE


# =============================================================================
# Operators
# =============================================================================


class OperatorExpression(Expression):
    @property
    def operator(self) -> str:
        return self.data.get("operator", "")

    def unimplemented(self) -> UnimplementedOperator:
        return UnimplementedOperator(self.kind, self.operator, self.raw)


@node_kind("AssignmentExpression")
class AssignmentExpression(OperatorExpression):
    """
    ``left op= right``.

    Plain assignment moves type knowledge toward whichever side is weaker.
    Compound assignments constrain both sides like the binary operator
    they apply.
    """

    def _binary_kind(self) -> Optional[OperatorKind]:
        if self.operator not in ASSIGNMENT_OPERATORS:
            raise self.unimplemented()
        binary = ASSIGNMENT_OPERATORS[self.operator]
        return classify_binary_operator(binary) if binary is not None else None

    def infer_type(self) -> DataType:
        kind = self._binary_kind()
        if kind is None:
            return self.right.get_data_type()
        return binary_result_type(kind, self.left.get_data_type(), self.right.get_data_type())

    def propagate(self) -> bool:
        kind = self._binary_kind()
        if kind is not None:
            return constrain_operands(kind, self.left, self.right)

        left_type = self.left.get_data_type()
        right_type = self.right.get_data_type()
        order = compare_types(left_type, right_type)
        if order is Ordering.EQUAL:
            return False
        if order is Ordering.GREATER:
            return self.right.probable_type(left_type)
        return self.left.probable_type(right_type)


@node_kind("BinaryExpression")
class BinaryExpression(OperatorExpression):
    def _kind(self) -> OperatorKind:
        kind = classify_binary_operator(self.operator)
        if kind is None:
            raise self.unimplemented()
        return kind

    def infer_type(self) -> DataType:
        return binary_result_type(
            self._kind(), self.left.get_data_type(), self.right.get_data_type()
        )

    def propagate(self) -> bool:
        return constrain_operands(self._kind(), self.left, self.right)


@node_kind("LogicalExpression")
class LogicalExpression(OperatorExpression):
    def infer_type(self) -> DataType:
        if self.operator not in LOGICAL_OPERATORS:
            raise self.unimplemented()
        return unify_types([self.left.get_data_type(), self.right.get_data_type()])


@node_kind("UnaryExpression")
class UnaryExpression(OperatorExpression):
    def infer_type(self) -> DataType:
        operator = self.operator
        if operator not in UNARY_OPERATORS:
            raise self.unimplemented()
        if operator == "typeof":
            return STRING_TYPE
        if operator in ("!", "delete"):
            return BOOL_TYPE
        if operator in ("-", "+"):
            return DOUBLE_TYPE if self.argument.get_data_type() == DOUBLE_TYPE else INT_TYPE
        if operator == "~":
            return INT_TYPE
        # void evaluates to undefined
        return OBJECT_TYPE


@node_kind("UpdateExpression")
class UpdateExpression(OperatorExpression):
    """``++`` / ``--``: the operand is a number, an ``int`` unless known double."""

    def infer_type(self) -> DataType:
        if self.operator not in UPDATE_OPERATORS:
            raise self.unimplemented()
        return DOUBLE_TYPE if self.argument.get_data_type() == DOUBLE_TYPE else INT_TYPE

    def propagate(self) -> bool:
        if self.operator not in UPDATE_OPERATORS:
            raise self.unimplemented()
        if self.argument.get_data_type() == DOUBLE_TYPE:
            return False
        return self.argument.probable_type(INT_TYPE)


@node_kind("ConditionalExpression")
class ConditionalExpression(Expression):
    def infer_type(self) -> DataType:
        return unify_types([self.consequent.get_data_type(), self.alternate.get_data_type()])


@node_kind("SequenceExpression")
class SequenceExpression(Expression):
    def infer_type(self) -> DataType:
        return self.expressions[-1].get_data_type()


# =============================================================================
# Member Access and Calls
# =============================================================================


@node_kind("MemberExpression")
class MemberExpression(Expression):
    """
    ``object.property`` or ``object[property]``.

    Indexing an identifier with an ``int`` marks it as an array; hints pushed
    onto the indexed element become the array's element type.
    """

    @property
    def computed(self) -> bool:
        return bool(self.data.get("computed"))

    @property
    def property_name(self) -> Optional[str]:
        """The accessed name when it is statically known."""
        if not self.computed and isinstance(self.property, Identifier):
            return self.property.name
        if isinstance(self.property, Literal) and isinstance(self.property.value, str):
            return self.property.value
        return None

    def holds_reference(self, slot: Optional[str]) -> bool:
        return slot != "property" or self.computed

    def _indexed_identifier(self) -> Optional[Identifier]:
        """The indexed identifier for ``name[int]`` accesses on non-strings."""
        if not self.computed or not isinstance(self.object, Identifier):
            return None
        if self.property.get_data_type() != INT_TYPE:
            return None
        if self.object.get_data_type() == STRING_TYPE:
            return None
        return self.object

    def infer_type(self) -> DataType:
        if self.computed:
            object_type = self.object.get_data_type()
            if isinstance(object_type, CollectionType):
                return element_type_of(object_type)
            if object_type == STRING_TYPE and self.property.get_data_type() == INT_TYPE:
                return STRING_TYPE

        if self.property_name in self.program.config.size_properties:
            return INT_TYPE
        return OBJECT_TYPE

    def propagate(self) -> bool:
        target = self._indexed_identifier()
        if target is None:
            return False
        return target.probable_type(ARRAY_TYPE)

    def probable_type(self, type_: DataType) -> bool:
        target = self._indexed_identifier()
        if target is None or type_ == OBJECT_TYPE:
            return False
        return target.probable_type(CollectionType(type_))


@node_kind("CallExpression")
class CallExpression(Expression):
    """
    ``callee(arguments)``.

    The result is the callee's return type, or a known result type for
    common string and collection methods. Calls also teach their receiver:
    ``x.push(v)`` on a collection records ``v``'s type as the element type
    and string-only methods mark the receiver as a string.
    """

    def _method_call(self) -> tuple[Optional[Expression], Optional[str]]:
        callee = self.callee
        if isinstance(callee, MemberExpression) and not callee.computed:
            return callee.object, callee.property_name
        return None, None

    def infer_type(self) -> DataType:
        receiver, method = self._method_call()
        if receiver is not None and method is not None:
            receiver_type = receiver.get_data_type()
            if receiver_type == STRING_TYPE and method in STRING_METHOD_TYPES:
                return STRING_METHOD_TYPES[method]
            if is_collection_type(receiver_type):
                result = collection_method_type(receiver_type, method)
                if result is not None:
                    return result
        return return_type_of(self.callee.get_data_type())

    def propagate(self) -> bool:
        receiver, method = self._method_call()
        if not isinstance(receiver, Identifier) or method is None:
            return False

        changed = False
        if method in self.program.config.string_methods:
            changed = receiver.probable_type(STRING_TYPE)
        if method == "push" and len(self.arguments) == 1:
            if is_collection_type(receiver.get_data_type()):
                element_type = self.arguments[0].get_data_type()
                changed = receiver.probable_type(CollectionType(element_type)) or changed
        return changed


@node_kind("NewExpression")
class NewExpression(Expression):
    def infer_type(self) -> DataType:
        if isinstance(self.callee, Identifier) and self.callee.name == "Array":
            return ARRAY_TYPE
        return OBJECT_TYPE


# =============================================================================
# Literals of Aggregates
# =============================================================================


@node_kind("ArrayExpression")
class ArrayExpression(Expression):
    """An array literal: ``array<E>`` when every element has type E, else ``array``."""

    def infer_type(self) -> DataType:
        element_types: list[DataType] = []
        for element in self.elements or ():
            element_type = element.get_data_type()
            if element_type not in element_types:
                element_types.append(element_type)

        if len(element_types) == 1:
            return CollectionType(element_types[0])
        return ARRAY_TYPE


@node_kind("ObjectExpression")
class ObjectExpression(Expression):
    def infer_type(self) -> DataType:
        return OBJECT_TYPE
