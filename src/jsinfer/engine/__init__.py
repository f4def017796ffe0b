"""
jsinfer inference engine.

Importing this package registers a wrapper class for every supported node
kind. ``Program`` wraps a raw ESTree tree and runs inference; the query
functions read the results.
"""

from jsinfer.engine import expressions, functions, statements  # noqa: F401  (registers node kinds)
from jsinfer.engine.config import DEFAULT_CONFIG, InferenceConfig
from jsinfer.engine.nodes import NODE_CLASSES, Expression, Node, wrap_node
from jsinfer.engine.program import Program
from jsinfer.engine.query import IdentifierInfo, get_data_type, get_identifier, get_identifiers
from jsinfer.engine.schema import NODE_SCHEMA, SCHEMA_VERSION
from jsinfer.engine.scope import Scope
from jsinfer.engine.types import (
    ARRAY_TYPE,
    BOOL_TYPE,
    DOUBLE_TYPE,
    FUNCTION_TYPE,
    INT_OR_STRING,
    INT_TYPE,
    OBJECT_TYPE,
    STRING_TYPE,
    VOID_TYPE,
    AmbiguousType,
    CollectionType,
    DataType,
    FunctionType,
    Ordering,
    PrimitiveType,
    ambiguous,
    compare_types,
    unify_types,
)

__all__ = [
    # Driver
    "Program",
    "InferenceConfig",
    "DEFAULT_CONFIG",
    # Queries
    "IdentifierInfo",
    "get_data_type",
    "get_identifiers",
    "get_identifier",
    # Tree
    "Node",
    "Expression",
    "Scope",
    "wrap_node",
    "NODE_CLASSES",
    "NODE_SCHEMA",
    "SCHEMA_VERSION",
    # Descriptors
    "DataType",
    "PrimitiveType",
    "FunctionType",
    "CollectionType",
    "AmbiguousType",
    "Ordering",
    "ambiguous",
    "compare_types",
    "unify_types",
    "INT_TYPE",
    "DOUBLE_TYPE",
    "STRING_TYPE",
    "BOOL_TYPE",
    "OBJECT_TYPE",
    "VOID_TYPE",
    "ARRAY_TYPE",
    "FUNCTION_TYPE",
    "INT_OR_STRING",
]
