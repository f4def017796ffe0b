"""
jsinfer Utilities Package.

Error types, error codes and diagnostic helpers shared by the engine and CLI.
"""

from jsinfer.utils.diagnostics import (
    ERROR_DESCRIPTIONS,
    ErrorCode,
    describe_raw_node,
    dump_raw_node,
    levenshtein_distance,
    suggest_similar,
)
from jsinfer.utils.errors import (
    ConvergenceError,
    FatalInferenceError,
    InferenceError,
    QueryError,
    SourceLocation,
    UnimplementedInferenceRule,
    UnimplementedOperator,
    UnknownIdentifier,
    UnknownNodeKind,
)

__all__ = [
    # Errors
    "InferenceError",
    "FatalInferenceError",
    "QueryError",
    "UnknownNodeKind",
    "UnimplementedOperator",
    "UnimplementedInferenceRule",
    "ConvergenceError",
    "UnknownIdentifier",
    "SourceLocation",
    # Error codes
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    # Helpers
    "describe_raw_node",
    "dump_raw_node",
    "levenshtein_distance",
    "suggest_similar",
]
