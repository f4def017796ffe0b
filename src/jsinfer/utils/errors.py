"""
Error types and source location tracking for jsinfer.

Errors fall into two families:

- ``FatalInferenceError``: a gap in the engine's coverage (unknown node kind,
  unsupported operator, missing inference rule, runaway fixpoint). These abort
  the whole inference run.
- ``QueryError``: a lookup against a finished model that cannot be answered.
  Only the failing query is affected.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from jsinfer.utils.diagnostics import ERROR_DESCRIPTIONS, ErrorCode, describe_raw_node


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """
    Represents a location in the analyzed source.

    Attributes:
        line: 1-indexed line number
        column: 1-indexed column number
        filename: Optional filename for error reporting
    """

    line: int
    column: int
    filename: Optional[str] = None

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"

    @classmethod
    def from_raw(cls, raw: Any) -> Optional[SourceLocation]:
        """Read the ESTree ``loc`` block of a raw node, if the parser produced one."""
        if not isinstance(raw, Mapping):
            return None
        loc = raw.get("loc")
        if not isinstance(loc, Mapping):
            return None
        start = loc.get("start")
        if not isinstance(start, Mapping):
            return None
        return cls(line=start.get("line", 0), column=start.get("column", 0) + 1,
                   filename=loc.get("source"))


class InferenceError(Exception):
    """Base exception for all jsinfer errors."""

    code: str = ""

    def __init__(self, message: str, location: Optional[SourceLocation] = None) -> None:
        self.message = message
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = []
        if self.code:
            parts.append(f"error[{self.code}]:")
        if self.location:
            parts.append(f"[{self.location}]")
        parts.append(self.message)
        return " ".join(parts)

    @property
    def description(self) -> str:
        """Short catalog description of this error's code."""
        return ERROR_DESCRIPTIONS.get(self.code, "")


# -----------------------------------------------------------------------------
# Fatal engine errors
# -----------------------------------------------------------------------------


class FatalInferenceError(InferenceError):
    """
    Raised when the engine meets input its schema or rules do not cover.

    Carries the offending raw node so the failure can be reproduced.
    """

    def __init__(self, message: str, raw: Any = None) -> None:
        self.raw = raw
        super().__init__(message + describe_raw_node(raw), SourceLocation.from_raw(raw))


class UnknownNodeKind(FatalInferenceError):
    """Raised when wrapping meets a node kind absent from the schema table."""

    code = ErrorCode.E0301

    def __init__(self, kind: Any, raw: Any, context: str = "") -> None:
        self.kind = kind
        self.keys = list(raw.keys()) if isinstance(raw, Mapping) else []
        prefix = f"{context}: " if context else ""
        super().__init__(f"{prefix}Unknown node kind: {kind}", raw)


class UnimplementedOperator(FatalInferenceError):
    """Raised when an operator node carries an operator with no typing rule."""

    code = ErrorCode.E0302

    def __init__(self, kind: str, operator: Any, raw: Any = None) -> None:
        self.kind = kind
        self.operator = operator
        super().__init__(f"{kind}: type inference not implemented for operator {operator!r}", raw)


class UnimplementedInferenceRule(FatalInferenceError):
    """Raised when a node reaches ``infer_type`` with no matching case."""

    code = ErrorCode.E0303

    def __init__(self, kind: str, detail: str = "", raw: Any = None) -> None:
        self.kind = kind
        message = f"{kind}: infer_type not implemented"
        if detail:
            message += f" ({detail})"
        super().__init__(message, raw)


class ConvergenceError(FatalInferenceError):
    """Raised when the fixpoint driver exceeds its safety cap."""

    code = ErrorCode.E0304

    def __init__(self, passes: int, limit: int) -> None:
        self.passes = passes
        self.limit = limit
        super().__init__(f"type inference still changing after {passes} passes (limit {limit})")


# -----------------------------------------------------------------------------
# Query errors
# -----------------------------------------------------------------------------


class QueryError(InferenceError):
    """Raised when a read-only query against an inferred program fails."""

    pass


class UnknownIdentifier(QueryError):
    """Raised when a name is not declared in the queried scope."""

    code = ErrorCode.E0102

    def __init__(self, name: str, suggestions: Sequence[str] = ()) -> None:
        self.name = name
        self.suggestions = list(suggestions)
        message = f"unknown identifier '{name}'"
        if self.suggestions:
            quoted = ", ".join(f"'{s}'" for s in self.suggestions)
            message += f"; did you mean {quoted}?"
        super().__init__(message)
