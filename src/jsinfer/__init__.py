"""
jsinfer - heuristic type inference for ESTree programs.

Wraps a parsed JavaScript program, infers a descriptor (``int``, ``string``,
``array<int>``, ``func<bool>``, ``int|string`` ...) for every identifier by
propagating constraints to a fixpoint, and answers queries about the result.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from jsinfer.engine import InferenceConfig, Program, get_data_type, get_identifier, get_identifiers
from jsinfer.frontend import parse_source

__version__ = "0.1.0"
__all__ = [
    "infer_source",
    "infer_tree",
    "parse_source",
    "Program",
    "InferenceConfig",
    "get_data_type",
    "get_identifiers",
    "get_identifier",
]


def infer_tree(raw: Mapping[str, Any], config: Optional[InferenceConfig] = None) -> Program:
    """Wrap a raw ESTree ``Program`` and run inference to a fixpoint."""
    program = Program(raw, config)
    program.infer()
    return program


def infer_source(source: str, config: Optional[InferenceConfig] = None) -> Program:
    """Parse script source and run inference on it."""
    return infer_tree(parse_source(source), config)
