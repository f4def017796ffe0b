"""
Diagnostic helpers for jsinfer errors.

Provides the error code catalog, a compact dump of raw ESTree nodes for
reproducing engine failures, and Levenshtein-based "did you mean?"
suggestions for identifier lookups.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Iterable


# =============================================================================
# Error Codes Catalog
# =============================================================================


class ErrorCode:
    """
    Centralized catalog of error codes for jsinfer.

    Error codes are organized by category:
    - E01xx: Query errors (recoverable, scoped to a single lookup)
    - E03xx: Fatal engine errors (abort the whole inference run)
    """

    # Query errors: E01xx
    E0102 = "E0102"  # unknown identifier

    # Fatal engine errors: E03xx
    E0301 = "E0301"  # unknown node kind
    E0302 = "E0302"  # unimplemented operator
    E0303 = "E0303"  # unimplemented inference rule
    E0304 = "E0304"  # fixpoint did not converge


ERROR_DESCRIPTIONS: dict[str, str] = {
    ErrorCode.E0102: "unknown identifier",
    ErrorCode.E0301: "unknown node kind",
    ErrorCode.E0302: "unimplemented operator",
    ErrorCode.E0303: "unimplemented inference rule",
    ErrorCode.E0304: "type inference did not converge",
}


# =============================================================================
# Raw Node Dumps
# =============================================================================

MAX_DUMP_LENGTH = 1000


def raw_node_keys(raw: Any) -> list[str]:
    """Return the property names of a raw node, or an empty list."""
    if isinstance(raw, Mapping):
        return list(raw.keys())
    return []


def dump_raw_node(raw: Any, limit: int = MAX_DUMP_LENGTH) -> str:
    """
    Render a raw ESTree node as indented JSON, truncated to ``limit`` characters.

    Values that are not JSON serializable (compiled regular expressions,
    parser objects) are rendered with ``str``.
    """
    text = json.dumps(raw, indent=2, default=str)
    if len(text) > limit:
        return text[:limit] + "\n..."
    return text


def describe_raw_node(raw: Any) -> str:
    """Build the diagnostic tail appended to fatal engine errors."""
    if raw is None:
        return ""
    keys = json.dumps(raw_node_keys(raw), indent=2)
    return f"\n\nKeys:\n{keys}\n\nNode:\n{dump_raw_node(raw)}"


# =============================================================================
# String Similarity
# =============================================================================


def levenshtein_distance(s1: str, s2: str) -> int:
    """
    Calculate the Levenshtein (edit) distance between two strings.

    Args:
        s1: First string
        s2: Second string

    Returns:
        The minimum number of single-character insertions, deletions or
        substitutions needed to turn one string into the other
    """
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)
    if not s2:
        return len(s1)

    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            current_row.append(
                min(
                    previous_row[j + 1] + 1,
                    current_row[j] + 1,
                    previous_row[j] + (c1 != c2),
                )
            )
        previous_row = current_row

    return previous_row[-1]


def suggest_similar(
    name: str,
    candidates: Iterable[str],
    max_distance: int = 2,
    max_suggestions: int = 3,
) -> list[str]:
    """
    Find names close to ``name`` for "did you mean?" hints.

    Args:
        name: The name that failed to resolve
        candidates: Names that are known to exist
        max_distance: Maximum edit distance to consider
        max_suggestions: Maximum number of suggestions to return

    Returns:
        Matching candidates, closest first (ties broken alphabetically)
    """
    scored = []
    for candidate in candidates:
        if candidate == name or abs(len(candidate) - len(name)) > max_distance:
            continue
        distance = levenshtein_distance(name, candidate)
        if distance <= max_distance:
            scored.append((distance, candidate))

    scored.sort()
    return [candidate for _, candidate in scored[:max_suggestions]]
