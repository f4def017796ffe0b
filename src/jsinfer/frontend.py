"""
Parsing front door.

The engine consumes an already-parsed ESTree mapping; this module produces
one from script source using esprima.
"""

from __future__ import annotations

from typing import Any

import esprima
from esprima.error_handler import Error as ParseError

__all__ = ["ParseError", "parse_source"]


def parse_source(source: str, locations: bool = True) -> dict[str, Any]:
    """
    Parse script source into a raw ESTree ``Program`` mapping.

    Args:
        source: Script source text
        locations: Attach ``loc`` blocks so errors can point into the source

    Raises:
        ParseError: If the source is not valid script syntax
    """
    tree = esprima.parseScript(source, {"loc": locations})
    return tree.toDict()

