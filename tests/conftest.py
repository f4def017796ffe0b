"""
Pytest configuration and shared fixtures for jsinfer tests.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import pytest

from jsinfer.engine import InferenceConfig, Program
from jsinfer.engine.expressions import Identifier
from jsinfer.engine.query import IdentifierInfo, get_identifiers
from jsinfer.frontend import parse_source

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def parse():
    """Fixture to parse script source into a raw ESTree mapping."""

    def _parse(source: str) -> dict:
        return parse_source(source)

    return _parse


@pytest.fixture
def program_factory(parse):
    """Factory fixture for wrapping source in a Program without inferring."""

    def _create_program(source: str, config: Optional[InferenceConfig] = None) -> Program:
        return Program(parse(source), config)

    return _create_program


# =============================================================================
# Inference Results
# =============================================================================


@dataclass
class InferenceResult:
    """
    A program after inference, with helpers for the common assertions.

    Types are compared as rendered strings (``"array<int>"``) since that is
    the form consumers print.
    """

    source: str
    program: Program
    passes: int
    identifiers: dict[str, IdentifierInfo] = field(default_factory=dict)

    def declaration(self, name: str) -> Identifier:
        """First defining occurrence of ``name`` anywhere in the program."""
        for node in self.program.each_descendant("Identifier"):
            if node.is_defined_here() and node.name == name:
                return node
        raise LookupError(f"{name!r} is not declared")

    def type_of(self, name: str) -> str:
        """Rendered type of a declared name, or of an implicit global."""
        for node in self.program.each_descendant("Identifier"):
            if node.is_defined_here() and node.name == name:
                return str(node.get_data_type())
        return str(self.program.scope.resolve_type(name))

    def nested(self, function_name: str) -> dict[str, str]:
        """Rendered types of the names defined inside a top-level function."""
        info = get_identifiers(self.program, recursive=True)[function_name]
        return {name: str(entry.data_type) for name, entry in (info.identifiers or {}).items()}


@pytest.fixture
def infer(program_factory):
    """Fixture to parse source and run inference to a fixpoint."""

    def _infer(source: str, config: Optional[InferenceConfig] = None) -> InferenceResult:
        program = program_factory(source, config)
        passes = program.infer()
        return InferenceResult(
            source=source,
            program=program,
            passes=passes,
            identifiers=get_identifiers(program),
        )

    return _infer


@pytest.fixture
def type_of(infer):
    """Fixture returning the rendered type of one name after inference."""

    def _type_of(source: str, name: str) -> str:
        return infer(source).type_of(name)

    return _type_of


@pytest.fixture
def load_fixture():
    """Fixture to read a sample program from tests/fixtures."""

    def _load(filename: str) -> str:
        return (FIXTURES_DIR / filename).read_text(encoding="utf-8")

    return _load


@pytest.fixture
def infer_fixture(infer, load_fixture):
    """Fixture to run inference over a sample program."""

    def _infer_fixture(filename: str) -> InferenceResult:
        return infer(load_fixture(filename))

    return _infer_fixture
