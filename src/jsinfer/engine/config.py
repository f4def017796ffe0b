"""
Inference engine configuration.

The defaults reproduce the engine's built-in heuristics; callers adjust them
with ``InferenceConfig.with_overrides``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace


DEFAULT_SIZE_PROPERTIES = frozenset({"count", "length", "size"})

# Receivers of these methods are assumed to be strings.
DEFAULT_STRING_METHODS = frozenset({
    "charAt",
    "charCodeAt",
    "substring",
    "substr",
    "toLowerCase",
    "toUpperCase",
    "trim",
    "split",
    "replace",
    "localeCompare",
})


@dataclass(frozen=True)
class InferenceConfig:
    """
    Settings for one inference run.

    Attributes:
        size_properties: Member names whose value is taken to be an ``int``
        string_methods: Method names that mark their receiver as a ``string``
        max_type_depth: Descriptors nested deeper than this are never recorded
        pass_limit_factor: Fixpoint passes allowed per wrapped node
        min_pass_limit: Lower bound on the fixpoint pass limit
    """

    size_properties: frozenset[str] = field(default=DEFAULT_SIZE_PROPERTIES)
    string_methods: frozenset[str] = field(default=DEFAULT_STRING_METHODS)
    max_type_depth: int = 4
    pass_limit_factor: int = 4
    min_pass_limit: int = 32

    def __post_init__(self) -> None:
        if self.max_type_depth < 1:
            raise ValueError("max_type_depth must be at least 1")
        if self.pass_limit_factor < 1 or self.min_pass_limit < 1:
            raise ValueError("pass limits must be positive")

    def pass_limit(self, node_count: int) -> int:
        """Safety cap on fixpoint passes for a tree of ``node_count`` nodes."""
        return max(self.min_pass_limit, self.pass_limit_factor * node_count)

    def with_overrides(self, **changes: object) -> InferenceConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


DEFAULT_CONFIG = InferenceConfig()
