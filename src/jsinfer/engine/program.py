"""
Program root and the fixpoint driver.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from jsinfer.engine.config import DEFAULT_CONFIG, InferenceConfig
from jsinfer.engine.nodes import Node, as_raw_node, node_kind
from jsinfer.engine.query import IdentifierInfo, get_identifiers
from jsinfer.engine.scope import Scope
from jsinfer.utils.errors import ConvergenceError, UnknownNodeKind

logger = logging.getLogger(__name__)


@node_kind("Program")
class Program(Node):
    """
    The root wrapper: owns the outermost scope and drives inference.

    Wrapping the raw tree registers every declaration before any inference
    runs, so uses that precede a ``var`` or ``function`` declaration still
    resolve to it. ``infer`` then seeds constraints bottom-up and repeats
    full passes until a pass changes no scope table.

    A Program and its wrappers are not thread-safe. Scope tables are mutated
    in place throughout a run, so one thread must own the program for as long
    as ``infer`` and any queries against it are running.

    Attributes:
        config: Settings for this run
        node_count: Number of wrapped nodes, the program included
    """

    def __init__(self, raw: Mapping[str, Any], config: Optional[InferenceConfig] = None) -> None:
        raw = as_raw_node(raw)
        if not isinstance(raw, Mapping) or raw.get("type") != "Program":
            kind = raw.get("type") if isinstance(raw, Mapping) else None
            raise UnknownNodeKind(kind, raw, context="expected Program")
        self.config = config or DEFAULT_CONFIG
        self.node_count = 0
        super().__init__(raw)

    def __repr__(self) -> str:
        return "Program"

    def _enter_scope(self) -> Scope:
        return Scope(self, None, self.config.max_type_depth)

    def infer(self) -> int:
        """
        Run inference to a fixpoint.

        Returns:
            Number of full passes, the final unchanged pass included

        Raises:
            ConvergenceError: If the pass limit is exceeded
            FatalInferenceError: If a node kind or operator has no rule
        """
        for node in self.each_descendant_post_order():
            node.reconcile()

        limit = self.config.pass_limit(self.node_count)
        passes = 0
        while True:
            if passes >= limit:
                raise ConvergenceError(passes, limit)
            passes += 1

            for node in self.each_descendant():
                node.forget_data_type()
            changes = sum(1 for node in self.each_descendant() if node.reconcile())

            logger.debug("pass %d: %d changes", passes, changes)
            if changes == 0:
                break

        logger.info("converged after %d passes over %d nodes", passes, self.node_count)
        return passes

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_identifier(self, name: str) -> Node:
        return self.scope.get_identifier(name)

    def identifiers(self, recursive: bool = False) -> dict[str, IdentifierInfo]:
        return get_identifiers(self, recursive)
