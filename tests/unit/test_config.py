"""
Unit tests for InferenceConfig.
"""

import pytest

from jsinfer.engine.config import DEFAULT_CONFIG, InferenceConfig


class TestInferenceConfig:
    """Tests for configuration defaults and validation."""

    def test_defaults(self):
        assert DEFAULT_CONFIG.size_properties == frozenset({"count", "length", "size"})
        assert "charAt" in DEFAULT_CONFIG.string_methods
        assert DEFAULT_CONFIG.max_type_depth == 4

    def test_pass_limit(self):
        config = InferenceConfig(pass_limit_factor=2, min_pass_limit=10)
        assert config.pass_limit(3) == 10
        assert config.pass_limit(100) == 200

    def test_with_overrides(self):
        config = DEFAULT_CONFIG.with_overrides(max_type_depth=2)
        assert config.max_type_depth == 2
        assert DEFAULT_CONFIG.max_type_depth == 4

    @pytest.mark.parametrize(
        "changes",
        [
            {"max_type_depth": 0},
            {"pass_limit_factor": 0},
            {"min_pass_limit": 0},
        ],
    )
    def test_invalid(self, changes):
        with pytest.raises(ValueError):
            InferenceConfig(**changes)

    def test_custom_size_properties(self, infer):
        config = InferenceConfig(size_properties=frozenset({"total"}))
        result = infer("var a = xs.total; var b = xs.length;", config)
        assert result.type_of("a") == "int"
        assert result.type_of("b") == "object"

    def test_custom_string_methods(self, infer):
        config = InferenceConfig(string_methods=frozenset({"shout"}))
        result = infer("var s; var t; s.shout(); t.charAt(0);", config)
        assert result.type_of("s") == "string"
        assert result.type_of("t") == "object"
