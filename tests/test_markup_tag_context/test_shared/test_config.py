"""Tests for the configuration system."""

import json

import pytest

from markup_tag_context.shared.config import (
    ConfigError,
    ConfigValidationError,
    ContextConfig,
    MarkupDialect,
    ResolverConfig,
    TokenizerConfig,
)


class TestTokenizerConfig:
    """Test suite for TokenizerConfig."""

    def test_default_configuration(self):
        """Test default tokenizer configuration values."""
        config = TokenizerConfig()

        assert config.dialect is MarkupDialect.HTML
        assert config.raw_text_tags == ("script", "style")
        assert config.lowercase_tag_names is False

    def test_dialect_from_string(self):
        """Test dialect names are accepted case-insensitively."""
        assert TokenizerConfig(dialect="xml").dialect is MarkupDialect.XML
        assert TokenizerConfig(dialect="HTML").dialect is MarkupDialect.HTML

    def test_invalid_dialect(self):
        """Test unknown dialects are rejected."""
        with pytest.raises(ValueError, match="dialect must be one of"):
            TokenizerConfig(dialect="sgml")

    def test_raw_text_tags_normalized(self):
        """Test raw text tag names are lowercased into a tuple."""
        config = TokenizerConfig(raw_text_tags=["SCRIPT", "Textarea"])
        assert config.raw_text_tags == ("script", "textarea")

    def test_empty_raw_text_tag_rejected(self):
        """Test empty raw text tag names are rejected."""
        with pytest.raises(ValueError, match="empty names"):
            TokenizerConfig(raw_text_tags=("script", ""))


class TestResolverConfig:
    """Test suite for ResolverConfig."""

    def test_default_configuration(self):
        """Test default resolver configuration values."""
        config = ResolverConfig()

        assert config.enable_diagnostics is True
        assert config.log_navigation is False
        assert config.diagnostic_level == "WARNING"

    def test_invalid_diagnostic_level(self):
        """Test unknown diagnostic levels are rejected."""
        with pytest.raises(ValueError, match="diagnostic_level must be one of"):
            ResolverConfig(diagnostic_level="LOUD")


class TestContextConfig:
    """Test suite for ContextConfig."""

    def test_presets(self):
        """Test the preset constructors."""
        assert ContextConfig.html().tokenizer.dialect is MarkupDialect.HTML

        xml = ContextConfig.xml()
        assert xml.tokenizer.dialect is MarkupDialect.XML
        assert xml.tokenizer.raw_text_tags == ()

        debugging = ContextConfig.debugging()
        assert debugging.resolver.log_navigation is True
        assert debugging.resolver.diagnostic_level == "DEBUG"

    def test_immutable(self):
        """Test the top-level configuration is frozen."""
        config = ContextConfig()
        with pytest.raises(AttributeError):
            config.correlation_id = "abc"

    @pytest.mark.parametrize("component,field_name,value", [
        ("tokenizer", "dialect", MarkupDialect.XML),
        ("resolver", "log_navigation", True),
    ])
    def test_components_immutable(self, component, field_name, value):
        """Test a shared configuration cannot be changed through its components."""
        config = ContextConfig()
        with pytest.raises(AttributeError):
            setattr(getattr(config, component), field_name, value)

        assert config == ContextConfig()

    def test_override_nested_fields(self):
        """Test component__field overrides."""
        config = ContextConfig().override(
            tokenizer__dialect=MarkupDialect.XML,
            resolver__log_navigation=True,
            correlation_id="editor-1",
        )

        assert config.tokenizer.dialect is MarkupDialect.XML
        assert config.resolver.log_navigation is True
        assert config.correlation_id == "editor-1"
        assert ContextConfig().tokenizer.dialect is MarkupDialect.HTML

    def test_override_unknown_component(self):
        """Test overriding an unknown component fails."""
        with pytest.raises(ConfigValidationError) as exc_info:
            ContextConfig().override(parser__strict=True)

        assert exc_info.value.field_name == "parser__strict"
        assert "tokenizer" in exc_info.value.suggestions

    @pytest.mark.parametrize("overrides", [
        {"resolver__diagnostic_level": "LOUD"},
        {"resolver__no_such_field": 1},
        {"tokenizer__dialect": "sgml"},
    ])
    def test_override_invalid_values(self, overrides):
        """Test invalid overrides raise configuration errors."""
        with pytest.raises(ConfigError):
            ContextConfig().override(**overrides)

    def test_to_dict(self):
        """Test serialization to plain values."""
        data = ContextConfig.xml().to_dict()

        assert data == {
            "tokenizer": {
                "dialect": "xml",
                "raw_text_tags": [],
                "lowercase_tag_names": False,
            },
            "resolver": {
                "enable_diagnostics": True,
                "log_navigation": False,
                "diagnostic_level": "WARNING",
            },
            "correlation_id": None,
        }

    def test_json_round_trip(self):
        """Test JSON serialization and parsing agree."""
        config = ContextConfig.debugging().override(correlation_id="abc")

        restored = ContextConfig.from_json(config.to_json())

        assert restored == config
        assert json.loads(config.to_json())["resolver"]["diagnostic_level"] == "DEBUG"

    def test_from_dict_partial(self):
        """Test missing sections fall back to defaults."""
        config = ContextConfig.from_dict({"tokenizer": {"dialect": "xml"}})

        assert config.tokenizer.dialect is MarkupDialect.XML
        assert config.resolver == ResolverConfig()

    def test_from_dict_unknown_keys(self):
        """Test unknown top-level keys are rejected."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration keys"):
            ContextConfig.from_dict({"tokeniser": {}})

    @pytest.mark.parametrize("data", [
        {"tokenizer": {"dialekt": "xml"}},
        {"resolver": {"diagnostic_level": "LOUD"}},
        {"tokenizer": {"dialect": "sgml"}},
    ])
    def test_from_dict_invalid_values(self, data):
        """Test invalid sections raise configuration errors."""
        with pytest.raises(ConfigValidationError):
            ContextConfig.from_dict(data)
