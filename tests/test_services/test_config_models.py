"""Tests for config_models module (pydantic-settings integration)."""

from typing import Any

import pytest
from pydantic import ValidationError

from elixir_rdf.services.config_models import BuilderSettings

# Type alias to help with BaseSettings._env_file parameter which isn't in the type signature
_BuilderSettings: Any = BuilderSettings


class TestBuilderSettings:
    """Tests for BuilderSettings."""

    def test_default_values(self):
        """Should have sensible defaults."""
        settings = _BuilderSettings(_env_file=None)
        assert settings.base_iri == "https://example.org/code#"
        assert settings.include_expressions is False
        assert settings.include_git_info is True
        assert settings.dependency_roots == ["deps"]
        assert settings.log_level == "INFO"

    def test_loads_from_env(self, monkeypatch):
        """Should load values from environment."""
        monkeypatch.setenv("ELIXIR_RDF_BASE_IRI", "https://acme.test/code#")
        monkeypatch.setenv("ELIXIR_RDF_INCLUDE_EXPRESSIONS", "true")
        monkeypatch.setenv("ELIXIR_RDF_DEPENDENCY_ROOTS", '["deps", "vendor"]')
        settings = _BuilderSettings(_env_file=None)
        assert settings.base_iri == "https://acme.test/code#"
        assert settings.include_expressions is True
        assert settings.dependency_roots == ["deps", "vendor"]

    def test_log_level_is_normalized(self, monkeypatch):
        """Should upper-case level names."""
        monkeypatch.setenv("ELIXIR_RDF_LOG_LEVEL", "debug")
        settings = _BuilderSettings(_env_file=None)
        assert settings.log_level == "DEBUG"

    def test_empty_base_iri_rejected(self):
        """Should reject an empty base IRI."""
        with pytest.raises(ValidationError):
            _BuilderSettings(_env_file=None, base_iri="")

    def test_builder_config(self):
        """Should expose the feature flags."""
        settings = _BuilderSettings(_env_file=None, include_expressions=True)
        assert settings.builder_config() == {"include_expressions": True, "include_git_info": True}
