"""
Pydantic models for elixir_rdf configuration.

Uses pydantic-settings for environment variable validation and type coercion.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["BuilderSettings"]

# =============================================================================
# Environment Settings (from .env file)
# =============================================================================


class BuilderSettings(BaseSettings):
    """Triple builder settings."""

    model_config = SettingsConfigDict(env_prefix="ELIXIR_RDF_", env_file=".env", extra="ignore")

    base_iri: str = "https://example.org/code#"

    # Feature flags
    include_expressions: bool = False
    include_git_info: bool = True

    # Top-level directories holding third-party code (never built in full mode)
    dependency_roots: list[str] = Field(default_factory=lambda: ["deps"])

    # Logging
    log_level: str = "INFO"

    @field_validator("base_iri")
    @classmethod
    def require_base_iri(cls, v: str) -> str:
        """Reject an empty base IRI; entity IRIs are appended to it verbatim."""
        if not v:
            raise ValueError("base_iri must not be empty")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize level names to uppercase."""
        if isinstance(v, str):
            return v.upper()
        return v

    def builder_config(self) -> dict[str, bool]:
        """Feature flags in the form a build Context expects."""
        return {
            "include_expressions": self.include_expressions,
            "include_git_info": self.include_git_info,
        }
