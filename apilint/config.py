"""
apilint Configuration — pydantic-settings based.

All settings are read from environment variables or .env file.
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from apilint.models.rule_models import RuleConfig


class Settings(BaseSettings):
    """Application-wide settings sourced from environment variables."""

    # ── Engine ──
    lint_max_workers: int = Field(
        default=4, ge=1, description="Files linted concurrently per request"
    )
    enabled_rules: list[str] = Field(
        default_factory=list, description="Rule-name prefixes forced on"
    )
    disabled_rules: list[str] = Field(
        default_factory=list, description="Rule-name prefixes switched off"
    )

    # ── API ──
    max_files_per_request: int = Field(
        default=200, description="Max files accepted by POST /lint"
    )
    cors_origins: list[str] = Field(
        default=["*"], description="Allowed CORS origins"
    )
    log_level: str = Field(default="INFO", description="Root log level")

    # ── Audit ──
    audit_enabled: bool = Field(
        default=False, description="Write one JSON line per lint request"
    )
    audit_log_path: str = Field(
        default="lint_audit.jsonl", description="Path to JSON-lines audit log file"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def rule_config(self) -> RuleConfig:
        """Default rule enablement for requests that do not send their own."""
        return RuleConfig(
            enabled_rules=list(self.enabled_rules),
            disabled_rules=list(self.disabled_rules),
        )


# Singleton instance imported by other modules
settings = Settings()
