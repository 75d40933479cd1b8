"""
Centralized settings for ddlgen.

Manifesto:
    One validated, cached settings object holds the defaults every entry
    point falls back to.  Values come from ``DDLGEN_*`` environment
    variables or a ``.env`` file in the project root; explicit request
    fields and ``[tool.ddlgen]`` in ``pyproject.toml`` take precedence over
    them (see :mod:`~ddlgen.core.config.loader`).

Tags:
    ddlgen, configuration, settings, pydantic, caching

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
_LOG_FORMATS = frozenset({"console", "json"})


class DdlSettings(BaseSettings):
    """ddlgen configuration.

    All fields can be set via ``DDLGEN_*`` environment variables (e.g.
    ``DDLGEN_OUTPUT_DIR=build/ddl``) or through a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="DDLGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Output ───────────────────────────────────────────────────
    output_dir: Path = Field(default=Path("src/main/sql/ddl"))
    overlay_path: Path | None = Field(default=None)

    # ── Execution ────────────────────────────────────────────────
    max_workers: int = Field(default=1, ge=1, description="Dialects generated in parallel")

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console", description="console or json")

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return value

    @field_validator("log_format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        value = value.lower()
        if value not in _LOG_FORMATS:
            raise ValueError(f"log_format must be one of {sorted(_LOG_FORMATS)}")
        return value

    @property
    def json_logs(self) -> bool:
        return self.log_format == "json"


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, DdlSettings] = {}


def get_settings(*, project_root: Path | None = None, _force_reload: bool = False) -> DdlSettings:
    """Load, validate, and cache a :class:`DdlSettings` instance.

    Parameters
    ----------
    project_root:
        Directory whose ``.env`` is read.  Auto-detected when omitted.
    _force_reload:
        Bypass cache and reload from disk.
    """
    from .loader import find_project_root

    root = (project_root or find_project_root()).resolve()
    cache_key = str(root)

    if not _force_reload and cache_key in _settings_cache:
        return _settings_cache[cache_key]

    settings = DdlSettings(_env_file=root / ".env")  # type: ignore[call-arg]
    _settings_cache[cache_key] = settings
    return settings


def clear_settings_cache() -> None:
    """Drop every cached settings instance (used by tests)."""
    _settings_cache.clear()


__all__ = ["DdlSettings", "clear_settings_cache", "get_settings"]
