"""Configuration for ddlgen.

Modules
-------
settings    DdlSettings (DDLGEN_* environment), get_settings, clear_settings_cache
loader      find_project_root, [tool.ddlgen] from pyproject.toml

Tags:
    ddlgen, configuration

Doc-Types:
    package-overview, module-index
"""

from __future__ import annotations

from ddlgen.core.config.loader import ProjectConfig, find_project_root, load_project_config
from ddlgen.core.config.settings import DdlSettings, clear_settings_cache, get_settings

__all__ = [
    "DdlSettings",
    "ProjectConfig",
    "clear_settings_cache",
    "find_project_root",
    "get_settings",
    "load_project_config",
]
