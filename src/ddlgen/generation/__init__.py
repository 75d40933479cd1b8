"""DDL generation: schema model, history tables and rendering.

Modules
-------
model       SchemaModel, settings keys and defaults, build_settings
engine      build_schema_model, generate
audit       add_audit_tables (revision + history tables)
render      compile_statements, format_statement, join_script

Tags:
    ddlgen, generation, ddl, sqlalchemy

Doc-Types:
    package-overview, module-index
"""

from __future__ import annotations

from ddlgen.generation.engine import build_schema_model, generate
from ddlgen.generation.model import DEFAULT_SETTINGS, SchemaModel, build_settings

__all__ = [
    "DEFAULT_SETTINGS",
    "SchemaModel",
    "build_schema_model",
    "build_settings",
    "generate",
]
