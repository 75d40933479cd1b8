"""
ddlgen - Generate per-dialect DDL scripts from SQLAlchemy mappings.

Scan namespaces for declarative entities, render one schema script per
database dialect, and write each script only when its content changed.

Usage::

    from ddlgen import GenerationRequest, generate_ddl

    results = generate_ddl(
        GenerationRequest(
            output_dir=Path("src/main/sql/ddl"),
            namespaces=("app.entities",),
            dialects=("hsql", "postgresql9"),
        )
    )
"""

from __future__ import annotations

__version__ = "0.1.0"

from ddlgen.ops.generate import generate_ddl
from ddlgen.ops.requests import GenerationRequest, GenerationResult

__all__ = ["GenerationRequest", "GenerationResult", "__version__", "generate_ddl"]
