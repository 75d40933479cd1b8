"""Operations: typed requests and the generation pipeline.

Modules
-------
requests    GenerationRequest, GenerationResult
generate    generate_ddl

Tags:
    ddlgen, operations

Doc-Types:
    package-overview, module-index
"""

from __future__ import annotations

from ddlgen.ops.generate import generate_ddl
from ddlgen.ops.requests import GenerationRequest, GenerationResult

__all__ = ["GenerationRequest", "GenerationResult", "generate_ddl"]
