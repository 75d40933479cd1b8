"""Mapping helpers for models scanned by ddlgen.

Modules
-------
base        DdlBase (declarative base with a portable type map)
markers     embeddable decorator, is_entity / is_embeddable predicates

Tags:
    ddlgen, orm, sqlalchemy, declarative, markers

Doc-Types:
    package-overview, module-index
"""

from __future__ import annotations

from ddlgen.orm.base import DdlBase
from ddlgen.orm.markers import embeddable, is_embeddable, is_entity

__all__ = [
    "DdlBase",
    "embeddable",
    "is_embeddable",
    "is_entity",
]
