"""Entity and embeddable markers recognised by the scanner.

An *entity* is any concrete SQLAlchemy declarative class: it has a mapper
and a ``Table`` of its own.  No extra decoration is needed for entities.

An *embeddable* is a plain value class stored inside an entity's table
through :func:`sqlalchemy.orm.composite`.  SQLAlchemy keeps no registry of
such classes, so they are marked explicitly::

    @embeddable
    @dataclasses.dataclass
    class Address:
        street: str
        city: str
"""

from __future__ import annotations

from typing import TypeVar

from sqlalchemy import Table
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Mapper

EMBEDDABLE_ATTR = "__ddl_embeddable__"

T = TypeVar("T", bound=type)


def embeddable(cls: T) -> T:
    """Mark ``cls`` as an embeddable value type."""
    setattr(cls, EMBEDDABLE_ATTR, True)
    return cls


def is_embeddable(obj: object) -> bool:
    """True for classes decorated with :func:`embeddable` (not inherited)."""
    return isinstance(obj, type) and bool(vars(obj).get(EMBEDDABLE_ATTR, False))


def is_entity(obj: object) -> bool:
    """True for concrete declarative classes mapped to their own table."""
    if not isinstance(obj, type) or vars(obj).get("__abstract__", False):
        return False
    mapper = sa_inspect(obj, raiseerr=False)
    if not isinstance(mapper, Mapper) or mapper.class_ is not obj:
        return False
    # single-table inheritance subclasses share the parent's table
    return isinstance(mapper.local_table, Table) and (
        mapper.inherits is None or mapper.local_table is not mapper.inherits.local_table
    )


__all__ = ["EMBEDDABLE_ATTR", "embeddable", "is_embeddable", "is_entity"]
