"""History-table augmentation.

For every table ``T`` in the model (entity and association tables), adds
``<prefix>T<suffix>`` whose rows record one revision of a ``T`` row each,
plus the single revision-info table they reference::

    revinfo (rev INTEGER PK, revtstmp BIGINT)

    persons_aud (
        id        INTEGER NOT NULL,     -- T's primary key, kept NOT NULL
        name      VARCHAR(255),         -- every other column, nullable
        rev       INTEGER NOT NULL  ──► revinfo.rev
        revtype   SMALLINT,
        PRIMARY KEY (id, rev)
    )

Mirrored columns keep their types but drop defaults, uniqueness, indexes
and foreign keys.  A table without a primary key is keyed on all of its
columns plus ``rev``.
"""

from __future__ import annotations

from sqlalchemy import BigInteger, Column, ForeignKey, Integer, SmallInteger, Table
from sqlalchemy.types import SchemaType, TypeEngine

from ddlgen.core.dialect import DialectDescriptor
from ddlgen.core.errors import GenerationError
from ddlgen.generation.model import (
    AUDIT_REVISION_FIELD,
    AUDIT_REVISION_TABLE,
    AUDIT_REVISION_TIMESTAMP_FIELD,
    AUDIT_REVISION_TYPE_FIELD,
    AUDIT_TABLE_PREFIX,
    AUDIT_TABLE_SUFFIX,
    SchemaModel,
)


def _qualified(name: str, schema: str | None) -> str:
    return name if schema is None else f"{schema}.{name}"


def _mirror_type(type_: TypeEngine) -> TypeEngine:
    # schema-bound types (Enum, Boolean) attach to one table each
    return type_.copy() if isinstance(type_, SchemaType) else type_


def _revision_table(model: SchemaModel, dialect: DialectDescriptor) -> Table:
    settings = model.settings
    name = settings[AUDIT_REVISION_TABLE]
    schema = model.default_schema
    if _qualified(name, schema) in model.metadata.tables:
        raise GenerationError(
            f"Revision table '{name}' collides with a mapped table",
            dialect=dialect.identifier,
        )
    return Table(
        name,
        model.metadata,
        Column(settings[AUDIT_REVISION_FIELD], Integer, primary_key=True),
        Column(settings[AUDIT_REVISION_TIMESTAMP_FIELD], BigInteger),
        schema=schema,
    )


def _history_table(
    model: SchemaModel, dialect: DialectDescriptor, source: Table, revinfo: Table
) -> Table:
    settings = model.settings
    rev_name = settings[AUDIT_REVISION_FIELD]
    revtype_name = settings[AUDIT_REVISION_TYPE_FIELD]
    owner = model.owner_of(source)

    clashes = {rev_name, revtype_name} & set(source.columns.keys())
    if clashes:
        raise GenerationError(
            f"Table '{source.name}' already has column(s) {sorted(clashes)} "
            "reserved for revision tracking",
            dialect=dialect.identifier,
            type_name=owner,
        )

    name = f"{settings[AUDIT_TABLE_PREFIX]}{source.name}{settings[AUDIT_TABLE_SUFFIX]}"
    if _qualified(name, source.schema) in model.metadata.tables:
        raise GenerationError(
            f"History table '{name}' collides with an existing table",
            dialect=dialect.identifier,
            type_name=owner,
        )

    # tables without a primary key (association tables) are keyed on every column
    key_names = {c.name for c in source.primary_key} or {c.name for c in source.columns}
    columns = [
        Column(
            column.name,
            _mirror_type(column.type),
            primary_key=column.name in key_names,
            nullable=column.name not in key_names,
            autoincrement=False,
        )
        for column in source.columns
    ]
    columns.append(
        Column(
            rev_name,
            Integer,
            ForeignKey(revinfo.c[rev_name]),
            primary_key=True,
            nullable=False,
            autoincrement=False,
        )
    )
    columns.append(Column(revtype_name, SmallInteger))

    table = Table(name, model.metadata, *columns, schema=source.schema)
    if owner is not None:
        model.owners[table.key] = owner
    return table


def add_audit_tables(model: SchemaModel, dialect: DialectDescriptor) -> list[Table]:
    """Add the revision table and one history table per entity table.

    Returns:
        The tables added, revision table first.

    Raises:
        GenerationError: If a generated name collides with an existing table
            or a source table already uses a revision column name.
    """
    sources = sorted(model.metadata.tables.values(), key=lambda t: t.key)
    revinfo = _revision_table(model, dialect)
    added = [revinfo]
    for source in sources:
        added.append(_history_table(model, dialect, source, revinfo))
    return added


__all__ = ["add_audit_tables"]
