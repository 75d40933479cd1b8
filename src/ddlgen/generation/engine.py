"""
Generation engine: mapped types + dialect + overlay → DDL script text.

The engine is a pure function of its inputs.  It never connects to a
database; SQLAlchemy dialect instances are used only as DDL compilers.

Manifesto:
    Generated scripts are compared byte-for-byte against what is already on
    disk, so the same inputs must always produce the same text.  Tables are
    copied into a private ``MetaData`` in a fixed order, rendered in
    dependency order, and normalised before joining.

    - **Isolated:** User models' ``MetaData`` is never mutated
    - **Deterministic:** Sorted inputs, sorted indexes, normalised whitespace
    - **Fail loudly:** A type the backend cannot render aborts the dialect
      with the type and dialect named

Architecture::

    generate(types, dialect, overlay, audit=.., drop=..)
        │
        ├── build_settings(overlay)        defaults ◄── overlay wins
        ├── build_schema_model(...)        Table.to_metadata() per entity
        │       │                          + relationship(secondary=...) tables
        │       └── add_audit_tables()     revinfo + <prefix>T<suffix>
        ├── compile_statements(...)        DROP (reversed) / CREATE + INDEX
        │                                  / ALTER for cyclic foreign keys
        └── join_script(...)               ";"-terminated, blank-line separated

Settings keys:
    ============================================  ===========
    ``audit.table_prefix``                        ``""``
    ``audit.table_suffix``                        ``_aud``
    ``audit.revision_field_name``                 ``rev``
    ``audit.revision_type_field_name``            ``revtype``
    ``audit.revision_table_name``                 ``revinfo``
    ``audit.revision_timestamp_field_name``       ``revtstmp``
    ``schema.default_schema``                     *(unset)*
    ============================================  ===========

Tags:
    generation, ddl, sqlalchemy, audit, ddlgen

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from sqlalchemy import MetaData, Table
from sqlalchemy import exc as sa_exc
from sqlalchemy import inspect as sa_inspect

from ddlgen.core.dialect import DialectDescriptor
from ddlgen.core.errors import GenerationError
from ddlgen.core.logging import get_logger
from ddlgen.core.scanner import MappedTypeDescriptor, TypeKind
from ddlgen.generation.audit import add_audit_tables
from ddlgen.generation.model import SchemaModel, build_settings
from ddlgen.generation.render import compile_statements, join_script

logger = get_logger(__name__)


def _check_references(model: SchemaModel, dialect: DialectDescriptor) -> None:
    for table in model.metadata.tables.values():
        for fk in table.foreign_keys:
            try:
                fk.column
            except sa_exc.NoReferenceError as exc:
                owner = model.owner_of(table)
                raise GenerationError(
                    f"Mapped type '{owner}' references '{fk.target_fullname}', "
                    f"which is not part of the generated schema ({dialect.identifier})",
                    dialect=dialect.identifier,
                    type_name=owner,
                    cause=exc,
                ) from exc


def _copy_table(model: SchemaModel, source: Table, owner: str) -> Table:
    schema = source.schema
    if schema is None:
        schema = model.default_schema
    key = source.name if schema is None else f"{schema}.{source.name}"
    copy = model.metadata.tables.get(key)
    if copy is None:
        copy = source.to_metadata(model.metadata, schema=schema)
    model.owners.setdefault(copy.key, owner)
    return copy


def _association_tables(mapped_class: type) -> list[Table]:
    mapper = sa_inspect(mapped_class)
    tables = {
        rel.secondary.key: rel.secondary
        for rel in mapper.relationships
        if isinstance(rel.secondary, Table)
    }
    return [tables[key] for key in sorted(tables)]


def build_schema_model(
    types: Iterable[MappedTypeDescriptor],
    dialect: DialectDescriptor,
    settings: Mapping[str, str],
    *,
    audit: bool = False,
) -> SchemaModel:
    """Copy every entity's table into a fresh ``MetaData`` for ``dialect``.

    Association tables named by an entity's ``relationship(secondary=...)``
    are copied too and owned by the first entity (by name) that uses them.
    Tables without an explicit schema are placed in
    ``schema.default_schema`` when that setting is present.  The dialect's
    table options (``mysql_engine``, ...) are applied to every table,
    including history tables.

    Raises:
        GenerationError: If a foreign key points outside the model, or
            history tables are requested for a dialect that cannot hold them.
    """
    if audit and not dialect.supports_audit:
        raise GenerationError(
            f"Dialect {dialect.identifier} does not support audit tables",
            dialect=dialect.identifier,
        )

    model = SchemaModel(metadata=MetaData(), settings=settings)
    entities = sorted(
        (t for t in types if t.kind is TypeKind.ENTITY and t.mapped_class is not None),
        key=lambda t: t.type_name,
    )

    for entity in entities:
        _copy_table(model, entity.mapped_class.__table__, entity.type_name)  # type: ignore[union-attr]

    # association tables are only reachable through relationship(secondary=...)
    for entity in entities:
        for table in _association_tables(entity.mapped_class):  # type: ignore[arg-type]
            _copy_table(model, table, entity.type_name)

    _check_references(model, dialect)

    if audit:
        add_audit_tables(model, dialect)

    for table in model.metadata.tables.values():
        for key, value in dialect.table_options.items():
            table.dialect_kwargs[key] = value

    return model


def generate(
    types: Iterable[MappedTypeDescriptor],
    dialect: DialectDescriptor,
    overlay: Mapping[str, str] | None = None,
    *,
    audit: bool = False,
    drop: bool = False,
) -> str:
    """Render the DDL script for ``types`` in ``dialect``.

    Args:
        types: Scanned mapped types; embeddables contribute no tables of
            their own.
        dialect: Target dialect.
        overlay: Property overrides merged over the built-in settings.
        audit: Add the revision table and one history table per entity.
        drop: Emit ``DROP TABLE`` statements (reverse dependency order)
            before the creates.  Ignored when ``audit`` is set.

    Returns:
        The script text; empty when there is nothing to create.

    Raises:
        GenerationError: If the backend cannot render a mapped type.
    """
    if audit and drop:
        logger.warning(
            "drop_ignored_with_audit",
            dialect=dialect.identifier,
            reason="audit generation emits create statements only",
        )
        drop = False

    settings = build_settings(overlay)
    model = build_schema_model(types, dialect, settings, audit=audit)
    statements = compile_statements(model, dialect, drop=drop)
    logger.debug(
        "ddl_rendered",
        dialect=dialect.identifier,
        tables=len(model.metadata.tables),
        statements=len(statements),
    )
    return join_script(statements)


__all__ = [
    "build_schema_model",
    "build_settings",
    "generate",
]
