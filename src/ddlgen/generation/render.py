"""Compile a schema model to normalised, ``;``-delimited statements."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import ForeignKeyConstraint, Table
from sqlalchemy import exc as sa_exc
from sqlalchemy.engine.interfaces import Dialect as SADialect
from sqlalchemy.schema import (
    AddConstraint,
    CreateIndex,
    CreateTable,
    DropConstraint,
    DropTable,
    ExecutableDDLElement,
    sort_tables_and_constraints,
)
from sqlalchemy.sql.elements import conv

from ddlgen.core.dialect import DialectDescriptor
from ddlgen.core.errors import GenerationError
from ddlgen.generation.model import SchemaModel

DELIMITER = ";"
INDENT = "    "


def format_statement(sql: str) -> str:
    """Normalise compiled DDL: stripped, tabs expanded, no trailing blanks."""
    lines = [line.rstrip() for line in sql.strip().replace("\t", INDENT).splitlines()]
    return "\n".join(line for line in lines if line) + DELIMITER


def join_script(statements: Iterable[str]) -> str:
    """Join statements with one blank line; non-empty scripts end in a newline."""
    statements = list(statements)
    if not statements:
        return ""
    return "\n\n".join(statements) + "\n"


def _compile(
    element: ExecutableDDLElement,
    table: Table,
    sa_dialect: SADialect,
    model: SchemaModel,
    dialect: DialectDescriptor,
) -> str:
    try:
        return format_statement(str(element.compile(dialect=sa_dialect)))
    except sa_exc.SQLAlchemyError as exc:
        owner = model.owner_of(table) or table.fullname
        raise GenerationError(
            f"Cannot render mapped type '{owner}' for {dialect.identifier}: {exc}",
            dialect=dialect.identifier,
            type_name=owner,
            cause=exc,
        ) from exc


def _cycle_constraint_name(constraint: ForeignKeyConstraint) -> conv:
    table = constraint.table
    return conv(f"fk_{table.name}_{'_'.join(constraint.column_keys)}")


def _sort(
    model: SchemaModel,
) -> tuple[list[tuple[Table, list[ForeignKeyConstraint]]], list[ForeignKeyConstraint]]:
    """Dependency-ordered tables plus the foreign keys that close a cycle.

    Cycle-closing constraints are left out of their ``CREATE TABLE`` and
    given a deterministic name so they can be added and dropped by
    ``ALTER TABLE``.
    """
    tables = sorted(model.metadata.tables.values(), key=lambda t: t.key)
    ordered: list[tuple[Table, list[ForeignKeyConstraint]]] = []
    deferred: list[ForeignKeyConstraint] = []
    for table, constraints in sort_tables_and_constraints(tables):
        if table is None:
            deferred.extend(constraints)
        else:
            ordered.append((table, list(constraints)))

    deferred.sort(key=lambda c: (c.table.key, tuple(c.column_keys)))
    for constraint in deferred:
        if not isinstance(constraint.name, str):
            constraint.name = _cycle_constraint_name(constraint)
    return ordered, deferred


def compile_statements(
    model: SchemaModel, dialect: DialectDescriptor, *, drop: bool = False
) -> list[str]:
    """Compile every table of ``model`` for ``dialect``.

    Creates follow dependency order (referenced tables first), each table's
    indexes right after it in name order.  Foreign keys that form a cycle
    are added by ``ALTER TABLE`` once every table exists.  With ``drop`` the
    drops come first: cycle constraints, then tables in reverse dependency
    order.
    """
    sa_dialect = dialect.create_dialect()
    ordered, deferred = _sort(model)
    statements: list[str] = []

    if drop:
        for constraint in deferred:
            statements.append(
                _compile(DropConstraint(constraint), constraint.table, sa_dialect, model, dialect)
            )
        for table, _ in reversed(ordered):
            element = DropTable(table, if_exists=dialect.drop_if_exists)
            statements.append(_compile(element, table, sa_dialect, model, dialect))

    for table, constraints in ordered:
        element = CreateTable(table, include_foreign_key_constraints=constraints)
        statements.append(_compile(element, table, sa_dialect, model, dialect))
        for index in sorted(table.indexes, key=lambda i: str(i.name)):
            statements.append(_compile(CreateIndex(index), table, sa_dialect, model, dialect))

    for constraint in deferred:
        statements.append(
            _compile(AddConstraint(constraint), constraint.table, sa_dialect, model, dialect)
        )

    return statements


__all__ = ["DELIMITER", "compile_statements", "format_statement", "join_script"]
