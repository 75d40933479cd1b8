"""Closed registry of the SQL dialects ddlgen can generate scripts for.

Each supported dialect is one row in a static table binding a canonical
identifier to a :class:`DialectDescriptor`.  The descriptor names the
SQLAlchemy dialect family that renders its DDL (``backend``) plus the few
settings that distinguish versions of the same engine: the server version
the compiler should assume, constructor keyword arguments, and table options
applied to every generated table.

Manifesto:
    The set of dialects is closed and self-describing.  Lookups are exact and
    case-insensitive so ``hsql``, ``HSQL`` and ``Hsql`` resolve to the same
    descriptor, and an unknown identifier fails with the complete list of
    valid ones.

    - **Closed table:** No runtime registration, no fuzzy matching
    - **Data-driven:** Engines differing only in version or table options are
      rows, not classes
    - **No connections:** ``create_dialect()`` only instantiates a compiler

Architecture::

    resolve("mysql5_innodb")
        │
        ▼
    _REGISTRY["MYSQL5_INNODB"] ──► DialectDescriptor(
                                      backend="mysql",
                                      server_version=(5, 0),
                                      table_options={"mysql_engine": "InnoDB"})
        │
        ▼
    descriptor.create_dialect() ──► sqlalchemy MySQLDialect instance

Families without a dialect bundled in SQLAlchemy (DB2, H2, HSQL, Sybase,
Informix, ...) render through SQLAlchemy's generic ``DefaultDialect``
compiler, which emits ANSI-style DDL and refuses types it cannot express.

Tags:
    dialect, registry, sqlalchemy, ddl, ddlgen

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from sqlalchemy.dialects.mssql.base import MSDialect
from sqlalchemy.dialects.mysql.base import MySQLDialect
from sqlalchemy.dialects.oracle.base import OracleDialect
from sqlalchemy.dialects.postgresql.base import PGDialect
from sqlalchemy.engine.default import DefaultDialect
from sqlalchemy.engine.interfaces import Dialect as SADialect

from ddlgen.core.errors import UnknownDialectError

# Capability tokens -> SQLAlchemy dialect classes
_BACKENDS: dict[str, Callable[..., SADialect]] = {
    "generic": DefaultDialect,
    "mssql": MSDialect,
    "mysql": MySQLDialect,
    "oracle": OracleDialect,
    "postgresql": PGDialect,
}


@dataclass(frozen=True, slots=True)
class DialectDescriptor:
    """Canonical description of one supported dialect.

    Attributes:
        identifier: Upper-case canonical name (``"POSTGRESQL9"``).
        backend: Capability token selecting the SQLAlchemy dialect family.
        server_version: Version tuple the DDL compiler should assume.
        dialect_options: Keyword arguments for the dialect constructor.
        table_options: Dialect keyword arguments applied to every table.
        supports_audit: Whether history tables may be generated.
        drop_if_exists: Whether drop statements may carry ``IF EXISTS``.
    """

    identifier: str
    backend: str
    server_version: tuple[int, ...] | None = None
    dialect_options: Mapping[str, Any] = field(default_factory=dict, compare=False)
    table_options: Mapping[str, Any] = field(default_factory=dict, compare=False)
    supports_audit: bool = True
    drop_if_exists: bool = False

    @property
    def file_stem(self) -> str:
        """Lower-case identifier used to name the output file."""
        return self.identifier.lower()

    def create_dialect(self) -> SADialect:
        """Instantiate the SQLAlchemy dialect used to compile DDL."""
        dialect = _BACKENDS[self.backend](**dict(self.dialect_options))
        if self.server_version is not None:
            dialect.server_version_info = self.server_version
        return dialect


def _d(identifier: str, backend: str = "generic", **kwargs: Any) -> DialectDescriptor:
    return DialectDescriptor(identifier=identifier, backend=backend, **kwargs)


_INNODB = MappingProxyType({"mysql_engine": "InnoDB"})
_MYISAM = MappingProxyType({"mysql_engine": "MyISAM"})

_DIALECTS: tuple[DialectDescriptor, ...] = (
    _d("CUBRID"),
    _d("DB2"),
    _d("DB2_AS400"),
    _d("DB2_OS390"),
    _d("FIREBIRD"),
    _d("FRONTBASE"),
    _d("H2", drop_if_exists=True),
    _d("HSQL", drop_if_exists=True),
    _d("INFORMIX"),
    _d("INGRES"),
    _d("INGRES9"),
    _d("INGRES10"),
    _d("INTERBASE"),
    _d("INTERSYSTEMS_CACHE"),
    _d("JDATASTORE"),
    _d("MCKOISQL"),
    _d("SQLSERVER2000", "mssql", server_version=(8, 0)),
    _d("SQLSERVER2005", "mssql", server_version=(9, 0)),
    _d("SQLSERVER2008", "mssql", server_version=(10, 0)),
    _d("SQLSERVER2012", "mssql", server_version=(11, 0),
       dialect_options=MappingProxyType({"deprecate_large_types": True})),
    _d("MIMERSQL"),
    _d("MYSQL", "mysql", server_version=(4, 1), drop_if_exists=True),
    _d("MYSQL_INNODB", "mysql", server_version=(4, 1), table_options=_INNODB, drop_if_exists=True),
    # MyISAM is not transactional; revision rows could diverge from entity rows
    _d("MYSQL_MYISAM", "mysql", server_version=(4, 1), table_options=_MYISAM, supports_audit=False,
       drop_if_exists=True),
    _d("MYSQL5", "mysql", server_version=(5, 0), drop_if_exists=True),
    _d("MYSQL5_INNODB", "mysql", server_version=(5, 0), table_options=_INNODB, drop_if_exists=True),
    _d("ORACLE8I", "oracle", server_version=(8, 1)),
    _d("ORACLE9I", "oracle", server_version=(9, 2)),
    _d("ORACLE10G", "oracle", server_version=(10, 2)),
    _d("ORACLE_TIMES_TEN"),
    _d("POINTBASE"),
    _d("POSTGRESQL81", "postgresql", server_version=(8, 1)),
    _d("POSTGRESQL82", "postgresql", server_version=(8, 2), drop_if_exists=True),
    _d("POSTGRESQL9", "postgresql", server_version=(9, 0), drop_if_exists=True),
    _d("PROGRESS"),
    _d("SAP_DB"),
    _d("SAP_HANA_COL"),
    _d("SAP_HANA_ROW"),
    _d("SYBASE"),
    _d("SYBASE11"),
    _d("SYBASE_ASE155"),
    _d("SYBASE_ASE157"),
    _d("SYBASE_ANYWHERE"),
    _d("TERADATA"),
    _d("UNISYS_OS_2200_RDMS"),
)

_REGISTRY: Mapping[str, DialectDescriptor] = MappingProxyType(
    {descriptor.identifier: descriptor for descriptor in _DIALECTS}
)


def dialect_identifiers() -> list[str]:
    """All valid identifiers, sorted."""
    return sorted(_REGISTRY)


def available_dialects() -> list[DialectDescriptor]:
    """All descriptors, sorted by identifier."""
    return [_REGISTRY[name] for name in dialect_identifiers()]


def resolve(identifier: str) -> DialectDescriptor:
    """Resolve a dialect identifier, ignoring case.

    Raises:
        UnknownDialectError: If ``identifier`` names no supported dialect.
            The error lists every valid identifier.

    Example:
        >>> resolve("postgresql9").backend
        'postgresql'
    """
    key = identifier.strip().upper()
    try:
        return _REGISTRY[key]
    except KeyError:
        raise UnknownDialectError(identifier, dialect_identifiers()) from None


def resolve_all(identifiers: Iterable[str]) -> list[DialectDescriptor]:
    """Resolve several identifiers, dropping duplicates in first-seen order."""
    resolved: dict[str, DialectDescriptor] = {}
    for identifier in identifiers:
        descriptor = resolve(identifier)
        resolved.setdefault(descriptor.identifier, descriptor)
    return list(resolved.values())


__all__ = [
    "DialectDescriptor",
    "available_dialects",
    "dialect_identifiers",
    "resolve",
    "resolve_all",
]
