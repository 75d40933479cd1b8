"""Schema model and generation settings shared by the engine stages."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from sqlalchemy import MetaData, Table

AUDIT_TABLE_PREFIX = "audit.table_prefix"
AUDIT_TABLE_SUFFIX = "audit.table_suffix"
AUDIT_REVISION_FIELD = "audit.revision_field_name"
AUDIT_REVISION_TYPE_FIELD = "audit.revision_type_field_name"
AUDIT_REVISION_TABLE = "audit.revision_table_name"
AUDIT_REVISION_TIMESTAMP_FIELD = "audit.revision_timestamp_field_name"
DEFAULT_SCHEMA = "schema.default_schema"

DEFAULT_SETTINGS: Mapping[str, str] = MappingProxyType(
    {
        AUDIT_TABLE_PREFIX: "",
        AUDIT_TABLE_SUFFIX: "_aud",
        AUDIT_REVISION_FIELD: "rev",
        AUDIT_REVISION_TYPE_FIELD: "revtype",
        AUDIT_REVISION_TABLE: "revinfo",
        AUDIT_REVISION_TIMESTAMP_FIELD: "revtstmp",
    }
)


def build_settings(overlay: Mapping[str, str] | None = None) -> dict[str, str]:
    """Merge the built-in defaults with ``overlay``; overlay entries win.

    Keys the engine does not know are kept verbatim.
    """
    settings = dict(DEFAULT_SETTINGS)
    if overlay:
        settings.update(overlay)
    return settings


@dataclass(slots=True)
class SchemaModel:
    """Tables to render for one dialect, with the settings that shaped them.

    ``owners`` maps each table key to the fully-qualified name of the mapped
    type it came from, so compile failures can name the type.
    """

    metadata: MetaData
    settings: Mapping[str, str]
    owners: dict[str, str] = field(default_factory=dict)

    @property
    def default_schema(self) -> str | None:
        return self.settings.get(DEFAULT_SCHEMA) or None

    def owner_of(self, table: Table) -> str | None:
        return self.owners.get(table.key)


__all__ = [
    "AUDIT_REVISION_FIELD",
    "AUDIT_REVISION_TABLE",
    "AUDIT_REVISION_TIMESTAMP_FIELD",
    "AUDIT_REVISION_TYPE_FIELD",
    "AUDIT_TABLE_PREFIX",
    "AUDIT_TABLE_SUFFIX",
    "DEFAULT_SCHEMA",
    "DEFAULT_SETTINGS",
    "SchemaModel",
    "build_settings",
]
