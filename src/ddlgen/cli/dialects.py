"""
CLI: ``ddlgen dialects`` — list the supported dialects.
"""

from __future__ import annotations

import typer

from ddlgen.cli.utils import output_json, output_table
from ddlgen.core.dialect import available_dialects


def _row(descriptor) -> dict[str, object]:
    return {
        "identifier": descriptor.identifier,
        "file": f"{descriptor.file_stem}.sql",
        "backend": descriptor.backend,
        "server_version": ".".join(map(str, descriptor.server_version or ())) or "-",
        "audit": descriptor.supports_audit,
    }


def list_dialects(
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List every dialect identifier ddlgen can generate for."""
    rows = [_row(d) for d in available_dialects()]
    if as_json:
        output_json(rows)
        return
    output_table(rows, title="Dialects")
