"""
CLI: ``ddlgen generate`` — write one DDL script per dialect.

Every option is optional on the command line; missing values come from
``[tool.ddlgen]`` in the project's ``pyproject.toml`` and then from
:class:`~ddlgen.core.config.settings.DdlSettings`.
"""

from __future__ import annotations

from pathlib import Path

import typer

from ddlgen.cli.utils import console, fail, output_json, output_table
from ddlgen.core.config import find_project_root, get_settings, load_project_config
from ddlgen.core.errors import ConfigurationError, DdlError
from ddlgen.ops.generate import generate_ddl
from ddlgen.ops.requests import GenerationRequest


def _pick(*values):
    """First value that is not ``None`` (empty lists count as unset)."""
    for value in values:
        if value is not None and value != []:
            return value
    return None


def build_request(
    *,
    project_root: Path | None = None,
    output_dir: Path | None = None,
    namespaces: list[str] | None = None,
    dialects: list[str] | None = None,
    audit: bool | None = None,
    drop: bool | None = None,
    overlay: Path | None = None,
    classpath: list[Path] | None = None,
    embeddables: bool | None = None,
    workers: int | None = None,
) -> GenerationRequest:
    """Merge command-line values over project config over settings."""
    root = (project_root or find_project_root()).resolve()
    project = load_project_config(root)
    settings = get_settings(project_root=root)

    settings_output = settings.output_dir if settings.output_dir.is_absolute() else root / settings.output_dir

    return GenerationRequest(
        output_dir=_pick(output_dir, project.output_dir, settings_output),
        namespaces=tuple(_pick(namespaces, project.namespaces) or ()),
        dialects=tuple(_pick(dialects, project.dialects) or ()),
        use_audit=bool(_pick(audit, project.use_audit, False)),
        include_drop=bool(_pick(drop, project.include_drop, False)),
        overlay_path=_pick(overlay, project.overlay, settings.overlay_path),
        classpath=tuple(_pick(classpath, project.classpath) or ()),
        include_embeddables=bool(_pick(embeddables, project.include_embeddables, True)),
        max_workers=_pick(workers, project.workers, settings.max_workers),
    )


def generate_command(
    output_dir: Path | None = typer.Option(  # noqa: UP007
        None, "--output-dir", "-o", help="Directory receiving <dialect>.sql files"
    ),
    namespace: list[str] | None = typer.Option(  # noqa: UP007
        None, "--namespace", "-n", help="Package to scan (repeatable)"
    ),
    dialect: list[str] | None = typer.Option(  # noqa: UP007
        None, "--dialect", "-d", help="Dialect identifier, any case (repeatable)"
    ),
    audit: bool | None = typer.Option(  # noqa: UP007
        None, "--audit/--no-audit", help="Add revision and history tables"
    ),
    drop: bool | None = typer.Option(  # noqa: UP007
        None, "--drop/--no-drop", help="Emit DROP TABLE statements before the creates"
    ),
    overlay: Path | None = typer.Option(  # noqa: UP007
        None, "--overlay", help="persistence.xml-style or YAML property overlay"
    ),
    classpath: list[Path] | None = typer.Option(  # noqa: UP007
        None, "--classpath", "-c", help="Source root making the namespaces importable (repeatable)"
    ),
    embeddables: bool | None = typer.Option(  # noqa: UP007
        None, "--embeddables/--no-embeddables", help="Collect @embeddable value types"
    ),
    workers: int | None = typer.Option(  # noqa: UP007
        None, "--workers", "-w", min=1, help="Dialects generated in parallel"
    ),
    project_root: Path | None = typer.Option(  # noqa: UP007
        None, "--project-root", help="Directory holding pyproject.toml (auto-detected)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Generate one DDL script per dialect into the output directory."""
    try:
        request = build_request(
            project_root=project_root,
            output_dir=output_dir,
            namespaces=namespace,
            dialects=dialect,
            audit=audit,
            drop=drop,
            overlay=overlay,
            classpath=classpath,
            embeddables=embeddables,
            workers=workers,
        )
        results = generate_ddl(request)
    except DdlError as exc:
        fail(exc)
    except ValueError as exc:
        fail(ConfigurationError(str(exc), cause=exc))

    if as_json:
        output_json(results)
        return

    output_table(results, title="DDL scripts")
    changed = sum(1 for r in results if r.changed)
    console.print(f"[dim]{changed} of {len(results)} file(s) changed[/dim]")
