"""
CLI: ``ddlgen config`` — configuration inspection.
"""

from __future__ import annotations

from pathlib import Path

import typer

from ddlgen.cli.utils import console, fail, output_dict, output_json
from ddlgen.core.errors import DdlError

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config(
    project_root: Path | None = typer.Option(  # noqa: UP007
        None, "--project-root", help="Directory holding pyproject.toml (auto-detected)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show effective settings and the [tool.ddlgen] project table."""
    from ddlgen.core.config import find_project_root, get_settings, load_project_config

    root = (project_root or find_project_root()).resolve()
    try:
        project = load_project_config(root)
    except DdlError as exc:
        fail(exc)
    settings = get_settings(project_root=root)

    settings_data = settings.model_dump(mode="json")
    project_data = project.model_dump(mode="json", by_alias=True, exclude_defaults=True)

    if as_json:
        output_json({"project_root": str(root), "settings": settings_data, "project": project_data})
        return

    console.print(f"[bold]Project Root:[/bold] {root}")
    output_dict(settings_data, title="\nSettings")
    if project_data:
        output_dict(project_data, title="\n\\[tool.ddlgen]")
    else:
        console.print("\n[dim]No \\[tool.ddlgen] table in pyproject.toml.[/dim]")
