"""
Root Typer application for the ddlgen CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from ddlgen.cli.utils import fail
from ddlgen.core.config import get_settings
from ddlgen.core.errors import ConfigurationError
from ddlgen.core.logging import configure_logging

app = Typer(
    name="ddlgen",
    help="ddlgen — per-dialect DDL scripts from SQLAlchemy mappings.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from ddlgen import __version__

        typer.echo(f"ddlgen {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(  # noqa: UP007
        None, "--log-level", help="Override DDLGEN_LOG_LEVEL (DEBUG, INFO, ...)"
    ),
) -> None:
    """ddlgen CLI — generate, list dialects, inspect configuration."""
    try:
        settings = get_settings()
    except ValueError as exc:
        fail(ConfigurationError(f"Invalid DDLGEN_* settings: {exc}", cause=exc))

    level = (log_level or settings.log_level).upper()
    if level not in _LOG_LEVELS:
        fail(ConfigurationError(f"Unknown log level '{level}'; use one of {', '.join(_LOG_LEVELS)}"))
    configure_logging(
        level=level,
        json_format=settings.json_logs,
        service="ddlgen",
    )


# ── Sub-command registration ─────────────────────────────────────────────

from ddlgen.cli.config import app as config_app  # noqa: E402
from ddlgen.cli.dialects import list_dialects  # noqa: E402
from ddlgen.cli.generate import generate_command  # noqa: E402

app.command("generate")(generate_command)
app.command("dialects")(list_dialects)
app.add_typer(config_app, name="config", help="Configuration inspection.")
