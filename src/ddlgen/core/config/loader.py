"""
Project configuration from ``pyproject.toml``.

Projects pin their generation inputs in a ``[tool.ddlgen]`` table so the
CLI can run without arguments::

    [tool.ddlgen]
    output-dir = "src/main/sql/ddl"
    namespaces = ["app.entities"]
    dialects = ["hsql", "postgresql9"]
    use-audit = false
    include-drop = false
    overlay = "src/main/resources/META-INF/persistence.xml"
    classpath = ["src"]
    include-embeddables = true
    workers = 1

Relative paths are resolved against the directory holding
``pyproject.toml``.

Tags:
    ddlgen, configuration, pyproject, toml, loader

Doc-Types:
    api-reference
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ddlgen.core.errors import ConfigurationError

PYPROJECT = "pyproject.toml"
TOOL_TABLE = "ddlgen"


def find_project_root(start: Path | None = None) -> Path:
    """Walk upward from *start* to find the project root.

    Recognised root markers (checked in order):

    * ``pyproject.toml``
    * ``.git`` directory

    Falls back to *start* (or cwd) when no marker is found.
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if (directory / PYPROJECT).exists():
            return directory
        if (directory / ".git").exists():
            return directory
    return current


class ProjectConfig(BaseModel):
    """The ``[tool.ddlgen]`` table; every key is optional."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    output_dir: Path | None = Field(default=None, alias="output-dir")
    namespaces: list[str] = Field(default_factory=list)
    dialects: list[str] = Field(default_factory=list)
    use_audit: bool | None = Field(default=None, alias="use-audit")
    include_drop: bool | None = Field(default=None, alias="include-drop")
    overlay: Path | None = None
    classpath: list[Path] = Field(default_factory=list)
    include_embeddables: bool | None = Field(default=None, alias="include-embeddables")
    workers: int | None = Field(default=None, ge=1)

    def resolved(self, root: Path) -> ProjectConfig:
        """Copy with relative paths anchored at ``root``."""

        def anchor(path: Path | None) -> Path | None:
            if path is None or path.is_absolute():
                return path
            return root / path

        return self.model_copy(
            update={
                "output_dir": anchor(self.output_dir),
                "overlay": anchor(self.overlay),
                "classpath": [anchor(p) for p in self.classpath],
            }
        )


def load_project_config(root: Path | None = None) -> ProjectConfig:
    """Read ``[tool.ddlgen]`` from ``<root>/pyproject.toml``.

    Returns an empty :class:`ProjectConfig` when the file or the table is
    absent.

    Raises:
        ConfigurationError: If the file is not valid TOML or the table holds
            unknown keys or values of the wrong type.
    """
    root = (root or find_project_root()).resolve()
    path = root / PYPROJECT
    if not path.is_file():
        return ProjectConfig()

    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Cannot read {path}: {exc}", cause=exc).with_context(
            path=str(path)
        ) from exc

    table = data.get("tool", {}).get(TOOL_TABLE, {})
    try:
        config = ProjectConfig.model_validate(table)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid [tool.{TOOL_TABLE}] in {path}: {exc}", cause=exc).with_context(
            path=str(path)
        ) from exc
    return config.resolved(root)


__all__ = ["ProjectConfig", "find_project_root", "load_project_config"]
