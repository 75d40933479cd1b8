"""
Typed request and result objects for DDL generation.

Requests carry only validated, transport-agnostic data: no Typer params,
no raw ``pyproject`` tables.  Callers build a :class:`GenerationRequest`
and hand it to :func:`ddlgen.ops.generate.generate_ddl`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ddlgen.core.errors import ConfigurationError

# ------------------------------------------------------------------ #
# Requests
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    """Request for :func:`ddlgen.ops.generate.generate_ddl`.

    Attributes:
        output_dir: Directory receiving one ``<dialect>.sql`` per dialect.
        namespaces: Dotted package names to scan for mapped types.
        dialects: Dialect identifiers, any case.
        use_audit: Add revision and history tables.
        include_drop: Prefix each script with ``DROP TABLE`` statements.
        overlay_path: Optional XML/YAML property overlay.
        classpath: Source roots that make ``namespaces`` importable.
        include_embeddables: Also collect ``@embeddable`` value types.
        max_workers: Dialects generated in parallel (``1`` = sequential).
    """

    output_dir: Path
    namespaces: tuple[str, ...]
    dialects: tuple[str, ...]
    use_audit: bool = False
    include_drop: bool = False
    overlay_path: Path | None = None
    classpath: tuple[Path, ...] = ()
    include_embeddables: bool = True
    max_workers: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        object.__setattr__(self, "namespaces", tuple(self.namespaces))
        object.__setattr__(self, "dialects", tuple(self.dialects))
        object.__setattr__(self, "classpath", tuple(Path(p) for p in self.classpath))
        if self.overlay_path is not None:
            object.__setattr__(self, "overlay_path", Path(self.overlay_path))

    @property
    def effective_namespaces(self) -> tuple[str, ...]:
        return tuple(n.strip() for n in self.namespaces if n and n.strip())

    @property
    def effective_dialects(self) -> tuple[str, ...]:
        return tuple(d.strip() for d in self.dialects if d and d.strip())

    def validate(self) -> None:
        """Reject requests that cannot produce any output.

        Raises:
            ConfigurationError: If no namespace or no dialect remains after
                dropping blank entries, or ``max_workers`` is below 1.
        """
        if not self.effective_namespaces:
            raise ConfigurationError("At least one namespace is required")
        if not self.effective_dialects:
            raise ConfigurationError("At least one dialect is required")
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be at least 1, got {self.max_workers}")


# ------------------------------------------------------------------ #
# Results
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Outcome for one dialect.

    Attributes:
        dialect: Canonical dialect identifier (``"POSTGRESQL9"``).
        path: Destination file.
        script: Generated script text.
        changed: Whether the destination file's content changed.
    """

    dialect: str
    path: Path
    script: str
    changed: bool

    def to_dict(self) -> dict[str, object]:
        return {"dialect": self.dialect, "path": str(self.path), "changed": self.changed}


__all__ = ["GenerationRequest", "GenerationResult"]
