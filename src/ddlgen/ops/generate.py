"""
DDL generation operation.

Wires the pipeline together for one request::

    validate ─► resolve dialects ─► scan ─► load overlay
                                               │
                  ┌────────────────────────────┘
                  ▼
        per dialect:  generate ─► sync(<scratch>/<dialect>.sql)

Dialects are resolved before anything touches the filesystem, so an unknown
identifier leaves the output directory exactly as it was.  All scratch
files of a request live in one private temporary directory that is removed
when the request finishes.

With ``max_workers > 1`` dialects run in a thread pool.  Every dialect runs
to completion, files already synchronised are kept, and the first failure
in request order is raised afterwards.
"""

from __future__ import annotations

import tempfile
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from ddlgen.core.dialect import DialectDescriptor, resolve_all
from ddlgen.core.errors import DdlIOError
from ddlgen.core.logging import LogContext, get_logger
from ddlgen.core.overlay import PropertyOverlay, load_overlay
from ddlgen.core.scanner import MappedTypeDescriptor, scan
from ddlgen.core.sync import SCRATCH_PREFIX, sync
from ddlgen.generation.engine import generate
from ddlgen.ops.requests import GenerationRequest, GenerationResult

logger = get_logger(__name__)


def _run_dialect(
    request: GenerationRequest,
    dialect: DialectDescriptor,
    types: frozenset[MappedTypeDescriptor],
    overlay: PropertyOverlay,
    scratch_dir: Path,
) -> GenerationResult:
    with LogContext(dialect=dialect.identifier):
        script = generate(
            types,
            dialect,
            overlay,
            audit=request.use_audit,
            drop=request.include_drop,
        )
        outcome = sync(dialect, script, request.output_dir, scratch_dir=scratch_dir)
        logger.info("ddl_generated", path=str(outcome.path), changed=outcome.changed)
        return GenerationResult(
            dialect=dialect.identifier,
            path=outcome.path,
            script=script,
            changed=outcome.changed,
        )


def _run_parallel(
    request: GenerationRequest,
    dialects: list[DialectDescriptor],
    types: frozenset[MappedTypeDescriptor],
    overlay: PropertyOverlay,
    scratch_dir: Path,
) -> list[GenerationResult]:
    workers = min(request.max_workers, len(dialects))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ddlgen") as pool:
        futures: list[Future[GenerationResult]] = [
            pool.submit(_run_dialect, request, dialect, types, overlay, scratch_dir)
            for dialect in dialects
        ]

    failures = [(d, f.exception()) for d, f in zip(dialects, futures) if f.exception() is not None]
    for dialect, exc in failures:
        logger.error("ddl_generation_failed", dialect=dialect.identifier, error=str(exc))
    if failures:
        raise failures[0][1]
    return [f.result() for f in futures]


def generate_ddl(request: GenerationRequest) -> list[GenerationResult]:
    """Generate and synchronise one DDL script per requested dialect.

    Args:
        request: What to scan, which dialects to emit, and where.

    Returns:
        One result per distinct dialect, in first-requested order.

    Raises:
        ConfigurationError: Invalid request (``UnknownDialectError`` for an
            unknown dialect identifier).
        ScanConfigurationError: A namespace or classpath entry is unusable.
        GenerationError: The backend could not render a mapped type.
        DestinationConflictError: The output path is not a directory.
        DdlIOError: Scratch or destination I/O failed.
    """
    request.validate()
    dialects = resolve_all(request.effective_dialects)

    types = scan(
        request.effective_namespaces,
        request.classpath,
        include_embeddables=request.include_embeddables,
    )
    overlay = load_overlay(request.overlay_path)
    logger.info(
        "generation_started",
        dialects=[d.identifier for d in dialects],
        types=len(types),
        audit=request.use_audit,
        drop=request.include_drop,
    )

    try:
        with tempfile.TemporaryDirectory(prefix=SCRATCH_PREFIX) as tmp:
            scratch_dir = Path(tmp)
            if request.max_workers > 1 and len(dialects) > 1:
                return _run_parallel(request, dialects, types, overlay, scratch_dir)
            return [
                _run_dialect(request, dialect, types, overlay, scratch_dir)
                for dialect in dialects
            ]
    except OSError as exc:
        raise DdlIOError(f"Scratch directory failure: {exc}", cause=exc) from exc


__all__ = ["generate_ddl"]
