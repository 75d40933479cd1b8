"""
Shared pytest fixtures and configuration for ddlgen tests.

This module provides:
- Paths to the fixture applications under ``tests/fixtures``
- Overlay file writers (XML and YAML)
- Settings-cache and logging-context cleanup for test isolation
- A ``request_factory`` building ``GenerationRequest`` objects against the
  sample application

Usage:
    Fixtures are auto-discovered by pytest::

        def test_something(request_factory, tmp_path):
            results = generate_ddl(request_factory(dialects=("hsql",)))
"""

import sys
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog

# Ensure ddlgen package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ddlgen.core.config import clear_settings_cache
from ddlgen.core.logging import clear_context
from ddlgen.ops.requests import GenerationRequest

FIXTURES = Path(__file__).parent / "fixtures"
SAMPLE_APP = FIXTURES / "sampleapp"
BROKEN_APP = FIXTURES / "brokenapp"


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop cached settings, bound log context and structlog config around every test."""
    for key in ("DDLGEN_OUTPUT_DIR", "DDLGEN_OVERLAY_PATH", "DDLGEN_LOG_LEVEL", "DDLGEN_LOG_FORMAT", "DDLGEN_MAX_WORKERS"):
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    clear_context()
    yield
    clear_settings_cache()
    clear_context()
    structlog.reset_defaults()


# =============================================================================
# Fixture applications
# =============================================================================


@pytest.fixture
def sample_app() -> Path:
    """Source root holding the ``pkg`` sample application."""
    return SAMPLE_APP


@pytest.fixture
def broken_app() -> Path:
    """Source root holding ``brokenpkg`` (a submodule fails to import)."""
    return BROKEN_APP


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Not-yet-existing destination directory for generated scripts."""
    return tmp_path / "build" / "ddl"


@pytest.fixture
def request_factory(output_dir: Path, sample_app: Path) -> Callable[..., GenerationRequest]:
    """Build requests against the sample app; keyword arguments override."""

    def _make(**overrides) -> GenerationRequest:
        values = {
            "output_dir": output_dir,
            "namespaces": ("pkg.entities",),
            "dialects": ("hsql",),
            "classpath": (sample_app,),
        }
        values.update(overrides)
        return GenerationRequest(**values)

    return _make


# =============================================================================
# Overlays
# =============================================================================


@pytest.fixture
def write_xml_overlay(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write a persistence.xml-style overlay holding ``properties``."""

    def _write(properties: dict[str, str], name: str = "persistence.xml") -> Path:
        entries = "\n".join(
            f'        <property name="{key}" value="{value}"/>' for key, value in properties.items()
        )
        path = tmp_path / name
        path.write_text(
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<persistence xmlns="http://xmlns.jcp.org/xml/ns/persistence" version="2.1">\n'
            '  <persistence-unit name="sample">\n'
            "    <properties>\n"
            f"{entries}\n"
            "    </properties>\n"
            "  </persistence-unit>\n"
            "</persistence>\n",
            encoding="utf-8",
        )
        return path

    return _write


@pytest.fixture
def write_yaml_overlay(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write a YAML overlay with a top-level ``properties`` mapping."""

    def _write(properties: dict[str, str], name: str = "overlay.yaml") -> Path:
        lines = ["properties:"] + [f'  "{key}": "{value}"' for key, value in properties.items()]
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
