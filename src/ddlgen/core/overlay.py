"""Property overlay loading.

An overlay is an optional file of configuration overrides merged into the
schema model before generation (audit table naming, default schema, ...).
Two formats are understood:

* XML in the ``persistence.xml`` style -- every ``<property name=".."
  value=".."/>`` element, at any depth, contributes one entry::

      <persistence>
        <persistence-unit name="app">
          <properties>
            <property name="audit.table_suffix" value="_audit"/>
          </properties>
        </persistence-unit>
      </persistence>

* YAML (``.yaml`` / ``.yml``) with a top-level ``properties`` mapping.

A missing, unreadable or malformed overlay is never fatal: the problem is
logged and an empty overlay is returned so generation proceeds with the
built-in defaults.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path
from xml.etree import ElementTree

import yaml

from ddlgen.core.logging import get_logger

logger = get_logger(__name__)

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class PropertyOverlay(Mapping[str, str]):
    """Immutable ``{key: value}`` mapping of configuration overrides."""

    __slots__ = ("_values", "source")

    def __init__(self, values: Mapping[str, str] | None = None, source: Path | None = None):
        self._values: dict[str, str] = dict(values or {})
        self.source = source

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"PropertyOverlay({self._values!r}, source={self.source!r})"


class _MalformedOverlay(ValueError):
    pass


def _local_name(tag: str) -> str:
    # "{http://xmlns.jcp.org/xml/ns/persistence}property" -> "property"
    return tag.rsplit("}", 1)[-1]


def _parse_xml(text: str) -> list[tuple[str | None, str | None]]:
    try:
        root = ElementTree.fromstring(text)
    except ElementTree.ParseError as exc:
        raise _MalformedOverlay(str(exc)) from exc
    return [
        (element.get("name"), element.get("value"))
        for element in root.iter()
        if isinstance(element.tag, str) and _local_name(element.tag) == "property"
    ]


def _parse_yaml(text: str) -> list[tuple[str | None, str | None]]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise _MalformedOverlay(str(exc)) from exc
    if not isinstance(data, dict) or not isinstance(data.get("properties"), dict):
        raise _MalformedOverlay("expected a top-level 'properties' mapping")
    return [
        (None if key is None else str(key), None if value is None else str(value))
        for key, value in data["properties"].items()
    ]


def load_overlay(source: Path | str | None) -> PropertyOverlay:
    """Load the overlay at ``source``.

    Entries with an empty or missing name or value are skipped; later
    entries overwrite earlier ones with the same name.

    Returns:
        The overlay, or an empty one when ``source`` is ``None``, missing,
        unreadable or malformed.
    """
    if source is None:
        return PropertyOverlay()

    path = Path(source)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("overlay_unreadable", path=str(path), error=str(exc))
        return PropertyOverlay(source=path)

    logger.info("overlay_found", path=str(path))
    parse = _parse_yaml if path.suffix.lower() in YAML_SUFFIXES else _parse_xml
    try:
        entries = parse(text)
    except _MalformedOverlay as exc:
        logger.error("overlay_malformed", path=str(path), error=str(exc))
        return PropertyOverlay(source=path)

    values: dict[str, str] = {}
    for name, value in entries:
        if not name or not value:
            logger.debug("overlay_entry_skipped", name=name)
            continue
        logger.debug("overlay_property", name=name, value=value)
        values[name] = value

    return PropertyOverlay(values, source=path)


__all__ = ["PropertyOverlay", "load_overlay"]
