"""
Entity scanner: discovery of mapped types across namespaces.

A *namespace* is a dotted package name.  Scanning imports the package and
every module below it, then collects the classes defined there that are
either declarative entities or marked embeddables.  The result is a set of
:class:`MappedTypeDescriptor` values identified by fully-qualified name.

Manifesto:
    - **Import only:** No code beyond module import runs and no database
      connection is opened
    - **All or nothing:** A module that fails to import aborts the scan with
      the module named; a partial type set is never returned
    - **Scoped path:** Classpath entries are visible on ``sys.path`` only for
      the duration of the scan

Architecture::

    scan(["app.entities"], classpath=["build/src"])
        │
        ├── classpath_context()      prepend roots to sys.path
        ├── _import_namespace()      import package + walk_packages
        └── _collect()               is_entity / is_embeddable per class
                │
                ▼
        frozenset[MappedTypeDescriptor]

Tags:
    scanner, discovery, sqlalchemy, pkgutil, ddlgen

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import importlib
import pkgutil
import sys
import zipfile
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import ModuleType

from ddlgen.core.errors import ScanConfigurationError
from ddlgen.core.logging import get_logger
from ddlgen.orm.markers import is_embeddable, is_entity

logger = get_logger(__name__)


class TypeKind(str, Enum):
    """Role of a mapped type in the schema."""

    ENTITY = "entity"
    EMBEDDABLE = "embeddable"


@dataclass(frozen=True, slots=True)
class MappedTypeDescriptor:
    """A discovered mapped type.

    Identity is the fully-qualified ``type_name``; ``kind``, ``namespace``
    and the class reference do not take part in equality or hashing.
    """

    type_name: str
    kind: TypeKind = field(compare=False)
    namespace: str = field(compare=False)
    mapped_class: type | None = field(default=None, compare=False, repr=False)

    @classmethod
    def of(cls, mapped_class: type, kind: TypeKind, namespace: str) -> MappedTypeDescriptor:
        type_name = f"{mapped_class.__module__}.{mapped_class.__qualname__}"
        return cls(type_name=type_name, kind=kind, namespace=namespace, mapped_class=mapped_class)


# =============================================================================
# CLASSPATH
# =============================================================================


def _validate_root(entry: str | Path) -> str:
    path = Path(entry).expanduser().resolve()
    if path.is_dir() or (path.is_file() and zipfile.is_zipfile(path)):
        return str(path)
    raise ScanConfigurationError(
        f"Classpath entry is not a directory or archive: {entry}",
        path=path,
    )


@contextmanager
def classpath_context(entries: Iterable[str | Path]) -> Iterator[list[str]]:
    """Prepend ``entries`` to ``sys.path`` for the duration of the block.

    Raises:
        ScanConfigurationError: If an entry is neither a directory nor a
            zip archive.  ``sys.path`` is left untouched in that case.
    """
    roots = [_validate_root(entry) for entry in entries]
    sys.path[0:0] = roots
    importlib.invalidate_caches()
    try:
        yield roots
    finally:
        for root in roots:
            if root in sys.path:
                sys.path.remove(root)


# =============================================================================
# SCANNING
# =============================================================================


def _import_namespace(namespace: str) -> list[ModuleType]:
    try:
        package = importlib.import_module(namespace)
    except Exception as exc:
        raise ScanConfigurationError(
            f"Cannot import namespace '{namespace}': {exc}",
            namespace=namespace,
            cause=exc,
        ) from exc

    modules = [package]
    search_path = getattr(package, "__path__", None)
    if search_path is None:
        return modules

    def _onerror(name: str) -> None:
        raise ScanConfigurationError(f"Cannot import module '{name}'", namespace=namespace)

    current = namespace
    try:
        for info in pkgutil.walk_packages(search_path, prefix=f"{namespace}.", onerror=_onerror):
            current = info.name
            modules.append(importlib.import_module(info.name))
    except ScanConfigurationError:
        raise
    except Exception as exc:
        raise ScanConfigurationError(
            f"Cannot import module '{current}': {exc}",
            namespace=namespace,
            cause=exc,
        ) from exc
    return modules


def _in_namespace(module_name: str, namespace: str) -> bool:
    return module_name == namespace or module_name.startswith(f"{namespace}.")


def _collect(
    modules: Iterable[ModuleType], namespace: str, include_embeddables: bool
) -> Iterator[MappedTypeDescriptor]:
    for module in modules:
        for obj in list(vars(module).values()):
            if not isinstance(obj, type) or not _in_namespace(obj.__module__, namespace):
                continue
            if is_entity(obj):
                yield MappedTypeDescriptor.of(obj, TypeKind.ENTITY, namespace)
            elif include_embeddables and is_embeddable(obj):
                yield MappedTypeDescriptor.of(obj, TypeKind.EMBEDDABLE, namespace)


def scan(
    namespaces: Iterable[str],
    classpath: Iterable[str | Path] = (),
    *,
    include_embeddables: bool = True,
) -> frozenset[MappedTypeDescriptor]:
    """Discover the mapped types defined under ``namespaces``.

    Args:
        namespaces: Dotted package names; blank entries are ignored.
        classpath: Source roots (directories or zip archives) that make the
            namespaces importable.
        include_embeddables: Also collect classes marked ``@embeddable``.

    Returns:
        The union of the types found in every namespace.  A type found by
        several namespaces keeps the first namespace that found it.

    Raises:
        ScanConfigurationError: If a classpath entry is invalid or a module
            cannot be imported.
    """
    found: dict[str, MappedTypeDescriptor] = {}
    with classpath_context(classpath):
        for namespace in namespaces:
            namespace = namespace.strip()
            if not namespace:
                continue
            modules = _import_namespace(namespace)
            before = len(found)
            for descriptor in _collect(modules, namespace, include_embeddables):
                found.setdefault(descriptor.type_name, descriptor)
            logger.info(
                "entities_found",
                namespace=namespace,
                modules=len(modules),
                types=len(found) - before,
            )
    return frozenset(found.values())


__all__ = [
    "MappedTypeDescriptor",
    "TypeKind",
    "classpath_context",
    "scan",
]
