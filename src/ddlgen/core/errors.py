"""
Structured error types for ddlgen.

Every failure the generator can surface to its caller is a :class:`DdlError`
subclass.  Each error carries a category, a machine-readable code and an
:class:`ErrorContext` naming the dialect, namespace, mapped type or path that
caused it, so a failed build can be acted on without re-running in a debug
mode.

Manifesto:
    - **Typed taxonomy:** One class per failure kind the caller can act on
    - **Actionable context:** Offending identifier, path, or type name travels
      with the error
    - **Error chaining:** The original exception is preserved as ``cause``
    - **Nothing silent:** Only the overlay loader degrades instead of raising

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                        DdlError                              │
        │            (category, code, context, cause)                  │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  ConfigurationError        ScanConfigurationError            │
        │  (CONFIG)                  (SCAN)                            │
        │       │                                                      │
        │  UnknownDialectError       GenerationError                   │
        │  (valid_identifiers)       (GENERATION)                      │
        │                                                              │
        │  DestinationConflictError  DdlIOError                        │
        │  (STORAGE)                 (STORAGE)                         │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> error = GenerationError("cannot render", dialect="HSQL", type_name="app.Person")
    >>> error.context.dialect
    'HSQL'
    >>> error.to_dict()["code"]
    'GENERATION_FAILED'

Guardrails:
    ❌ DON'T: Raise bare ``Exception`` or ``OSError`` from the core
    ✅ DO: Wrap with the matching DdlError subclass and pass ``cause=``

Tags:
    error-handling, exception-hierarchy, error-context, ddlgen

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and reporting.

    Attributes:
        CONFIG: Invalid request or unknown dialect
        SCAN: Namespace / classpath discovery failures
        GENERATION: Backend could not render a mapped type
        STORAGE: Destination tree or scratch file failures
        INTERNAL: Bugs, unexpected state
    """

    CONFIG = "CONFIG"
    SCAN = "SCAN"
    GENERATION = "GENERATION"
    STORAGE = "STORAGE"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Only the fields relevant to a given failure are set; ``to_dict()``
    drops the rest so log lines stay short.

    Attributes:
        dialect: Canonical dialect identifier being processed
        namespace: Namespace (package) being scanned
        type_name: Fully-qualified name of the offending mapped type
        path: File or directory involved in the failure
        metadata: Additional key-value pairs
    """

    dialect: str | None = None
    namespace: str | None = None
    type_name: str | None = None
    path: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["dialect", "namespace", "type_name", "path"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class DdlError(Exception):
    """
    Base exception for all ddlgen errors.

    Subclasses set ``default_category`` and ``code``; instances carry the
    human message, an :class:`ErrorContext` and the chained ``cause``.

    Examples:
        >>> error = DdlError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> DdlError("copy failed").with_context(path="/tmp/x").context.path
        '/tmp/x'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> DdlError:
        """
        Add context to this error (fluent API).

        Usage:
            raise DdlIOError("Copy failed").with_context(path=str(target))
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# REQUEST / CONFIGURATION ERRORS
# =============================================================================


class ConfigurationError(DdlError):
    """The generation request failed validation before any work started."""

    default_category = ErrorCategory.CONFIG
    code = "INVALID_REQUEST"


class UnknownDialectError(ConfigurationError):
    """A requested dialect identifier is not in the closed registry.

    The message enumerates every valid identifier (sorted, one per line) so
    the caller can correct the request directly from the build output.
    """

    code = "UNKNOWN_DIALECT"

    def __init__(self, identifier: str, valid_identifiers: Sequence[str]):
        self.identifier = identifier
        self.valid_identifiers = sorted(valid_identifiers)
        listing = "\n".join(self.valid_identifiers)
        super().__init__(
            f"Can't convert the configured dialect '{identifier}' to a dialect. "
            f"Available dialects are:\n{listing}\n",
            context=ErrorContext(metadata={"identifier": identifier}),
        )


# =============================================================================
# PIPELINE ERRORS
# =============================================================================


class ScanConfigurationError(DdlError):
    """The namespace scan could not be set up or a module failed to import."""

    default_category = ErrorCategory.SCAN
    code = "SCAN_FAILED"

    def __init__(
        self,
        message: str,
        *,
        namespace: str | None = None,
        path: str | Path | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(
            message,
            context=ErrorContext(namespace=namespace, path=str(path) if path is not None else None),
            cause=cause,
        )


class GenerationError(DdlError):
    """The backend could not render a mapped type for a dialect."""

    default_category = ErrorCategory.GENERATION
    code = "GENERATION_FAILED"

    def __init__(
        self,
        message: str,
        *,
        dialect: str | None = None,
        type_name: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(
            message,
            context=ErrorContext(dialect=dialect, type_name=type_name),
            cause=cause,
        )


# =============================================================================
# STORAGE ERRORS
# =============================================================================


class DestinationConflictError(DdlError):
    """The output path is occupied by something that is not a directory."""

    default_category = ErrorCategory.STORAGE
    code = "DESTINATION_CONFLICT"

    def __init__(self, path: str | Path):
        super().__init__(
            f"A file with the name of the output directory already exists but is not a directory: {path}",
            context=ErrorContext(path=str(path)),
        )


class DdlIOError(DdlError):
    """Scratch-file creation, read, copy or delete failed."""

    default_category = ErrorCategory.STORAGE
    code = "IO_ERROR"

    def __init__(
        self,
        message: str,
        *,
        path: str | Path | None = None,
        dialect: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(
            message,
            context=ErrorContext(dialect=dialect, path=str(path) if path is not None else None),
            cause=cause,
        )


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "DdlError",
    "ConfigurationError",
    "UnknownDialectError",
    "ScanConfigurationError",
    "GenerationError",
    "DestinationConflictError",
    "DdlIOError",
]
