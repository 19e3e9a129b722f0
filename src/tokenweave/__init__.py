"""
tokenweave - layered design tokens.

Resolves token declarations across global, semantic and component layers,
applies per-theme overrides, and exports the resolved values as CSS, SCSS,
JavaScript or JSON.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.audit import AuditReport, audit
from .core.errors import ResolutionError, SerializationError, StoreValidationError, TokenweaveError
from .core.store import TokenStore
from .core.themes import ThemeEngine
from .formats import OutputFormat, serialize

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "TokenStore",
    "ThemeEngine",
    "OutputFormat",
    "serialize",
    "audit",
    "AuditReport",
    "TokenweaveError",
    "StoreValidationError",
    "ResolutionError",
    "SerializationError",
]
