"""Core tokenweave functionality: IR, token store, resolution, themes, audit."""

from . import ir
from .audit import AuditReport, HardcodedCandidate, audit
from .errors import (
    CyclicReferenceError,
    DeclarationError,
    DuplicateNameError,
    DuplicateOverrideError,
    ErrorContext,
    InvalidOverrideTargetError,
    LayerViolationError,
    LiteralTypeError,
    ManifestError,
    ReservedThemeError,
    ResolutionError,
    SerializationError,
    StoreValidationError,
    TokenweaveError,
    UnknownThemeError,
    UnknownTokenError,
    UnresolvedReferenceError,
)
from .loader import UsageSet, load_declarations, load_usage, parse_declarations
from .resolver import ResolutionTrace, resolve_theme, resolve_token
from .store import StoreSnapshot, TokenStore
from .themes import ThemeEngine, ThemeResolution

__all__ = [
    "ir",
    # Store
    "TokenStore",
    "StoreSnapshot",
    # Resolution
    "ThemeEngine",
    "ThemeResolution",
    "ResolutionTrace",
    "resolve_theme",
    "resolve_token",
    # Audit
    "AuditReport",
    "HardcodedCandidate",
    "audit",
    # Loading
    "UsageSet",
    "load_declarations",
    "load_usage",
    "parse_declarations",
    # Errors
    "TokenweaveError",
    "ErrorContext",
    "StoreValidationError",
    "DuplicateNameError",
    "UnknownTokenError",
    "InvalidOverrideTargetError",
    "DuplicateOverrideError",
    "ReservedThemeError",
    "LiteralTypeError",
    "ResolutionError",
    "CyclicReferenceError",
    "UnresolvedReferenceError",
    "LayerViolationError",
    "UnknownThemeError",
    "SerializationError",
    "DeclarationError",
    "ManifestError",
]
