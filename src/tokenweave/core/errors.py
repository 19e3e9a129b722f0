"""
Error types for tokenweave declaration loading, validation, resolution and export.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class TokenweaveError(Exception):
    """Base exception for all tokenweave errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        location = self.context.format() if self.context else ""
        if location:
            return f"{location}: {self.message}"
        return self.message


@dataclass
class ErrorContext:
    """
    Context information for an error.

    Attributes:
        file: Declaration file the offending record came from
        token: Token name involved
        theme: Theme being resolved or declared
    """

    file: Path | None = None
    token: str | None = None
    theme: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "tokens.yaml [theme=dark] token colorPrimary"
        """
        parts: list[str] = []
        if self.file:
            parts.append(str(self.file))
        if self.theme is not None:
            parts.append(f"[theme={self.theme or 'default'}]")
        if self.token:
            parts.append(f"token {self.token}")
        return " ".join(parts)


# =============================================================================
# Store validation (ingestion-time, fatal)
# =============================================================================


class StoreValidationError(TokenweaveError):
    """
    Raised when a declaration cannot be added to the token store.

    Examples:
    - Duplicate token names
    - Overrides for undeclared or global tokens
    - Literals that do not fit the token category
    """

    pass


class DuplicateNameError(StoreValidationError):
    """Raised when a token name is declared twice."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Token '{name}' is already declared", ErrorContext(token=name))


class UnknownTokenError(StoreValidationError):
    """Raised when an override targets a token that was never declared."""

    def __init__(self, name: str, theme: str | None = None):
        self.name = name
        super().__init__(
            f"Cannot override undeclared token '{name}'",
            ErrorContext(token=name, theme=theme),
        )


class InvalidOverrideTargetError(StoreValidationError):
    """Raised when a theme tries to override a global-layer token."""

    def __init__(self, name: str, theme: str):
        self.name = name
        self.theme = theme
        super().__init__(
            f"Global token '{name}' cannot be themed; "
            "override a semantic or component token that aliases it instead",
            ErrorContext(token=name, theme=theme),
        )


class DuplicateOverrideError(StoreValidationError):
    """Raised when one theme overrides the same token twice."""

    def __init__(self, name: str, theme: str):
        self.name = name
        self.theme = theme
        super().__init__(
            f"Theme '{theme}' already overrides '{name}'",
            ErrorContext(token=name, theme=theme),
        )


class ReservedThemeError(StoreValidationError):
    """Raised when overrides are declared for the base theme name."""

    def __init__(self, theme: str, name: str | None = None):
        self.theme = theme
        super().__init__(
            f"Theme name '{theme}' is reserved for the base theme and cannot carry overrides",
            ErrorContext(token=name),
        )


class LiteralTypeError(StoreValidationError):
    """Raised when a literal value does not fit its token category."""

    def __init__(self, message: str, name: str | None = None, theme: str | None = None):
        self.name = name
        super().__init__(message, ErrorContext(token=name, theme=theme))


# =============================================================================
# Resolution (per theme, fatal for that theme only)
# =============================================================================


class ResolutionError(TokenweaveError):
    """
    Raised when a theme cannot be resolved to concrete literals.

    A resolution error only invalidates the theme being resolved; other
    themes can still resolve independently.
    """

    def __init__(self, message: str, theme: str, token: str | None = None):
        self.theme = theme
        super().__init__(message, ErrorContext(token=token, theme=theme))


class CyclicReferenceError(ResolutionError):
    """Raised when a reference chain loops back onto itself."""

    def __init__(self, cycle: list[str], theme: str):
        self.cycle = list(cycle)
        super().__init__(
            f"Circular token reference detected: {' -> '.join(self.cycle)}",
            theme=theme,
            token=self.cycle[0] if self.cycle else None,
        )


class UnresolvedReferenceError(ResolutionError):
    """Raised when a token references a name that was never declared."""

    def __init__(self, missing: str, referrer: str, theme: str):
        self.missing = missing
        self.referrer = referrer
        super().__init__(
            f"Token '{referrer}' references undeclared token '{missing}'",
            theme=theme,
            token=referrer,
        )


class LayerViolationError(ResolutionError):
    """Raised when a token references a token in a higher layer."""

    def __init__(
        self,
        token: str,
        token_layer: str,
        target: str,
        target_layer: str,
        theme: str,
    ):
        self.token = token
        self.target = target
        self.token_layer = token_layer
        self.target_layer = target_layer
        super().__init__(
            f"{token_layer} token '{token}' cannot reference "
            f"{target_layer} token '{target}'",
            theme=theme,
            token=token,
        )


class UnknownThemeError(ResolutionError):
    """Raised when resolving a theme that has no overrides declared."""

    def __init__(self, theme: str, available: list[str]):
        self.available = list(available)
        super().__init__(
            f"Unknown theme '{theme}'. Available: {', '.join(self.available)}",
            theme=theme,
        )


# =============================================================================
# Export, loading and configuration
# =============================================================================


class SerializationError(TokenweaveError):
    """
    Raised when a resolved literal cannot be written in a target syntax.

    Fatal for the artifact being produced only.
    """

    def __init__(self, message: str, token: str | None = None, fmt: str | None = None):
        self.token = token
        self.fmt = fmt
        prefix = f"[{fmt}] " if fmt else ""
        super().__init__(f"{prefix}{message}", ErrorContext(token=token))


class DeclarationError(TokenweaveError):
    """Raised when a declaration document cannot be read or parsed."""

    def __init__(self, message: str, file: Path | None = None):
        self.file = file
        super().__init__(message, ErrorContext(file=file) if file else None)


class ManifestError(TokenweaveError):
    """Raised when tokenweave.toml is missing required data or is malformed."""

    pass
