"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""


class DeclarationError(ConfigurationError):
    """Raised when the organization declaration cannot be read or validated."""


class DuplicateKeyError(ConfigurationError):
    """Raised when a declaration lists the same key twice within one collection."""

    def __init__(self, kind: str, key: str, *, scope: str | None = None) -> None:
        where = f" in {scope}" if scope else ""
        super().__init__(f"Duplicate {kind} found{where}: {key}")
        self.kind = kind
        self.key = key
        self.scope = scope


class UnknownReferenceError(ConfigurationError):
    """Raised when a declaration references an entity that does not exist."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"Referenced {kind} does not exist: {name}")
        self.kind = kind
        self.name = name
