"""Custom exception types for catalog loading, configuration and session flow."""


class CatalogError(ValueError):
    """Raised when static catalog data is malformed. Fatal at startup."""


class ConfigurationError(ValueError):
    """Raised when session configuration data is invalid."""


class ScriptImportError(ValueError):
    """Raised by a strict script import when entries were rejected."""

    def __init__(self, message: str, rejected: tuple = ()) -> None:
        super().__init__(message)
        self.rejected = rejected


class InvalidMutationError(RuntimeError):
    """Raised when a mutation name is not part of the session protocol."""
