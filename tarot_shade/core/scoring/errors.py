"""Error taxonomy for the shade scoring engine.

Every public function either returns a complete result or raises one of
these immediately. Messages are written to be shown to users as-is.
"""


class ShadeEngineError(Exception):
    """Base class for scoring engine failures."""


class ValidationError(ShadeEngineError, ValueError):
    """Raised when input scores, readings, or dates are malformed or out of range."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or [message]


class ConfigurationError(ShadeEngineError, LookupError):
    """Raised when a lookup against a static table fails (spread type, category)."""
