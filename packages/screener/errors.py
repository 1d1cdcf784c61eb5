# packages/screener/errors.py

from typing import Optional


class ScreenerError(Exception):
    """Base class for errors raised by the screener package."""


class ValidationError(ScreenerError, ValueError):
    """
    A malformed or out-of-bounds query: unknown sort field, limit above the
    ceiling, negative pagination, unparseable numbers, unknown keys.
    Callers surface it as a 400; it is never retried.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def __str__(self):
        return self.message


class TemplateNotFoundError(ValidationError):
    def __init__(self, template_id: str):
        super().__init__(f"Unknown screener template '{template_id}'", field="template")
        self.template_id = template_id


class UniverseError(ScreenerError):
    """The universe handed to the screener violates its invariants (e.g. duplicate tickers)."""
