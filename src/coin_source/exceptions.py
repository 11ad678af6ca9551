"""
Coin source exception hierarchy.

The symbol normalizer is total and never raises; these cover settings
loading and opt-in strict validation of a coin source record.
"""


class CoinSourceError(Exception):
    """Base exception for all coin source errors."""


class ConfigurationError(CoinSourceError):
    """Settings or a coin source record could not be loaded or validated."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class CoinSourceValidationError(CoinSourceError):
    """Strict validation found problems a lenient check would only warn about."""

    def __init__(self, message: str, warnings: list | None = None):
        super().__init__(message)
        self.warnings = warnings or []
