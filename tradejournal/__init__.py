"""Trade Journal - session-based stake and risk tracking for binary trades."""

__version__ = "0.1.0"
