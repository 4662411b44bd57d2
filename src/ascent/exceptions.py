"""Custom exceptions for level generation and persistence."""


class LevelError(Exception):
    """Base exception for level errors."""

    pass


class LevelNotFoundError(LevelError, FileNotFoundError):
    """Raised when a level file is missing or unreadable."""

    pass


class LevelParseError(LevelError, ValueError):
    """Raised when a level file has malformed content."""

    pass


class LevelWriteError(LevelError, OSError):
    """Raised when a level file cannot be written."""

    pass


class InvalidDimensionsError(LevelError):
    """Raised when grid dimensions are zero, too large, or inconsistent.

    Not a ValueError, so pydantic validators re-raise it unchanged.
    """

    pass


class UnknownThemeError(LevelError, KeyError):
    """Raised when a theme name is not registered."""

    pass
