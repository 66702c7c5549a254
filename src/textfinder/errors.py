"""
Exception types raised by textfinder.

Search-time failures (unreadable files, a missing root directory) are never
raised; they are reported through the listener's error channel. The exceptions
below cover misuse of the engine API and invalid settings files.
"""


class TextFinderError(Exception):
    """Base class for all textfinder errors."""
    pass


class SearchInProgressError(TextFinderError):
    """Raised when a search is started while another one is still active."""
    pass


class EngineDisposedError(TextFinderError):
    """Raised when a disposed engine is asked to start a new search."""
    pass


class ConfigurationError(TextFinderError):
    """Raised when settings parsing or validation fails."""
    pass
