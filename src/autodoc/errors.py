"""Exception types raised by the extraction pipeline."""


class AutodocError(Exception):
    """Base class for errors that abort a run."""


class SourceParseError(AutodocError):
    """A source file could not be turned into a declaration tree."""

    def __init__(self, origin: str, reason: str):
        super().__init__(f"{origin}: {reason}")
        self.origin = origin
        self.reason = reason


class ConfigError(AutodocError):
    """A settings file or flag value is malformed."""
