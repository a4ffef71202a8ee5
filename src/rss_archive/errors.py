"""
Exception hierarchy for RSS Archive.

Date and per-URL fetch errors are recovered where they occur; configuration,
input and persistence errors propagate to the caller.
"""


class RssArchiveError(Exception):
    """Base class for all archive errors."""


class DateParseError(RssArchiveError, ValueError):
    """A publication date could not be normalized."""


class FormatError(DateParseError):
    """The date string or its timezone designator is malformed."""


class UnknownTimezoneError(DateParseError):
    """The timezone abbreviation is not in the configured table."""

    def __init__(self, abbreviation: str):
        self.abbreviation = abbreviation
        super().__init__(f"Timezone abbreviation {abbreviation!r} is not registered")


class ConfigError(RssArchiveError):
    """Channel configuration could not be loaded."""


class ConfigLoadError(ConfigError):
    """A configuration fragment is missing, unreadable or invalid."""


class UnsortedInputError(ConfigError):
    """Channel groups are not in canonical order."""


class NilInputError(RssArchiveError, ValueError):
    """A pipeline stage received no input at all."""


class FetchError(RssArchiveError):
    """A feed document could not be obtained."""


class FeedDecodeError(FetchError):
    """A fetched document is not a readable RSS feed."""


class PersistenceError(RssArchiveError):
    """A day record could not be loaded or saved."""

    def __init__(self, message: str, path=None):
        self.path = path
        super().__init__(message)


class RecordReadError(PersistenceError):
    """An existing day record could not be read."""


class RecordDecodeError(PersistenceError):
    """An existing day record is not valid."""


class RecordWriteError(PersistenceError):
    """A day record could not be written."""


class SetupError(RssArchiveError):
    """The archive directory layout is unusable."""
