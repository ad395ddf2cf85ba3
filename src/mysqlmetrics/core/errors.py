"""Exceptions raised while deriving metrics from status queries."""


class ScrapeError(Exception):
    """A scraper could not complete its current cycle."""


class QueryFallbackError(ScrapeError):
    """Every query text and suffix combination failed to execute.

    The last underlying error is available as __cause__.
    """

    def __init__(self, attempts: list[str]) -> None:
        self.attempts = attempts
        super().__init__(f"all {len(attempts)} query variants failed: {attempts!r}")


class ColumnCountError(ScrapeError):
    """A result had a column count the scraper does not understand."""

    def __init__(self, query: str, count: int) -> None:
        self.query = query
        self.count = count
        super().__init__(f"invalid number of columns for {query!r}: {count}")


class LogFileSequenceError(ScrapeError, ValueError):
    """A log file name did not end in a dotted integer sequence number."""


class GTIDParseError(ValueError):
    """A transaction set string was malformed."""


class QueryExecutionError(Exception):
    """A query could not be executed by an executor adapter."""
