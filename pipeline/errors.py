"""
Errors raised while loading regional site data.

Each error carries the HTTP status the API reports for it, so the request
boundary can translate failures without knowing every subclass.
"""


class SiteDataError(Exception):
    """Base error for site data loading failures."""

    status_code = 500

    def __init__(self, message: str, region: str | None = None):
        super().__init__(message)
        self.message = message
        self.region = region


class SourceNotFound(SiteDataError):
    """The source file (or remote export) for a region does not exist."""

    status_code = 404


class ParseFailure(SiteDataError):
    """The source exists but could not be decoded or parsed as CSV."""

    status_code = 500


class SourceUnavailable(SiteDataError):
    """A remote source could not be reached or returned an error."""

    status_code = 502
