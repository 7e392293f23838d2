"""
Exceptions raised by the cleaner. Everything derives from CleanerError so
that the command line can report any failure in the same way.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .deletion import DeletionReport


class CleanerError(Exception):
    pass


class MissingCredentialError(CleanerError):
    """
    No access token was supplied. Raised before any network activity.
    """

    pass


class MalformedRecordError(CleanerError):
    """
    A listing page was received but its file records or paging envelope
    did not match the expected schema.
    """

    def __init__(self, message: str, page: Optional[int] = None):
        super().__init__(message)
        self.page = page


class CleanerHTTPError(CleanerError):
    """
    A request to the remote service failed: transport error, non-2xx status,
    an undecodable body, or an error envelope.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        error: Optional[str] = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.error = error


class ListingFetchError(CleanerHTTPError):
    def __init__(self, message: str, page: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.page = page


class DeletionError(CleanerHTTPError):
    def __init__(
        self,
        message: str,
        file_id: Optional[str] = None,
        report: Optional["DeletionReport"] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.file_id = file_id
        self.report = report
