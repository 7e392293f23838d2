"""
Asynchronous client for the remote file listing and deletion endpoints.
"""

import asyncio
from typing import Any, Callable, Optional

import aiohttp
from loguru import logger
from pydantic import ValidationError

from .exceptions import (
    CleanerHTTPError,
    DeletionError,
    ListingFetchError,
    MalformedRecordError,
)
from .models import FileDeleteResponse, FilesListResponse
from .settings import ClientSettings, load_settings


class SlackFilesClient:
    """
    Thin wrapper around an aiohttp session that knows how to list one page
    of files and delete a single file. The token is sent as a query
    parameter, as the API expects, and never appears in logs or errors.

    Use as an async context manager; a session is created on entry unless
    one was passed in, and only a session created here is closed on exit.
    """

    def __init__(
        self,
        token: str,
        settings: Optional[ClientSettings] = None,
        http_session: Optional[aiohttp.ClientSession] = None,
    ):
        self._token = token
        self.settings = settings or load_settings()
        self._session = http_session
        self._session_created = False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} list_url={self.settings.list_url}>"

    async def __aenter__(self) -> "SlackFilesClient":
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._session_created = True
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._session_created and self._session is not None:
            await self._session.close()
            self._session = None
            self._session_created = False

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("SlackFilesClient must be used as an async context manager")
        return self._session

    def _describe_client_error(self, error: aiohttp.ClientError) -> str:
        """
        Summarize a transport error without the request URL, whose query
        string carries the token.
        """
        if isinstance(error, aiohttp.ClientResponseError):
            text = f"{type(error).__name__} (HTTP {error.status})"
            if error.message:
                text += f": {error.message}"
        else:
            text = f"{type(error).__name__}: {error}"

        return text.replace(self._token, "***")

    async def _request(
        self,
        send: Callable,
        url: str,
        params: dict[str, str],
        error_cls: type[CleanerHTTPError],
        description: str,
        **error_kwargs,
    ) -> dict[str, Any]:
        """
        Issue a request and return the decoded JSON envelope.

        Raises
        ------
        error_cls
            On a transport error, timeout, non-2xx status, undecodable body,
            or an envelope with ok=false or an error field.
        """
        query = dict(params, token=self._token)
        timeout = aiohttp.ClientTimeout(total=self.settings.request_timeout)

        try:
            async with send(url, params=query, timeout=timeout) as response:
                status = response.status
                try:
                    body = await response.json(content_type=None)
                except ValueError as e:
                    raise error_cls(
                        f"Could not decode response to {description} (HTTP {status})",
                        url=url,
                        status_code=status,
                        **error_kwargs,
                    ) from e
        except aiohttp.ClientError as e:
            raise error_cls(
                f"Request to {description} failed: {self._describe_client_error(e)}",
                url=url,
                **error_kwargs,
            ) from e
        except asyncio.TimeoutError as e:
            raise error_cls(
                f"Request to {description} timed out after "
                f"{self.settings.request_timeout} s",
                url=url,
                **error_kwargs,
            ) from e

        error = body.get("error") if isinstance(body, dict) else None

        if not 200 <= status < 300:
            raise error_cls(
                f"Request to {description} returned HTTP {status}"
                + (f" ({error})" if error else ""),
                url=url,
                status_code=status,
                error=error,
                **error_kwargs,
            )

        if not isinstance(body, dict):
            raise error_cls(
                f"Response to {description} is not a JSON object",
                url=url,
                status_code=status,
                **error_kwargs,
            )

        if body.get("ok") is False or error:
            raise error_cls(
                f"Service rejected {description}: {error or 'unknown error'}",
                url=url,
                status_code=status,
                error=error,
                **error_kwargs,
            )

        return body

    async def fetch_page(self, page: int) -> FilesListResponse:
        """
        Fetch a single page of the file listing.

        Raises
        ------
        ListingFetchError
            If the page could not be fetched.
        MalformedRecordError
            If the page was fetched but does not match the expected schema.
        """
        logger.debug("Fetching listing page {}", page)

        body = await self._request(
            self.session.get,
            self.settings.list_url,
            params={"page": str(page)},
            error_cls=ListingFetchError,
            description=f"list files page {page}",
            page=page,
        )

        try:
            listing = FilesListResponse.model_validate(body)
        except ValidationError as e:
            raise MalformedRecordError(
                f"Listing page {page} has malformed records: {e}", page=page
            ) from e

        logger.debug(
            "Page {} returned {} files (page {} of {})",
            page,
            len(listing.files),
            listing.paging.page,
            listing.paging.pages,
        )

        return listing

    async def delete_file(self, file_id: str) -> FileDeleteResponse:
        """
        Delete a single file.

        Raises
        ------
        DeletionError
            If the service did not confirm the deletion.
        """
        logger.debug("Deleting file {}", file_id)

        body = await self._request(
            self.session.post,
            self.settings.delete_url,
            params={"file": file_id},
            error_cls=DeletionError,
            description=f"delete file {file_id}",
            file_id=file_id,
        )

        try:
            return FileDeleteResponse.model_validate(body)
        except ValidationError as e:
            raise DeletionError(
                f"Unexpected response to delete file {file_id}: {e}",
                url=self.settings.delete_url,
                file_id=file_id,
            ) from e
