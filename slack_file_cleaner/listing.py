"""
Paginated listing of every file visible to the token.
"""

import asyncio
from time import perf_counter

from loguru import logger

from .client import SlackFilesClient
from .exceptions import CleanerError
from .models import FileRecord, FilesListResponse
from .settings import DEFAULT_LIST_CONCURRENCY

FIRST_PAGE = 0


async def list_all_files(
    client: SlackFilesClient, concurrency: int = DEFAULT_LIST_CONCURRENCY
) -> list[FileRecord]:
    """
    Fetch the first page to learn how many pages there are, then fetch the
    rest concurrently and flatten them into a single list in page order.

    The remaining pages are numbered relative to the page number the service
    echoes back for the first request, so a service that answers page=0 with
    page=1 (one-based) and one that answers with page=0 are both handled.

    Parameters
    ----------
    client : SlackFilesClient
        An open client.
    concurrency : int
        Maximum number of pages fetched at once after the first.

    Returns
    -------
    list[FileRecord]
        All records across all pages.

    Raises
    ------
    ListingFetchError
        If any page fails to fetch. Pages still in flight are cancelled and
        nothing fetched so far is returned.
    MalformedRecordError
        If any page contains records that fail validation.
    """
    start = perf_counter()

    first = await client.fetch_page(FIRST_PAGE)
    paging = first.paging
    remaining = list(range(paging.page + 1, paging.page + paging.pages))

    logger.info(
        "Listing reports {} page(s); fetching {} more", paging.pages, len(remaining)
    )

    pages: dict[int, FilesListResponse] = {}
    semaphore = asyncio.Semaphore(concurrency)

    async def fetch(page: int) -> None:
        async with semaphore:
            pages[page] = await client.fetch_page(page)

    try:
        async with asyncio.TaskGroup() as group:
            for page in remaining:
                group.create_task(fetch(page))
    except ExceptionGroup as group_error:
        first_error = next(
            (e for e in group_error.exceptions if isinstance(e, CleanerError)), None
        )
        if first_error is None:
            raise
        logger.error("Listing aborted: {}", first_error)
        raise first_error

    files = list(first.files)
    for page in remaining:
        files.extend(pages[page].files)

    logger.info(
        "Listed {} files across {} page(s) in {:.2f} s",
        len(files),
        len(remaining) + 1,
        perf_counter() - start,
    )

    return files
