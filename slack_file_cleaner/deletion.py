"""
Deletion of the selected files with a bounded number of requests in flight.

A fixed pool of workers pulls identifiers from a shared queue, so a new
delete starts as soon as any previous one finishes. After the first failure
no new deletes are started; the ones already in flight are allowed to finish
and the first failure is then raised along with a report of what happened.
"""

import asyncio
from dataclasses import dataclass, field
from time import perf_counter
from typing import Iterable, Optional

from loguru import logger

from .client import SlackFilesClient
from .exceptions import CleanerError, DeletionError
from .settings import DEFAULT_DELETE_CONCURRENCY


@dataclass
class DeletionReport:
    requested: int = 0
    "Number of files targeted for deletion."

    deleted: list[str] = field(default_factory=list)
    "Identifiers the service confirmed as deleted, in completion order."

    failed: dict[str, str] = field(default_factory=dict)
    "Identifiers whose deletion failed, mapped to the failure message."

    @property
    def skipped(self) -> int:
        """
        Files never attempted because an earlier deletion failed.
        """
        return self.requested - len(self.deleted) - len(self.failed)

    @property
    def success(self) -> bool:
        return not self.failed and len(self.deleted) == self.requested


async def delete_all(
    client: SlackFilesClient,
    file_ids: Iterable[str],
    concurrency_limit: int = DEFAULT_DELETE_CONCURRENCY,
) -> DeletionReport:
    """
    Delete every file in `file_ids`, with at most `concurrency_limit`
    requests outstanding at any moment.

    Raises
    ------
    ValueError
        If concurrency_limit is smaller than one.
    DeletionError
        If any deletion failed. The error carries the DeletionReport and is
        chained to the first underlying failure.
    """
    if concurrency_limit < 1:
        raise ValueError("concurrency_limit must be at least 1")

    file_ids = list(file_ids)
    report = DeletionReport(requested=len(file_ids))

    queue: asyncio.Queue[str] = asyncio.Queue()
    for file_id in file_ids:
        queue.put_nowait(file_id)

    first_error: Optional[CleanerError] = None

    async def worker() -> None:
        nonlocal first_error

        while first_error is None:
            try:
                file_id = queue.get_nowait()
            except asyncio.QueueEmpty:
                return

            try:
                await client.delete_file(file_id)
            except CleanerError as e:
                logger.error("Failed to delete {}: {}", file_id, e)
                report.failed[file_id] = str(e)
                if first_error is None:
                    first_error = e
                return

            report.deleted.append(file_id)

    start = perf_counter()
    workers = min(concurrency_limit, len(file_ids))

    logger.info(
        "Deleting {} files with {} concurrent request(s)", len(file_ids), workers
    )

    async with asyncio.TaskGroup() as group:
        for _ in range(workers):
            group.create_task(worker())

    logger.info(
        "Deleted {} of {} files in {:.2f} s ({} failed, {} skipped)",
        len(report.deleted),
        report.requested,
        perf_counter() - start,
        len(report.failed),
        report.skipped,
    )

    if first_error is not None:
        raise DeletionError(
            f"Deletion stopped after an error; {len(report.deleted)} of "
            f"{report.requested} files deleted: {first_error}",
            file_id=getattr(first_error, "file_id", None),
            report=report,
            url=getattr(first_error, "url", None),
            status_code=getattr(first_error, "status_code", None),
            error=getattr(first_error, "error", None),
        ) from first_error

    return report
