"""
Shared fixtures: a fake files client that records what it was asked to do,
and helpers for building listing pages.
"""

import asyncio
import sys
from datetime import datetime, timezone

import pytest
from loguru import logger

from slack_file_cleaner.exceptions import DeletionError
from slack_file_cleaner.models import FilesListResponse
from slack_file_cleaner.settings import ClientSettings


def seconds_for(year: int, month: int, day: int) -> int:
    return int(datetime(year, month, day, tzinfo=timezone.utc).timestamp())


def make_page(files: list[dict], page: int = 1, pages: int = 1) -> dict:
    return {
        "ok": True,
        "files": files,
        "paging": {"count": 100, "total": len(files), "page": page, "pages": pages},
    }


class FakeFilesClient:
    """
    Stands in for SlackFilesClient. Pages are looked up by the requested
    page number; an Exception value is raised instead of returned.
    """

    def __init__(self, pages=None, delete_errors=None, delete_delays=None):
        self.pages = pages or {}
        self.delete_errors = set(delete_errors or [])
        self.delete_delays = delete_delays or {}

        self.page_calls: list[int] = []
        self.delete_calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.entered = False
        self.exited = False

    async def __aenter__(self):
        self.entered = True
        return self

    async def __aexit__(self, *exc_info):
        self.exited = True

    async def fetch_page(self, page: int) -> FilesListResponse:
        self.page_calls.append(page)
        await asyncio.sleep(0)

        value = self.pages[page]
        if isinstance(value, Exception):
            raise value

        return FilesListResponse.model_validate(value)

    async def delete_file(self, file_id: str) -> None:
        self.delete_calls.append(file_id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)

        try:
            await asyncio.sleep(self.delete_delays.get(file_id, 0.001))
        finally:
            self.in_flight -= 1

        if file_id in self.delete_errors:
            raise DeletionError(
                f"Service rejected delete file {file_id}: file_not_found",
                file_id=file_id,
                error="file_not_found",
            )


@pytest.fixture
def fake_client_factory():
    return FakeFilesClient


@pytest.fixture
def client_settings():
    return ClientSettings(
        list_url="https://files.test/api/files.list",
        delete_url="https://files.test/api/files.delete",
        request_timeout=5.0,
        list_concurrency=4,
        delete_concurrency=10,
        log_level="DEBUG",
    )


@pytest.fixture(name="make_page")
def make_page_fixture():
    return make_page


@pytest.fixture(name="seconds_for")
def seconds_for_fixture():
    return seconds_for


@pytest.fixture(autouse=True)
def _log_to_current_stderr():
    """
    Route loguru to whatever sys.stderr is when a message is written, so
    that capsys sees it and no sink outlives the test that created it.
    """
    logger.remove()
    logger.add(lambda message: sys.stderr.write(message), level="DEBUG")
    yield
    logger.remove()
