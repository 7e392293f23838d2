"""
End-to-end tests of the cleanup pipeline against a fake service.
"""

from datetime import datetime, timezone

import pytest

from slack_file_cleaner.cleanup import run_cleanup
from slack_file_cleaner.exceptions import DeletionError, ListingFetchError
from slack_file_cleaner.settings import CleanerConfig

NOW = datetime(2024, 1, 31, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_only_old_file_is_deleted(
    capsys, fake_client_factory, make_page, seconds_for, client_settings
):
    client = fake_client_factory(
        pages={
            0: make_page(
                [
                    {"id": "F1", "created": seconds_for(2023, 1, 1), "name": "a.png"},
                    {"id": "F2", "created": seconds_for(2024, 1, 30), "name": "b.png"},
                ]
            )
        }
    )
    config = CleanerConfig(token="abc", threshold_days=30)

    report = await run_cleanup(config, client_settings, now=NOW, client=client)

    assert client.delete_calls == ["F1"]
    assert report.deleted == ["F1"]
    assert client.entered and client.exited

    captured = capsys.readouterr()
    assert captured.out == "Found 1 old files\nAll old files successfully deleted\n"


@pytest.mark.asyncio
async def test_listing_failure_deletes_nothing(
    capsys, fake_client_factory, client_settings
):
    client = fake_client_factory(
        pages={0: ListingFetchError("Request to list files page 0 failed: boom", page=0)}
    )
    config = CleanerConfig(token="abc", threshold_days=30)

    with pytest.raises(ListingFetchError, match="boom"):
        await run_cleanup(config, client_settings, now=NOW, client=client)

    assert client.delete_calls == []
    assert client.exited
    assert "Found" not in capsys.readouterr().out


@pytest.mark.asyncio
async def test_duplicate_records_are_deleted_once(
    fake_client_factory, make_page, seconds_for, client_settings
):
    old = seconds_for(2023, 6, 1)
    client = fake_client_factory(
        pages={
            0: make_page([{"id": "F1", "created": old}], page=1, pages=2),
            2: make_page([{"id": "F1", "created": old}], page=2, pages=2),
        }
    )
    config = CleanerConfig(token="abc", threshold_days=30)

    await run_cleanup(config, client_settings, now=NOW, client=client)

    assert client.delete_calls == ["F1"]


@pytest.mark.asyncio
async def test_deletion_failure_is_raised_without_success_message(
    capsys, fake_client_factory, make_page, seconds_for, client_settings
):
    old = seconds_for(2023, 1, 1)
    client = fake_client_factory(
        pages={0: make_page([{"id": "F1", "created": old}])},
        delete_errors={"F1"},
    )
    config = CleanerConfig(token="abc", threshold_days=30)

    with pytest.raises(DeletionError):
        await run_cleanup(config, client_settings, now=NOW, client=client)

    out = capsys.readouterr().out
    assert "Found 1 old files" in out
    assert "successfully deleted" not in out
