"""
The whole cleanup: list every file, keep the old ones, delete them.
"""

from datetime import datetime, timezone
from typing import Optional

from loguru import logger

from .client import SlackFilesClient
from .deletion import DeletionReport, delete_all
from .filtering import filter_old, select_file_ids
from .listing import list_all_files
from .settings import ClientSettings, CleanerConfig, load_settings


async def run_cleanup(
    config: CleanerConfig,
    settings: Optional[ClientSettings] = None,
    now: Optional[datetime] = None,
    client: Optional[SlackFilesClient] = None,
) -> DeletionReport:
    """
    Run the pipeline once. Each stage consumes the full output of the
    previous one; any CleanerError propagates to the caller untouched.

    Parameters
    ----------
    config : CleanerConfig
        Token and age threshold.
    settings : ClientSettings, optional
        Endpoints, timeouts and concurrency. Defaults to load_settings().
    now : datetime, optional
        Reference time for the age filter. Defaults to the wall-clock time
        at which filtering starts.
    client : SlackFilesClient, optional
        Client to use instead of building one from config and settings.
    """
    settings = settings or load_settings()
    client = client or SlackFilesClient(token=config.token, settings=settings)

    async with client:
        files = await list_all_files(client, concurrency=settings.list_concurrency)

        if now is None:
            now = datetime.now(timezone.utc)

        old_files = filter_old(files, config.threshold_days, now)
        file_ids = select_file_ids(old_files)

        logger.info(
            "{} of {} files are older than {} days",
            len(file_ids),
            len(files),
            config.threshold_days,
        )
        print(f"Found {len(file_ids)} old files")

        report = await delete_all(
            client, file_ids, concurrency_limit=settings.delete_concurrency
        )

    print("All old files successfully deleted")

    return report
