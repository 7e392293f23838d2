"""
Settings for the cleaner.

Operational knobs (endpoints, timeouts, concurrency, logging) live in
ClientSettings and can be overridden with SLACK_FILE_CLEANER_* environment
variables. The access token and the age threshold only ever come from the
command line and are carried around explicitly as a CleanerConfig.
"""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DAYS = 30
DEFAULT_LIST_CONCURRENCY = 10
DEFAULT_DELETE_CONCURRENCY = 10

SLACK_FILES_LIST_URL = "https://slack.com/api/files.list"
SLACK_FILES_DELETE_URL = "https://slack.com/api/files.delete"


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SLACK_FILE_CLEANER_")

    list_url: str = SLACK_FILES_LIST_URL
    "Endpoint used to list files, one page per request."

    delete_url: str = SLACK_FILES_DELETE_URL
    "Endpoint used to delete a single file."

    request_timeout: float = Field(default=30.0, gt=0)
    "Total timeout, in seconds, for any single HTTP request."

    list_concurrency: int = Field(default=DEFAULT_LIST_CONCURRENCY, ge=1)
    "Maximum number of listing pages fetched at once."

    delete_concurrency: int = Field(default=DEFAULT_DELETE_CONCURRENCY, ge=1)
    "Maximum number of delete requests in flight at once."

    log_level: str = "INFO"


class CleanerConfig(BaseModel):
    """
    The resolved invocation: who we are acting as, and what counts as old.
    """

    model_config = ConfigDict(frozen=True)

    token: str = Field(min_length=1, repr=False)
    threshold_days: int = Field(default=DEFAULT_DAYS, ge=0)


@lru_cache
def load_settings() -> ClientSettings:
    return ClientSettings()
