"""
Age-based selection of file records. Nothing here does any I/O.
"""

from datetime import datetime, timedelta, timezone
from typing import Iterable, Union

from .models import FileRecord

MS_PER_SECOND = 1000
MS_PER_DAY = 24 * 60 * 60 * MS_PER_SECOND

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_epoch_ms(now: Union[datetime, int, float]) -> int:
    """
    Convert a point in time to unix milliseconds. Naive datetimes are taken
    to be UTC.
    """
    if isinstance(now, datetime):
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return (now - EPOCH) // timedelta(milliseconds=1)

    return int(now)


def is_old(record: FileRecord, threshold_days: int, now_ms: int) -> bool:
    # Strictly older: a file exactly threshold_days old is kept.
    return now_ms - record.created_ms > threshold_days * MS_PER_DAY


def filter_old(
    records: Iterable[FileRecord],
    threshold_days: int,
    now: Union[datetime, int, float],
) -> list[FileRecord]:
    """
    Return the records created more than `threshold_days` days before `now`,
    in their original order. The input is left untouched.
    """
    now_ms = to_epoch_ms(now)
    return [record for record in records if is_old(record, threshold_days, now_ms)]


def select_file_ids(records: Iterable[FileRecord]) -> list[str]:
    """
    Identifiers of the given records, in order, without duplicates.
    """
    return list(dict.fromkeys(record.id for record in records))
