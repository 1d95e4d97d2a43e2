"""
Retention policy for sync backups.

Snapshots are files named after the local time they were taken,
YYYYMMDDTHHMMSS with an optional .json extension. The fixed-width
encoding makes name order and chronological order the same thing, which
the selection below relies on.

Everything here is pure: no filesystem access, no clock reads.
"""

import re
from datetime import datetime, timedelta
from numbers import Real
from typing import Iterable, List, Optional, Tuple

# Minimum number of snapshots kept per resource, whatever their age
MIN_RETAINED = 10

DEFAULT_BACKUP_DURATION_DAYS = 30

SNAPSHOT_NAME_PATTERN = re.compile(r'^\d{8}T\d{6}(\.json)?$')

SNAPSHOT_TIME_FORMAT = '%Y%m%dT%H%M%S'


def snapshot_name(moment: datetime) -> str:
    """Return the snapshot filename for a local time, e.g. 20240115T093005.json."""
    return f"{moment.strftime(SNAPSHOT_TIME_FORMAT)}.json"


def is_snapshot_name(name: str) -> bool:
    return SNAPSHOT_NAME_PATTERN.match(name) is not None


def parse_snapshot_time(name: str) -> float:
    """
    Recover the time a snapshot was taken from its filename.

    Args:
        name: Snapshot filename, with or without the .json extension

    Returns:
        Epoch seconds of the encoded local time

    Raises:
        ValueError: If the name is not a snapshot name or encodes an invalid date
    """
    if not is_snapshot_name(name):
        raise ValueError(f"Not a snapshot name: {name!r}")

    taken = datetime(
        int(name[0:4]),
        int(name[4:6]),
        int(name[6:8]),
        int(name[9:11]),
        int(name[11:13]),
        int(name[13:15])
    )
    return taken.timestamp()


def backup_max_age(days) -> timedelta:
    """
    Convert the configured retention window to a duration.

    Anything that is not a positive number (unset, a string, a bool, zero)
    falls back to DEFAULT_BACKUP_DURATION_DAYS.
    """
    if isinstance(days, bool) or not isinstance(days, Real) or not days > 0:
        days = DEFAULT_BACKUP_DURATION_DAYS
    return timedelta(days=days)


def select_for_deletion(
    snapshots: Iterable[Tuple[str, Optional[float]]],
    max_age: timedelta,
    now: float,
    min_retained: int = MIN_RETAINED
) -> List[str]:
    """
    Pick the snapshots to delete.

    A snapshot expires when it is older than max_age. Expired snapshots are
    only deleted while at least min_retained snapshots survive; when the
    floor would be breached the newest expired snapshots are spared, so the
    survivors are always the most recent ones. Sparing goes from the newest
    expired snapshot backwards; deletion always starts from the oldest.

    Args:
        snapshots: (name, ctime) pairs; ctime in epoch seconds or None to
            use the time encoded in the name. Names that are not snapshot
            names or encode an impossible date are ignored.
        max_age: Retention window
        now: Current time in epoch seconds
        min_retained: Retained count floor

    Returns:
        Names to delete, oldest first
    """
    limit = max_age.total_seconds()
    known = []
    for name, ctime in sorted(snapshots, key=lambda snapshot: snapshot[0]):
        try:
            taken = parse_snapshot_time(name)
        except ValueError:
            continue
        known.append((name, taken if ctime is None else ctime))

    expired = [name for name, ctime in known if now - ctime > limit]

    remaining = len(known) - len(expired)
    if remaining < min_retained:
        expired = expired[:max(0, len(expired) - (min_retained - remaining))]

    return expired
