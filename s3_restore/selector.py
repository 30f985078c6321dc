"""Pick, per key, the version that was current at a point in time."""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Iterator, Union

from s3_restore.errors import InvalidTimestamp


@dataclass(frozen=True)
class VersionRecord:
    key: str
    version_id: str
    last_modified: datetime

    @classmethod
    def from_listing(cls, version):
        """Build a record from one entry of a ListObjectVersions ``Versions`` list."""
        return cls(
            key=version['Key'],
            version_id=version['VersionId'],
            last_modified=version['LastModified'],
        )


@dataclass(frozen=True)
class RestoreTarget:
    key: str
    version_id: str


def parse_timestamp(value: Union[int, str]) -> datetime:
    """Convert UNIX epoch seconds into an aware UTC datetime.

    Accepts an int or a string of ASCII decimal digits with an optional
    sign. Anything else (floats, whitespace, underscores), or a value
    outside the range datetime can represent, raises InvalidTimestamp.
    """
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise InvalidTimestamp(value)
    if isinstance(value, str) and not re.fullmatch(r'[+-]?[0-9]+', value):
        raise InvalidTimestamp(value)
    seconds = int(value)
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise InvalidTimestamp(value) from None


def select_restore_targets(
    restore_time: datetime, records: Iterable[VersionRecord]
) -> Iterator[RestoreTarget]:
    """Yield the version of each key that was current just before restore_time.

    S3 lists the versions of a key newest first, so the first version of a
    key modified strictly before restore_time is the one to restore; every
    later record for that key is older and is skipped. Keys whose versions
    all date from restore_time or after are never yielded.
    """
    seen = set()
    for record in records:
        if record.key in seen:
            continue
        if record.last_modified < restore_time:
            seen.add(record.key)
            yield RestoreTarget(record.key, record.version_id)
