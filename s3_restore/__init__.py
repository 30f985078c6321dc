"""Restore a versioned S3 bucket to a point in time."""

from s3_restore.errors import (
    ArgumentError,
    ClientSetupError,
    CommandNotImplemented,
    InvalidTimestamp,
    RestoreError,
    StorageCopyError,
    StorageError,
    StorageListError,
)
from s3_restore.restorer import RestoreReport, restore
from s3_restore.selector import (
    RestoreTarget,
    VersionRecord,
    parse_timestamp,
    select_restore_targets,
)

__version__ = "0.1.0"

__all__ = [
    "ArgumentError",
    "ClientSetupError",
    "CommandNotImplemented",
    "InvalidTimestamp",
    "RestoreError",
    "RestoreReport",
    "RestoreTarget",
    "StorageCopyError",
    "StorageError",
    "StorageListError",
    "VersionRecord",
    "parse_timestamp",
    "restore",
    "select_restore_targets",
]
