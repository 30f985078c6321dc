"""Apply a point-in-time restore to a bucket."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from s3_restore.errors import StorageCopyError
from s3_restore.selector import RestoreTarget, select_restore_targets
from s3_restore.storage import copy_version, list_versions

logger = logging.getLogger(__name__)


@dataclass
class RestoreReport:
    bucket: str
    prefix: str = ''
    restored: List[Tuple[RestoreTarget, Optional[str]]] = field(default_factory=list)
    failed: List[Tuple[RestoreTarget, StorageCopyError]] = field(default_factory=list)
    cancelled: bool = False
    # Key of the first listed version left unread when the run was cancelled.
    stopped_at_key: Optional[str] = None

    @property
    def ok(self):
        return not self.failed and not self.cancelled

    def summary(self):
        text = f"{len(self.restored)} restored, {len(self.failed)} failed"
        if self.cancelled:
            text += ", cancelled"
        return text


def restore(client, bucket, restore_time, prefix='', continue_on_error=False,
            cancel_event=None):
    """Restore every key under prefix to the version current at restore_time.

    Targets are copied one at a time in the order they are selected. A
    listing failure always propagates. A copy failure propagates too,
    unless continue_on_error is set, in which case it is recorded in the
    report and the run goes on. Keys restored before a failure stay
    restored.

    cancel_event is an optional threading.Event, checked for every listed
    version. Once it is set no further copies are started and no further
    pages are requested.
    """
    report = RestoreReport(bucket=bucket, prefix=prefix)
    logger.info("Restoring s3://%s/%s to %s", bucket, prefix, restore_time.isoformat())

    records = list_versions(client, bucket, prefix)
    if cancel_event is not None:
        records = _until_cancelled(records, cancel_event, report)
    for target in select_restore_targets(restore_time, records):
        logger.debug("Restoring %s from version %s", target.key, target.version_id)
        try:
            new_version = copy_version(client, bucket, target)
        except StorageCopyError as e:
            if not continue_on_error:
                raise
            logger.error("%s", e)
            report.failed.append((target, e))
            continue

        logger.debug("Copied %s version %s as %s", target.key, target.version_id,
                     new_version)
        report.restored.append((target, new_version))

    logger.info("Done: %s", report.summary())
    return report


def _until_cancelled(records, cancel_event, report):
    for record in records:
        if cancel_event.is_set():
            logger.warning("Restore cancelled at %s", record.key)
            report.cancelled = True
            report.stopped_at_key = record.key
            return
        yield record
