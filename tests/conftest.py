from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from s3_restore.selector import VersionRecord


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


def listing_entry(key, version_id, last_modified, is_latest=False):
    return {
        'Key': key,
        'VersionId': version_id,
        'LastModified': last_modified,
        'IsLatest': is_latest,
        'Size': 1,
        'ETag': '"etag"',
        'StorageClass': 'STANDARD',
    }


@pytest.fixture
def example_records():
    """Key a has versions on both sides of 2021-06-01, key c only before."""
    return [
        VersionRecord('a', 'v3', utc(2021, 6, 2)),
        VersionRecord('a', 'v2', utc(2021, 5, 30)),
        VersionRecord('a', 'v1', utc(2021, 5, 1)),
        VersionRecord('c', 'v2', utc(2021, 5, 15)),
    ]


@pytest.fixture
def fake_client():
    """Mock S3 client whose listing is set with ``fake_client.pages = [...]``."""
    client = Mock()
    client.pages = []
    client.get_paginator.return_value.paginate.side_effect = (
        lambda **kwargs: iter(client.pages))
    client.copy_object.side_effect = (
        lambda **kwargs: {'VersionId': f"new-{kwargs['Key']}"})
    return client
