"""boto3 adapters for listing and copying object versions."""

import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from s3_restore.errors import ClientSetupError, StorageCopyError, StorageListError
from s3_restore.selector import VersionRecord

logger = logging.getLogger(__name__)

DEFAULT_REGION = 'eu-west-1'
DEFAULT_MAX_ATTEMPTS = 5


def make_client(region=None, profile=None, endpoint_url=None,
                max_attempts=DEFAULT_MAX_ATTEMPTS):
    """Create the S3 client shared by the lister and the restorer.

    Credentials and region come from the usual boto3 discovery chain.
    Throttling and connection errors are retried by botocore. An unknown
    profile or invalid option raises ClientSetupError.
    """
    try:
        session = boto3.session.Session(profile_name=profile, region_name=region)
        region_name = session.region_name or DEFAULT_REGION
        config = Config(retries={'mode': 'standard', 'max_attempts': max_attempts})
        logger.debug("Creating s3 client in %s (endpoint %s)", region_name, endpoint_url)
        return session.client('s3', region_name=region_name,
                              endpoint_url=endpoint_url, config=config)
    except (BotoCoreError, ValueError) as e:
        raise ClientSetupError(e) from e


def _error_code(exc):
    if isinstance(exc, ClientError):
        return exc.response.get('Error', {}).get('Code')
    return None


def list_versions(client, bucket, prefix=''):
    """Yield every version under prefix, in the order S3 returns them.

    Pages are fetched lazily. Delete markers are listed separately by S3
    and are not yielded.
    """
    paginator = client.get_paginator('list_object_versions')
    pages = paginator.paginate(Bucket=bucket, Prefix=prefix)
    try:
        for page_number, page in enumerate(pages, start=1):
            versions = page.get('Versions', [])
            logger.debug("Page %d: %d versions", page_number, len(versions))
            for version in versions:
                yield VersionRecord.from_listing(version)
    except (ClientError, BotoCoreError) as e:
        raise StorageListError(bucket, prefix, e, code=_error_code(e)) from e


def copy_version(client, bucket, target):
    """Copy target's version over its key, making it the current version.

    Returns the VersionId S3 assigned to the new copy. Sources over the
    5 GB CopyObject limit go through the managed multipart copy, which does
    not report a VersionId; None is returned for those.
    """
    copy_source = {
        'Bucket': bucket,
        'Key': target.key,
        'VersionId': target.version_id,
    }
    try:
        return _copy(client, bucket, target.key, copy_source)
    except (ClientError, BotoCoreError) as e:
        raise StorageCopyError(bucket, target.key, target.version_id, e,
                               code=_error_code(e)) from e


def _copy(client, bucket, key, copy_source):
    try:
        response = client.copy_object(Bucket=bucket, Key=key, CopySource=copy_source)
    except ClientError as e:
        # CopyObject rejects sources larger than 5 GB.
        if _error_code(e) != 'InvalidRequest':
            raise
        logger.debug("Copying %s with multipart copy: %s", key, e)
        client.copy(copy_source, bucket, key)
        return None
    return response.get('VersionId')
