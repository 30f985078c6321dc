"""Errors raised while restoring a bucket."""


class RestoreError(Exception):
    pass


class ArgumentError(RestoreError):
    """Bad command line input."""


class InvalidTimestamp(ArgumentError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"invalid timestamp {value!r}: expected integer UNIX seconds")


class CommandNotImplemented(ArgumentError):
    def __init__(self, command):
        self.command = command
        super().__init__(f"{command!r} is not implemented")


class StorageError(RestoreError):
    """A call to the storage API failed.

    The botocore exception is kept as ``__cause__``; ``code`` is the AWS
    error code when the service returned one.
    """

    def __init__(self, message, code=None):
        self.code = code
        super().__init__(message)


class StorageListError(StorageError):
    def __init__(self, bucket, prefix, reason, code=None):
        self.bucket = bucket
        self.prefix = prefix
        super().__init__(
            f"Failed to list versions in s3://{bucket}/{prefix}: {reason}", code=code
        )


class StorageCopyError(StorageError):
    def __init__(self, bucket, key, version_id, reason, code=None):
        self.bucket = bucket
        self.key = key
        self.version_id = version_id
        super().__init__(
            f"Failed to restore s3://{bucket}/{key} to version {version_id}: {reason}",
            code=code,
        )


class ClientSetupError(ArgumentError):
    """The S3 client could not be built from the given profile and options."""

    def __init__(self, reason):
        super().__init__(f"cannot create S3 client: {reason}")
