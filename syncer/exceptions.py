"""Custom exception classes for the sync engine."""


class SyncError(Exception):
    """
    Base exception class for all sync-related errors.
    """
    pass


class ConfigurationError(SyncError):
    """
    Raised when required configuration is missing or invalid, including an
    empty roster or a node absent from the roster in strict mode.
    """
    pass


class RosterUnavailableError(SyncError):
    """
    Raised when the cluster roster cannot be retrieved or parsed.
    """
    pass


class BucketNotFoundError(SyncError):
    """
    Raised when the configured S3 bucket is not visible to the credentials.
    """
    pass


class ObjectStoreError(SyncError):
    """
    Raised when an S3 call fails for a reason other than a missing object.
    """
    pass


class SourceDirectoryError(SyncError):
    """
    Raised when the sync root directory cannot be read.
    """
    pass


class UnsupportedDirectionError(SyncError):
    """
    Raised when a recognized but unimplemented sync direction is requested.
    """
    pass


class LogSetupError(SyncError):
    """
    Raised when the persistent log file cannot be opened.
    """
    pass
