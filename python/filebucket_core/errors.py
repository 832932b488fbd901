"""
Exception hierarchy for the file bucket.
"""


class FileBucketError(Exception):
    """Base class for file bucket errors"""
    pass


class ValidationError(FileBucketError, ValueError):
    """Raised when an argument, checksum, name or payload is malformed"""
    pass


class ConfigurationError(ValidationError):
    """Raised when the digest algorithm setting cannot be used"""
    pass


class ImmutabilityViolation(FileBucketError, AttributeError):
    """Raised on any attempt to modify a bucket file after construction"""
    pass


class StorageError(FileBucketError):
    """Raised when stored content does not agree with its checksum"""
    pass
