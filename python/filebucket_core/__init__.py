"""
Content addressed file bucket.

Files are stored and looked up by digest. The configured digest algorithm
list decides which checksum names a file and under which paths it is
saved; the first algorithm is the default.
"""
from .errors import (
    FileBucketError,
    ValidationError,
    ConfigurationError,
    ImmutabilityViolation,
    StorageError,
)
from .digest import (
    DigestAlgorithm,
    VALID_DIGEST_ALGORITHMS,
    DIGEST_LENGTHS,
    hexdigest,
    resolve_digest_algorithms,
)
from .checksums import Checksum, compute_checksum, compute_all_checksums
from .address import SEGMENT_DEPTH, path_for, relative_path
from .bucket_file import BucketFile
from .formats import (
    DEFAULT_FORMAT,
    SUPPORTED_FORMATS,
    render,
    convert_from,
)
from .backends import StorageBackend, MemoryBackend, DirectoryBackend

__version__ = "0.1.0"

__all__ = [
    'FileBucketError',
    'ValidationError',
    'ConfigurationError',
    'ImmutabilityViolation',
    'StorageError',
    'DigestAlgorithm',
    'VALID_DIGEST_ALGORITHMS',
    'DIGEST_LENGTHS',
    'hexdigest',
    'resolve_digest_algorithms',
    'Checksum',
    'compute_checksum',
    'compute_all_checksums',
    'SEGMENT_DEPTH',
    'path_for',
    'relative_path',
    'BucketFile',
    'DEFAULT_FORMAT',
    'SUPPORTED_FORMATS',
    'render',
    'convert_from',
    'StorageBackend',
    'MemoryBackend',
    'DirectoryBackend',
]
