import os
import logging
from typing import Dict, List, Optional

from .backends import StorageBackend
from .bucket_file import BucketFile
from .checksums import compute_checksum
from .digest import DigestAlgorithm
from .errors import FileBucketError, StorageError
from . import settings

logger = logging.getLogger("filebucket.helpers")


def bucket_file_from_path(file_path: str) -> BucketFile:
    """
    Read a file into a bucket file.

    Args:
        file_path: Path to the file

    Returns:
        The bucket file holding the file's bytes
    """
    with open(file_path, 'rb') as f:
        return BucketFile(f.read())


def store_file_from_path(backend: StorageBackend, file_path: str) -> str:
    """
    Back up a file, recording where it came from.

    Args:
        backend: Backend to store into
        file_path: Path to the file to store

    Returns:
        The name of the stored bucket file
    """
    bucket_file = bucket_file_from_path(file_path)
    backend.store(bucket_file, {"path": os.path.abspath(file_path)})
    return bucket_file.name


def retrieve_file_to_path(backend: StorageBackend, name: str, output_path: str) -> None:
    """
    Retrieve a bucket file and save it to a path.

    Args:
        backend: Backend to read from
        name: Name of the bucket file, e.g. ``md5/8b3702ad...``
        output_path: Path to save the file to

    Raises:
        FileNotFoundError: If nothing is stored under name
    """
    bucket_file = backend.find(name)
    if bucket_file is None:
        raise FileNotFoundError(f"Bucket file {name} not found")

    # Ensure the directory exists
    os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)

    with open(output_path, 'wb') as f:
        f.write(bucket_file.contents)


def batch_store_files(backend: StorageBackend, file_paths: List[str]) -> Dict[str, str]:
    """
    Store multiple files and return their names.

    Args:
        backend: Backend to store into
        file_paths: List of paths to files to store

    Returns:
        Dictionary mapping file paths to bucket file names, or to an
        ``Error: ...`` message for files that could not be stored
    """
    results = {}
    for file_path in file_paths:
        try:
            results[file_path] = store_file_from_path(backend, file_path)
        except (OSError, FileBucketError) as e:
            logger.error(f"Failed to store {file_path}: {e}")
            results[file_path] = f"Error: {e}"
    return results


def verify_file_integrity(backend: StorageBackend, name: str) -> bool:
    """
    Check that a stored file exists and still matches its name.

    Args:
        backend: Backend to read from
        name: Name of the bucket file

    Returns:
        True if the file is intact, False if it is missing or corrupt
    """
    try:
        return backend.find(name) is not None
    except StorageError as e:
        logger.error(str(e))
        return False


def calculate_file_hash(file_path: str, algorithm: Optional[DigestAlgorithm] = None) -> str:
    """
    Calculate the checksum of a file without storing it.

    Args:
        file_path: Path to the file
        algorithm: Digest algorithm; defaults to the first configured one

    Returns:
        The checksum in ``{algorithm}digest`` form
    """
    algorithms = (DigestAlgorithm(algorithm),) if algorithm else settings.digest_algorithms()
    with open(file_path, 'rb') as f:
        return str(compute_checksum(f.read(), algorithms))
