"""
Configuration for the file bucket.

Values come from the environment (a ``.env`` file is honoured) and are
resolved once; the digest algorithm list is probed at load time so an
unusable setting stops the process before anything is hashed.
"""
import os
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from .digest import AlgorithmList, resolve_digest_algorithms

logger = logging.getLogger("filebucket.settings")

# Load environment variables
load_dotenv()

DIGEST_ALGORITHMS_ENV = "FILEBUCKET_DIGEST_ALGORITHMS"
BUCKET_DIR_ENV = "FILEBUCKET_BUCKET_DIR"

DEFAULT_DIGEST_ALGORITHMS = "md5, sha256"
DEFAULT_BUCKET_DIR = "./bucket"


class Settings(BaseModel):
    """Resolved configuration"""
    model_config = ConfigDict(frozen=True)

    digest_algorithms: AlgorithmList
    bucket_dir: Path


_current: Optional[Settings] = None


def load_settings(digest_algorithms: Optional[str] = None, bucket_dir: Optional[str] = None) -> Settings:
    """
    Build settings from explicit values, falling back to the environment.

    Raises:
        ConfigurationError: If the digest algorithm list is unusable
    """
    if digest_algorithms is None:
        digest_algorithms = os.getenv(DIGEST_ALGORITHMS_ENV, DEFAULT_DIGEST_ALGORITHMS)
    if bucket_dir is None:
        bucket_dir = os.getenv(BUCKET_DIR_ENV, DEFAULT_BUCKET_DIR)

    settings = Settings(
        digest_algorithms=resolve_digest_algorithms(digest_algorithms),
        bucket_dir=Path(bucket_dir),
    )
    logger.debug(f"Using digest algorithms: {', '.join(map(str, settings.digest_algorithms))}")
    return settings


def get_settings() -> Settings:
    """Get the process settings, loading them on first use."""
    global _current
    if _current is None:
        _current = load_settings()
    return _current


def configure(digest_algorithms: Optional[str] = None, bucket_dir: Optional[str] = None) -> Settings:
    """Replace the process settings."""
    global _current
    _current = load_settings(digest_algorithms, bucket_dir)
    return _current


def digest_algorithms() -> AlgorithmList:
    """The resolved digest algorithm list; the first entry is the default."""
    return get_settings().digest_algorithms


@contextmanager
def using_digest_algorithms(value: str) -> Iterator[AlgorithmList]:
    """Temporarily use a different digest algorithm list."""
    global _current
    previous = _current
    if previous is not None:
        bucket_dir = previous.bucket_dir
    else:
        bucket_dir = Path(os.getenv(BUCKET_DIR_ENV, DEFAULT_BUCKET_DIR))
    _current = Settings(digest_algorithms=resolve_digest_algorithms(value), bucket_dir=bucket_dir)
    try:
        yield _current.digest_algorithms
    finally:
        _current = previous
