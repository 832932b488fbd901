"""
Digest algorithms and the policy that decides which of them are usable.

The configured value is a comma separated list such as ``"md5, sha256"``.
Every name must be one of the supported algorithms. Each algorithm is then
probed once; algorithms the runtime refuses to compute (MD5 on a FIPS
restricted OpenSSL, for instance) are dropped with a warning instead of
failing later in the middle of a store.
"""
import logging
from enum import Enum
from typing import Tuple

from cryptography.hazmat.primitives import hashes

from .errors import ConfigurationError

logger = logging.getLogger("filebucket.digest")


class DigestAlgorithm(str, Enum):
    """Supported digest algorithms"""
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"

    def __str__(self) -> str:
        return self.value


AlgorithmList = Tuple[DigestAlgorithm, ...]

VALID_DIGEST_ALGORITHMS: AlgorithmList = tuple(DigestAlgorithm)

# Hex digest length per algorithm
DIGEST_LENGTHS = {
    DigestAlgorithm.MD5: 32,
    DigestAlgorithm.SHA1: 40,
    DigestAlgorithm.SHA256: 64,
}

_HASH_CLASSES = {
    DigestAlgorithm.MD5: hashes.MD5,
    DigestAlgorithm.SHA1: hashes.SHA1,
    DigestAlgorithm.SHA256: hashes.SHA256,
}

PROBE_STRING = b"test digest string"


def hexdigest(algorithm: DigestAlgorithm, data: bytes) -> str:
    """
    Calculate the lowercase hex digest of data.

    Args:
        algorithm: Digest algorithm to use
        data: Bytes to hash

    Returns:
        The hex-encoded digest
    """
    digest = hashes.Hash(_HASH_CLASSES[DigestAlgorithm(algorithm)]())
    digest.update(data)
    return digest.finalize().hex()


def is_usable(algorithm: DigestAlgorithm) -> bool:
    """Probe an algorithm by hashing a fixed string with it."""
    try:
        hexdigest(algorithm, PROBE_STRING)
    except Exception as e:
        logger.warning(f"Digest algorithm {algorithm} fails; not using it ({e})")
        return False
    return True


def resolve_digest_algorithms(value: str) -> AlgorithmList:
    """
    Turn the configured algorithm list into the algorithms to use.

    Args:
        value: Comma separated algorithm names, e.g. "sha1, sha256"

    Returns:
        The usable algorithms, in configured order

    Raises:
        ConfigurationError: If the list is empty, names an unknown
            algorithm, or none of the algorithms work on this runtime
    """
    if not isinstance(value, str):
        raise ConfigurationError(f"Digest algorithms must be a comma separated string, got a {type(value).__name__}")
    names = [name.strip() for name in value.split(",")]
    if not any(names) or not all(names):
        raise ConfigurationError(f"Empty digest algorithm in {value!r}")

    known = {algorithm.value for algorithm in DigestAlgorithm}
    invalids = [name for name in names if name not in known]
    if invalids:
        raise ConfigurationError(f"Unknown digest algorithm(s): {' '.join(invalids)}")

    algorithms = []
    for name in names:
        algorithm = DigestAlgorithm(name)
        if algorithm not in algorithms:
            algorithms.append(algorithm)

    usable = tuple(algorithm for algorithm in algorithms if is_usable(algorithm))
    if not usable:
        raise ConfigurationError("No workable digest algorithms")
    return usable
