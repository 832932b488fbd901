"""
Checksums tagged with the algorithm that produced them.
"""
import re
from dataclasses import dataclass
from typing import Sequence, Tuple

from .digest import DIGEST_LENGTHS, DigestAlgorithm, hexdigest
from .errors import ConfigurationError, ValidationError

_CHECKSUM_PATTERN = re.compile(r"^\{(?P<algorithm>[a-z0-9]+)\}(?P<digest>[0-9a-f]+)$")
_NAME_PATTERN = re.compile(r"^(?P<algorithm>[a-z0-9]+)/(?P<digest>[0-9a-f]+)$")


@dataclass(frozen=True)
class Checksum:
    """A lowercase hex digest and the algorithm it was computed with."""

    algorithm: DigestAlgorithm
    digest: str

    def __post_init__(self):
        try:
            algorithm = DigestAlgorithm(self.algorithm)
        except ValueError:
            raise ValidationError(f"Unknown digest algorithm: {self.algorithm}") from None
        object.__setattr__(self, "algorithm", algorithm)

        if not isinstance(self.digest, str) or not re.fullmatch(r"[0-9a-f]*", self.digest):
            raise ValidationError(f"Digest must be lowercase hex, got {self.digest!r}")
        if len(self.digest) != DIGEST_LENGTHS[algorithm]:
            raise ValidationError(
                f"{algorithm} digest must be {DIGEST_LENGTHS[algorithm]} hex characters, "
                f"got {len(self.digest)}"
            )

    def __str__(self) -> str:
        return f"{{{self.algorithm}}}{self.digest}"

    @property
    def name(self) -> str:
        """Url-safe lookup name, e.g. ``md5/8b3702ad...``"""
        return f"{self.algorithm}/{self.digest}"

    @classmethod
    def parse(cls, text: str) -> "Checksum":
        """Parse the ``{algorithm}digest`` form."""
        match = _CHECKSUM_PATTERN.match(text) if isinstance(text, str) else None
        if not match:
            raise ValidationError(f"Invalid checksum: {text!r}")
        return cls(match.group("algorithm"), match.group("digest"))

    @classmethod
    def from_name(cls, name: str) -> "Checksum":
        """Parse the ``algorithm/digest`` lookup name."""
        match = _NAME_PATTERN.match(name) if isinstance(name, str) else None
        if not match:
            raise ValidationError(f"Invalid bucket file name: {name!r}")
        return cls(match.group("algorithm"), match.group("digest"))

    def verify(self, contents: bytes) -> bool:
        """Recompute the digest of contents and compare."""
        return hexdigest(self.algorithm, contents) == self.digest


def compute_checksum(contents: bytes, algorithms: Sequence[DigestAlgorithm]) -> Checksum:
    """
    Calculate the checksum of contents with the primary algorithm.

    Args:
        contents: Bytes to hash
        algorithms: Resolved algorithm list; the first entry is used

    Returns:
        The checksum of contents
    """
    if not algorithms:
        raise ConfigurationError("No digest algorithms configured")
    algorithm = algorithms[0]
    return Checksum(algorithm, hexdigest(algorithm, contents))


def compute_all_checksums(contents: bytes, algorithms: Sequence[DigestAlgorithm]) -> Tuple[Checksum, ...]:
    """
    Calculate one checksum per algorithm, in the given order.

    Args:
        contents: Bytes to hash
        algorithms: Resolved algorithm list

    Returns:
        Tuple of checksums
    """
    if not algorithms:
        raise ConfigurationError("No digest algorithms configured")
    return tuple(Checksum(algorithm, hexdigest(algorithm, contents)) for algorithm in algorithms)
