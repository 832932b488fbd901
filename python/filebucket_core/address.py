"""
Storage paths derived from checksums.

The first eight hex characters of the digest each become a directory, and
the full digest is the leaf, so no directory holds more than 16 entries:

    8/b/3/7/0/2/a/d/8b3702ad1aed1ace7e32bde76ffffb2d
"""
from typing import Tuple

from .checksums import Checksum

# Number of single character directories, the same for every algorithm
SEGMENT_DEPTH = 8


def path_for(checksum: Checksum) -> Tuple[str, ...]:
    """
    Get the path segments for a checksum.

    Args:
        checksum: Checksum to address

    Returns:
        Tuple of directory segments ending with the full digest
    """
    digest = checksum.digest
    return tuple(digest[:SEGMENT_DEPTH]) + (digest,)


def relative_path(checksum: Checksum) -> str:
    """Get the path for a checksum as a ``/`` separated string."""
    return "/".join(path_for(checksum))
