"""
Shared fixtures for the file bucket tests.
"""
from contextlib import contextmanager
from unittest.mock import patch

from filebucket_core import digest, settings
from filebucket_core.digest import DigestAlgorithm

CONTENTS = "file\r\n contents"

MD5_DIGEST = "8b3702ad1aed1ace7e32bde76ffffb2d"
MD5_CHECKSUM = "{md5}" + MD5_DIGEST

SHA1_DIGEST = "8b1ab916151c0e1c2fedd3380e1d5c427e7d3924"
SHA1_CHECKSUM = "{sha1}" + SHA1_DIGEST

SHA256_DIGEST = "7152323bbca95871b2090190e80a02e05d7f164df9c4c3f543f6ff63dd817523"
SHA256_CHECKSUM = "{sha256}" + SHA256_DIGEST


def use_digest_algorithms(test_case, value):
    """Configure digest algorithms for the duration of a test."""
    context = settings.using_digest_algorithms(value)
    algorithms = context.__enter__()
    test_case.addCleanup(context.__exit__, None, None, None)
    return algorithms


@contextmanager
def failing_digest(*broken):
    """
    Make the named algorithms raise the way a FIPS restricted runtime does
    when asked for a disallowed digest.
    """
    broken = {DigestAlgorithm(algorithm) for algorithm in broken}
    real_hexdigest = digest.hexdigest

    def hexdigest(algorithm, data):
        if DigestAlgorithm(algorithm) in broken:
            raise RuntimeError("Digest initialization failed.")
        return real_hexdigest(algorithm, data)

    with patch("filebucket_core.digest.hexdigest", side_effect=hexdigest), \
            patch("filebucket_core.checksums.hexdigest", side_effect=hexdigest):
        yield
