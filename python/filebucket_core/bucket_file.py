"""
The bucket file: a piece of content addressed by its checksum.
"""
from typing import Any, Optional, Tuple, Union

from . import settings
from .checksums import Checksum, compute_all_checksums, compute_checksum
from .digest import DigestAlgorithm
from .errors import ImmutabilityViolation, ValidationError

# Options accepted by BucketFile()
VALID_OPTIONS = frozenset(["override_checksum_name"])


class BucketFile:
    """
    Immutable file content plus its lazily computed checksum.

    The checksum uses the first configured digest algorithm unless a
    checksum is supplied with ``override_checksum_name``, in which case
    that checksum is trusted for addressing. The content is still hashed
    independently when a backend stores it.
    """

    __slots__ = ("_contents", "_override", "_checksum")

    def __init__(self, contents: Union[str, bytes], **options: Any):
        if isinstance(contents, str):
            try:
                contents = contents.encode("utf-8")
            except UnicodeEncodeError as e:
                raise ValidationError(f"contents must be UTF-8 encodable text: {e}") from e
        elif isinstance(contents, (bytes, bytearray, memoryview)):
            contents = bytes(contents)
        else:
            raise ValidationError(f"contents must be a str or bytes, got a {type(contents).__name__}")

        unknown = sorted(set(options) - VALID_OPTIONS)
        if unknown:
            raise ValidationError(f"Unknown option(s): {', '.join(unknown)}")

        override = options.get("override_checksum_name")
        if override is not None and not isinstance(override, Checksum):
            override = Checksum.parse(override)

        object.__setattr__(self, "_contents", contents)
        object.__setattr__(self, "_override", override)
        object.__setattr__(self, "_checksum", override)

    def __setattr__(self, name: str, value: Any) -> None:
        raise ImmutabilityViolation(f"can't set {name!r}: {type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise ImmutabilityViolation(f"can't delete {name!r}: {type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} ({len(self._contents)} bytes)>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BucketFile):
            return NotImplemented
        return self._contents == other._contents

    def __hash__(self) -> int:
        return hash(self._contents)

    @property
    def contents(self) -> bytes:
        return self._contents

    def _resolve_checksum(self) -> Checksum:
        checksum = self._checksum
        if checksum is None:
            checksum = compute_checksum(self._contents, settings.digest_algorithms())
            # A racing reader may compute the same value; either write wins
            object.__setattr__(self, "_checksum", checksum)
        return checksum

    @property
    def checksum(self) -> str:
        """The checksum in ``{algorithm}digest`` form."""
        return str(self._resolve_checksum())

    @property
    def checksum_type(self) -> DigestAlgorithm:
        return self._resolve_checksum().algorithm

    @property
    def digest(self) -> str:
        return self._resolve_checksum().digest

    @property
    def name(self) -> str:
        """The ``algorithm/digest`` name backends look the file up by."""
        return self._resolve_checksum().name

    def checksums(self) -> Tuple[Checksum, ...]:
        """
        One checksum per configured digest algorithm.

        A supplied checksum stands in for the computed one of its own
        algorithm and is appended if that algorithm is not configured.
        """
        computed = compute_all_checksums(self._contents, settings.digest_algorithms())
        override: Optional[Checksum] = self._override
        if override is None:
            return computed
        result = tuple(override if c.algorithm == override.algorithm else c for c in computed)
        if override not in result:
            result += (override,)
        return result

    def render(self, fmt: Optional[str] = None) -> Union[bytes, str]:
        from . import formats
        return formats.render(self, fmt or formats.DEFAULT_FORMAT)

    def to_json(self) -> str:
        from . import formats
        return formats.to_json(self)

    @classmethod
    def convert_from(cls, fmt: str, data: Any) -> "BucketFile":
        from . import formats
        return formats.convert_from(fmt, data)

    @classmethod
    def from_json(cls, data: Any) -> "BucketFile":
        from . import formats
        return formats.from_json(data)
