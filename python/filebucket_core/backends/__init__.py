"""
File bucket storage backends.

A backend only knows how to write content at a path and read it back. The
addressing (one copy per configured digest algorithm) and the checks that
content matches its checksum live in StorageBackend itself.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Sequence, Tuple

from ..address import path_for
from ..bucket_file import BucketFile
from ..checksums import Checksum
from ..errors import StorageError

logger = logging.getLogger("filebucket.backends")


class StorageBackend(ABC):
    """Base abstract class for all storage backends"""

    @abstractmethod
    def save(self, path: Sequence[str], contents: bytes, metadata: Mapping[str, Any]) -> None:
        """
        Write contents at path unless they are already there

        Args:
            path: Path segments from path_for()
            contents: Bytes to write
            metadata: Sidecar information such as the original ``path``

        Raises:
            StorageError: If different contents already exist at path
        """
        pass

    @abstractmethod
    def read(self, path: Sequence[str]) -> Optional[bytes]:
        """
        Read the contents stored at path

        Args:
            path: Path segments from path_for()

        Returns:
            The stored bytes, or None if nothing is stored there
        """
        pass

    def store(self, bucket_file: BucketFile, metadata: Optional[Mapping[str, Any]] = None) -> Tuple[Checksum, ...]:
        """
        Save a bucket file once per configured digest algorithm.

        Args:
            bucket_file: File to save
            metadata: Optional sidecar information

        Returns:
            The checksums the file was saved under
        """
        checksums = bucket_file.checksums()
        for checksum in checksums:
            if not checksum.verify(bucket_file.contents):
                raise StorageError(f"Contents do not match checksum {checksum}")
        for checksum in checksums:
            logger.debug(f"Saving {checksum.name}")
            self.save(path_for(checksum), bucket_file.contents, dict(metadata or {}))
        return checksums

    def find(self, name: str) -> Optional[BucketFile]:
        """
        Look a bucket file up by its ``algorithm/digest`` name.

        Returns:
            The bucket file, carrying exactly the requested checksum, or
            None if nothing is stored under that name

        Raises:
            ValidationError: If name is malformed
            StorageError: If the stored content does not match the name
        """
        checksum = Checksum.from_name(name)
        contents = self.read(path_for(checksum))
        if contents is None:
            logger.debug(f"No bucket file for {name}")
            return None
        if not checksum.verify(contents):
            raise StorageError(f"Stored contents for {name} do not match their checksum")
        return BucketFile(contents, override_checksum_name=checksum)

    def exists(self, name: str) -> bool:
        return self.read(path_for(Checksum.from_name(name))) is not None


from .memory import MemoryBackend
from .directory import DirectoryBackend

__all__ = [
    'StorageBackend',
    'MemoryBackend',
    'DirectoryBackend',
]
