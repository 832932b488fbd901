"""
On-disk storage backend.

Each stored file gets its own directory under the bucket root:

    <root>/8/b/3/7/0/2/a/d/8b3702ad1aed1ace7e32bde76ffffb2d/contents
    <root>/8/b/3/7/0/2/a/d/8b3702ad1aed1ace7e32bde76ffffb2d/metadata.json

``metadata.json`` records every original path the content was backed up
from.
"""
import os
import logging
import threading
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

from ..address import path_for
from ..checksums import Checksum
from ..core.utils import ensure_directory, read_json_file, write_bytes_atomic, write_json_file
from ..errors import StorageError
from . import StorageBackend

logger = logging.getLogger("filebucket.backends.directory")

CONTENTS_FILE = "contents"
METADATA_FILE = "metadata.json"


class DirectoryBackend(StorageBackend):
    """Stores bucket files in a directory tree"""

    def __init__(self, root: Union[str, Path]):
        """
        Args:
            root: Bucket directory; created on first save
        """
        self.root = Path(root)
        # Guards the contents check and the metadata.json read-modify-write
        self._lock = threading.Lock()

    def directory_for(self, path: Sequence[str]) -> Path:
        return self.root.joinpath(*path)

    def save(self, path: Sequence[str], contents: bytes, metadata: Mapping[str, Any]) -> None:
        directory = self.directory_for(path)
        contents_path = directory / CONTENTS_FILE

        with self._lock:
            ensure_directory(directory)
            if contents_path.exists():
                if contents_path.read_bytes() != contents:
                    raise StorageError(f"Got passed new contents for {'/'.join(path)}")
                logger.debug(f"{contents_path} already stored")
            else:
                write_bytes_atomic(contents_path, contents)
                logger.info(f"Stored {len(contents)} bytes at {contents_path}")

            original = metadata.get("path")
            if original:
                self._record_path(directory / METADATA_FILE, os.fspath(original))

    def _record_path(self, metadata_path: Path, original: str) -> None:
        sidecar = read_json_file(metadata_path)
        paths = sidecar.setdefault("paths", [])
        if original not in paths:
            paths.append(original)
            write_json_file(metadata_path, sidecar)

    def read(self, path: Sequence[str]) -> Optional[bytes]:
        contents_path = self.directory_for(path) / CONTENTS_FILE
        try:
            return contents_path.read_bytes()
        except FileNotFoundError:
            return None

    def paths(self, name: str) -> List[str]:
        """Original paths recorded for a stored file."""
        sidecar = read_json_file(self.directory_for(path_for(Checksum.from_name(name))) / METADATA_FILE)
        return list(sidecar.get("paths", []))
