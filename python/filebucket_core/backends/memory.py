"""
In-memory storage backend, for tests and short lived processes.
"""
import threading
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from ..errors import StorageError
from . import StorageBackend


class MemoryBackend(StorageBackend):
    """Keeps contents and metadata in a dict keyed by path"""

    def __init__(self):
        self._lock = threading.Lock()
        self.entries: Dict[Tuple[str, ...], bytes] = {}
        self.metadata: Dict[Tuple[str, ...], Dict[str, Any]] = {}

    def save(self, path: Sequence[str], contents: bytes, metadata: Mapping[str, Any]) -> None:
        key = tuple(path)
        with self._lock:
            existing = self.entries.get(key)
            if existing is None:
                self.entries[key] = contents
            elif existing != contents:
                raise StorageError(f"Got passed new contents for {'/'.join(key)}")

            sidecar = self.metadata.setdefault(key, {"paths": []})
            original = metadata.get("path")
            if original and original not in sidecar["paths"]:
                sidecar["paths"].append(original)

    def read(self, path: Sequence[str]) -> Optional[bytes]:
        return self.entries.get(tuple(path))
