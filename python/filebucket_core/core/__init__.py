# Filesystem helpers shared by the backends and the CLI
from .utils import (
    ensure_directory,
    write_bytes_atomic,
    read_json_file,
    write_json_file,
    format_size,
)

__all__ = [
    'ensure_directory',
    'write_bytes_atomic',
    'read_json_file',
    'write_json_file',
    'format_size',
]
