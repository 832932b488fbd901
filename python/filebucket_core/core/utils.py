"""
Filesystem utility functions for the on-disk bucket.
"""
import os
import json
import tempfile
from pathlib import Path
from typing import Dict, Any, Union

PathLike = Union[str, Path]


def ensure_directory(path: PathLike) -> None:
    """
    Ensure a directory exists.

    Args:
        path: Directory path to create
    """
    os.makedirs(path, exist_ok=True)


def write_bytes_atomic(path: PathLike, data: bytes) -> None:
    """
    Write bytes through a temporary file in the same directory and rename
    it into place, so readers never see a partial file.

    Args:
        path: Destination file
        data: Bytes to write
    """
    directory = os.path.dirname(os.path.abspath(path))
    ensure_directory(directory)
    fd, temp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-")
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.replace(temp_path, path)
    except BaseException:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise


def read_json_file(path: PathLike) -> Dict[str, Any]:
    """
    Read a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        The parsed JSON data, or an empty dict if the file does not exist
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        return {}


def write_json_file(path: PathLike, data: Dict[str, Any]) -> None:
    """
    Write a dictionary to a JSON file.

    Args:
        path: Path to the JSON file
        data: Data to write
    """
    write_bytes_atomic(path, json.dumps(data, indent=2, sort_keys=True).encode('utf-8'))


def format_size(size_bytes: float) -> str:
    """
    Format a size in bytes to a human-readable string.

    Args:
        size_bytes: Size in bytes

    Returns:
        Human-readable size string
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.2f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.2f} PB"
