"""
Wire formats for bucket files.

``raw`` is the content itself and is the default. ``json`` wraps the
content as ``{"contents": "..."}``; it is kept for older peers and every
use of it is reported as deprecated.
"""
import json
import logging
import warnings
from typing import Any, Callable, Dict, Mapping, Union

import pydantic
from pydantic import BaseModel, ConfigDict

from .bucket_file import BucketFile
from .errors import ValidationError

logger = logging.getLogger("filebucket.formats")

FORMAT_RAW = "raw"
FORMAT_JSON = "json"

DEFAULT_FORMAT = FORMAT_RAW
SUPPORTED_FORMATS = (FORMAT_RAW, FORMAT_JSON)

SERIALIZE_DEPRECATION = "Serializing BucketFile objects to json is deprecated."
DESERIALIZE_DEPRECATION = "Deserializing BucketFile objects from json is deprecated. Upgrade to a newer version."


def deprecation_warning(message: str) -> None:
    """Report use of a deprecated code path to the log and to warnings filters."""
    logger.warning(message)
    warnings.warn(message, DeprecationWarning, stacklevel=3)


class BucketFilePayload(BaseModel):
    """The structured payload: exactly one ``contents`` string."""
    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    contents: str


def _text(contents: bytes) -> str:
    try:
        return contents.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValidationError(f"json format requires UTF-8 contents: {e}") from e


def to_raw(bucket_file: BucketFile) -> bytes:
    return bucket_file.contents


def from_raw(data: Union[bytes, str]) -> BucketFile:
    return BucketFile(data)


def to_json(bucket_file: BucketFile, notify: Callable[[str], None] = deprecation_warning) -> str:
    """
    Serialize a bucket file as ``{"contents": "..."}``.

    Args:
        bucket_file: File to serialize
        notify: Receives the deprecation notice

    Returns:
        Compact JSON text

    Raises:
        ValidationError: If the contents are not UTF-8 text
    """
    notify(SERIALIZE_DEPRECATION)
    payload = BucketFilePayload(contents=_text(bucket_file.contents))
    return json.dumps(payload.model_dump(), separators=(",", ":"))


def from_json(data: Union[str, bytes, Mapping[str, Any]],
              notify: Callable[[str], None] = deprecation_warning) -> BucketFile:
    """
    Deserialize a bucket file from JSON text or an already decoded mapping.

    The checksum is never read from the payload; it is recomputed from the
    contents.

    Args:
        data: JSON text/bytes, or a mapping with a single ``contents`` key
        notify: Receives the deprecation notice

    Returns:
        The bucket file

    Raises:
        ValidationError: If the payload is not exactly ``{"contents": str}``
    """
    notify(DESERIALIZE_DEPRECATION)
    if isinstance(data, (str, bytes, bytearray)):
        try:
            data = json.loads(data)
        except ValueError as e:
            raise ValidationError(f"Invalid bucket file json: {e}") from e
    if not isinstance(data, Mapping):
        raise ValidationError(f"Bucket file json must be an object, got a {type(data).__name__}")

    try:
        payload = BucketFilePayload.model_validate(dict(data))
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid bucket file json: {e}") from e
    return BucketFile(payload.contents)


_RENDERERS: Dict[str, Callable[[BucketFile], Any]] = {
    FORMAT_RAW: to_raw,
    FORMAT_JSON: to_json,
}

_PARSERS: Dict[str, Callable[[Any], BucketFile]] = {
    FORMAT_RAW: from_raw,
    FORMAT_JSON: from_json,
}


def _check_format(fmt: str) -> None:
    if fmt not in SUPPORTED_FORMATS:
        raise ValidationError(f"Unsupported format {fmt!r}; expected one of {', '.join(SUPPORTED_FORMATS)}")


def render(bucket_file: BucketFile, fmt: str = DEFAULT_FORMAT) -> Union[bytes, str]:
    """Serialize a bucket file in the given format."""
    _check_format(fmt)
    return _RENDERERS[fmt](bucket_file)


def convert_from(fmt: str, data: Any) -> BucketFile:
    """Deserialize a bucket file from the given format."""
    _check_format(fmt)
    return _PARSERS[fmt](data)
