from pathlib import Path
from typing import Optional, Union


class KittiError(Exception):
    """Base class for errors raised while decoding dataset files."""


class TruncatedRecordError(KittiError):
    """A binary record ended in the middle of a field."""


class CalibrationError(KittiError, ValueError):
    pass


class LabelError(KittiError, ValueError):
    pass


class OxtsError(KittiError, ValueError):
    pass


class ImageDecodeError(KittiError):
    pass


def truncated_record(record_idx: int, expected: int, received: int) -> TruncatedRecordError:
    return TruncatedRecordError(
        f"Point record {record_idx} is truncated: expected {expected} more bytes, got {received}"
    )


def invalid_calibration(message: str, source: Optional[Union[str, Path]] = None) -> CalibrationError:
    if source is not None:
        message = f"{source}: {message}"
    return CalibrationError(message)


def invalid_field(error_cls, column: str, value, row: int, source=None):
    """Build a LabelError / OxtsError for a bad value in a whitespace-separated row."""
    location = f"row {row}" if source is None else f"{source}, row {row}"
    return error_cls(f"Invalid {column} value {value!r} ({location})")
