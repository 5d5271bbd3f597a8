"""Text/binary classification from a short file prefix."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

PREFIX_SIZE = 50
ALLOWED_CONTROL_BYTES = frozenset({9, 10, 13})
DELETE_BYTE = 127


class FileReadError(OSError):
    """Raised when a candidate file cannot be read."""


class FileKind(str, Enum):
    """Content kind used to filter which rules run on a file."""

    TEXT = "text"
    BINARY = "binary"


def is_control_byte(value: int) -> bool:
    if value == DELETE_BYTE:
        return True
    return value <= 31 and value not in ALLOWED_CONTROL_BYTES


def is_binary_prefix(data: bytes) -> bool:
    """Return True if any byte is a control character other than tab, LF or CR."""
    return any(is_control_byte(value) for value in data)


def read_prefix(path: Path | str, size: int = PREFIX_SIZE) -> bytes:
    """Read up to ``size`` bytes; shorter files are returned whole."""
    try:
        with open(path, "rb") as file_obj:
            return file_obj.read(size)
    except OSError as exc:
        raise FileReadError(f"Cannot read file {path}: {exc.strerror or exc}") from exc


def classify_file(path: Path | str) -> FileKind:
    """Classify a file as text or binary from its first bytes."""
    kind = FileKind.BINARY if is_binary_prefix(read_prefix(path)) else FileKind.TEXT
    logger.debug("classified %s as %s", path, kind.value)
    return kind
