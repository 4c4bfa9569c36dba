"""Internal shared constants and helpers for charsniff."""

from __future__ import annotations

#: Size of each window read from a source during the scan.
WINDOW_SIZE: int = 4096

#: Number of leading bytes examined for a byte-order mark or magic number.
SIGNATURE_SIZE: int = 4

#: Sources larger than this are reported as binary without being scanned.
MAX_SCAN_SIZE: int = 100 * 1024 * 1024

#: Inputs with fewer structural UTF-8 errors than this are reported as UTF-8.
UTF8_ERROR_LIMIT: int = 5

#: A source is binary once more than 1/N of the bytes read are control bytes.
BINARY_RATIO_DIVISOR: int = 8

#: Label reported when the statistical guesser cannot name an encoding.
FALLBACK_LABEL: str = "windows-1252"


def _validate_read(offset: int, length: int, size: int) -> None:
    """Raise ValueError if ``[offset, offset + length)`` is not inside the source."""
    if offset < 0 or length < 0:
        msg = f"offset and length must be non-negative, got {offset} and {length}"
        raise ValueError(msg)
    if offset + length > size:
        msg = f"read of {length} bytes at offset {offset} exceeds source size {size}"
        raise ValueError(msg)
