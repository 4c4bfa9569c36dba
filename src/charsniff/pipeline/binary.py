"""Control-byte density check for binary content."""

from __future__ import annotations

from charsniff._utils import BINARY_RATIO_DIVISOR

# Every byte below 0x20 except tab (0x09), line feed (0x0A) and carriage
# return (0x0D).  bytes.translate deletes these, so len(data) - len(clean)
# gives the count in one C-level pass.
_CONTROL_BYTES: bytes = bytes(b for b in range(0x20) if b not in (0x09, 0x0A, 0x0D))


def count_control_bytes(data: bytes) -> int:
    """Return how many bytes of *data* are control-like."""
    return len(data) - len(data.translate(None, _CONTROL_BYTES))


def exceeds_binary_ratio(binary_count: int, offset: int) -> bool:
    """Return True if more than 1/8 of the first *offset* bytes are control bytes."""
    return binary_count > offset // BINARY_RATIO_DIVISOR
