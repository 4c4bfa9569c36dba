"""Detection pipeline stages and shared types."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from dataclasses import field
from typing import TYPE_CHECKING

from charsniff._utils import WINDOW_SIZE
from charsniff.pipeline.utf8 import Utf8State

if TYPE_CHECKING:
    from charsniff.source import ByteSource


@dataclasses.dataclass(frozen=True, slots=True)
class ByteWindow:
    """Up to :data:`WINDOW_SIZE` bytes read from a source at *offset*."""

    offset: int
    data: bytes

    @property
    def end(self) -> int:
        return self.offset + len(self.data)


@dataclasses.dataclass(frozen=True, slots=True)
class DetectionState:
    """Scan state threaded through the windows of a single detection.

    Each detection builds its own state and discards it once a label is
    produced, so concurrent detections never share anything.  Invariants:
    ``binary_count <= offset`` and ``0 <= pending_continuation <= 3``.
    """

    offset: int = 0
    binary_count: int = 0
    utf8: Utf8State = field(default_factory=Utf8State)

    @property
    def pending_continuation(self) -> int:
        return self.utf8.pending

    @property
    def utf8_errors(self) -> int:
        return self.utf8.errors


def iter_windows(
    source: ByteSource, window_size: int = WINDOW_SIZE
) -> Iterator[ByteWindow]:
    """Yield consecutive windows covering *source* from offset 0 to its end.

    Windows are read lazily, so a consumer that stops early never reads the
    rest of the source.
    """
    if window_size < 1:
        msg = "window_size must be a positive integer"
        raise ValueError(msg)
    size = source.size()
    offset = 0
    while offset < size:
        length = min(window_size, size - offset)
        yield ByteWindow(offset=offset, data=bytes(source.read(offset, length)))
        offset += length
