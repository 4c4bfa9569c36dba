"""Random-access byte sources that detection reads from."""

from __future__ import annotations

import mmap
import os
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from charsniff._utils import _validate_read

if TYPE_CHECKING:
    from types import TracebackType


@runtime_checkable
class ByteSource(Protocol):
    """Anything that can report its size and read a byte range."""

    def size(self) -> int:
        """Return the total number of bytes in the source."""
        ...

    def read(self, offset: int, length: int) -> bytes:
        """Return *length* bytes starting at *offset*.

        :raises ValueError: If the range extends past :meth:`size`.
        """
        ...


class BytesSource:
    """A :class:`ByteSource` over an in-memory buffer."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)

    def size(self) -> int:
        return len(self._data)

    def read(self, offset: int, length: int) -> bytes:
        _validate_read(offset, length, len(self._data))
        return self._data[offset : offset + length]


class FileSource:
    """A read-only, memory-mapped :class:`ByteSource` over a file on disk.

    Opening a missing or unreadable file raises :class:`OSError`.  Empty files
    are supported without creating a mapping, since ``mmap`` refuses to map
    zero bytes.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = os.fspath(path)
        self._file = open(self._path, "rb")  # noqa: SIM115
        try:
            self._size = os.fstat(self._file.fileno()).st_size
            self._map: mmap.mmap | None = None
            if self._size:
                self._map = mmap.mmap(
                    self._file.fileno(), 0, access=mmap.ACCESS_READ
                )
        except BaseException:
            self._file.close()
            raise

    @property
    def path(self) -> str:
        """The path this source was opened from."""
        return self._path

    @property
    def closed(self) -> bool:
        return self._file.closed

    def size(self) -> int:
        return self._size

    def read(self, offset: int, length: int) -> bytes:
        if self.closed:
            msg = f"read from closed source {self._path!r}"
            raise ValueError(msg)
        _validate_read(offset, length, self._size)
        if self._map is None:
            return b""
        return self._map[offset : offset + length]

    def close(self) -> None:
        """Release the mapping and the underlying file handle."""
        if self._map is not None:
            self._map.close()
            self._map = None
        self._file.close()

    def __enter__(self) -> FileSource:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
