"""Shared test fixtures."""

from __future__ import annotations

import pytest

from charsniff.pipeline.strategy import FullStrategy, MinimalStrategy


class FakeGuesser:
    """Stands in for chardet and records what it was given."""

    def __init__(self, label: str = "windows-1252") -> None:
        self.label = label
        self.fed: list[bytes] = []
        self.closed = False

    def feed(self, data: bytes) -> None:
        self.fed.append(data)

    def close(self) -> str:
        self.closed = True
        return self.label


class RecordingSource:
    """ByteSource that logs every read and can claim a size it cannot serve.

    Reads beyond the real data raise OSError, like a truncated file would.
    """

    def __init__(self, data: bytes, size: int | None = None) -> None:
        self._data = data
        self._size = len(data) if size is None else size
        self.reads: list[tuple[int, int]] = []

    def size(self) -> int:
        return self._size

    def read(self, offset: int, length: int) -> bytes:
        self.reads.append((offset, length))
        if offset + length > len(self._data):
            msg = f"cannot read {length} bytes at {offset}"
            raise OSError(msg)
        return self._data[offset : offset + length]


@pytest.fixture
def guessers() -> list[FakeGuesser]:
    """Every FakeGuesser created by the ``full_strategy`` fixture."""
    return []


@pytest.fixture
def full_strategy(guessers: list[FakeGuesser]) -> FullStrategy:
    """A FullStrategy that does not depend on chardet being installed."""

    def factory() -> FakeGuesser:
        guesser = FakeGuesser()
        guessers.append(guesser)
        return guesser

    return FullStrategy(guesser_factory=factory)


@pytest.fixture
def minimal_strategy() -> MinimalStrategy:
    return MinimalStrategy()
