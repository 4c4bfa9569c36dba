"""Binary-versus-text and character encoding detection for files and buffers."""

from __future__ import annotations

import os

from charsniff.detector import StreamDetector
from charsniff.enums import Label, StrategyName
from charsniff.pipeline.orchestrator import run_detection
from charsniff.pipeline.statistical import HAS_STATISTICAL_FALLBACK
from charsniff.pipeline.strategy import Strategy, get_strategy
from charsniff.source import ByteSource, BytesSource, FileSource

__version__ = "1.0.0"
__all__ = [
    "HAS_STATISTICAL_FALLBACK",
    "ByteSource",
    "BytesSource",
    "FileSource",
    "Label",
    "StrategyName",
    "StreamDetector",
    "detect",
    "detect_bytes",
    "detect_file",
    "get_strategy",
]


def detect(source: ByteSource, strategy: Strategy | None = None) -> str:
    """Detect whether *source* is binary and, if not, its encoding.

    :param source: Any object with ``size()`` and ``read(offset, length)``.
    :param strategy: Detection strategy; defaults to the installation default.
    :returns: ``"binary"``, ``"utf-8"``, a UTF-16/32 label from a byte-order
        mark, or a label guessed by the statistical fallback.
    """
    return run_detection(source, strategy)


def detect_bytes(
    data: bytes | bytearray | memoryview, strategy: Strategy | None = None
) -> str:
    """Detect the encoding of an in-memory buffer."""
    return run_detection(BytesSource(data), strategy)


def detect_file(path: str | os.PathLike[str], strategy: Strategy | None = None) -> str:
    """Detect the encoding of the file at *path*.

    :raises OSError: If the file cannot be opened or mapped.
    """
    with FileSource(path) as source:
        return run_detection(source, strategy)
