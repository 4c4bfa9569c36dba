"""StreamDetector: detection over data that arrives in pieces."""

from __future__ import annotations

import logging

from charsniff._utils import MAX_SCAN_SIZE, SIGNATURE_SIZE, WINDOW_SIZE
from charsniff.enums import Label
from charsniff.pipeline.signature import detect_signature
from charsniff.pipeline.strategy import (
    FullScanner,
    MinimalScanner,
    Strategy,
    get_strategy,
)

logger = logging.getLogger(__name__)


class StreamDetector:
    """Streaming counterpart of :func:`charsniff.detect`.

    For input whose total size is unknown until it ends, such as stdin or a
    socket.  Chunks of any size are regrouped into the 4096-byte windows
    that :func:`charsniff.detect` reads, which keeps the two in agreement on
    the same bytes, and at most one partial window is held in memory.
    """

    def __init__(self, strategy: Strategy | None = None) -> None:
        """Initialize the detector.

        :param strategy: The strategy to scan with.  Defaults to the one
            chosen for this installation.
        """
        self._strategy = strategy if strategy is not None else get_strategy()
        self.reset()

    def reset(self) -> None:
        """Reset the detector to its initial state for reuse."""
        self._pending = bytearray()
        self._total = 0
        self._scanner: FullScanner | MinimalScanner | None = None
        self._signature_checked = False
        self._result: str | None = None
        self._closed = False

    def feed(self, byte_str: bytes | bytearray) -> None:
        """Append *byte_str* to the stream and scan any windows it completes.

        Once the label is settled, by a signature, the size cap or the
        binary ratio, further chunks are dropped unread.

        :param byte_str: The next chunk of the stream.
        :raises ValueError: If the detector has been closed; call
            :meth:`reset` to start a new stream.
        """
        if self._closed:
            msg = "detector is closed; call reset() before feeding a new stream"
            raise ValueError(msg)
        if self._result is not None or not byte_str:
            return
        self._total += len(byte_str)
        if self._scanner is None or self._scanner.wants_more:
            self._pending.extend(byte_str)

        if not self._signature_checked:
            if self._total < SIGNATURE_SIZE:
                return
            self._signature_checked = True
            signature = detect_signature(bytes(self._pending[:SIGNATURE_SIZE]))
            if signature is not None:
                logger.debug("signature identifies %s", signature)
                self._finish(signature)
                return

        if self._total > MAX_SCAN_SIZE:
            logger.debug("stream exceeds the %d byte scan limit", MAX_SCAN_SIZE)
            self._finish(Label.BINARY)
            return

        while len(self._pending) >= WINDOW_SIZE:
            window = bytes(self._pending[:WINDOW_SIZE])
            del self._pending[:WINDOW_SIZE]
            if self._scan(window):
                return

    def close(self) -> str:
        """Finalize detection and return the label.

        :returns: A :class:`Label` or a label reported by the statistical
            guesser.
        """
        if not self._closed:
            self._closed = True
            if self._result is None and not (
                self._pending and self._scan(bytes(self._pending))
            ):
                self._finish(self._get_scanner().finish())
        return self.result

    @property
    def done(self) -> bool:
        """Whether the label is known and no more data is needed."""
        return self._result is not None

    @property
    def result(self) -> str | None:
        """The label, or ``None`` until it is known."""
        return self._result

    def _get_scanner(self) -> FullScanner | MinimalScanner:
        if self._scanner is None:
            self._scanner = self._strategy.new_scanner()
        return self._scanner

    def _scan(self, window: bytes) -> bool:
        """Feed one window to the scanner; return True once the label is known."""
        scanner = self._get_scanner()
        if not scanner.wants_more:
            self._pending.clear()
            return False
        verdict = scanner.feed(window)
        if verdict is not None:
            logger.debug("binary content found by offset %d", scanner.state.offset)
            self._finish(verdict)
            return True
        if not scanner.wants_more:
            self._pending.clear()
        return False

    def _finish(self, label: str) -> None:
        self._result = label
        self._pending.clear()
