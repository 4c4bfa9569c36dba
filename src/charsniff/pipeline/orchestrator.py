"""Pipeline orchestrator: runs the detection stages over a byte source."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from charsniff._utils import MAX_SCAN_SIZE, SIGNATURE_SIZE
from charsniff.enums import Label
from charsniff.pipeline import iter_windows
from charsniff.pipeline.signature import detect_signature
from charsniff.pipeline.strategy import Strategy, get_strategy

if TYPE_CHECKING:
    from charsniff.source import ByteSource

logger = logging.getLogger(__name__)


def run_detection(source: ByteSource, strategy: Strategy | None = None) -> str:
    """Classify *source* as binary or as text in a particular encoding.

    Stages, in order: signature check on the first four bytes, the size cap,
    then a windowed scan whose scanner decides the final label.  Errors
    raised by the source propagate; no partial result is returned.

    :param source: The bytes to examine.
    :param strategy: The strategy to scan with.  Defaults to the one chosen
        for this installation by :func:`get_strategy`.
    :returns: A :class:`Label` or a label reported by the statistical guesser.
    """
    if strategy is None:
        strategy = get_strategy()
    size = source.size()

    if size >= SIGNATURE_SIZE:
        signature = detect_signature(source.read(0, SIGNATURE_SIZE))
        if signature is not None:
            logger.debug("signature identifies %s", signature)
            return signature

    # Anything this large is either binary or too big to be worth scanning.
    if size > MAX_SCAN_SIZE:
        logger.debug("%d bytes exceeds the %d byte scan limit", size, MAX_SCAN_SIZE)
        return Label.BINARY

    scanner = strategy.new_scanner()
    for window in iter_windows(source):
        verdict = scanner.feed(window.data)
        if verdict is not None:
            logger.debug("binary content found by offset %d", window.end)
            return verdict
        if not scanner.wants_more:
            break

    label = scanner.finish()
    logger.debug("%s scan of %d bytes gives %s", strategy.name, size, label)
    return label
