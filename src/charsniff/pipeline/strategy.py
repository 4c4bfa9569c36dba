"""Full and minimal detection strategies.

Which strategy is the default depends on whether the statistical guesser is
available.  The two differ on purpose:

* :class:`FullStrategy` scans the whole source, runs the UTF-8 automaton and
  hands the decision to the guesser when the input is not UTF-8.
* :class:`MinimalStrategy` only checks the first window for control bytes and
  otherwise reports UTF-8.  It never looks past the first 4096 bytes, so a
  file whose binary content starts later is reported as UTF-8.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable

from charsniff.enums import Label, StrategyName
from charsniff.pipeline import DetectionState
from charsniff.pipeline.binary import count_control_bytes, exceeds_binary_ratio
from charsniff.pipeline.statistical import (
    HAS_STATISTICAL_FALLBACK,
    ChardetGuesser,
    StatisticalGuesser,
)
from charsniff.pipeline.utf8 import feed_utf8, finish_utf8, looks_like_utf8

logger = logging.getLogger(__name__)


def advance(state: DetectionState, data: bytes) -> DetectionState:
    """Return the state after scanning one more window of *data*."""
    return DetectionState(
        offset=state.offset + len(data),
        binary_count=state.binary_count + count_control_bytes(data),
        utf8=feed_utf8(state.utf8, data),
    )


class FullScanner:
    """Per-detection scanner for :class:`FullStrategy`."""

    def __init__(self, guesser: StatisticalGuesser) -> None:
        self._guesser = guesser
        self.state = DetectionState()

    @property
    def wants_more(self) -> bool:
        return True

    def feed(self, data: bytes) -> str | None:
        """Scan one window; return :attr:`Label.BINARY` if the ratio trips."""
        self._guesser.feed(data)
        self.state = advance(self.state, data)
        if exceeds_binary_ratio(self.state.binary_count, self.state.offset):
            logger.debug(
                "%d of the first %d bytes are control bytes",
                self.state.binary_count,
                self.state.offset,
            )
            return Label.BINARY
        return None

    def finish(self) -> str:
        utf8 = finish_utf8(self.state.utf8)
        self.state = dataclasses.replace(self.state, utf8=utf8)
        if looks_like_utf8(utf8):
            return Label.UTF_8
        logger.debug("%d UTF-8 errors, asking the statistical guesser", utf8.errors)
        return self._guesser.close()


class MinimalScanner:
    """Per-detection scanner for :class:`MinimalStrategy`."""

    def __init__(self) -> None:
        self.state = DetectionState()

    @property
    def wants_more(self) -> bool:
        return not self.state.offset

    def feed(self, data: bytes) -> str | None:
        self.state = DetectionState(
            offset=self.state.offset + len(data),
            binary_count=self.state.binary_count + count_control_bytes(data),
        )
        if exceeds_binary_ratio(self.state.binary_count, self.state.offset):
            return Label.BINARY
        return None

    def finish(self) -> str:
        return Label.UTF_8


class FullStrategy:
    """Signature, size cap, binary ratio, UTF-8 automaton and statistical guess."""

    name = StrategyName.FULL

    def __init__(
        self, guesser_factory: Callable[[], StatisticalGuesser] = ChardetGuesser
    ) -> None:
        self._guesser_factory = guesser_factory

    def new_scanner(self) -> FullScanner:
        return FullScanner(self._guesser_factory())


class MinimalStrategy:
    """Signature, size cap and a first-window binary ratio; UTF-8 otherwise."""

    name = StrategyName.MINIMAL

    def new_scanner(self) -> MinimalScanner:
        return MinimalScanner()


Strategy = FullStrategy | MinimalStrategy


def _default_strategy_name() -> StrategyName:
    if HAS_STATISTICAL_FALLBACK:
        return StrategyName.FULL
    return StrategyName.MINIMAL


#: Strategy used when none is given explicitly; fixed at import time.
DEFAULT_STRATEGY_NAME: StrategyName = _default_strategy_name()


def get_strategy(name: str | None = None) -> Strategy:
    """Return a strategy by name, or the default one for this installation.

    :param name: ``"full"``, ``"minimal"`` or ``None`` for the default.
    :raises ValueError: If *name* is not a known strategy.
    :raises ImportError: If the full strategy is requested but chardet is
        not installed.
    """
    if name is None:
        name = DEFAULT_STRATEGY_NAME
    try:
        strategy_name = StrategyName(name)
    except ValueError:
        choices = ", ".join(s.value for s in StrategyName)
        msg = f"unknown strategy {name!r}, expected one of: {choices}"
        raise ValueError(msg) from None
    if strategy_name is StrategyName.FULL:
        if not HAS_STATISTICAL_FALLBACK:
            msg = "full strategy requires chardet; install charsniff[statistical]"
            raise ImportError(msg)
        return FullStrategy()
    return MinimalStrategy()
