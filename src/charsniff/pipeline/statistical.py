"""Statistical encoding guesser consulted when UTF-8 checking fails.

The guesser is the third-party :mod:`chardet` package.  Whether it is
installed is decided once, at import time, and recorded in
:data:`HAS_STATISTICAL_FALLBACK`; the default detection strategy is chosen
from that flag.
"""

from __future__ import annotations

import importlib.util
import logging
from typing import Protocol

from charsniff._utils import FALLBACK_LABEL

logger = logging.getLogger(__name__)

#: True when the :mod:`chardet` package is available to guess legacy encodings.
HAS_STATISTICAL_FALLBACK: bool = importlib.util.find_spec("chardet") is not None


class StatisticalGuesser(Protocol):
    """Incremental guesser fed the same windows as the other stages."""

    def feed(self, data: bytes) -> None: ...

    def close(self) -> str: ...


class ChardetGuesser:
    """:class:`StatisticalGuesser` backed by ``chardet.UniversalDetector``.

    chardet stops buffering on its own once it has seen enough input, so
    feeding it every window of a large file is safe.
    """

    def __init__(self) -> None:
        import chardet

        self._detector = chardet.UniversalDetector()

    def feed(self, data: bytes) -> None:
        self._detector.feed(data)

    def close(self) -> str:
        """Finalize the guess and return its label.

        chardet answers ``None`` when no encoding fits.  The binary check has
        already passed by then, so the input is reported as the most common
        legacy code page, :data:`FALLBACK_LABEL`, rather than as binary.
        """
        result = self._detector.close()
        encoding = result.get("encoding")
        logger.debug(
            "chardet guessed %s with confidence %s", encoding, result.get("confidence")
        )
        if encoding is None:
            return FALLBACK_LABEL
        return encoding
