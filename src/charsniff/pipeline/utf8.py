"""Incremental UTF-8 structure checking.

The automaton classifies each byte by its number of leading one-bits: 0 for
ASCII, 1 for a continuation byte, 2-4 for a lead byte and anything higher for
a byte that can never appear in UTF-8.  Only the sequence structure is
checked; overlong forms, surrogates and code points above U+10FFFF pass.
"""

from __future__ import annotations

import dataclasses

from charsniff._utils import UTF8_ERROR_LIMIT

# Translation table mapping every byte value to its count of leading one-bits,
# so a whole window is classified in one C-level pass.
_LEADING_ONES: bytes = bytes(8 - (b ^ 0xFF).bit_length() for b in range(256))


@dataclasses.dataclass(frozen=True, slots=True)
class Utf8State:
    """Automaton state carried from one window to the next.

    ``pending`` is the number of continuation bytes still owed by the
    sequence in progress (0 to 3); ``errors`` only ever grows.
    """

    pending: int = 0
    errors: int = 0


def feed_utf8(state: Utf8State, data: bytes) -> Utf8State:
    """Run the automaton over *data* and return the resulting state.

    :param state: State left by the previous window.
    :param data: The next window of bytes.
    :returns: A new :class:`Utf8State`; *state* is not modified.
    """
    if not state.pending and data.isascii():
        return state

    pending = state.pending
    errors = state.errors
    for ones in data.translate(_LEADING_ONES):
        if pending and ones == 1:
            pending -= 1
            continue
        if pending:
            # Sequence cut short; this byte is then judged on its own.
            pending = 0
            errors += 1
        if ones == 1 or ones > 4:
            errors += 1
        elif ones > 1:
            pending = ones - 1
    return Utf8State(pending=pending, errors=errors)


def finish_utf8(state: Utf8State) -> Utf8State:
    """Account for a sequence left unfinished at end of input."""
    if state.pending:
        return Utf8State(pending=0, errors=state.errors + 1)
    return state


def looks_like_utf8(state: Utf8State) -> bool:
    """Return True if *state* has few enough errors to call the input UTF-8."""
    return state.errors < UTF8_ERROR_LIMIT
