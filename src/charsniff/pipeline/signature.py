"""Byte-order mark and container magic number detection."""

from __future__ import annotations

from charsniff._utils import SIGNATURE_SIZE
from charsniff.enums import Label

# Checked in order, first match wins.  The UTF-32-LE mark must come before
# the UTF-16-LE one since FF FE 00 00 starts with FF FE.
_SIGNATURES: tuple[tuple[bytes, Label], ...] = (
    (b"\xef\xbb\xbf", Label.UTF_8),
    (b"\x00\x00\xfe\xff", Label.UTF_32BE),
    (b"\xff\xfe\x00\x00", Label.UTF_32LE),
    (b"\xfe\xff", Label.UTF_16BE),
    (b"\xff\xfe", Label.UTF_16LE),
    (b"\x1a\x45\xdf\xa3", Label.BINARY),  # EBML (Matroska, WebM)
)


def detect_signature(header: bytes) -> Label | None:
    """Return the label identified by the first bytes of a source, if any.

    :param header: The first :data:`SIGNATURE_SIZE` bytes of the source.
        Shorter input never matches.
    :returns: The matching :class:`Label`, or ``None``.
    """
    if len(header) < SIGNATURE_SIZE:
        return None
    for signature, label in _SIGNATURES:
        if header.startswith(signature):
            return label
    return None
