"""Enumerations for charsniff."""

import enum


class Label(enum.StrEnum):
    """Verdicts produced by the signature and heuristic stages.

    Labels returned by the statistical guesser are passed through as plain
    strings and are not members of this enum.
    """

    UTF_8 = "utf-8"
    UTF_16LE = "utf-16le"
    UTF_16BE = "utf-16be"
    UTF_32LE = "utf-32le"
    UTF_32BE = "utf-32be"
    BINARY = "binary"


class StrategyName(enum.StrEnum):
    """Names of the interchangeable detection strategies."""

    FULL = "full"
    MINIMAL = "minimal"
