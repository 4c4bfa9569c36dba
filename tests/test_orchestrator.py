from __future__ import annotations

import pytest

from charsniff._utils import MAX_SCAN_SIZE
from charsniff.enums import Label
from charsniff.pipeline.orchestrator import run_detection
from charsniff.source import BytesSource

from conftest import RecordingSource

_GERMAN_LATIN1 = (
    "Die Größe des Gebäudes überraschte die Besucher. "
    "Natürlich können wir das ändern."
).encode("latin-1")


def _boundary_utf8() -> bytes:
    # A three-byte sequence straddles each of the first five window boundaries
    data = bytearray(b"a" * 4096 * 6)
    for k in range(1, 6):
        pos = 4096 * k - 1
        data[pos : pos + 3] = "€".encode()
    return bytes(data)


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"\xef\xbb\xbfHello", Label.UTF_8),
        (b"\xff\xfe" + "Hello".encode("utf-16-le"), Label.UTF_16LE),
        (b"\xfe\xff" + "Hello".encode("utf-16-be"), Label.UTF_16BE),
        (b"\xff\xfe\x00\x00" + "Hello".encode("utf-32-le"), Label.UTF_32LE),
        (b"\x00\x00\xfe\xff" + "Hello".encode("utf-32-be"), Label.UTF_32BE),
        (b"\x1a\x45\xdf\xa3\x01\x42\x86\x81", Label.BINARY),
    ],
)
def test_signature_decides(data: bytes, expected: Label, full_strategy, guessers):
    assert run_detection(BytesSource(data), full_strategy) == expected
    assert guessers == []


def test_utf8_bom_wins_over_invalid_content(full_strategy):
    data = b"\xef\xbb\xbf" + b"\xff\x80\x00" * 1000
    assert run_detection(BytesSource(data), full_strategy) == Label.UTF_8


def test_utf32_le_is_never_reported_as_utf16_le(full_strategy):
    data = b"\xff\xfe\x00\x00" + "Hi".encode("utf-16-le")
    assert run_detection(BytesSource(data), full_strategy) == Label.UTF_32LE


def test_signature_only_checked_for_four_bytes_or_more(full_strategy):
    # A lone UTF-16 mark is scanned instead: two invalid bytes, still UTF-8
    source = RecordingSource(b"\xff\xfe")
    assert run_detection(source, full_strategy) == Label.UTF_8
    assert source.reads == [(0, 2)]


def test_oversized_source_is_binary_without_scanning(full_strategy, guessers):
    source = RecordingSource(b"text", size=MAX_SCAN_SIZE + 1)
    assert run_detection(source, full_strategy) == Label.BINARY
    assert source.reads == [(0, 4)]
    assert guessers == []


def test_oversized_source_with_bom_uses_signature(full_strategy):
    source = RecordingSource(b"\xef\xbb\xbfx", size=MAX_SCAN_SIZE + 1)
    assert run_detection(source, full_strategy) == Label.UTF_8


@pytest.mark.parametrize("length", [1, 100, 4096, 4097, 20_000])
def test_ascii_is_utf8(length: int, full_strategy, minimal_strategy):
    data = (b"The quick brown fox.\r\n\t" * 1000)[:length]
    assert run_detection(BytesSource(data), full_strategy) == Label.UTF_8
    assert run_detection(BytesSource(data), minimal_strategy) == Label.UTF_8


def test_empty_source(full_strategy, minimal_strategy, guessers):
    assert run_detection(BytesSource(b""), full_strategy) == Label.UTF_8
    assert run_detection(BytesSource(b""), minimal_strategy) == Label.UTF_8
    assert guessers[0].closed is False


def test_single_truncated_lead_byte_is_utf8(full_strategy, guessers):
    assert run_detection(BytesSource(b"\xe2"), full_strategy) == Label.UTF_8
    assert guessers[0].closed is False


def test_valid_utf8_text(full_strategy):
    data = "Größe, naïve café, 日本語, 🌍\n".encode() * 500
    assert run_detection(BytesSource(data), full_strategy) == Label.UTF_8


def test_four_errors_still_utf8(full_strategy, guessers):
    data = b"a\x80" * 4
    assert run_detection(BytesSource(data), full_strategy) == Label.UTF_8
    assert guessers[0].closed is False


def test_five_errors_ask_guesser(full_strategy, guessers):
    data = b"a\x80" * 5
    assert run_detection(BytesSource(data), full_strategy) == "windows-1252"
    assert guessers[0].closed is True


def test_latin1_text_uses_guesser_label(full_strategy, guessers):
    data = _GERMAN_LATIN1
    assert run_detection(BytesSource(data), full_strategy) == "windows-1252"
    assert b"".join(guessers[0].fed) == data


def test_guesser_receives_every_window_in_order(full_strategy, guessers):
    data = bytes(range(0x20, 0x80)) * 100  # 9600 bytes
    run_detection(BytesSource(data), full_strategy)
    assert [len(w) for w in guessers[0].fed] == [4096, 4096, 1408]
    assert b"".join(guessers[0].fed) == data


def test_binary_prefix_stops_scan(full_strategy):
    data = b"\x01" * 4096 + b"valid text " * 10_000
    source = RecordingSource(data)
    assert run_detection(source, full_strategy) == Label.BINARY
    assert source.reads == [(0, 4), (0, 4096)]


def test_binary_ratio_just_under_threshold(full_strategy):
    data = b"\x00" * 512 + b"a" * 3584
    assert run_detection(BytesSource(data), full_strategy) == Label.UTF_8


def test_binary_ratio_just_over_threshold(full_strategy):
    data = b"a" * 4 + b"\x00" * 513 + b"a" * 3579
    assert run_detection(BytesSource(data), full_strategy) == Label.BINARY


def test_full_strategy_finds_binary_after_first_window(full_strategy):
    data = b"a" * 8192 + b"\x00" * 4096
    source = RecordingSource(data)
    assert run_detection(source, full_strategy) == Label.BINARY
    assert source.reads[-1] == (8192, 4096)


def test_minimal_strategy_only_checks_first_window(minimal_strategy):
    # Known difference between the strategies: binary content after the
    # first 4096 bytes goes unnoticed without the statistical guesser.
    data = b"a" * 8192 + b"\x00" * 4096
    source = RecordingSource(data)
    assert run_detection(source, minimal_strategy) == Label.UTF_8
    assert source.reads == [(0, 4), (0, 4096)]


def test_minimal_strategy_binary_first_window(minimal_strategy):
    data = b"\x00\x01\x02\x03" * 300
    assert run_detection(BytesSource(data), minimal_strategy) == Label.BINARY


def test_minimal_strategy_ignores_invalid_utf8(minimal_strategy):
    data = _GERMAN_LATIN1 * 10
    assert run_detection(BytesSource(data), minimal_strategy) == Label.UTF_8


def test_sequences_across_window_boundaries(full_strategy, guessers):
    assert run_detection(BytesSource(_boundary_utf8()), full_strategy) == Label.UTF_8
    assert guessers[0].closed is False


def test_detection_is_repeatable(full_strategy):
    source = BytesSource("naïve café".encode("latin-1") * 100)
    assert run_detection(source, full_strategy) == run_detection(source, full_strategy)


def test_read_errors_propagate(full_strategy):
    source = RecordingSource(b"abcd", size=5000)
    with pytest.raises(OSError):
        run_detection(source, full_strategy)
