# tests/test_scrubbers.py
import time

import pytest

from tn_utils.scrubbers import REPLACEMENT, compress_spaces, scrub_bad_utf8, scrub_eol


def test_scrub_eol_mixed_endings():
    assert scrub_eol(b"a\r\nb\rc\nd") == b"a\nb\nc\nd"


def test_scrub_eol_lone_trailing_cr():
    assert scrub_eol(b"tribe 0987\r") == b"tribe 0987\n"
    assert scrub_eol(b"tribe 0987\r") == scrub_eol(b"tribe 0987\r\n")


def test_scrub_eol_cr_then_crlf_is_two_lines():
    assert scrub_eol(b"a\r\r\nb") == b"a\n\nb"


def test_scrub_eol_lf_only_is_noop():
    data = b"line one\nline two\n\n"
    assert scrub_eol(data) == data
    assert b"\r" not in scrub_eol(b"\r\r\n\r")
    assert scrub_eol(b"") == b""


def test_scrub_bad_utf8_absent_and_empty():
    assert scrub_bad_utf8(None) is None
    assert scrub_bad_utf8(b"") == b""


def test_scrub_bad_utf8_valid_is_noop():
    data = "héllo → wörld".encode("utf-8")
    assert scrub_bad_utf8(data) == data


def test_scrub_bad_utf8_replaces_each_bad_byte():
    assert scrub_bad_utf8(b"ab\xffcd") == b"ab" + REPLACEMENT + b"cd"
    # truncated 3-byte sequence: one replacement per byte
    out = scrub_bad_utf8(b"x\xe2\x82")
    assert out == b"x" + REPLACEMENT + REPLACEMENT
    out.decode("utf-8")


def test_scrub_bad_utf8_large_cp1252_report():
    # accented names saved as cp1252: one bad byte per line, ~1 MB
    line = "0987 status:caf\xe9 river ne\n".encode("cp1252")
    data = line * 40_000
    started = time.perf_counter()
    out = scrub_bad_utf8(data)
    elapsed = time.perf_counter() - started

    expected = "0987 status:caf\ufffd river ne\n".encode("utf-8") * 40_000
    assert out == expected
    assert elapsed < 2.0, f"took {elapsed:.2f}s"


def test_scrub_bad_utf8_output_always_decodes():
    for data in (b"\x80\x81", b"\xc3", b"ok\xed\xa0\x80ok", bytes(range(256))):
        scrub_bad_utf8(data).decode("utf-8")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", ""),
        ("tribe0123", "tribe0123"),
        ("tribe 0123", "tribe 0123"),
        ("tribe   0123", "tribe 0123"),
        ("tribe,   0123", "tribe,0123"),
        ("tribe,   0123  ", "tribe,0123"),
        ("tribe\t \t0123", "tribe 0123"),
        ("  tribe 0123", "tribe 0123"),
        ("tribe 0123 \n 0123 status", "tribe 0123\n0123 status"),
        ("tribe   0123,   status:  active  ( good )", "tribe 0123,status:active(good)"),
    ],
)
def test_compress_spaces(raw, expected):
    assert compress_spaces(raw) == expected


@pytest.mark.parametrize("delim", [",", "(", ")", "\\", ":"])
def test_compress_spaces_drops_runs_touching_delimiters(delim):
    assert compress_spaces("a" + delim + "   " + "b") == "a" + delim + "b"
    assert compress_spaces("a" + "   " + delim + "b") == "a" + delim + "b"


def test_compress_spaces_is_idempotent():
    samples = [
        "tribe   0123,   status:  active  ( good )",
        " \t lead and trail \t ",
        "scout 1: scout  n-pr ,  0987e1 \\  ne-gh",
        "a b  c\t\td \n  e",
    ]
    for s in samples:
        once = compress_spaces(s)
        assert compress_spaces(once) == once
