from __future__ import annotations

import codecs
from typing import Optional, Tuple


# U+FFFD encoded as UTF-8
REPLACEMENT = "\ufffd".encode("utf-8")

BAD_BYTE_HANDLER = "tn-replace-byte"


def _replace_one_byte(err: UnicodeError) -> Tuple[str, int]:
    if not isinstance(err, UnicodeDecodeError):
        raise err
    # resume right after the first bad byte, not after the whole bad sequence
    return "\ufffd", err.start + 1


codecs.register_error(BAD_BYTE_HANDLER, _replace_one_byte)


# ---------------- Line endings ----------------


def scrub_eol(data: bytes) -> bytes:
    """
    Convert Windows (CR+LF) and classic Mac (CR) line endings to LF.
    LF passes through unchanged.
    """
    if not data:
        return data
    # order matters: CR+LF first so the CR isn't turned into a second LF
    return data.replace(b"\r\n", b"\n").replace(b"\r", b"\n")


# ---------------- Encoding ----------------


def scrub_bad_utf8(data: Optional[bytes]) -> Optional[bytes]:
    """
    Replace every byte that doesn't start a valid UTF-8 sequence with the
    encoded replacement character. One replacement per bad byte.
    None stays None; empty stays empty.
    """
    if data is None:
        return None
    if not data:
        return data
    return data.decode("utf-8", BAD_BYTE_HANDLER).encode("utf-8")


# ---------------- Whitespace ----------------

SPACE_DELIMITERS = frozenset("\n,()\\:")


def compress_spaces(text: str) -> str:
    """
    Reduce runs of spaces and tabs to a single space.
    A run is dropped entirely when it touches a delimiter or either end of
    the input.

      "tribe   0123 ,  ( status ). " -> "tribe 0123,(status)."
    """
    if not text:
        return text

    out = []
    i, n = 0, len(text)
    prev_is_delimiter = True  # start of input
    while i < n:
        ch = text[i]
        if ch == " " or ch == "\t":
            while i < n and text[i] in " \t":
                i += 1
            next_is_delimiter = i == n or text[i] in SPACE_DELIMITERS
            if not (prev_is_delimiter or next_is_delimiter):
                out.append(" ")
            continue
        out.append(ch)
        prev_is_delimiter = ch in SPACE_DELIMITERS
        i += 1
    return "".join(out)
