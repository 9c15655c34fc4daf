# tests/test_word_reader.py
import io
import zipfile

import pytest

from tn_core.errors import UnknownFormatError
from word.reader import is_docx, read_docx


def test_is_docx(sample_report_docx, sample_report_bytes):
    assert is_docx(sample_report_docx.read_bytes())
    assert not is_docx(sample_report_bytes)
    assert not is_docx(b"")


def test_plain_zip_is_not_docx():
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("hello.txt", "hi")
    assert not is_docx(buf.getvalue())
    assert not is_docx(b"PK\x03\x04 truncated")


def test_read_docx_rejects_text(sample_report_bytes):
    with pytest.raises(UnknownFormatError):
        read_docx(sample_report_bytes)


def test_read_docx_paragraphs(sample_report_docx):
    lines = read_docx(sample_report_docx.read_bytes()).decode("utf-8").split("\n")
    assert lines[0] == "Tribe 0987, , Current Hex = QQ 0707, (Previous Hex = QQ 0708)"
    assert "\t" in lines[1]
    assert lines[-1] == "0987f1 Status: OCEAN"
