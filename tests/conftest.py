# tests/conftest.py
import docx
import pytest

# Mixed case, CRLF endings and sloppy spacing, the way reports arrive.
SAMPLE_LINES = [
    "Tribe 0987, , Current Hex = QQ 0707, (Previous Hex = QQ 0708)",
    "Current Turn 900-04 (#4), Summer, FINE\tNext Turn 900-05 (#5), 12/11/2023",
    "Tribe Movement: Move NE-PR\\-PR, O NW",
    "Scout 1: Scout N-PR, 0987e1\\ NE-GH",
    "0987 Status: PRAIRIE, O NE, NW, 0987, 0987e1",
    "Some narrative line to drop",
    "",
    "Garrison 0987g1, West Harbor, Current Hex = QQ 0707, (Previous Hex = N/A)",
    "0987g1 Status: CONIFER HILLS, Lcm SE, S",
    "Fleet 0987f1, , Current Hex = QQ 0606, (Previous Hex = QQ 0606)",
    "Mild NE Fleet Movement: Move N-PR,-(NE O, SE O,)\\",
    "0987f1 Status: OCEAN",
]


@pytest.fixture
def sample_report_bytes():
    return ("\r\n".join(SAMPLE_LINES) + "\r\n").encode("utf-8")


@pytest.fixture
def sample_report_txt(tmp_path, sample_report_bytes):
    p = tmp_path / "0900-04.0987.report.txt"
    p.write_bytes(sample_report_bytes)
    return p


@pytest.fixture
def sample_report_docx(tmp_path):
    p = tmp_path / "0900-04.0987.report.docx"
    document = docx.Document()
    for line in SAMPLE_LINES:
        document.add_paragraph(line)
    document.save(str(p))
    return p
