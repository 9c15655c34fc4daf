# tests/test_parse.py
import docx
import pytest

from tn_core.errors import EmptyInputError, UnknownFormatError
from pipeline.parse import filter_text, parse_docx, parse_sections, parse_text


def test_empty_input():
    with pytest.raises(EmptyInputError):
        parse_text(b"")
    with pytest.raises(EmptyInputError):
        parse_sections(b"")


def test_unknown_format_for_binary_or_short_input():
    with pytest.raises(UnknownFormatError):
        parse_text(b"\x00\x01\x02tribe 0987,")
    with pytest.raises(UnknownFormatError):
        parse_text(b"\xef\xbb\xbftribe 0987,")  # BOM is not ascii
    with pytest.raises(UnknownFormatError):
        parse_text(b"ab")


def test_parse_docx_rejects_plain_text(sample_report_bytes):
    with pytest.raises(UnknownFormatError):
        parse_docx(sample_report_bytes)


def test_parse_text_sample(sample_report_bytes):
    sections = parse_text(sample_report_bytes)
    assert [s.id for s in sections] == [1, 2, 3]
    tribe, garrison, fleet = sections
    assert tribe.header == "tribe 0987,,current hex = qq 0707,(previous hex = qq 0708)"
    assert tribe.turn.startswith("current turn 900-04(#4),summer,fine")
    assert tribe.movement == "tribe movement:move ne-pr\\pr,o nw"
    assert tribe.scouts == ["scout 1:scout n-pr,0987e1\\ne-gh"]
    assert tribe.status == "0987 status:prairie,o ne nw,0987 0987e1"
    assert garrison.status == "0987g1 status:conifer hills,lcm se s"
    assert fleet.fleet == "mild ne fleet movement:move n-pr,-(ne o,se o)"
    assert fleet.status == "0987f1 status:ocean"


def test_parse_text_repairs_bad_bytes():
    data = b"tribe 0987,,current hex = qq 0707,(previous hex = n/a)\r0987 status:pr\xffairie\r"
    (s,) = parse_text(data)
    assert s.status == "0987 status:pr\ufffdairie"


def test_parse_sections_reads_docx(sample_report_docx, sample_report_bytes):
    from_docx = parse_sections(sample_report_docx.read_bytes())
    from_text = parse_sections(sample_report_bytes)
    assert from_docx == from_text


def test_parse_sections_docx_with_non_ascii_start_raises(tmp_path):
    p = tmp_path / "quoted.docx"
    document = docx.Document()
    document.add_paragraph("“Welcome”")
    document.add_paragraph("Tribe 0987, , Current Hex = QQ 0707, (Previous Hex = QQ 0708)")
    document.save(str(p))

    with pytest.raises(UnknownFormatError):
        parse_sections(p.read_bytes())


def test_filter_text_keeps_mapping_lines(sample_report_bytes):
    lines = filter_text(sample_report_bytes).split("\n")
    assert len(lines) == 10
    assert "some narrative line to drop" not in lines
    assert lines[0].startswith("tribe 0987,")
    assert lines[-1] == "0987f1 status:ocean"
