# pipeline/parse.py
"""
Entry points: raw report bytes -> normalized sections.

  bytes --scrub EOL/UTF-8--> text --lower/compress--> sections --scrub steps--> sections
"""

from __future__ import annotations

import logging
from typing import List

from tn_core.errors import EmptyInputError, UnknownFormatError
from tn_core.models import Section
from tn_utils.scrubbers import compress_spaces, scrub_bad_utf8, scrub_eol
from turn_parser.classifier import remove_non_mapping_lines
from turn_parser.sections import section_input
from turn_parser.steps import normalize_sections
from word.reader import is_docx, read_docx

log = logging.getLogger("parse")


def _looks_like_text(data: bytes) -> bool:
    return len(data) >= 3 and all(0 < b <= 127 for b in data[:3])


def _prepare_text(data: bytes) -> str:
    if not data:
        raise EmptyInputError()
    if not _looks_like_text(data):
        raise UnknownFormatError("input does not start with ascii text")
    text = scrub_bad_utf8(scrub_eol(data)).decode("utf-8")
    # the whole report is lower-cased, free text (unit names) included
    return compress_spaces(text.lower())


def parse_text(data: bytes) -> List[Section]:
    text = _prepare_text(data)
    sections = normalize_sections(section_input(text))
    log.debug("sectioned %d bytes into %d sections", len(data), len(sections))
    return sections


def parse_docx(data: bytes) -> List[Section]:
    if not is_docx(data):
        raise UnknownFormatError("not a word document")
    return parse_text(read_docx(data))


def parse_sections(data: bytes) -> List[Section]:
    """Word document or plain text, whichever the input turns out to be."""
    if not data:
        raise EmptyInputError()
    # decide on the container; errors from the extracted text must propagate
    if is_docx(data):
        return parse_docx(data)
    return parse_text(data)


def filter_text(data: bytes) -> str:
    """Only the lines needed for mapping, one per line."""
    if is_docx(data):
        data = read_docx(data)
    lines = _prepare_text(data).split("\n")
    return "\n".join(remove_non_mapping_lines(lines))
