# turn_parser/steps.py
"""
Repair punctuation in movement, scout, fleet and status lines.

After scrubbing, a backslash separates steps and a comma separates the
results within a step. Lists inside a single result (the directions after an
edge code, the unit ids seen in a hex) are joined with spaces.

Example:
  "tribe movement:move ne-pr\\-pr,o,nw" -> "tribe movement:move ne-pr\\pr,o nw"

Callers must compress spaces before scrubbing.
"""

from __future__ import annotations

import re
from typing import Iterable, List

from tn_core.models import Section
from turn_parser.classifier import DIRECTION, UNIT_ID


# --------- Punctuation repair ---------

RX_BACKSLASH_DASH = re.compile(r"\\+-+ *")
RX_BACKSLASH_COMMA = re.compile(r"\\+,+")
RX_COMMA_BACKSLASH = re.compile(r",+\\+")
RX_BACKSLASH_UNIT = re.compile(rf"\\+({UNIT_ID})")
RX_DIRECTION_UNIT = re.compile(rf"\b({DIRECTION}) ({UNIT_ID})")
RX_RUN_OF_BACKSLASHES = re.compile(r"\\\\+")
RX_RUN_OF_COMMAS = re.compile(r",,+")

# --------- Step results ---------

# no leading "^": these are matched with pattern.match(line, pos)
RX_EDGE_CODE = re.compile(r",(?:hsm|l|lcm|ljm|lsm|o)\b")
RX_RESULT_UNIT = re.compile(rf",{UNIT_ID}\b")
RX_LIST_DIRECTION = re.compile(r"[, ][ns][ew]?\b")
RX_LIST_UNIT = re.compile(rf"[, ]{UNIT_ID}\b")


def _repair_separators(line: str) -> str:
    # a dash right after a step separator is noise
    line = RX_BACKSLASH_DASH.sub(r"\\", line)

    # adjacent step and result separators collapse to a step separator
    line = RX_BACKSLASH_COMMA.sub(r"\\", line)
    line = RX_COMMA_BACKSLASH.sub(r"\\", line)

    # a unit id glued onto a backslash or a direction is missing its comma
    line = RX_BACKSLASH_UNIT.sub(r",\1", line)
    line = RX_DIRECTION_UNIT.sub(r"\1,\2", line)

    line = RX_RUN_OF_BACKSLASHES.sub(r"\\", line)
    line = RX_RUN_OF_COMMAS.sub(",", line)
    return line


def _join_list(line: str, chars: List[str], pos: int, rx: re.Pattern) -> int:
    m = rx.match(line, pos)
    while m:
        chars[pos] = " "
        pos = m.end()
        m = rx.match(line, pos)
    return pos


def scrub_step_results(line: str) -> str:
    """
    Walk the results from the first comma on. After an edge code, join the
    directions that follow it; after a unit id, join the unit ids that
    follow it. Every comma left behind separates two results.
    """
    pos = line.find(",")
    if pos < 0:
        return line

    # matches run against the original line; only commas behind pos change
    chars = list(line)
    while 0 <= pos < len(line):
        m = RX_EDGE_CODE.match(line, pos)
        if m:
            pos = _join_list(line, chars, m.end(), RX_LIST_DIRECTION)
            continue
        m = RX_RESULT_UNIT.match(line, pos)
        if m:
            pos = _join_list(line, chars, m.end(), RX_LIST_UNIT)
            continue
        pos = line.find(",", pos + 1)
    return "".join(chars)


# --------- Line scrubbers ---------


def preprocess_movement_line(line: str) -> str:
    """Separator repair only, including the fleet observation fix."""
    line = _repair_separators(line)
    line = line.replace(",)", ")")
    return line.rstrip("\\")


def _scrub(line: str, *, fleet: bool = False) -> str:
    if not line:
        return line
    line = _repair_separators(line)
    if fleet:
        # observations must not end with a dangling separator
        line = line.replace(",)", ")")
    line = line.rstrip("\\")
    return scrub_step_results(line)


def scrub_movement_line(line: str) -> str:
    return _scrub(line)


def scrub_scout_line(line: str) -> str:
    return _scrub(line)


def scrub_status_line(line: str) -> str:
    return _scrub(line)


def scrub_fleet_line(line: str) -> str:
    return _scrub(line, fleet=True)


def scrub_follows_line(line: str) -> str:
    return line.strip() if line else line


def scrub_goes_to_line(line: str) -> str:
    return line.strip() if line else line


def normalize_section(section: Section) -> Section:
    """Scrub every movement and status field of a section, in place."""
    if section.movement:
        section.movement = scrub_movement_line(section.movement)
    if section.follows:
        section.follows = scrub_follows_line(section.follows)
    if section.goes_to:
        section.goes_to = scrub_goes_to_line(section.goes_to)
    if section.fleet:
        section.fleet = scrub_fleet_line(section.fleet)
    section.scouts = [scrub_scout_line(s) for s in section.scouts]
    if section.status:
        section.status = scrub_status_line(section.status)
    return section


def normalize_sections(sections: Iterable[Section]) -> List[Section]:
    return [normalize_section(s) for s in sections]
