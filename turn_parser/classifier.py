# turn_parser/classifier.py
"""
Recognize the handful of line shapes a turn report uses for mapping.

Input lines are expected to be lower-cased and space-compressed already.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from tn_core.models import LineKind


# --------- Patterns ---------

UNIT_ID = r"\d{4}(?:[cefg]\d)?"
DIRECTION = r"(?:ne|se|sw|nw|n|s)"

# Ordered: first match wins.
LINE_TABLE: Tuple[Tuple[LineKind, re.Pattern], ...] = (
    (
        LineKind.UNIT_HEADER,
        re.compile(
            r"^(?:tribe \d{4}|courier \d{4}c\d|element \d{4}e\d"
            r"|fleet \d{4}f\d|garrison \d{4}g\d),"
        ),
    ),
    (LineKind.TURN_HEADER, re.compile(r"^current turn \d{3,4}-\d{1,2}\(#\d+\),")),
    (LineKind.TRIBE_MOVEMENT, re.compile(r"^tribe movement:")),
    (LineKind.TRIBE_FOLLOWS, re.compile(r"^tribe follows ")),
    (LineKind.TRIBE_GOES_TO, re.compile(r"^tribe goes to ")),
    (
        LineKind.FLEET_MOVEMENT,
        re.compile(rf"^(?:calm|mild|strong|gale) {DIRECTION} fleet movement:"),
    ),
    (LineKind.SCOUT_MOVEMENT, re.compile(r"^scout [1-8]:")),
    (LineKind.UNIT_STATUS, re.compile(rf"^{UNIT_ID} status:")),
)

MOVEMENT_KINDS = frozenset(
    {
        LineKind.TRIBE_MOVEMENT,
        LineKind.TRIBE_FOLLOWS,
        LineKind.TRIBE_GOES_TO,
        LineKind.FLEET_MOVEMENT,
        LineKind.SCOUT_MOVEMENT,
    }
)

_PATTERNS = dict(LINE_TABLE)


def classify(line: str) -> LineKind:
    for kind, rx in LINE_TABLE:
        if rx.match(line):
            return kind
    return LineKind.UNCLASSIFIED


# --------- Predicates ---------


def _matches(kind: LineKind, line: str) -> bool:
    return _PATTERNS[kind].match(line) is not None


def is_unit_header(line: str) -> bool:
    """tribe, courier, element, fleet or garrison header."""
    return _matches(LineKind.UNIT_HEADER, line)


def is_turn_header(line: str) -> bool:
    return _matches(LineKind.TURN_HEADER, line)


def is_fleet_movement(line: str) -> bool:
    return _matches(LineKind.FLEET_MOVEMENT, line)


def is_scout_movement(line: str) -> bool:
    # "scout 1:scout s-pr"
    return _matches(LineKind.SCOUT_MOVEMENT, line)


def is_unit_movement(line: str) -> bool:
    return (
        _matches(LineKind.TRIBE_MOVEMENT, line)
        or _matches(LineKind.TRIBE_FOLLOWS, line)
        or _matches(LineKind.TRIBE_GOES_TO, line)
    )


def is_movement_line(line: str) -> bool:
    return any(_matches(kind, line) for kind in MOVEMENT_KINDS)


def is_unit_status(line: str) -> bool:
    return _matches(LineKind.UNIT_STATUS, line)


# --------- Line lists ---------


def remove_non_mapping_lines(lines: Sequence[str]) -> List[str]:
    """Keep headers, turn headers, movement and status lines, in input order."""
    return [ln for ln in lines if classify(ln) is not LineKind.UNCLASSIFIED]


def remove_leading_blank_lines(lines: Optional[List[str]]) -> Optional[List[str]]:
    if lines is None:
        return None
    start = 0
    while start < len(lines) and not lines[start]:
        start += 1
    return lines[start:]


def remove_trailing_blank_lines(lines: Optional[List[str]]) -> Optional[List[str]]:
    if lines is None:
        return None
    end = len(lines)
    while end > 0 and not lines[end - 1]:
        end -= 1
    return lines[:end]
