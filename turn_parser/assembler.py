# turn_parser/assembler.py
"""
Turn normalized sections into a Report keyed by unit id.

Sections must already have been scrubbed by turn_parser.steps.
"""

from __future__ import annotations

import json
import re
import time
from typing import Iterable, List, Optional

from tn_core.errors import EmptyInputError, MissingElementHeaderError
from tn_core.models import Report, ReportMeta, Scout, Section, Step, Unit, Winds
from turn_parser import __version__
from turn_parser.classifier import DIRECTION, UNIT_ID
from turn_parser.header import parse_element_header

HEX = r"(n/a|(?:##|[a-z]{2}) \d{4})"

# "tribe 0138,current hex = ## 0709,(previous hex = ## 0709)"
# "garrison 0138g1,west harbor,current hex = qq 0709,(previous hex = n/a)"
RX_UNIT_HEADER = re.compile(
    rf"^(?:courier|element|garrison|fleet|tribe) ({UNIT_ID}),(?:([^,]*),)?"
    rf"current hex = {HEX},\(previous hex = {HEX}\)$"
)

# "current turn 900-04(#4),summer,fine"
RX_TURN_HEADER = re.compile(r"^current turn (\d{3,4})-(\d{1,2})")

RX_TRIBE_MOVEMENT = re.compile(r"^tribe movement:move(.*)$")
RX_TRIBE_FOLLOWS = re.compile(rf"^tribe follows ({UNIT_ID})$")
RX_TRIBE_GOES_TO = re.compile(r"^tribe goes to ([a-z][a-z] \d{4})$")
RX_FLEET_MOVEMENT = re.compile(
    rf"^(calm|mild|strong|gale) ({DIRECTION}) fleet movement:move(.*)$"
)
RX_SCOUT_PATROL = re.compile(r"^scout ([1-8]):scout(.*)$")
RX_UNIT_STATUS = re.compile(rf"{UNIT_ID} status:(.*)$")


def _split_steps(payload: str) -> List[str]:
    steps = []
    for step in payload.split("\\"):
        step = step.strip(", ").strip()
        if step:
            steps.append(step)
    return steps


def _unit_from_header(section: Section) -> Unit:
    m = RX_UNIT_HEADER.match(section.header)
    if m:
        return Unit(
            id=m.group(1),
            name=(m.group(2) or "").strip(),
            from_hex=m.group(4),
            to_hex=m.group(3),
        )

    # header is slightly off: keep the raw text so players can find it
    node = parse_element_header(section.header)
    element = node.child("element-id")
    if element is not None and element.error is None and element.value:
        return Unit(id=element.value, text=section.header)
    return Unit(id=f"unit-{section.id:03d}", text=section.header)


def _turn_id(line: str) -> Optional[str]:
    m = RX_TURN_HEADER.match(line)
    if not m:
        return None
    return f"{int(m.group(1)):04d}-{int(m.group(2)):02d}"


def _fleet_steps(payload: str) -> List[Step]:
    out: List[Step] = []
    for step in _split_steps(payload):
        head, sep, obs = step.partition("-(")
        if not sep:
            out.append(Step(step=step))
        else:
            out.append(
                Step(
                    step=head.rstrip(",").strip(),
                    observations="(" + obs.strip(),
                )
            )
    return out


def build_unit(section: Section) -> Unit:
    unit = _unit_from_header(section)

    if section.movement:
        m = RX_TRIBE_MOVEMENT.match(section.movement)
        if m:
            steps = _split_steps(m.group(1))
            unit.moves.extend(Step(step=s) for s in steps)
            if not steps:
                unit.moves.append(Step(still=True))

    if section.follows:
        m = RX_TRIBE_FOLLOWS.match(section.follows)
        if m:
            unit.moves.append(Step(follows=m.group(1)))

    if section.goes_to:
        m = RX_TRIBE_GOES_TO.match(section.goes_to)
        if m:
            unit.moves.append(Step(goes_to=m.group(1)))

    if section.fleet:
        m = RX_FLEET_MOVEMENT.match(section.fleet)
        if m:
            unit.winds = Winds(strength=m.group(1), direction=m.group(2))
            unit.moves.extend(_fleet_steps(m.group(3)))

    for line in section.scouts:
        m = RX_SCOUT_PATROL.match(line)
        if not m:
            continue
        patrol = _split_steps(m.group(2))
        unit.scouts.append(Scout(id=m.group(1), patrol=patrol, still=not patrol))

    if section.status:
        m = RX_UNIT_STATUS.match(section.status)
        if m:
            unit.status = m.group(1)

    return unit


def to_report(
    file_name: str,
    sections: Iterable[Section],
    *,
    generated_by: str = "tn3",
    timestamp: Optional[int] = None,
) -> Report:
    sections = list(sections)
    if not sections:
        raise EmptyInputError(file_name)

    report = Report(
        file_name=file_name,
        meta=ReportMeta(
            generated_by=generated_by,
            version=__version__,
            timestamp=int(time.time()) if timestamp is None else timestamp,
        ),
    )
    for section in sections:
        if not section.header:
            raise MissingElementHeaderError(f"section {section.id}")
        if section.turn:
            report.turn_id = _turn_id(section.turn) or report.turn_id
        unit = build_unit(section)
        report.units[unit.id] = unit
    return report


def report_to_json(report: Report, *, indent: Optional[int] = 2) -> str:
    return json.dumps(report.to_dict(), indent=indent, ensure_ascii=True)
