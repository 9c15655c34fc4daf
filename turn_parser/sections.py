# turn_parser/sections.py
from __future__ import annotations

from typing import List, Optional

from tn_core.models import LineKind, Section
from turn_parser.classifier import classify

# scalar Section field for each kind; later lines overwrite earlier ones
_FIELD_FOR_KIND = {
    LineKind.TURN_HEADER: "turn",
    LineKind.TRIBE_MOVEMENT: "movement",
    LineKind.TRIBE_FOLLOWS: "follows",
    LineKind.TRIBE_GOES_TO: "goes_to",
    LineKind.FLEET_MOVEMENT: "fleet",
    LineKind.UNIT_STATUS: "status",
}


def section_input(text: str) -> List[Section]:
    """
    Group classified lines under the unit header that introduces them.

    Lines before the first header have no section and are dropped, as are
    blank and unclassified lines. Sections come back in header order.
    """
    sections: List[Section] = []
    current: Optional[Section] = None
    for line in text.split("\n"):
        if not line:
            continue
        kind = classify(line)
        if kind is LineKind.UNIT_HEADER:
            current = Section(id=len(sections) + 1, header=line)
            sections.append(current)
        elif current is None or kind is LineKind.UNCLASSIFIED:
            continue
        elif kind is LineKind.SCOUT_MOVEMENT:
            current.scouts.append(line)
        else:
            setattr(current, _FIELD_FOR_KIND[kind], line)
    return sections
