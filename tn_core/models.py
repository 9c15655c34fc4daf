from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class LineKind(Enum):
    UNIT_HEADER = "unit-header"
    TURN_HEADER = "turn-header"
    TRIBE_MOVEMENT = "tribe-movement"
    TRIBE_FOLLOWS = "tribe-follows"
    TRIBE_GOES_TO = "tribe-goes-to"
    FLEET_MOVEMENT = "fleet-movement"
    SCOUT_MOVEMENT = "scout-movement"
    UNIT_STATUS = "unit-status"
    UNCLASSIFIED = "unclassified"


@dataclass
class Section:
    """All the mapping lines that follow one unit header."""

    id: int
    header: str
    turn: Optional[str] = None
    movement: Optional[str] = None
    follows: Optional[str] = None
    goes_to: Optional[str] = None
    fleet: Optional[str] = None
    scouts: List[str] = field(default_factory=list)
    status: Optional[str] = None


@dataclass
class HeaderNode:
    kind: str
    value: Optional[str] = None
    # ReportError instance when the field is missing or malformed
    error: Optional[Exception] = None
    input: Optional[str] = None
    children: List["HeaderNode"] = field(default_factory=list)

    def child(self, kind: str) -> Optional["HeaderNode"]:
        return next((c for c in self.children if c.kind == kind), None)


# ---------------- Report records ----------------


@dataclass
class Winds:
    strength: str = ""
    direction: str = ""


@dataclass
class Step:
    follows: str = ""
    goes_to: str = ""
    step: str = ""
    still: bool = False
    observations: str = ""


@dataclass
class Scout:
    id: str
    patrol: List[str] = field(default_factory=list)
    still: bool = False


@dataclass
class Unit:
    id: str
    text: str = ""  # raw header when it could not be parsed
    name: str = ""
    from_hex: str = ""
    to_hex: str = ""
    winds: Optional[Winds] = None
    moves: List[Step] = field(default_factory=list)
    scouts: List[Scout] = field(default_factory=list)
    status: str = ""


@dataclass
class ReportMeta:
    generated_by: str = "tn3"
    version: str = ""
    timestamp: int = 0


@dataclass
class Report:
    file_name: str
    turn_id: str = ""
    units: Dict[str, Unit] = field(default_factory=dict)
    meta: ReportMeta = field(default_factory=ReportMeta)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly dict using the report's wire names; empty values are omitted."""
        out: Dict[str, Any] = {"file-name": self.file_name, "turn-id": self.turn_id}
        if self.units:
            out["units"] = {uid: _unit_as_dict(u) for uid, u in self.units.items()}
        out["metadata"] = _compact(
            {
                "generated-by": self.meta.generated_by,
                "version": self.meta.version,
                "timestamp": self.meta.timestamp,
            },
            keep=("generated-by",),
        )
        return out


def _compact(d: Dict[str, Any], keep: tuple = ()) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if k in keep or v}


def _unit_as_dict(u: Unit) -> Dict[str, Any]:
    return _compact(
        {
            "id": u.id,
            "text": u.text,
            "name": u.name,
            "from": u.from_hex,
            "to": u.to_hex,
            "winds": _compact(
                {"strength": u.winds.strength, "direction": u.winds.direction}
            )
            if u.winds
            else None,
            "moves": [
                _compact(
                    {
                        "follows": s.follows,
                        "goes-to": s.goes_to,
                        "step": s.step,
                        "still": s.still,
                        "observations": s.observations,
                    }
                )
                for s in u.moves
            ],
            "scouts": [
                _compact(
                    {"id": s.id, "scout": list(s.patrol), "still": s.still},
                    keep=("id",),
                )
                for s in u.scouts
            ],
            "status": u.status,
        },
        keep=("id",),
    )
