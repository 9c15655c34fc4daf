# turn_parser/header.py
from __future__ import annotations

import re
from typing import List

from tn_core.errors import (
    InvalidElementIdError,
    MissingElementHeaderError,
    MissingFieldError,
    UnexpectedInputError,
)
from tn_core.models import HeaderNode

# element kind -> id pattern
ELEMENT_ID_RX = (
    re.compile(r"^courier (\d{4}c\d)$"),
    re.compile(r"^element (\d{4}e\d)$"),
    re.compile(r"^fleet (\d{4}f\d)$"),
    re.compile(r"^garrison (\d{4}g\d)$"),
    re.compile(r"^tribe (\d{4})$"),
)

FIELD_KINDS = ("element-id", "name", "current-hex", "previous-hex")


def _element_id(field: str) -> HeaderNode:
    node = HeaderNode(kind="element-id")
    for rx in ELEMENT_ID_RX:
        m = rx.match(field)
        if m:
            node.value = m.group(1)
            return node
    node.error = InvalidElementIdError(field)
    node.input = field
    return node


def parse_element_header(header: str) -> HeaderNode:
    """
    Split an element header into its comma separated fields:
      "tribe 0987,,current hex = qq 0707,(previous hex = qq 0708)"

    Problems are recorded on the nodes rather than raised, so one bad header
    doesn't stop the rest of the report from being read.
    """
    root = HeaderNode(kind="element-header")
    if not header:
        root.error = MissingElementHeaderError()
        root.input = header
        return root

    fields: List[str] = [f.strip() for f in header.split(",")]
    root.children.append(_element_id(fields[0]))

    for i, kind in enumerate(FIELD_KINDS[1:], start=1):
        node = HeaderNode(kind=kind)
        if i < len(fields):
            node.value = fields[i]
        else:
            node.error = MissingFieldError(kind)
        root.children.append(node)

    if len(fields) > len(FIELD_KINDS):
        extra = ",".join(fields[len(FIELD_KINDS) :])
        root.children.append(
            HeaderNode(
                kind="extra-input", error=UnexpectedInputError(extra), input=extra
            )
        )
    return root
