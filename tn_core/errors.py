# tn_core/errors.py
from __future__ import annotations


class ReportError(ValueError):
    """Base class for conditions raised while reading a turn report."""

    message = "report error"

    def __init__(self, detail: str | None = None):
        self.detail = detail
        super().__init__(f"{self.message}: {detail}" if detail else self.message)


class EmptyInputError(ReportError):
    message = "empty input"


class UnknownFormatError(ReportError):
    message = "unknown format"


class MissingElementHeaderError(ReportError):
    message = "missing element header"


class InvalidElementIdError(ReportError):
    message = "invalid element id"


class MissingFieldError(ReportError):
    message = "missing field"


class UnexpectedInputError(ReportError):
    message = "unexpected input"
