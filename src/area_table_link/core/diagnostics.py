"""Diagnostics and change instructions emitted by import and reconciliation."""

import logging
from enum import Enum

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    PARSE_FAILURE = "parse_failure"
    DUPLICATE_HANDLE = "duplicate_handle"
    UNMATCHED_HANDLE = "unmatched_handle"
    UNMATCHED_ITEM = "unmatched_item"
    READONLY_SKIP = "readonly_skip"
    ORPHAN_SUB_ITEM = "orphan_sub_item"


class Diagnostic(BaseModel):
    """A non-fatal problem found while importing or reconciling."""

    kind: DiagnosticKind
    message: str
    handle: str | None = None
    row: int | None = Field(default=None, description="1-based sheet or table row")
    field: str | None = None

    def __str__(self) -> str:
        return self.message


class ChangeInstruction(BaseModel):
    """A field-level update for the host document to apply."""

    handle: str
    field: str = Field(description="number, parzelle, address or area")
    item: str | None = None
    sub_item: str | None = None
    old_value: str | float | None = None
    new_value: str | float | None = None

    @property
    def path(self) -> str:
        """Field path such as ``number`` or ``Temp. Nutzung/Kiosk``."""
        if self.item is None:
            return self.field
        if self.sub_item is None:
            return self.item
        return f"{self.item}/{self.sub_item}"

    def __str__(self) -> str:
        return f"{self.handle} {self.path}: {self.old_value!r} -> {self.new_value!r}"


def record(diagnostics: list[Diagnostic], kind: DiagnosticKind, message: str, **context) -> Diagnostic:
    """Append a diagnostic and log it."""
    diagnostic = Diagnostic(kind=kind, message=message, **context)
    diagnostics.append(diagnostic)
    logger.warning(message)
    return diagnostic
