"""Transform and reconcile area tables between the drawing and the "Area Tables" sheet."""

from .deserializer import ImportResult, deserialize
from .diagnostics import ChangeInstruction, Diagnostic, DiagnosticKind
from .errors import (
    AreaParseError,
    AreaTableLinkError,
    ChangeTargetError,
    MissingColumnError,
    SheetNotFoundError,
)
from .header_reader import read_layout
from .layout import ColumnLayout, ColumnSpan, plan_layout
from .models import Item, SubItem, Table
from .reconcile import ReconcileResult, reconcile
from .serializer import serialize

__all__ = [
    "AreaParseError",
    "AreaTableLinkError",
    "ChangeInstruction",
    "ChangeTargetError",
    "ColumnLayout",
    "ColumnSpan",
    "Diagnostic",
    "DiagnosticKind",
    "ImportResult",
    "Item",
    "MissingColumnError",
    "ReconcileResult",
    "SheetNotFoundError",
    "SubItem",
    "Table",
    "deserialize",
    "plan_layout",
    "read_layout",
    "reconcile",
    "serialize",
]
