"""Exceptions raised by the area table link."""


class AreaTableLinkError(Exception):
    """Base class for all area table link errors."""


class MissingColumnError(AreaTableLinkError):
    """A mandatory header column was not found in the sheet.

    Structural: the whole import is aborted before any row is parsed.
    """

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Missing column(s) in sheet: {', '.join(self.missing)}")


class AreaParseError(AreaTableLinkError, ValueError):
    """Area text that cannot be read as a number."""

    def __init__(self, text: object):
        self.text = text
        super().__init__(f"Invalid area: {text!r}")


class SheetNotFoundError(AreaTableLinkError):
    """The workbook has no sheet with the expected name."""


class ChangeTargetError(AreaTableLinkError):
    """A change instruction points at a cell that does not exist in the host table."""
