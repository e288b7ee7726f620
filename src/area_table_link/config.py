"""Settings for reading and writing the "Area Tables" workbook."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field


class LinkSettings(BaseModel):
    """Workbook settings, optionally loaded from a YAML file."""

    model_config = ConfigDict(extra="forbid")

    sheet_name: str = Field(default="Area Tables", min_length=1, max_length=31)
    hide_handle_column: bool = Field(
        default=True, description="Hide the Handle column so it is not edited by accident"
    )
    column_width: float = Field(default=20, gt=0)
    address_column_width: float = Field(default=65, gt=0)
    header_fill: str = Field(default="90EE90", description="RGB hex fill of the header cells")
    address_fill: str = Field(default="D3D3D3", description="RGB hex fill of the Address header")


def load_settings(path: str | Path | None = None) -> LinkSettings:
    """Load settings from a YAML mapping, or return the defaults when no path is given.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    pydantic.ValidationError
        If the file has unknown keys or invalid values.
    """
    if path is None:
        return LinkSettings()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return LinkSettings.model_validate(data)
