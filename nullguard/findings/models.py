# Pydantic data models for comparison findings: Finding and its source Location.

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class Location(BaseModel):
    """Source span of the offending operand (file, start/end line and column, bytes)."""

    path: Path
    line: int = Field(..., ge=1, description="1-based start line")
    column: int = Field(..., ge=1, description="1-based start column")
    end_line: Optional[int] = Field(None, ge=1)
    end_column: Optional[int] = Field(None, ge=1)
    start_byte: Optional[int] = Field(None, ge=0)
    end_byte: Optional[int] = Field(None, ge=0)
    snippet: Optional[str] = None

    model_config = {"arbitrary_types_allowed": True, "frozen": True}


class Finding(BaseModel):
    """A single diagnostic reported by a rule (e.g. `x == null` at line 3)."""

    rule_id: str
    message: str
    location: Location
    severity: str = Field(default="warning", description="e.g. error, warning, info")

    model_config = {"arbitrary_types_allowed": True, "frozen": True}
