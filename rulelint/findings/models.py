# Pydantic data model for rule violations: one reported finding per line.

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class Violation(BaseModel):
    """A single issue reported by a rule (e.g. unnecessary semicolon at line 42).

    Value type: created once by the rule that found it, never mutated.
    """

    rule_id: str
    line_number: int = Field(..., ge=1, description="1-based line number")
    source_line: str = Field(..., description="Verbatim text of the offending line")
    message: str
    path: Optional[Path] = None
    priority: int = Field(default=3, ge=1, le=3, description="1 = high, 3 = low")

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    @property
    def severity(self) -> str:
        """Display severity derived from the rule priority."""
        return PRIORITY_SEVERITY.get(self.priority, "info")


PRIORITY_SEVERITY = {
    1: "error",
    2: "warning",
    3: "info",
}
