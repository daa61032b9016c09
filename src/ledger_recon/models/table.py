"""Named result table handed to the report writer."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ResultTable:
    """A named sheet of rows under a fixed header."""

    name: str
    headers: list[str]
    rows: list[list[Any]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def as_cells(self) -> list[list[Any]]:
        """Header row followed by data rows."""
        return [list(self.headers)] + [list(r) for r in self.rows]
