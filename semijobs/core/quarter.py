import math
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Quarter:
    quarter: int
    year: int

    @property
    def label(self) -> str:
        return f"Q{self.quarter}_{self.year}"


def get_current_quarter(today: Optional[date] = None) -> Quarter:
    """Calendar quarter for ``today`` (defaults to the current date)."""
    today = today or date.today()
    return Quarter(quarter=math.ceil(today.month / 3), year=today.year)
