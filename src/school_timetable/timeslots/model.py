from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Timeslot:
    """Daily time window; times are zero-padded ``HH:MM:SS`` strings."""

    id: int
    name: str
    start_time: str
    end_time: str
    day_of_week: Optional[int] = None
    is_break: bool = False
