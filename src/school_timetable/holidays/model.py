from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Holiday:
    id: int
    calendar_id: int
    name: str
    date: str
    recurring: bool = False

    def falls_on(self, day: str) -> bool:
        """Recurring holidays repeat on the same month and day every year."""
        if self.recurring:
            return self.date[5:] == day[5:]
        return self.date == day
