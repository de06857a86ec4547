from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Room:
    id: int
    name: str
    capacity: Optional[int] = None
    description: Optional[str] = None
