from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EntryDraft, TimetableEntry


class TimetableRepository(Protocol):
    def list_entries(
        self,
        *,
        class_id: Optional[str] = None,
        teacher_id: Optional[str] = None,
        subject_id: Optional[int] = None,
        day_of_week: Optional[int] = None,
    ) -> Sequence[TimetableEntry]:
        """Equality-filtered select; ``None`` filters are ignored."""

        raise NotImplementedError

    def get_by_id(self, entry_id: int) -> Optional[TimetableEntry]:
        raise NotImplementedError

    def create(self, draft: EntryDraft) -> int:
        raise NotImplementedError

    def replace(self, *, entry_id: int, draft: EntryDraft) -> None:
        """Overwrite every field of an existing entry."""

        raise NotImplementedError

    def delete(self, *, entry_id: int) -> bool:
        raise NotImplementedError

    def count_for_timeslot(self, timeslot_id: int) -> int:
        raise NotImplementedError

    def count_for_room(self, room_id: int) -> int:
        raise NotImplementedError
