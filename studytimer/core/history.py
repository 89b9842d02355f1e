# -*- coding: utf-8 -*-

from typing import Iterator, List, Optional, Tuple

from studytimer.domain.models import SessionRecord


class SessionHistoryLog:
    """
    Completed phases, newest first.
    Append-only and unbounded for the lifetime of the engine.
    """

    def __init__(self):
        # stored oldest-first so append stays O(1); read back reversed
        self._records: List[SessionRecord] = []

    def append(self, record: SessionRecord) -> None:
        self._records.append(record)

    def all(self) -> Tuple[SessionRecord, ...]:
        return tuple(reversed(self._records))

    def latest(self) -> Optional[SessionRecord]:
        return self._records[-1] if self._records else None

    def __iter__(self) -> Iterator[SessionRecord]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._records)
