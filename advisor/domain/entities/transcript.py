from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EntryStatus(str, Enum):
    pending = "pending"
    resolved = "resolved"
    failed = "failed"


@dataclass
class TranscriptEntry:
    id: int
    role: str
    text: str
    status: EntryStatus = EntryStatus.resolved

    def resolve(self, text: str) -> None:
        self._settle(text, EntryStatus.resolved)

    def fail(self, text: str) -> None:
        self._settle(text, EntryStatus.failed)

    def _settle(self, text: str, status: EntryStatus) -> None:
        if self.status is not EntryStatus.pending:
            raise ValueError(f"Transcript entry {self.id} is already {self.status.value}")
        self.text = text
        self.status = status


class Transcript:
    """Visible chat bubbles. Entry identity and order never change."""

    def __init__(self) -> None:
        self._entries: list[TranscriptEntry] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[TranscriptEntry, ...]:
        return tuple(self._entries)

    def append(self, role: str, text: str, status: EntryStatus = EntryStatus.resolved) -> TranscriptEntry:
        entry = TranscriptEntry(id=self._next_id, role=role, text=text, status=status)
        self._next_id += 1
        self._entries.append(entry)
        return entry

    def last(self, role: str | None = None) -> TranscriptEntry | None:
        for entry in reversed(self._entries):
            if role is None or entry.role == role:
                return entry
        return None
