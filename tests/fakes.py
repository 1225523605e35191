# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class RecordingSlotStorage:
    """
    In-memory SlotStorage that records every write.

    Lets tests assert how often (and with what payload) the store persisted.
    """

    slots: dict[str, str] = field(default_factory=dict)
    writes: list[tuple[str, str]] = field(default_factory=list)

    def read(self, key: str) -> str | None:
        return self.slots.get(key)

    def write(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        self.slots[key] = value

    def remove(self, key: str) -> None:
        self.slots.pop(key, None)

    def describe(self) -> str:
        return "recording"


class BrokenSlotStorage:
    """SlotStorage whose reads (and optionally writes) fail like a broken disk."""

    def __init__(self, *, fail_writes: bool = False) -> None:
        self.fail_writes = fail_writes
        self.written: dict[str, str] = {}

    def read(self, key: str) -> str | None:
        raise OSError("disk on fire")

    def write(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError("read-only filesystem")
        self.written[key] = value

    def remove(self, key: str) -> None:
        self.written.pop(key, None)

    def describe(self) -> str:
        return "broken"
