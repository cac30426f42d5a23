"""Shared data type definitions (LocalFile, RemoteObject, SyncEvent, etc.)."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SyncOutcome(Enum):
    """
    Per-file sync decision.
    """
    SKIP = "SKIP"
    NEW = "NEW"
    MODIFIED = "MOD"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class Node:
    """
    A cluster member and its position in the roster.
    """
    name: str
    ordinal: int


@dataclass(frozen=True)
class LocalFile:
    """
    Metadata for a file on the local filesystem.
    """
    path: str
    size: int
    mtime: int


@dataclass(frozen=True)
class RemoteObject:
    """
    Metadata for an object in the target bucket.
    """
    key: str
    size: int
    mtime: int


@dataclass(frozen=True)
class SyncEvent:
    """
    Status record emitted for every owned file.

    `outcome` is None when the file failed before a decision could be
    made (stat or probe error); `error` carries the failure message.
    """
    path: str
    outcome: Optional[SyncOutcome]
    size: int = 0
    total_bytes: int = 0
    avg_kbps: float = 0.0
    error: Optional[str] = None


@dataclass
class SyncReport:
    """
    Tally of one sync run.
    """
    skipped: int = 0
    new: int = 0
    modified: int = 0
    failed: int = 0
    bytes_transferred: int = 0

    @property
    def processed(self) -> int:
        return self.skipped + self.new + self.modified + self.failed

    def add(self, event: SyncEvent) -> None:
        if event.error is not None:
            self.failed += 1
        elif event.outcome is SyncOutcome.SKIP:
            self.skipped += 1
        elif event.outcome is SyncOutcome.NEW:
            self.new += 1
            self.bytes_transferred += event.size
        elif event.outcome is SyncOutcome.MODIFIED:
            self.modified += 1
            self.bytes_transferred += event.size
