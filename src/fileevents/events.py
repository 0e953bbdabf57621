"""Event models shared across the enumeration and query components."""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import PurePath
from typing import Optional, Union


class EventKind(str, Enum):
    """Types of filesystem changes an event record can describe."""

    CREATED = "Created"
    DELETED = "Deleted"
    MODIFIED = "Modified"
    RENAMED = "Renamed"

    @classmethod
    def parse(cls, value: Union["EventKind", str]) -> "EventKind":
        """Coerce a kind name or value into a member, case-insensitively."""

        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Event kind must be a string, got {type(value).__name__}")

        normalized = value.strip().lower()
        # Watchers commonly report content changes as "changed"
        if normalized == "changed":
            return cls.MODIFIED
        for member in cls:
            if normalized in (member.value.lower(), member.name.lower()):
                return member

        allowed = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown event kind {value!r}; expected one of: {allowed}")


@dataclass
class EventRecord:
    """A single change observed for one file."""

    file_name: str
    extension: str
    file_path: str
    event_kind: EventKind
    timestamp: datetime

    def __setattr__(self, name: str, value) -> None:
        if name == "event_kind":
            value = EventKind.parse(value)
        super().__setattr__(name, value)

    def __post_init__(self) -> None:
        if not self.file_name:
            raise ValueError("file_name must not be empty")
        if any(sep in self.file_name for sep in _SEPARATORS):
            raise ValueError(f"file_name {self.file_name!r} must not contain a directory part")
        if not _is_last_segment(self.file_path, self.file_name):
            raise ValueError(
                f"file_name {self.file_name!r} is not the last segment of file_path {self.file_path!r}"
            )
        if self.extension:
            if not self.extension.startswith("."):
                raise ValueError(f"extension {self.extension!r} must start with '.'")
            if not self.file_name.endswith(self.extension):
                raise ValueError(
                    f"file_name {self.file_name!r} does not end with extension {self.extension!r}"
                )

    @classmethod
    def from_change(
        cls,
        path: Union[str, PurePath],
        kind: Union[EventKind, str],
        timestamp: Optional[datetime] = None,
    ) -> "EventRecord":
        """Build a record from a raw ``(path, kind, time)`` change tuple."""

        file_path = str(path)
        file_name = os.path.basename(file_path)
        if not file_name:
            raise ValueError(f"Cannot derive a file name from {file_path!r}")

        return cls(
            file_name=file_name,
            extension=_extension_of(file_name),
            file_path=file_path,
            event_kind=EventKind.parse(kind),
            timestamp=timestamp if timestamp is not None else datetime.now(),
        )

    def as_row(self) -> tuple:
        return (
            self.file_name,
            self.extension,
            self.file_path,
            self.event_kind.value,
            self.timestamp.isoformat(),
        )

    def __str__(self) -> str:
        return f"{self.event_kind.value}: {self.file_path} @ {self.timestamp.isoformat()}"


_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep) if sep)


def _is_last_segment(file_path: str, file_name: str) -> bool:
    if file_path == file_name:
        return True
    if not file_path.endswith(file_name):
        return False
    return file_path[-len(file_name) - 1] in _SEPARATORS


def _extension_of(file_name: str) -> str:
    # Dotfiles such as ".bashrc" have no extension; a bare trailing dot is not one either
    extension = os.path.splitext(file_name)[1]
    return "" if extension == "." else extension
