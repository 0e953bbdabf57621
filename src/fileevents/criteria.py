"""Filter criteria for retrieving recorded file events."""
from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Any, Mapping, Optional

from .events import EventKind


def normalize_extension(extension: str) -> str:
    """Return ``extension`` with a single leading dot."""

    return extension if extension.startswith(".") else "." + extension


@dataclass
class QueryCriteria:
    """Optional constraints on recorded events.

    Every field defaults to ``None``. An unset field places no constraint on
    its dimension; set fields are meant to be combined with logical AND by
    whatever evaluates the criteria against stored records. Both date bounds
    are inclusive. ``event_kind`` is checked against :class:`EventKind`
    whenever it is assigned, not only at construction.
    """

    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    extension: Optional[str] = None
    event_kind: Optional[EventKind] = None
    directory_path: Optional[str] = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "event_kind" and value is not None:
            value = EventKind.parse(value)
        super().__setattr__(name, value)

    @property
    def normalized_extension(self) -> Optional[str]:
        if self.extension is None:
            return None
        return normalize_extension(self.extension)

    def is_unconstrained(self) -> bool:
        return all(getattr(self, item.name) is None for item in fields(self))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "QueryCriteria":
        """Build criteria from a plain mapping such as a parsed config section.

        Dates may be ``datetime``/``date`` objects or ISO-8601 strings; a bare
        date used as ``end_date`` covers the whole day.
        """

        known = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown query field(s): {', '.join(unknown)}")

        extension = _optional_str(data.get("extension"), "extension")
        directory_path = _optional_str(data.get("directory_path"), "directory_path")
        kind_raw = data.get("event_kind")

        return cls(
            start_date=_parse_datetime(data.get("start_date"), "start_date", end_of_day=False),
            end_date=_parse_datetime(data.get("end_date"), "end_date", end_of_day=True),
            extension=extension,
            event_kind=EventKind.parse(kind_raw) if kind_raw is not None else None,
            directory_path=directory_path,
        )


def _optional_str(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    return value


def _parse_datetime(value: Any, field_name: str, *, end_of_day: bool) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        boundary = datetime.max.time() if end_of_day else datetime.min.time()
        return datetime.combine(value, boundary)
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be an ISO-8601 date or datetime")

    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"{field_name} must be an ISO-8601 date or datetime") from exc
    if end_of_day and "T" not in value and " " not in value:
        parsed = datetime.combine(parsed.date(), datetime.max.time())
    return parsed
