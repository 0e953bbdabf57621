from datetime import date, datetime

import pytest

from fileevents.criteria import QueryCriteria, normalize_extension
from fileevents.events import EventKind


def test_default_criteria_leave_every_dimension_unset():
    criteria = QueryCriteria()

    assert criteria.start_date is None
    assert criteria.end_date is None
    assert criteria.extension is None
    assert criteria.event_kind is None
    assert criteria.directory_path is None
    assert criteria.normalized_extension is None
    assert criteria.is_unconstrained()


def test_criteria_fields_are_assignable():
    start = datetime(2025, 5, 25)
    end = datetime(2025, 6, 1)
    criteria = QueryCriteria()

    criteria.start_date = start
    criteria.end_date = end
    criteria.extension = "txt"
    criteria.event_kind = EventKind.CREATED
    criteria.directory_path = "/var/log"

    assert criteria.start_date == start
    assert criteria.end_date == end
    assert criteria.normalized_extension == ".txt"
    assert criteria.event_kind is EventKind.CREATED
    assert criteria.directory_path == "/var/log"
    assert not criteria.is_unconstrained()


def test_single_field_makes_criteria_constrained():
    assert not QueryCriteria(directory_path="/tmp").is_unconstrained()


def test_event_kind_is_validated_on_construction():
    assert QueryCriteria(event_kind="deleted").event_kind is EventKind.DELETED  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        QueryCriteria(event_kind="Manual")  # type: ignore[arg-type]


@pytest.mark.parametrize("raw, expected", [("txt", ".txt"), (".txt", ".txt"), ("tar.gz", ".tar.gz")])
def test_normalize_extension(raw, expected):
    assert normalize_extension(raw) == expected


def test_from_mapping_parses_dates_and_kind():
    criteria = QueryCriteria.from_mapping(
        {
            "start_date": "2025-06-01T08:30:00",
            "end_date": "2025-06-02",
            "extension": ".log",
            "event_kind": "Renamed",
            "directory_path": "/srv",
        }
    )

    assert criteria.start_date == datetime(2025, 6, 1, 8, 30)
    assert criteria.end_date == datetime.combine(date(2025, 6, 2), datetime.max.time())
    assert criteria.extension == ".log"
    assert criteria.event_kind is EventKind.RENAMED
    assert criteria.directory_path == "/srv"


def test_from_mapping_accepts_date_objects():
    criteria = QueryCriteria.from_mapping({"start_date": date(2025, 1, 1), "end_date": date(2025, 1, 31)})

    assert criteria.start_date == datetime(2025, 1, 1)
    assert criteria.end_date.date() == date(2025, 1, 31)
    assert criteria.end_date.hour == 23


def test_from_mapping_empty_is_unconstrained():
    assert QueryCriteria.from_mapping({}).is_unconstrained()


@pytest.mark.parametrize(
    "data",
    [
        {"start_date": "yesterday"},
        {"end_date": 20250101},
        {"extension": 5},
        {"event_kind": "Touched"},
        {"colour": "blue"},
    ],
)
def test_from_mapping_rejects_bad_input(data):
    with pytest.raises(ValueError):
        QueryCriteria.from_mapping(data)


def test_event_kind_is_validated_on_assignment():
    criteria = QueryCriteria()

    criteria.event_kind = "modified"  # type: ignore[assignment]
    assert criteria.event_kind is EventKind.MODIFIED

    criteria.event_kind = None
    assert criteria.is_unconstrained()

    with pytest.raises(ValueError):
        criteria.event_kind = "Touched"  # type: ignore[assignment]
