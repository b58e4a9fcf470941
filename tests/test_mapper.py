from datetime import datetime, timezone

import pytest

from sharepoint_rest.exceptions import MappingError
from sharepoint_rest.mapper import ABSENT, hydrate, merge_mappings, resolve, to_datetime, to_int
from sharepoint_rest.objects import SharePointObject


class Record(SharePointObject):
    id = 0

    fields = {
        "id": to_int,
        "title": None,
        "created": to_datetime,
    }

    mapping = {
        "id": "Id",
        "title": "Title",
        "created": "Created",
    }


PAYLOAD = {
    "Id": "12",
    "Title": "Quarterly report",
    "Created": "2016-03-01T10:20:30Z",
    "Author": {"Profile": {"LoginName": "bob"}},
}


def test_resolve_nested_values_with_both_separators():
    payload = {"a": {"b": {"c": 1}}, "x": [1, 2]}

    assert resolve(payload, "a.b.c") == 1
    assert resolve(payload, "a/b/c") == 1
    assert resolve(payload, "a.b/c") == 1
    assert resolve(payload, "a") == {"b": {"c": 1}}
    assert resolve(payload, "x") == [1, 2]


def test_resolve_returns_absent_for_missing_paths():
    payload = {"a": {"b": 1}, "x": [{"y": 1}]}

    assert resolve(payload, "missing") is ABSENT
    assert resolve(payload, "a.missing") is ABSENT
    assert resolve(payload, "a.b.c") is ABSENT
    assert resolve(payload, "x.0.y") is ABSENT
    assert resolve({}, "a") is ABSENT


def test_resolve_keeps_explicit_none():
    assert resolve({"a": None}, "a") is None


def test_merge_mappings_extra_wins_and_extends():
    default = {"id": "Id", "title": "Title"}
    extra = {"title": "FileLeafRef", "status": "Status"}

    merged = merge_mappings(default, extra)

    assert merged == {"id": "Id", "title": "FileLeafRef", "status": "Status"}
    assert default == {"id": "Id", "title": "Title"}
    assert merge_mappings(default) == default


def test_hydrate_assigns_core_fields_with_coercion():
    record = Record(PAYLOAD)

    assert record.id == 12
    assert record.title == "Quarterly report"
    assert record.created == datetime(2016, 3, 1, 10, 20, 30, tzinfo=timezone.utc)
    assert record.extra == {}


def test_hydrate_routes_unknown_fields_to_extra():
    record = Record(PAYLOAD, extra={"author": "Author.Profile/LoginName", "status": "Status"})

    assert record.extra == {"author": "bob", "status": None}
    assert "author" not in record.__dict__


def test_hydrate_is_idempotent():
    record = Record(PAYLOAD, extra={"author": "Author/Profile/LoginName"})
    first = record.to_dict()

    record.hydrate(PAYLOAD)

    assert record.to_dict() == first


def test_strict_hydration_names_the_missing_path():
    with pytest.raises(MappingError) as error:
        Record({"Id": 1, "Created": None}, strict=True)

    assert error.value.path == "Title"


def test_non_strict_hydration_keeps_prior_values():
    record = Record(PAYLOAD)

    record.hydrate({"Id": 13})

    assert record.id == 13
    assert record.title == "Quarterly report"


def test_failed_hydration_leaves_target_untouched():
    record = Record(PAYLOAD)

    with pytest.raises(MappingError):
        record.hydrate({"Title": "changed", "Id": "not a number"})

    assert record.title == "Quarterly report"
    assert record.id == 12


def test_hydrate_function_works_on_any_target_with_extra():
    class Target:
        fields = {"name": None}

        def __init__(self):
            self.name = "before"
            self.extra = {}

    target = hydrate(Target(), {"Name": "after", "Size": 3}, {"name": "Name", "size": "Size"})

    assert target.name == "after"
    assert target.extra == {"size": 3}


def test_to_datetime_accepts_offsets_and_naive_values():
    assert to_datetime("2016-03-01T10:20:30+01:00").utcoffset().total_seconds() == 3600
    assert to_datetime("2016-03-01T10:20:30").tzinfo is timezone.utc
    assert to_datetime(None) is None
