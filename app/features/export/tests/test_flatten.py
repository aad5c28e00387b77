"""Tests for record flattening."""

from app.features.export.flatten import flatten_record


def test_flat_record_is_unchanged() -> None:
    assert flatten_record({"Course Name": "MBA", "Count": 9}) == {"Course Name": "MBA", "Count": 9}


def test_nested_mappings_use_parent_child_keys() -> None:
    record = {"course": {"name": "MBA", "level": {"code": "l5"}}, "count": 1}

    assert flatten_record(record) == {
        "course_name": "MBA",
        "course_level_code": "l5",
        "count": 1,
    }


def test_sequences_become_json_text() -> None:
    record = {"a": {"b": 1}, "tags": [1, 2], "pair": ("x", None)}

    assert flatten_record(record) == {"a_b": 1, "tags": "[1,2]", "pair": '["x",null]'}


def test_non_ascii_is_kept() -> None:
    assert flatten_record({"names": ["Zoë"]}) == {"names": '["Zoë"]'}


def test_key_order_follows_input() -> None:
    flattened = flatten_record({"z": 1, "a": {"y": 2, "b": 3}, "m": 4})

    assert list(flattened) == ["z", "a_y", "a_b", "m"]
