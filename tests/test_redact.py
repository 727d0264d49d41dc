import json

import pytest

from docsgen.redact import MISSING, redact, redact_body


def test_redact_flat_object_keeps_keys_and_placeholders_values():
    value = {"name": "Jay", "age": 30, "active": True, "tags": ["a", "b"]}
    assert redact(value) == {"name": "", "age": 0, "active": False, "tags": []}


def test_redact_recurses_into_nested_objects():
    value = {
        "user": {"id": 7, "email": "j@user.com", "score": 9.5, "profile": {"bio": "hi"}},
        "meta": None,
        "items": [{"secret": "x"}],
    }
    out = redact(value)
    assert out == {
        "user": {"id": 0, "email": "", "score": 0, "profile": {"bio": ""}},
        "meta": None,
        "items": [],
    }
    assert "j@user.com" not in json.dumps(out)
    assert "secret" not in json.dumps(out)


def test_redact_bool_is_not_treated_as_number():
    assert redact(False) is False
    assert redact(True) is False
    assert redact(1) == 0


@pytest.mark.parametrize(
    "value, expected",
    [("x", ""), (3, 0), (2.5, 0), (None, None), ([1, 2], []), ({}, {})],
)
def test_redact_top_level_scalars_and_containers(value, expected):
    assert redact(value) == expected


def test_redact_rejects_non_json_values():
    with pytest.raises(TypeError):
        redact({"when": object()})


def test_redact_body_skips_empty_and_invalid_payloads():
    assert redact_body(b"") is MISSING
    assert redact_body(None) is MISSING
    assert redact_body(b"OK") is MISSING
    assert redact_body(b"\xff\xfe") is MISSING
    assert redact_body(b'{"name":"Jay"}') == {"name": ""}
