"""Tests for sfobjects.verbs."""

import pytest

from sfobjects.verbs import OVERRIDE_PARAM, Operation, Verb, verb_for


@pytest.mark.parametrize(
    "op",
    [
        Operation.LIST,
        Operation.SUMMARY,
        Operation.DESCRIBE,
        Operation.GET_RECORD,
        Operation.GET_BLOB,
        Operation.GET_DELETED,
        Operation.GET_UPDATED,
    ],
)
def test_read_operations_are_plain_get(op):
    verb = verb_for(op)
    assert verb.method == "GET"
    assert verb.override is None
    assert verb.sends_body is False
    assert verb.query() == {}


def test_create_is_post_with_body():
    verb = verb_for(Operation.CREATE)
    assert verb.method == "POST"
    assert verb.sends_body is True
    assert verb.query() == {}


def test_update_tunnels_patch_through_post():
    verb = verb_for(Operation.UPDATE)
    assert verb.method == "POST"
    assert verb.sends_body is True
    assert verb.query() == {OVERRIDE_PARAM: "PATCH"}


def test_delete_tunnels_delete_without_body():
    verb = verb_for(Operation.DELETE)
    assert verb.method == "POST"
    assert verb.sends_body is False
    assert verb.query() == {"_HttpMethod": "DELETE"}


def test_query_keeps_override_first_and_adds_extra():
    verb = Verb("POST", override="PATCH")
    assert list(verb.query({"fields": "Id"}).items()) == [
        ("_HttpMethod", "PATCH"),
        ("fields", "Id"),
    ]


def test_query_rejects_duplicate_override_key():
    with pytest.raises(ValueError, match="_HttpMethod"):
        verb_for(Operation.DELETE).query({"_HttpMethod": "GET"})
