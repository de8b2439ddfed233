"""Unit tests for the Query builder."""

from subsonic_remote.query import Query


def test_with_starts_query():
    assert Query.with_("action", "status").build() == [("action", "status")]


def test_arg_skips_none():
    query = Query.with_("action", "skip").arg("index", None).arg("offset", 30)

    assert query.build() == [("action", "skip"), ("offset", "30")]


def test_arg_zero_is_kept():
    assert Query().arg("index", 0).build() == [("index", "0")]


def test_arg_list_in_order():
    query = Query.with_("action", "add").arg_list("id", [3, 7, 9])

    assert query.build() == [("action", "add"), ("id", "3"), ("id", "7"), ("id", "9")]


def test_empty_arg_list_adds_nothing():
    assert Query.with_("action", "clear").arg_list("id", []).build() == [("action", "clear")]


def test_bool_values_use_wire_spelling():
    assert Query().arg("public", True).arg("open", False).build() == [
        ("public", "true"),
        ("open", "false"),
    ]


def test_build_returns_a_copy():
    query = Query.with_("action", "get")
    built = query.build()
    built.append(("id", "1"))

    assert query.build() == [("action", "get")]
