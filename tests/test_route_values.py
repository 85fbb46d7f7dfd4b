"""Unit tests for case-insensitive route value lookup."""

from route_values import RouteValues, get_value


def test_route_values_lookup_ignores_key_case() -> None:
    values = RouteValues(controller="home", Action="index")

    assert values["Controller"] == "home"
    assert values["ACTION"] == "index"
    assert "action" in values
    assert 42 not in values


def test_route_values_keep_first_spelling_and_insertion_order() -> None:
    values = RouteValues([("Controller", "home"), ("action", "index")])
    values["CONTROLLER"] = "products"

    assert list(values) == ["Controller", "action"]
    assert values["controller"] == "products"
    assert len(values) == 2


def test_route_values_delete_and_compare_with_plain_dict() -> None:
    values = RouteValues(controller="home", action="index", id="5")
    del values["ID"]

    assert values == {"CONTROLLER": "home", "action": "index"}
    assert values != {"controller": "home"}
    assert values.copy() == values


def test_get_value_is_case_insensitive_and_total() -> None:
    values = RouteValues(action="Index")

    assert get_value(values, "Action") == "Index"
    assert get_value(values, "action") == "Index"
    assert get_value(values, "ACTION") == "Index"
    assert get_value(values, "missing") is None
    assert get_value(None, "action") is None


def test_get_value_handles_plain_mappings_and_stringifies() -> None:
    values = {"Id": 5, "slug": None}

    assert get_value(values, "id") == "5"
    assert get_value(values, "SLUG") is None
    assert get_value(values, "other") is None
