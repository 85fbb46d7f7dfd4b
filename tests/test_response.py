"""Unit tests for the fake response model."""

from response import FakeHttpResponse


def test_apply_app_path_modifier_echoes_input() -> None:
    response = FakeHttpResponse()

    assert response.apply_app_path_modifier("/products/5") == "/products/5"
    assert response.apply_app_path_modifier("") == ""
