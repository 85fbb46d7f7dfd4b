"""Unit tests for fake HTTP context construction."""

from http_context import fake_http_context


def test_fake_context_splits_path_and_query() -> None:
    context = fake_http_context("~/search?q=term")

    assert context.request.app_relative_current_execution_file_path == "~/search"
    assert context.request.query_string == {"q": "term"}
    assert context.request.path_info == ""


def test_fake_context_splits_only_at_first_question_mark() -> None:
    context = fake_http_context("~/a?x=1?y")

    assert context.request.app_relative_current_execution_file_path == "~/a"
    assert context.request.query_string == {"x": "1?y"}


def test_fake_context_defaults_to_get_and_root_app_path() -> None:
    context = fake_http_context("~/")

    assert context.request.http_method == "GET"
    assert context.request.application_path == "/"
    assert context.request.query_string == {}


def test_fake_context_keeps_method_verbatim() -> None:
    context = fake_http_context("~/orders", app_path="/shop", http_method="post")

    assert context.request.http_method == "post"
    assert context.request.application_path == "/shop"


def test_fake_context_treats_paths_as_app_relative() -> None:
    assert fake_http_context("/products/5").request.app_relative_path == "~/products/5"
    assert fake_http_context("products").request.app_relative_path == "~/products"


def test_fake_context_response_passes_paths_through() -> None:
    context = fake_http_context("~/")

    assert context.response.apply_app_path_modifier("/shop/cart") == "/shop/cart"
