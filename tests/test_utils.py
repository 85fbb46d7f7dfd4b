"""Unit tests for string normalization helpers."""

from utils import join_app_path, strip_app_relative, strip_controller_suffix, to_app_relative


def test_strip_controller_suffix_removes_trailing_suffix_only() -> None:
    assert strip_controller_suffix("ProductsController") == "Products"
    assert strip_controller_suffix("ControllerFactoryController") == "ControllerFactory"
    assert strip_controller_suffix("Products") == "Products"


def test_strip_controller_suffix_is_idempotent() -> None:
    once = strip_controller_suffix("FooController")

    assert strip_controller_suffix(once) == once == "Foo"


def test_to_app_relative_normalizes_paths() -> None:
    assert to_app_relative("~/products") == "~/products"
    assert to_app_relative("/products") == "~/products"
    assert to_app_relative("products") == "~/products"
    assert to_app_relative("") == "~/"
    assert to_app_relative("~") == "~/"
    assert strip_app_relative("/products/5") == "products/5"


def test_join_app_path_roots_virtual_paths() -> None:
    assert join_app_path("/", "products/5") == "/products/5"
    assert join_app_path("/shop", "products/5") == "/shop/products/5"
    assert join_app_path("/shop/", "") == "/shop/"
    assert join_app_path("/", "") == "/"
