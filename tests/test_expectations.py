"""Unit tests for recording expected controller action calls."""

import pytest

from expectations import (
    ActionCall,
    CapturedValue,
    Controller,
    Literal,
    Unsupported,
    as_expression,
    captured,
    convert,
    expect,
    expected_string,
)


class ProductsController(Controller):
    def index(self, id):
        return id

    def details(self, id, format="html"):
        return id, format

    @staticmethod
    def feed(category):
        return category

    @classmethod
    def sitemap(cls, page=1):
        return page

    def search(self, *terms):
        return terms


class NotAController:
    def index(self):
        return None


def test_expect_binds_positional_and_keyword_arguments_by_name() -> None:
    call = expect(ProductsController).details("5", format="json")

    assert call.controller is ProductsController
    assert call.action == "details"
    assert call.arguments == (("id", Literal("5")), ("format", Literal("json")))


def test_expect_applies_parameter_defaults() -> None:
    call = expect(ProductsController).details(id=5)

    assert call.arguments == (("id", Literal(5)), ("format", Literal("html")))


def test_expect_handles_static_and_class_methods() -> None:
    assert expect(ProductsController).feed("books").arguments == (("category", Literal("books")),)
    assert expect(ProductsController).sitemap().arguments == (("page", Literal(1)),)


def test_expected_controller_strips_suffix() -> None:
    call = ActionCall.bind(ProductsController, "index", "5")

    assert call.expected_controller == "Products"
    assert str(call) == "ProductsController.index(id=Literal(value='5'))"


def test_expect_rejects_non_controller_types() -> None:
    with pytest.raises(TypeError, match="not a Controller subclass"):
        expect(NotAController)


def test_expect_rejects_unknown_actions() -> None:
    with pytest.raises(TypeError, match="has no action 'missing'"):
        expect(ProductsController).missing


def test_expect_rejects_variadic_actions() -> None:
    with pytest.raises(TypeError, match="variadic"):
        expect(ProductsController).search("a", "b")


def test_expect_rejects_arguments_that_do_not_bind() -> None:
    with pytest.raises(TypeError, match="cannot bind arguments"):
        expect(ProductsController).index("5", "6")


def test_as_expression_classifies_arguments() -> None:
    node = Literal("x")

    assert as_expression(node) is node
    assert as_expression(5) == Literal(5)
    assert as_expression(None) == Literal(None)
    assert isinstance(as_expression(lambda: 5), Unsupported)


def test_captured_reads_value_once_at_build_time() -> None:
    reads: list[int] = []
    product_id = 42

    def read_product_id() -> int:
        reads.append(product_id)
        return product_id

    node = captured(read_product_id)

    assert node == CapturedValue(value=42, source="read_product_id")
    assert reads == [42]


def test_convert_wraps_literal_and_captured_nodes() -> None:
    assert convert("5", int) == Literal(5)
    assert convert(CapturedValue(value="7", source="x"), int) == CapturedValue(value=7, source="x")


def test_convert_leaves_unsupported_nodes_alone() -> None:
    node = Unsupported("opaque")

    assert convert(node, int) is node


def test_expected_string_stringifies_values() -> None:
    assert expected_string(Literal(5)) == "5"
    assert expected_string(Literal(True)) == "True"
    assert expected_string(CapturedValue(value="abc")) == "abc"
    assert expected_string(Literal(None)) is None

    with pytest.raises(TypeError):
        expected_string(Unsupported("opaque"))
