"""Unit tests for route handler variants."""

from handlers.route_handlers import (
    MvcRouteHandler,
    PageRouteHandler,
    RedirectRouteHandler,
    RouteHandler,
    StopRoutingHandler,
    handler_name,
)


def test_handler_variants_share_a_base() -> None:
    handlers = [
        MvcRouteHandler(),
        StopRoutingHandler(),
        RedirectRouteHandler(redirect_to_url="~/products"),
        PageRouteHandler(virtual_path="~/pages/about.aspx"),
    ]

    assert all(isinstance(handler, RouteHandler) for handler in handlers)


def test_redirect_and_page_handlers_carry_targets() -> None:
    redirect = RedirectRouteHandler(redirect_to_url="~/products", permanent=True)
    page = PageRouteHandler(virtual_path="~/pages/about.aspx")

    assert redirect.redirect_to_url == "~/products"
    assert redirect.permanent is True
    assert page.virtual_path == "~/pages/about.aspx"
    assert page.check_physical_url_access is True


def test_handler_name_reports_class_or_none() -> None:
    assert handler_name(StopRoutingHandler()) == "StopRoutingHandler"
    assert handler_name(None) == "None"
