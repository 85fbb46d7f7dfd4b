"""Assertions that URLs resolve to the expected controllers, actions and handlers.

Every assertion returns the resolved :class:`router.RouteData` so checks can
be chained, and raises a :class:`RouteAssertionError` subclass on the first
disagreement. A URL that matches no route always fails with
:class:`NoRouteMatchError` before any other comparison is attempted.
"""

from __future__ import annotations

import logging
from typing import NoReturn

from config import DEFAULT_APP_PATH, DEFAULT_HTTP_METHOD, STRICT_EXPRESSIONS
from expectations import ActionCall, Unsupported, expected_string
from handlers.route_handlers import (
    MvcRouteHandler,
    PageRouteHandler,
    RedirectRouteHandler,
    StopRoutingHandler,
    handler_name,
)
from http_context import fake_http_context
from route_values import get_value
from router import RouteData, RouteTable, default_route_table
from url_helper import UrlHelper, get_url_helper
from utils import strip_controller_suffix

logger = logging.getLogger(__name__)


class RouteAssertionError(AssertionError):
    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class NoRouteMatchError(RouteAssertionError):
    pass


class _ExpectedActualError(RouteAssertionError):
    def __init__(
        self,
        message: str,
        *,
        expected: str | None,
        actual: str | None,
        url: str | None = None,
    ) -> None:
        super().__init__(message, url=url)
        self.expected = expected
        self.actual = actual


class HandlerTypeMismatchError(_ExpectedActualError):
    pass


class ControllerMismatchError(_ExpectedActualError):
    pass


class ActionMismatchError(_ExpectedActualError):
    pass


class TargetMismatchError(_ExpectedActualError):
    pass


class ParameterMismatchError(_ExpectedActualError):
    def __init__(
        self,
        message: str,
        *,
        parameter: str,
        expected: str | None,
        actual: str | None,
        url: str | None = None,
    ) -> None:
        super().__init__(message, expected=expected, actual=actual, url=url)
        self.parameter = parameter


class UnsupportedExpressionError(RouteAssertionError):
    def __init__(
        self,
        message: str,
        *,
        parameter: str,
        description: str,
        url: str | None = None,
    ) -> None:
        super().__init__(message, url=url)
        self.parameter = parameter
        self.description = description


def _fail(error: RouteAssertionError) -> NoReturn:
    logger.debug("%s: %s", type(error).__name__, error)
    raise error


def _table(routes: RouteTable | None) -> RouteTable:
    return routes if routes is not None else default_route_table()


def route(
    url: str,
    *,
    http_method: str = DEFAULT_HTTP_METHOD,
    routes: RouteTable | None = None,
) -> RouteData | None:
    """Resolve an app-relative URL; ``None`` when no route matches."""
    return _table(routes).get_route_data(fake_http_context(url, http_method=http_method))


def get(url: str, *, routes: RouteTable | None = None) -> RouteData | None:
    return route(url, http_method="GET", routes=routes)


def post(url: str, *, routes: RouteTable | None = None) -> RouteData | None:
    return route(url, http_method="POST", routes=routes)


def _require_route(route_data: RouteData | None, url: str | None) -> RouteData:
    if route_data is None:
        if url is None:
            _fail(NoRouteMatchError("The URL did not match any route"))
        _fail(NoRouteMatchError(f"Url {url} did not match any routes", url=url))
    return route_data


def _require_handler(route_data: RouteData, handler_type: type, url: str | None) -> None:
    if isinstance(route_data.route_handler, handler_type):
        return
    actual = handler_name(route_data.route_handler)
    _fail(
        HandlerTypeMismatchError(
            f"Expected route handler {handler_type.__name__} but was {actual}",
            expected=handler_type.__name__,
            actual=actual,
            url=url,
        )
    )


def _check_controller(route_data: RouteData, controller: type, url: str | None) -> None:
    expected = strip_controller_suffix(controller.__name__)
    actual = get_value(route_data.values, "controller")
    if actual is None or actual.lower() != expected.lower():
        _fail(
            ControllerMismatchError(
                f"Expected controller {expected!r} but was {actual!r}",
                expected=expected,
                actual=actual,
                url=url,
            )
        )


def _check_parameter(
    route_data: RouteData,
    name: str,
    node: object,
    *,
    strict_expressions: bool,
    url: str | None,
) -> None:
    if isinstance(node, Unsupported):
        if strict_expressions:
            _fail(
                UnsupportedExpressionError(
                    f"Cannot evaluate the expected value for parameter {name!r}: {node.description}",
                    parameter=name,
                    description=node.description,
                    url=url,
                )
            )
        expected = None
    else:
        expected = expected_string(node)

    actual = get_value(route_data.values, name)
    if expected != actual:
        _fail(
            ParameterMismatchError(
                f"Value for parameter {name!r} did not match: expected {expected!r} but was {actual!r}",
                parameter=name,
                expected=expected,
                actual=actual,
                url=url,
            )
        )


def should_map_to_controller(route_data: RouteData | None, controller: type) -> RouteData:
    route_data = _require_route(route_data, None)
    _check_controller(route_data, controller, None)
    return route_data


def should_map_to(
    route_data_or_url: RouteData | str | None,
    action_call: ActionCall,
    *,
    skip_parameter_checking: bool = False,
    strict_expressions: bool = STRICT_EXPRESSIONS,
    http_method: str = DEFAULT_HTTP_METHOD,
    routes: RouteTable | None = None,
) -> RouteData:
    """Assert the route dispatches to ``action_call``'s controller, action and arguments.

    Controller and action names compare case-insensitively. Each argument is
    stringified and compared with the route value of the same name.
    """
    if isinstance(route_data_or_url, str):
        url: str | None = route_data_or_url
        route_data = route(route_data_or_url, http_method=http_method, routes=routes)
    else:
        url = None
        route_data = route_data_or_url

    route_data = _require_route(route_data, url)
    _require_handler(route_data, MvcRouteHandler, url)
    _check_controller(route_data, action_call.controller, url)

    actual_action = get_value(route_data.values, "action")
    if actual_action is None or actual_action.lower() != action_call.action.lower():
        _fail(
            ActionMismatchError(
                f"Expected action {action_call.action!r} but was {actual_action!r}",
                expected=action_call.action,
                actual=actual_action,
                url=url,
            )
        )

    if not skip_parameter_checking:
        for name, node in action_call.arguments:
            _check_parameter(
                route_data,
                name,
                node,
                strict_expressions=strict_expressions,
                url=url,
            )

    return route_data


def should_be_ignored(url: str, *, routes: RouteTable | None = None) -> RouteData:
    route_data = _require_route(route(url, routes=routes), url)
    _require_handler(route_data, StopRoutingHandler, url)
    return route_data


def should_redirect_to(url: str, new_url: str, *, routes: RouteTable | None = None) -> RouteData:
    route_data = _require_route(route(url, routes=routes), url)
    _require_handler(route_data, RedirectRouteHandler, url)
    actual = route_data.route_handler.redirect_to_url
    if actual != new_url:
        _fail(
            TargetMismatchError(
                f"Expected redirect to {new_url!r} but was {actual!r}",
                expected=new_url,
                actual=actual,
                url=url,
            )
        )
    return route_data


def should_map_to_page(
    url: str,
    virtual_path: str | None = None,
    *,
    routes: RouteTable | None = None,
) -> RouteData:
    """Assert ``url`` is served by a page route; ``virtual_path`` defaults to ``url``."""
    if virtual_path is None:
        virtual_path = url
    route_data = _require_route(route(url, routes=routes), url)
    _require_handler(route_data, PageRouteHandler, url)
    actual = route_data.route_handler.virtual_path
    if actual != virtual_path:
        _fail(
            TargetMismatchError(
                f"Expected page {virtual_path!r} but was {actual!r}",
                expected=virtual_path,
                actual=actual,
                url=url,
            )
        )
    return route_data


class RouteTestBase:
    """Base for test classes asserting against one route table.

    ``routes`` left as ``None`` means the process-wide table.
    """

    routes: RouteTable | None = None
    app_path: str = DEFAULT_APP_PATH
    _url_helper: UrlHelper | None = None

    @property
    def url(self) -> UrlHelper:
        if self._url_helper is None:
            self._url_helper = get_url_helper(self.app_path, self.routes)
        return self._url_helper

    def get(self, url: str) -> RouteData | None:
        return route(url, http_method="GET", routes=self.routes)

    def post(self, url: str) -> RouteData | None:
        return route(url, http_method="POST", routes=self.routes)
