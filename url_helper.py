"""URL generation against a route table for round-trip route tests."""

from __future__ import annotations

from typing import Any

from config import AMBIENT_ACTION, AMBIENT_CONTROLLER, DEFAULT_APP_PATH
from http_context import RequestContext, fake_http_context
from route_values import RouteValues, get_value
from router import RouteData, RouteTable, default_route_table
from utils import join_app_path


class UrlHelper:
    def __init__(self, request_context: RequestContext, routes: RouteTable) -> None:
        self.request_context = request_context
        self.routes = routes

    @property
    def app_path(self) -> str:
        return self.request_context.http_context.request.application_path

    def route_url(self, route_name: str | None = None, **values: Any) -> str | None:
        """Build an app-rooted URL for ``values``, or ``None`` when no route generates one."""
        return self._generate(route_name, RouteValues(values))

    def action(self, action: str, controller: str | None = None, **values: Any) -> str | None:
        route_values = RouteValues(values)
        route_values["action"] = action
        if controller is None:
            controller = get_value(self.request_context.route_data.values, "controller")
        route_values["controller"] = controller
        return self._generate(None, route_values)

    def _generate(self, route_name: str | None, values: RouteValues) -> str | None:
        virtual_path = self.routes.get_virtual_path(self.request_context, values, name=route_name)
        if virtual_path is None:
            return None
        response = self.request_context.http_context.response
        return response.apply_app_path_modifier(join_app_path(self.app_path, virtual_path))


def get_url_helper(app_path: str = DEFAULT_APP_PATH, routes: RouteTable | None = None) -> UrlHelper:
    if routes is None:
        routes = default_route_table()

    http_context = fake_http_context("~/", app_path=app_path)
    route_data = RouteData(
        values=RouteValues(controller=AMBIENT_CONTROLLER, action=AMBIENT_ACTION),
    )
    request_context = RequestContext(http_context=http_context, route_data=route_data)
    http_context.request.request_context = request_context
    return UrlHelper(request_context, routes)
