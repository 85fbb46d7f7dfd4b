"""Fake request/response context construction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from config import DEFAULT_APP_PATH, DEFAULT_HTTP_METHOD
from request import FakeHttpRequest, parse_query_string
from response import FakeHttpResponse
from utils import to_app_relative

if TYPE_CHECKING:
    from router import RouteData


@dataclass(slots=True)
class FakeHttpContext:
    request: FakeHttpRequest = field(default_factory=FakeHttpRequest)
    response: FakeHttpResponse = field(default_factory=FakeHttpResponse)


@dataclass(slots=True)
class RequestContext:
    http_context: FakeHttpContext
    route_data: RouteData


def fake_http_context(
    request_url: str,
    app_path: str = DEFAULT_APP_PATH,
    http_method: str = DEFAULT_HTTP_METHOD,
) -> FakeHttpContext:
    """Build a context that a route table can resolve without a network stack."""
    path, _separator, query = request_url.partition("?")
    request = FakeHttpRequest(
        app_relative_current_execution_file_path=to_app_relative(path),
        path_info="",
        application_path=app_path,
        http_method=http_method,
        query_string=parse_query_string(query),
    )
    return FakeHttpContext(request=request, response=FakeHttpResponse())
