"""Pattern route table resolving fake contexts to route data."""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote, unquote, urlencode

from handlers.route_handlers import (
    MvcRouteHandler,
    PageRouteHandler,
    RedirectRouteHandler,
    RouteHandler,
    StopRoutingHandler,
    handler_name,
)
from http_context import FakeHttpContext, RequestContext
from route_values import RouteValues
from utils import strip_app_relative

logger = logging.getLogger(__name__)

PARAMETER_PATTERN = re.compile(r"\{(\*?)([A-Za-z_]\w*)\}")


class _OptionalParameter:
    def __repr__(self) -> str:
        return "OPTIONAL"


OPTIONAL = _OptionalParameter()


class RouteError(ValueError):
    """Invalid route registration."""

    def __init__(self, message: str, *, url_pattern: str = "") -> None:
        super().__init__(message)
        self.url_pattern = url_pattern


class RouteDirection(enum.Enum):
    INCOMING_REQUEST = "incoming_request"
    URL_GENERATION = "url_generation"


class HttpMethodConstraint:
    def __init__(self, *allowed_methods: str) -> None:
        if not allowed_methods:
            raise RouteError("HttpMethodConstraint needs at least one method")
        self.allowed_methods = frozenset(method.upper() for method in allowed_methods)

    def matches(
        self,
        http_context: FakeHttpContext,
        parameter_name: str,
        values: RouteValues,
        direction: RouteDirection,
    ) -> bool:
        _ = parameter_name, values
        if direction is RouteDirection.URL_GENERATION:
            return True
        return http_context.request.http_method.upper() in self.allowed_methods

    def __repr__(self) -> str:
        return f"HttpMethodConstraint({', '.join(sorted(self.allowed_methods))})"


@dataclass(slots=True)
class _SegmentPart:
    literal: str = ""
    parameter: str | None = None
    catch_all: bool = False


@dataclass(slots=True)
class _Segment:
    parts: list[_SegmentPart]
    regex: re.Pattern[str]

    @property
    def parameters(self) -> list[str]:
        return [part.parameter for part in self.parts if part.parameter is not None]

    @property
    def is_catch_all(self) -> bool:
        return any(part.catch_all for part in self.parts)


def _parse_segment(text: str, url_pattern: str) -> _Segment:
    parts: list[_SegmentPart] = []
    position = 0
    for match in PARAMETER_PATTERN.finditer(text):
        if match.start() > position:
            parts.append(_SegmentPart(literal=text[position : match.start()]))
        elif parts and parts[-1].parameter is not None:
            raise RouteError(
                "a segment cannot contain two consecutive parameters",
                url_pattern=url_pattern,
            )
        parts.append(_SegmentPart(parameter=match.group(2), catch_all=bool(match.group(1))))
        position = match.end()
    if position < len(text):
        parts.append(_SegmentPart(literal=text[position:]))

    for part in parts:
        if part.parameter is None and ("{" in part.literal or "}" in part.literal):
            raise RouteError("unbalanced braces in route pattern", url_pattern=url_pattern)
        if part.catch_all and len(parts) != 1:
            raise RouteError(
                "a catch-all parameter must be the only content of its segment",
                url_pattern=url_pattern,
            )

    expression = "".join(
        f"(?P<{part.parameter}>.+)" if part.parameter is not None else re.escape(part.literal)
        for part in parts
    )
    return _Segment(parts=parts, regex=re.compile(expression, re.IGNORECASE))


def _same_value(left: Any, right: Any) -> bool:
    if left is None or right is None:
        return left is right
    return str(left).casefold() == str(right).casefold()


def _is_empty(value: Any) -> bool:
    return value is None or value is OPTIONAL or value == ""


@dataclass(slots=True)
class RouteData:
    route: Route | None = None
    route_handler: RouteHandler | None = None
    values: RouteValues = field(default_factory=RouteValues)
    data_tokens: RouteValues = field(default_factory=RouteValues)


class Route:
    def __init__(
        self,
        url_pattern: str,
        route_handler: RouteHandler,
        defaults: Mapping[str, Any] | None = None,
        constraints: Mapping[str, Any] | None = None,
        data_tokens: Mapping[str, Any] | None = None,
    ) -> None:
        if url_pattern.startswith(("/", "~")):
            raise RouteError("route pattern cannot start with '/' or '~'", url_pattern=url_pattern)
        if "?" in url_pattern:
            raise RouteError("route pattern cannot contain '?'", url_pattern=url_pattern)

        self.url_pattern = url_pattern
        self.route_handler = route_handler
        self.defaults = RouteValues(defaults or {})
        self.constraints = RouteValues(constraints or {})
        self.data_tokens = RouteValues(data_tokens or {})
        self._segments = self._parse(url_pattern)
        self.parameter_names = [
            name for segment in self._segments for name in segment.parameters
        ]
        self._parameter_keys = {name.casefold() for name in self.parameter_names}

    def _parse(self, url_pattern: str) -> list[_Segment]:
        if not url_pattern:
            return []
        segments: list[_Segment] = []
        seen: set[str] = set()
        raw_segments = url_pattern.split("/")
        for index, raw in enumerate(raw_segments):
            if not raw:
                raise RouteError("route pattern contains an empty segment", url_pattern=url_pattern)
            segment = _parse_segment(raw, url_pattern)
            if segment.is_catch_all and index != len(raw_segments) - 1:
                raise RouteError(
                    "a catch-all parameter must be in the last segment",
                    url_pattern=url_pattern,
                )
            for name in segment.parameters:
                if name.casefold() in seen:
                    raise RouteError(f"duplicate route parameter {name!r}", url_pattern=url_pattern)
                seen.add(name.casefold())
            segments.append(segment)
        return segments

    def __repr__(self) -> str:
        return f"Route({self.url_pattern!r}, {handler_name(self.route_handler)})"

    def _match_path(self, path: str) -> dict[str, str] | None:
        request_segments = path.split("/") if path else []
        matched: dict[str, str] = {}

        for index, segment in enumerate(self._segments):
            if segment.is_catch_all:
                remainder = "/".join(request_segments[index:])
                if remainder:
                    matched[segment.parameters[0]] = unquote(remainder)
                return matched

            if index < len(request_segments):
                text = request_segments[index]
                if not text:
                    return None
                match = segment.regex.fullmatch(text)
                if match is None:
                    return None
                for name, value in match.groupdict().items():
                    matched[name] = unquote(value)
                continue

            for part in segment.parts:
                if part.parameter is None or part.parameter not in self.defaults:
                    return None

        if len(request_segments) > len(self._segments):
            return None
        return matched

    def _constraints_pass(
        self,
        http_context: FakeHttpContext,
        values: RouteValues,
        direction: RouteDirection,
    ) -> bool:
        for name, constraint in self.constraints.items():
            if hasattr(constraint, "matches"):
                if not constraint.matches(http_context, name, values, direction):
                    return False
                continue
            value = values.get(name)
            text = "" if _is_empty(value) else str(value)
            if re.fullmatch(f"(?:{constraint})", text, re.IGNORECASE) is None:
                return False
        return True

    def get_route_data(self, http_context: FakeHttpContext) -> RouteData | None:
        path = strip_app_relative(http_context.request.app_relative_path)
        if path.endswith("/"):
            path = path[:-1]

        matched = self._match_path(path)
        if matched is None:
            return None

        values = RouteValues(
            (key, value) for key, value in self.defaults.items() if value is not OPTIONAL
        )
        values.update(matched)
        if not self._constraints_pass(http_context, values, RouteDirection.INCOMING_REQUEST):
            return None

        return RouteData(
            route=self,
            route_handler=self.route_handler,
            values=values,
            data_tokens=self.data_tokens.copy(),
        )

    def get_virtual_path(
        self,
        request_context: RequestContext,
        values: Mapping[str, Any],
    ) -> str | None:
        if not isinstance(self.route_handler, MvcRouteHandler):
            return None

        provided = RouteValues(values)
        for name, default in self.defaults.items():
            if name.casefold() in self._parameter_keys or name not in provided:
                continue
            if not _same_value(provided[name], default):
                return None

        accepted = RouteValues()
        for name in self.parameter_names:
            if name in provided and not _is_empty(provided[name]):
                accepted[name] = provided[name]
            elif name in self.defaults:
                accepted[name] = self.defaults[name]
            else:
                return None

        check_values = RouteValues(self.defaults.items())
        check_values.update(accepted)
        if not self._constraints_pass(
            request_context.http_context, check_values, RouteDirection.URL_GENERATION
        ):
            return None

        rendered: list[tuple[str, bool]] = []
        for segment in self._segments:
            text_parts: list[str] = []
            omittable = True
            for part in segment.parts:
                if part.parameter is None:
                    text_parts.append(part.literal)
                    omittable = False
                    continue
                value = accepted[part.parameter]
                if not _is_empty(value):
                    safe = "/" if part.catch_all else ""
                    text_parts.append(quote(str(value), safe=safe))
                if not (
                    _is_empty(value)
                    or (
                        part.parameter in self.defaults
                        and _same_value(value, self.defaults[part.parameter])
                    )
                ):
                    omittable = False
            rendered.append(("".join(text_parts), omittable))

        while rendered and rendered[-1][1]:
            rendered.pop()
        if any(not text for text, _omittable in rendered):
            return None

        path = "/".join(text for text, _omittable in rendered)
        extra = [
            (name, str(value))
            for name, value in provided.items()
            if name.casefold() not in self._parameter_keys
            and name not in self.defaults
            and not _is_empty(value)
        ]
        if extra:
            path = f"{path}?{urlencode(extra)}"
        return path


class RouteTable:
    """Ordered route collection; the first matching route wins."""

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._named: dict[str, Route] = {}

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __getitem__(self, name: str) -> Route:
        return self._named[name]

    def add(self, route: Route, name: str | None = None) -> Route:
        if name is not None:
            if name in self._named:
                raise RouteError(
                    f"a route named {name!r} is already registered",
                    url_pattern=route.url_pattern,
                )
            self._named[name] = route
        self._routes.append(route)
        return route

    def map_route(
        self,
        name: str | None,
        url: str,
        defaults: Mapping[str, Any] | None = None,
        constraints: Mapping[str, Any] | None = None,
        data_tokens: Mapping[str, Any] | None = None,
    ) -> Route:
        route = Route(url, MvcRouteHandler(), defaults, constraints, data_tokens)
        return self.add(route, name)

    def ignore_route(self, url: str, constraints: Mapping[str, Any] | None = None) -> Route:
        return self.add(Route(url, StopRoutingHandler(), constraints=constraints))

    def map_redirect(
        self,
        url: str,
        redirect_to_url: str,
        *,
        permanent: bool = False,
        name: str | None = None,
        defaults: Mapping[str, Any] | None = None,
        constraints: Mapping[str, Any] | None = None,
    ) -> Route:
        handler = RedirectRouteHandler(redirect_to_url=redirect_to_url, permanent=permanent)
        return self.add(Route(url, handler, defaults, constraints), name)

    def map_page_route(
        self,
        name: str | None,
        url: str,
        virtual_path: str,
        *,
        check_physical_url_access: bool = True,
        defaults: Mapping[str, Any] | None = None,
        constraints: Mapping[str, Any] | None = None,
    ) -> Route:
        handler = PageRouteHandler(
            virtual_path=virtual_path,
            check_physical_url_access=check_physical_url_access,
        )
        return self.add(Route(url, handler, defaults, constraints), name)

    def clear(self) -> None:
        self._routes.clear()
        self._named.clear()

    def get_route_data(self, http_context: FakeHttpContext) -> RouteData | None:
        for route in self._routes:
            route_data = route.get_route_data(http_context)
            if route_data is not None:
                logger.debug(
                    "Resolved %s %s to %r with values %r",
                    http_context.request.http_method,
                    http_context.request.app_relative_path,
                    route,
                    dict(route_data.values),
                )
                return route_data
        logger.debug(
            "No route matched %s %s",
            http_context.request.http_method,
            http_context.request.app_relative_path,
        )
        return None

    def get_virtual_path(
        self,
        request_context: RequestContext,
        values: Mapping[str, Any],
        name: str | None = None,
    ) -> str | None:
        if name is not None:
            if name not in self._named:
                raise RouteError(f"no route named {name!r} is registered")
            return self._named[name].get_virtual_path(request_context, values)
        for route in self._routes:
            virtual_path = route.get_virtual_path(request_context, values)
            if virtual_path is not None:
                return virtual_path
        return None


ROUTES = RouteTable()


def default_route_table() -> RouteTable:
    """Return the process-wide table, looked up at call time."""
    return ROUTES
