"""Route handler variants a resolved route can carry."""

from dataclasses import dataclass


class RouteHandler:
    """Base for the closed set of handler variants below."""

    __slots__ = ()


class MvcRouteHandler(RouteHandler):
    """Dispatch to a controller action."""


class StopRoutingHandler(RouteHandler):
    """Decline to dispatch; the request falls through to the web server."""


@dataclass(slots=True)
class RedirectRouteHandler(RouteHandler):
    redirect_to_url: str
    permanent: bool = False


@dataclass(slots=True)
class PageRouteHandler(RouteHandler):
    virtual_path: str
    check_physical_url_access: bool = True


def handler_name(handler: object) -> str:
    if handler is None:
        return "None"
    return type(handler).__name__
