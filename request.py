"""Fake HTTP request model and query string parsing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from urllib.parse import parse_qs

from config import APP_RELATIVE_PREFIX, DEFAULT_APP_PATH, DEFAULT_HTTP_METHOD, QUERY_VALUE_SEPARATOR

if TYPE_CHECKING:
    from http_context import RequestContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FakeHttpRequest:
    app_relative_current_execution_file_path: str = APP_RELATIVE_PREFIX
    path_info: str = ""
    application_path: str = DEFAULT_APP_PATH
    http_method: str = DEFAULT_HTTP_METHOD
    query_string: dict[str, str] = field(default_factory=dict)
    server_variables: dict[str, str] = field(default_factory=dict)
    request_context: RequestContext | None = None

    @property
    def app_relative_path(self) -> str:
        return self.app_relative_current_execution_file_path + self.path_info


def parse_query_string(query: str) -> dict[str, str]:
    """Parse a URL-encoded query string into a flat name/value mapping.

    Repeated names are joined with a comma. Anything unparseable yields an
    empty mapping instead of an error.
    """
    if not query:
        return {}
    try:
        parsed = parse_qs(query, keep_blank_values=True)
    except ValueError:
        logger.debug("Ignoring malformed query string %r", query)
        return {}
    return {name: QUERY_VALUE_SEPARATOR.join(values) for name, values in parsed.items()}
