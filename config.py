"""Configuration constants for the route testing harness."""

DEFAULT_APP_PATH: str = "/"
DEFAULT_HTTP_METHOD: str = "GET"
APP_RELATIVE_PREFIX: str = "~/"
CONTROLLER_SUFFIX: str = "Controller"
QUERY_VALUE_SEPARATOR: str = ","
AMBIENT_CONTROLLER: str = "home"
AMBIENT_ACTION: str = "index"
STRICT_EXPRESSIONS: bool = True
