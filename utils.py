"""String normalization helpers shared across harness modules."""

from config import APP_RELATIVE_PREFIX, CONTROLLER_SUFFIX


def to_app_relative(path: str) -> str:
    """Normalize a request path to the ``~/``-prefixed application-relative form."""
    if path.startswith(APP_RELATIVE_PREFIX):
        return path
    if path == "~":
        return APP_RELATIVE_PREFIX
    return APP_RELATIVE_PREFIX + path.lstrip("/")


def strip_app_relative(path: str) -> str:
    return to_app_relative(path).removeprefix(APP_RELATIVE_PREFIX)


def strip_controller_suffix(name: str) -> str:
    return name.removesuffix(CONTROLLER_SUFFIX)


def join_app_path(app_path: str, virtual_path: str) -> str:
    """Root a generated virtual path under the application path."""
    root = app_path if app_path.endswith("/") else app_path + "/"
    return root + virtual_path.lstrip("/")
