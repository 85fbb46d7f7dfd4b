"""Fake HTTP response model."""

from dataclasses import dataclass


@dataclass(slots=True)
class FakeHttpResponse:
    def apply_app_path_modifier(self, virtual_path: str) -> str:
        """Return ``virtual_path`` unchanged; there is no cookieless session token to inject."""
        return virtual_path
