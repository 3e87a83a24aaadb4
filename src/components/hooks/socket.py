"""
Client socket init payload.

Reads the CSRF token from the page's `<meta name="csrf-token">` tag and
pairs it with the registered hook names.
"""

from __future__ import annotations

from html.parser import HTMLParser

from ._impl import HookRegistry
from .models import SocketOptions

LIVE_ENDPOINT = "/live"
CSRF_META_NAME = "csrf-token"


class _CsrfMetaParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.token: str | None = None

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if self.token is not None or tag.lower() != "meta":
            return
        values = {k.lower(): v for k, v in attrs}
        if values.get("name") == CSRF_META_NAME:
            self.token = values.get("content")


def read_csrf_token(html: str) -> str | None:
    """Return the CSRF token from page metadata, or None if absent."""
    parser = _CsrfMetaParser()
    parser.feed(html)
    parser.close()
    return parser.token


def build_socket_options(html: str, registry: HookRegistry, endpoint: str = LIVE_ENDPOINT) -> SocketOptions:
    token = read_csrf_token(html)
    params = {"_csrf_token": token} if token is not None else {}
    return SocketOptions(endpoint=endpoint, params=params, hooks=registry.names)
