"""Shared fixtures for staticweb tests."""

from collections.abc import Callable
from typing import Any

import pytest

from staticweb.http.request import Request


@pytest.fixture
def static_dir(tmp_path):
    """A small site: index page, script, image, and an assets directory."""
    root = tmp_path / "public"
    root.mkdir()

    (root / "index.html").write_text("<h1>Home</h1>")
    (root / "app.js").write_text("console.log('hello');")
    (root / "style.css").write_text("body { color: red; }")
    (root / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (root / "data.json").write_text('{"ok": true}')
    (root / "digits.txt").write_text("0123456789")

    assets = root / "assets"
    assets.mkdir()
    (assets / "a.txt").write_text("a")
    (assets / "b.txt").write_text("b")
    (assets / "fonts").mkdir()

    docs = root / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>Docs</h1>")

    return root


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Factory for Requests without going through ASGI."""

    def _make(
        path: str,
        *,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        query_string: bytes = b"",
    ) -> Request:
        async def receive() -> dict[str, Any]:
            return {"type": "http.request", "body": b"", "more_body": False}

        raw = tuple(
            (k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()
        )
        scope = {
            "type": "http",
            "method": method,
            "path": path,
            "headers": raw,
            "query_string": query_string,
        }
        return Request.from_asgi(scope, receive)

    return _make
