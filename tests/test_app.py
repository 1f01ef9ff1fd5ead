"""Tests for staticweb.app — ASGI serving, error handlers, and lifecycle."""

import gzip
from typing import Any

import pytest

from staticweb.app import App
from staticweb.builder import StaticHandlerBuilder
from staticweb.errors import ConfigurationError, NotFound
from staticweb.http.request import Request
from staticweb.http.response import Response
from staticweb.routing.route import Route
from staticweb.testing import TestClient


def _app(static_dir, *, path: str = "/", **options: Any) -> App:
    builder = StaticHandlerBuilder(static_dir).path(path)
    if options.get("gzip"):
        builder.gzip(True)
    if options.get("listing"):
        builder.listing(True)
    return App(builder)


class TestServing:
    async def test_index(self, static_dir) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.get("/")
        assert response.status == 200
        assert response.content_type == "text/html; charset=utf-8"
        assert response.text == "<h1>Home</h1>"

    async def test_script_type(self, static_dir) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.get("/app.js")
        assert response.status == 200
        assert response.content_type == "application/javascript"
        assert response.header("content-length") == str(len("console.log('hello');"))

    async def test_suppressed_listing(self, static_dir) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.get("/assets/")
        assert response.status == 200
        assert response.content_type == "text/html; charset=utf-8"
        assert response.text == "<pre>\n</pre>\n"

    async def test_listing(self, static_dir) -> None:
        async with TestClient(_app(static_dir, listing=True)) as client:
            response = await client.get("/assets/")
        assert "a.txt" in response.text
        assert "fonts/" in response.text

    async def test_missing_file(self, static_dir) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.get("/nope.txt")
        assert response.status == 404
        assert response.content_type == "text/plain; charset=utf-8"

    async def test_outside_prefix(self, static_dir) -> None:
        async with TestClient(_app(static_dir, path="/static")) as client:
            ok = await client.get("/static/app.js")
            missing = await client.get("/other/app.js")
        assert ok.status == 200
        assert missing.status == 404

    async def test_redirect(self, static_dir) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.get("/docs?lang=en")
        assert response.status == 301
        assert response.header("location") == "docs/?lang=en"

    async def test_head(self, static_dir) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.head("/digits.txt")
        assert response.status == 200
        assert response.body == b""
        assert response.header("content-length") == "10"

    async def test_range(self, static_dir) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.get("/digits.txt", headers={"Range": "bytes=3-5"})
        assert response.status == 206
        assert response.body == b"345"
        assert response.header("content-range") == "bytes 3-5/10"
        assert response.header("content-length") == "3"

    async def test_unsatisfiable_range(self, static_dir) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.get("/digits.txt", headers={"Range": "bytes=50-"})
        assert response.status == 416
        assert response.header("content-range") == "bytes */10"

    async def test_gzip(self, static_dir) -> None:
        async with TestClient(_app(static_dir, gzip=True)) as client:
            response = await client.get("/index.html", headers={"Accept-Encoding": "gzip"})
            # /index.html redirects to ./
            assert response.status == 301
            response = await client.get("/", headers={"Accept-Encoding": "gzip"})
        assert response.status == 200
        assert response.header("content-encoding") == "gzip"
        assert response.header("vary") == "Accept-Encoding"
        assert gzip.decompress(response.body) == b"<h1>Home</h1>"
        assert response.header("content-length") == str(len(response.body))

    async def test_exception_route(self, static_dir) -> None:
        builder = (
            StaticHandlerBuilder(static_dir)
            .path("/")
            .except_(Route("/version.json", lambda: {"version": "1.0"}))
        )
        async with TestClient(App(builder)) as client:
            response = await client.get("/version.json")
        assert response.status == 200
        assert response.content_type == "application/json"


class TestErrorHandlers:
    async def test_status_handler(self, static_dir) -> None:
        app = _app(static_dir)

        @app.error(404)
        def not_found(request: Request) -> str:
            return f"No {request.path} here"

        async with TestClient(app) as client:
            response = await client.get("/nope.txt")
        assert response.status == 404
        assert response.text == "No /nope.txt here"

    async def test_exception_type_handler(self, static_dir) -> None:
        app = _app(static_dir)

        @app.error(NotFound)
        async def not_found(request: Request, exc: Exception) -> Response:
            return Response(body=str(exc), status=410)

        async with TestClient(app) as client:
            response = await client.get("/nope.txt")
        assert response.status == 410

    async def test_internal_error(self, static_dir) -> None:
        def boom() -> str:
            raise ValueError("boom")

        builder = StaticHandlerBuilder(static_dir).path("/").except_(Route("/boom", boom))
        async with TestClient(App(builder)) as client:
            response = await client.get("/boom")
        assert response.status == 500
        assert response.text == "Internal Server Error"

    async def test_registration_after_first_request_raises(self, static_dir) -> None:
        app = _app(static_dir)
        async with TestClient(app) as client:
            await client.get("/")
        with pytest.raises(RuntimeError):
            app.error(404)(lambda: "late")


class TestAppTargets:
    async def test_plain_handler(self) -> None:
        async def handler(request: Request) -> Response:
            return Response(body=f"hi {request.path}")

        async with TestClient(App(handler)) as client:
            response = await client.get("/x")
        assert response.text == "hi /x"

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(ConfigurationError):
            App("./public")  # type: ignore[arg-type]

    def test_handler_property_builds(self, static_dir) -> None:
        builder = StaticHandlerBuilder(static_dir).path("/")
        app = App(builder)
        assert builder.built is False
        assert app.handler is builder.build()
        assert builder.built is True


class TestLifespan:
    async def test_startup_and_shutdown(self, static_dir) -> None:
        builder = StaticHandlerBuilder(static_dir).path("/")
        app = App(builder)
        events: list[str] = []

        @app.on_startup
        async def started() -> None:
            events.append("startup")

        @app.on_shutdown
        def stopped() -> None:
            events.append("shutdown")

        incoming = iter([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return next(incoming)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)

        assert builder.built is True
        assert events == ["startup", "shutdown"]
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    async def test_startup_failure(self, static_dir) -> None:
        app = _app(static_dir)

        @app.on_startup
        def fail() -> None:
            raise RuntimeError("no disk")

        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return {"type": "lifespan.startup"}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        assert sent == [{"type": "lifespan.startup.failed", "message": "no disk"}]
