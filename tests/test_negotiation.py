"""Tests for staticweb.server.negotiation — handler return values to Responses."""

import json

import pytest

from staticweb.http.response import Redirect, Response
from staticweb.server.negotiation import negotiate


class TestNegotiate:
    def test_response_unchanged(self) -> None:
        response = Response(body="x", status=201)
        assert negotiate(response) is response

    def test_str(self) -> None:
        response = negotiate("hello")
        assert response.text == "hello"
        assert response.content_type == "text/html; charset=utf-8"

    def test_bytes(self) -> None:
        response = negotiate(b"\x00")
        assert response.content_type == "application/octet-stream"

    def test_dict(self) -> None:
        response = negotiate({"a": 1})
        assert response.content_type == "application/json"
        assert json.loads(response.text) == {"a": 1}

    def test_list_is_json_not_tuple(self) -> None:
        response = negotiate(["x", 404])
        assert response.status == 200
        assert json.loads(response.text) == ["x", 404]

    def test_tuple_sets_status(self) -> None:
        response = negotiate(("missing", 404))
        assert response.status == 404
        assert response.text == "missing"

    def test_redirect(self) -> None:
        response = negotiate(Redirect("/new"))
        assert response.status == 302
        assert response.header("Location") == "/new"

    def test_none(self) -> None:
        assert negotiate(None).status == 204

    def test_unsupported(self) -> None:
        with pytest.raises(TypeError):
            negotiate(object())
