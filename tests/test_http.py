"""Tests for smolblog.http and the ASGI response sender."""

from typing import Any

from smolblog.http.request import Request
from smolblog.http.response import Response
from smolblog.server.sender import send_response


class TestRequest:
    def test_from_asgi(self) -> None:
        scope = {
            "type": "http",
            "method": "get",
            "path": "/about",
            "query_string": b"a=1",
        }
        request = Request.from_asgi(scope)
        assert request.method == "GET"
        assert request.path == "/about"
        assert request.url == "/about?a=1"

    def test_url_without_query(self) -> None:
        request = Request.from_asgi({"type": "http", "method": "GET", "path": "/"})
        assert request.url == "/"


class TestResponse:
    def test_chain(self) -> None:
        response = Response("hi").with_status(404).with_header("Allow", "GET")
        assert response.status == 404
        assert response.headers == (("Allow", "GET"),)

    def test_body_conversions(self) -> None:
        assert Response("é").body_bytes == "é".encode()
        assert Response(b"ok").text == "ok"


class TestSendResponse:
    async def _collect(self, response: Response) -> list[dict[str, Any]]:
        messages: list[dict[str, Any]] = []

        async def send(message: dict[str, Any]) -> None:
            messages.append(message)

        await send_response(response, send)
        return messages

    async def test_start_then_body(self) -> None:
        messages = await self._collect(Response(b"abc", content_type="text/css"))
        start, body = messages
        assert start["type"] == "http.response.start"
        assert start["status"] == 200
        headers = dict(start["headers"])
        assert headers[b"content-type"] == b"text/css"
        assert headers[b"content-length"] == b"3"
        assert body == {"type": "http.response.body", "body": b"abc"}

    async def test_extra_headers_lowercased(self) -> None:
        messages = await self._collect(Response("x").with_header("Allow", "GET"))
        assert (b"allow", b"GET") in messages[0]["headers"]

    async def test_no_body_for_304(self) -> None:
        messages = await self._collect(Response("ignored", status=304))
        assert messages[1]["body"] == b""
