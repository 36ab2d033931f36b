import base64
import io
import json
import sys

import pytest
from starlette.datastructures import URL

from apigw_adapter.core.response_recorder import ResponseRecorder
from apigw_adapter.core.request_builder import V2HTTPRequestBuilder
from apigw_adapter.core.wsgi import WSGIHandler
from apigw_adapter.models.aws_v2 import APIGatewayV2HTTPRequest
from apigw_adapter.models.http import HTTPHeaders, Request
from apigw_adapter.services.adapter import LambdaHTTPAdapter
from conftest import build_event

ENVIRON_KEYS = (
    "REQUEST_METHOD",
    "SCRIPT_NAME",
    "PATH_INFO",
    "QUERY_STRING",
    "SERVER_NAME",
    "SERVER_PORT",
    "SERVER_PROTOCOL",
    "REMOTE_ADDR",
    "CONTENT_TYPE",
    "CONTENT_LENGTH",
    "HTTP_ACCEPT",
    "HTTP_COOKIE",
    "wsgi.url_scheme",
)


def environ_app(environ, start_response):
    """Echo the interesting part of the environ as JSON."""
    data = {key: environ.get(key) for key in ENVIRON_KEYS}
    data["body"] = environ["wsgi.input"].read().decode("utf-8")
    start_response("200 OK", [("Content-Type", "application/json")])
    return [json.dumps(data).encode("utf-8")]


def _invoke(app, **overrides):
    event = APIGatewayV2HTTPRequest.model_validate(build_event(**overrides))
    return LambdaHTTPAdapter(WSGIHandler(app)).invoke(event)


class TestEnviron:
    def test_environ_is_built_from_event(self):
        response = _invoke(
            environ_app,
            rawPath="/caf%C3%A9/items",
            headers={
                "content-type": "application/json",
                "accept": "text/html, application/json",
                "x-forwarded-proto": "https",
            },
            cookies=["a=1", "b=2"],
        )
        environ = json.loads(response.body)

        assert environ["REQUEST_METHOD"] == "POST"
        assert environ["SCRIPT_NAME"] == ""
        assert environ["PATH_INFO"] == "/café/items".encode("utf-8").decode("latin-1")
        assert environ["QUERY_STRING"] == "parameter1=value1&parameter2=value2"
        assert environ["SERVER_NAME"] == "id.execute-api.us-east-1.amazonaws.com"
        assert environ["SERVER_PORT"] == "443"
        assert environ["SERVER_PROTOCOL"] == "HTTP/1.1"
        assert environ["REMOTE_ADDR"] == "192.0.2.1"
        assert environ["CONTENT_TYPE"] == "application/json"
        assert environ["CONTENT_LENGTH"] == str(len('{"key": "value"}'))
        assert environ["HTTP_ACCEPT"] == "text/html, application/json"
        assert environ["HTTP_COOKIE"] == "a=1; b=2"
        assert environ["wsgi.url_scheme"] == "https"
        assert environ["body"] == '{"key": "value"}'

    def test_non_ascii_headers_are_latin1_strings_in_environ(self):
        event = APIGatewayV2HTTPRequest.model_validate(
            build_event(headers={"x-name": "café"}, cookies=["n=José"])
        )
        request = V2HTTPRequestBuilder().build(event)

        environ = WSGIHandler(environ_app).build_environ(request)

        assert environ["HTTP_X_NAME"] == "café".encode("utf-8").decode("latin-1")
        assert environ["HTTP_COOKIE"] == "n=José".encode("utf-8").decode("latin-1")
        assert request.headers["x-name"] == "café"

    def test_scheme_defaults_to_https(self):
        response = _invoke(environ_app, headers={})
        environ = json.loads(response.body)

        assert environ["wsgi.url_scheme"] == "https"

    def test_request_without_event_uses_defaults(self):
        request = Request(
            method="GET",
            url=URL("http://example.com/x"),
            headers=HTTPHeaders(),
            body=io.BytesIO(),
        )

        environ = WSGIHandler(environ_app).build_environ(request)

        assert environ["SERVER_NAME"] == "localhost"
        assert environ["SERVER_PORT"] == "80"
        assert environ["REMOTE_ADDR"] == ""
        assert environ["wsgi.url_scheme"] == "http"
        assert environ["wsgi.errors"] is sys.stderr
        assert "apigw.event" not in environ


class TestResponse:
    def test_status_headers_and_cookies(self):
        def app(environ, start_response):
            start_response(
                "201 Created",
                [
                    ("Content-Type", "text/plain"),
                    ("Set-Cookie", "s1=a"),
                    ("Set-Cookie", "s2=b"),
                    ("Vary", "Accept"),
                    ("Vary", "Cookie"),
                ],
            )
            return [b"created"]

        response = _invoke(app)

        assert response.statusCode == 201
        assert response.body == "created"
        assert response.headers == {"Content-Type": "text/plain"}
        assert response.multiValueHeaders == {"Vary": ["Accept", "Cookie"]}
        assert response.cookies == ["s1=a", "s2=b"]

    def test_non_ascii_response_headers_are_decoded_from_latin1(self):
        def app(environ, start_response):
            start_response(
                "200 OK",
                [
                    ("Set-Cookie", environ["HTTP_COOKIE"]),
                    ("X-Name", "café".encode("utf-8").decode("latin-1")),
                ],
            )
            return [b""]

        response = _invoke(app, headers={}, cookies=["n=José"])

        assert response.cookies == ["n=José"]
        assert response.headers == {"X-Name": "café"}

    def test_empty_body_still_sends_status(self):
        def app(environ, start_response):
            start_response("304 Not Modified", [])
            return []

        response = _invoke(app)

        assert response.statusCode == 304
        assert response.body == ""

    def test_binary_body(self):
        payload = b"\x00\x01\xfe\xff"

        def app(environ, start_response):
            start_response("200 OK", [("Content-Type", "application/octet-stream")])
            return [payload[:2], payload[2:]]

        response = _invoke(app)

        assert response.isBase64Encoded is True
        assert base64.b64decode(response.body) == payload

    def test_write_callable(self):
        def app(environ, start_response):
            write = start_response("200 OK", [])
            write(b"legacy ")
            return [b"output"]

        response = _invoke(app)

        assert response.body == "legacy output"

    def test_exc_info_replaces_headers_before_body(self):
        def app(environ, start_response):
            start_response("200 OK", [("X-Stale", "1")])
            try:
                raise ValueError("late failure")
            except ValueError:
                start_response("500 Internal Server Error", [("X-Error", "1")], sys.exc_info())
            return [b"error"]

        response = _invoke(app)

        assert response.statusCode == 500
        assert response.headers == {"X-Error": "1"}

    def test_exc_info_after_body_reraises(self):
        def app(environ, start_response):
            start_response("200 OK", [])
            yield b"partial"
            try:
                raise ValueError("too late")
            except ValueError:
                start_response("500 Internal Server Error", [], sys.exc_info())
            yield b"never"

        with pytest.raises(ValueError, match="too late"):
            _invoke(app)

    def test_iterable_is_closed(self):
        closed = []

        class Body:
            def __iter__(self):
                return iter([b"ok"])

            def close(self):
                closed.append(True)

        def app(environ, start_response):
            start_response("200 OK", [])
            return Body()

        _invoke(app)

        assert closed == [True]

    def test_direct_call_with_recorder(self):
        request = Request(
            method="GET",
            url=URL("https://example.com/"),
            headers=HTTPHeaders(),
            body=io.BytesIO(),
        )
        recorder = ResponseRecorder()

        WSGIHandler(environ_app)(recorder, request)

        assert recorder.status == 200
        assert recorder.headers.getlist("content-type") == ["application/json"]
