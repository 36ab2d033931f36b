"""
WSGI bridge.

Runs a PEP 3333 application (Flask, Django, ...) as a handler, so it can be
served through the adapter without knowing about API Gateway events.
"""

import io
import logging
import sys
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
from urllib.parse import unquote_to_bytes

from ..models.http import VALUE_ENCODING, Request
from .event_context import get_original_event
from .response_recorder import ResponseWriter

logger = logging.getLogger("apigw_adapter.wsgi")

WSGIApp = Callable[[Dict[str, Any], Callable], Iterable[bytes]]

_DEFAULT_PORTS = {"http": "80", "https": "443"}


class WSGIHandler:
    """
    Handler that calls a WSGI application.

    Response headers are held back until the first body chunk is produced (or
    the iterable is exhausted), so ``start_response`` may be called again with
    ``exc_info`` to replace them.
    """

    def __init__(self, app: WSGIApp, default_scheme: str = "https"):
        self.app = app
        self.default_scheme = default_scheme

    def __call__(self, writer: ResponseWriter, request: Request) -> None:
        environ = self.build_environ(request)
        pending: Dict[str, Any] = {}
        state = {"headers_sent": False}

        def send_headers() -> None:
            if state["headers_sent"] or "status" not in pending:
                return
            for name, value in pending["headers"]:
                writer.headers.append(name, _from_wsgi_str(value))
            writer.write_header(pending["status"])
            logger.debug(f"WSGI application responded with status {pending['status']}")
            state["headers_sent"] = True

        def write(data: bytes) -> None:
            if "status" not in pending:
                raise AssertionError("write() before start_response()")
            send_headers()
            writer.write(data)

        def start_response(
            status: str, response_headers: List[Tuple[str, str]], exc_info=None
        ) -> Callable[[bytes], None]:
            if exc_info is not None:
                try:
                    if state["headers_sent"]:
                        raise exc_info[1].with_traceback(exc_info[2])
                finally:
                    exc_info = None
            elif "status" in pending:
                raise AssertionError("start_response() called twice without exc_info")

            pending["status"] = int(status.split(" ", 1)[0])
            pending["headers"] = list(response_headers)
            return write

        result = self.app(environ, start_response)
        try:
            for chunk in result:
                if chunk:
                    write(chunk)
            send_headers()
        finally:
            close = getattr(result, "close", None)
            if close is not None:
                close()

    def build_environ(self, request: Request) -> Dict[str, Any]:
        """Build a PEP 3333 environ dict from a Request."""
        body = request.body.read()
        scheme = request.scheme or self.default_scheme
        event, ok = get_original_event(request)

        server_name, _, server_port = (request.host or "localhost").partition(":")
        if not server_port:
            forwarded_port = request.headers.get("x-forwarded-port")
            server_port = forwarded_port or _DEFAULT_PORTS.get(scheme, "443")

        environ: Dict[str, Any] = {
            "REQUEST_METHOD": request.method,
            "SCRIPT_NAME": "",
            # PEP 3333: PATH_INFO is the percent-decoded path as a latin-1 "bytes in str".
            "PATH_INFO": unquote_to_bytes(request.path or "/").decode("latin-1"),
            "QUERY_STRING": request.query_string,
            "SERVER_NAME": server_name,
            "SERVER_PORT": server_port,
            "SERVER_PROTOCOL": _protocol(event.requestContext.http.protocol if ok else ""),
            "REMOTE_ADDR": event.requestContext.http.sourceIp if ok else "",
            "CONTENT_LENGTH": str(len(body)),
            "wsgi.version": (1, 0),
            "wsgi.url_scheme": scheme,
            "wsgi.input": io.BytesIO(body),
            "wsgi.errors": sys.stderr,
            "wsgi.multithread": False,
            "wsgi.multiprocess": False,
            "wsgi.run_once": False,
        }

        for name in dict.fromkeys(request.headers.keys()):
            values = request.headers.getlist(name)
            if name == "content-type":
                environ["CONTENT_TYPE"] = _wsgi_str(", ".join(values))
                continue
            if name == "content-length":
                continue
            separator = "; " if name == "cookie" else ", "
            environ["HTTP_" + name.upper().replace("-", "_")] = _wsgi_str(separator.join(values))

        if ok:
            environ["apigw.event"] = event
        return environ


def _wsgi_str(value: str) -> str:
    """PEP 3333 environ strings carry the wire bytes decoded as latin-1."""
    return value.encode(VALUE_ENCODING).decode("latin-1")


def _from_wsgi_str(value: str) -> str:
    try:
        return value.encode("latin-1").decode(VALUE_ENCODING)
    except UnicodeError:
        return value


def _protocol(protocol: Optional[str]) -> str:
    return protocol if protocol and protocol.startswith("HTTP/") else "HTTP/1.1"

