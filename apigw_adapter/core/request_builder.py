import base64
import binascii
import io
import logging
import re
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple

from starlette.datastructures import URL

from ..models.aws_v2 import APIGatewayV2HTTPRequest
from ..models.http import VALUE_ENCODING, HTTPHeaders, Request
from .exceptions import BodyDecodeError, InvalidMethodError, InvalidTargetError, RequestConstructionError

logger = logging.getLogger("apigw_adapter.request_builder")

# RFC 9110 token characters.
_METHOD_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_CONTROL_CHAR_RE = re.compile(r"[\x00-\x1f\x7f]")
# RFC 3986 scheme grammar.
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")

# Headers whose value grammar uses commas, so they are never split into tokens.
UNSPLIT_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "date",
        "expires",
        "if-modified-since",
        "if-range",
        "if-unmodified-since",
        "last-modified",
        "proxy-authorization",
        "retry-after",
        "set-cookie",
        "user-agent",
    }
)

RawHeaders = List[Tuple[bytes, bytes]]


class RequestBuilder(ABC):
    @abstractmethod
    def build(self, event: APIGatewayV2HTTPRequest, context: Mapping[str, Any]) -> Request:
        """
        Build a generic Request from an API Gateway event.
        ``context`` is the request-scoped binding attached to the result.
        """
        pass


class V2HTTPRequestBuilder(RequestBuilder):
    """Builds requests from API Gateway HTTP API (payload v2.0) events."""

    def build(
        self, event: APIGatewayV2HTTPRequest, context: Optional[Mapping[str, Any]] = None
    ) -> Request:
        body = self._decode_body(event)
        method = self._normalize_method(event.requestContext.http.method)
        self._check_target(event.rawPath, event.rawQueryString)

        domain_name = event.requestContext.domainName
        # An empty query yields an empty query component, not a trailing "?".
        try:
            url = URL(
                scheme=self._forwarded_proto(event.headers),
                netloc=domain_name,
                path=event.rawPath,
                query=event.rawQueryString,
            )
        except ValueError as e:
            raise RequestConstructionError(f"invalid URL for host {domain_name!r}", e) from e

        raw_headers = self._fold_headers(event.headers)
        # Cookies arrive outside the headers and must stay one value per cookie.
        for cookie in event.cookies or []:
            raw_headers.append((b"cookie", cookie.encode(VALUE_ENCODING)))

        logger.debug(f"Built request {method} {url.path} (host={domain_name})")

        return Request(
            method=method,
            url=url,
            headers=HTTPHeaders(raw=raw_headers),
            body=io.BytesIO(body),
            host=domain_name,
            context=context if context is not None else MappingProxyType({}),
        )

    @staticmethod
    def _decode_body(event: APIGatewayV2HTTPRequest) -> bytes:
        body = event.body or ""
        if not event.isBase64Encoded:
            return body.encode("utf-8")
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as e:
            raise BodyDecodeError(e) from e

    @staticmethod
    def _normalize_method(method: str) -> str:
        if not method:
            return "GET"
        if not _METHOD_RE.fullmatch(method):
            raise InvalidMethodError(method)
        return method.upper()

    @staticmethod
    def _check_target(path: str, query: str) -> None:
        target = f"{path}?{query}" if query else path
        if _CONTROL_CHAR_RE.search(target):
            raise InvalidTargetError(target)

    @staticmethod
    def _forwarded_proto(headers: Mapping[str, str]) -> str:
        for name, value in headers.items():
            if name.lower() == "x-forwarded-proto":
                # A proxy chain may append its own protocol; the client's comes first.
                proto = value.split(",", 1)[0].strip().lower()
                return proto if _SCHEME_RE.fullmatch(proto) else ""
        return ""

    @staticmethod
    def _fold_headers(headers: Mapping[str, str]) -> RawHeaders:
        """
        Expand comma-joined gateway header values into one entry per value.

        Values are stored UTF-8 encoded and read back unchanged through
        HTTPHeaders.
        """
        raw: RawHeaders = []
        for name, value in headers.items():
            try:
                raw_name = name.lower().encode("latin-1")
            except UnicodeEncodeError as e:
                raise RequestConstructionError(f"invalid header name {name!r}", e) from e

            if raw_name.decode("latin-1") in UNSPLIT_HEADERS:
                parts = [value.strip()]
            else:
                parts = [part.strip() for part in value.split(",")]

            for part in parts:
                raw.append((raw_name, part.encode(VALUE_ENCODING)))
        return raw
