import base64
import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, List

from ..models.aws_v2 import APIGatewayV2HTTPResponse
from .response_recorder import STATUS_UNSET, ResponseRecorder

logger = logging.getLogger("apigw_adapter.response_encoder")

SET_COOKIE = "set-cookie"

_HEADER_TOKEN_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def canonical_header_name(name: str) -> str:
    """
    Canonical MIME form of a header name: ``content-type`` becomes ``Content-Type``.

    Names that are not HTTP tokens are returned unchanged.
    """
    if not _HEADER_TOKEN_RE.fullmatch(name):
        return name
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


class ResponseEncoder(ABC):
    @abstractmethod
    def encode(self, recorder: ResponseRecorder) -> APIGatewayV2HTTPResponse:
        """
        Build the outbound API Gateway response from a finished recorder.
        """
        pass


class V2HTTPResponseEncoder(ResponseEncoder):
    """API Gateway HTTP API (payload v2.0) compatible response encoder."""

    def encode(self, recorder: ResponseRecorder) -> APIGatewayV2HTTPResponse:
        headers: Dict[str, str] = {}
        multi_headers: Dict[str, List[str]] = {}
        cookies: List[str] = []

        # keys() repeats a name once per value; keep first-seen order.
        for name in dict.fromkeys(recorder.headers.keys()):
            values = recorder.headers.getlist(name)

            # Set-Cookie travels in its own list.
            if name.lower() == SET_COOKIE:
                cookies.extend(values)
                continue

            if len(values) == 1:
                headers[canonical_header_name(name)] = values[0]
            else:
                multi_headers[canonical_header_name(name)] = list(values)

        # Binary detection is content-sniffed: anything that is not valid UTF-8
        # is sent base64 encoded, regardless of Content-Type.
        raw_body = recorder.body
        try:
            body = raw_body.decode("utf-8")
            is_base64 = False
        except UnicodeDecodeError:
            body = base64.b64encode(raw_body).decode("ascii")
            is_base64 = True

        if recorder.status == STATUS_UNSET:
            logger.warning("Response finished without a status; returning statusCode 0")

        return APIGatewayV2HTTPResponse(
            statusCode=recorder.status,
            headers=headers,
            multiValueHeaders=multi_headers,
            body=body,
            isBase64Encoded=is_base64,
            cookies=cookies,
        )
