"""
Run generic HTTP handlers behind API Gateway HTTP API (payload v2.0) Lambda integrations.

    from apigw_adapter import WSGIHandler, adapt

    lambda_handler = adapt(WSGIHandler(app))
"""

from .core import (
    ResponseRecorder,
    ResponseWriter,
    WSGIHandler,
    get_lambda_context,
    get_original_event,
)
from .core.exceptions import (
    AdapterError,
    BodyDecodeError,
    InvalidEventError,
    RequestConstructionError,
)
from .models import APIGatewayV2HTTPRequest, APIGatewayV2HTTPResponse, HTTPHeaders, Request
from .services import Handler, LambdaHTTPAdapter, adapt

__all__ = [
    "AdapterError",
    "APIGatewayV2HTTPRequest",
    "APIGatewayV2HTTPResponse",
    "BodyDecodeError",
    "Handler",
    "HTTPHeaders",
    "InvalidEventError",
    "LambdaHTTPAdapter",
    "Request",
    "RequestConstructionError",
    "ResponseRecorder",
    "ResponseWriter",
    "WSGIHandler",
    "adapt",
    "get_lambda_context",
    "get_original_event",
]
