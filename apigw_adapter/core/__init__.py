"""
Core logic package.

Provides the request/response translation and the request-scoped event binding.
"""

from .event_context import bind_event, get_lambda_context, get_original_event
from .request_builder import RequestBuilder, V2HTTPRequestBuilder
from .response_encoder import ResponseEncoder, V2HTTPResponseEncoder
from .response_recorder import ResponseRecorder, ResponseWriter
from .wsgi import WSGIHandler

__all__ = [
    "bind_event",
    "get_lambda_context",
    "get_original_event",
    "RequestBuilder",
    "V2HTTPRequestBuilder",
    "ResponseEncoder",
    "V2HTTPResponseEncoder",
    "ResponseRecorder",
    "ResponseWriter",
    "WSGIHandler",
]
