"""
Lambda Invocation Adapter - Service Layer

Standardizes the flow: API Gateway event -> Request -> handler -> API Gateway response.
"""

import logging
from typing import Any, Callable, Dict, Optional, Union

from pydantic import ValidationError

from ..core import request_context
from ..core.event_context import bind_event
from ..core.exceptions import AdapterError, InvalidEventError
from ..core.lambda_logging import robust_lambda_logger
from ..core.request_builder import RequestBuilder, V2HTTPRequestBuilder
from ..core.response_encoder import ResponseEncoder, V2HTTPResponseEncoder
from ..core.response_recorder import ResponseRecorder, ResponseWriter
from ..core.trace import TRACE_HEADER
from ..models.aws_v2 import APIGatewayV2HTTPRequest, APIGatewayV2HTTPResponse
from ..models.http import Request

logger = logging.getLogger("apigw_adapter.adapter")

Handler = Callable[[ResponseWriter, Request], None]


class LambdaHTTPAdapter:
    """
    Runs a generic HTTP handler for API Gateway HTTP API events.

    Each invocation builds one Request, calls the handler exactly once with a
    fresh ResponseRecorder and encodes what the handler wrote. Nothing is
    shared between invocations.
    """

    def __init__(
        self,
        handler: Handler,
        request_builder: Optional[RequestBuilder] = None,
        response_encoder: Optional[ResponseEncoder] = None,
    ):
        self.handler = handler
        self.request_builder = request_builder or V2HTTPRequestBuilder()
        self.response_encoder = response_encoder or V2HTTPResponseEncoder()

    def __call__(
        self, event: Union[Dict[str, Any], APIGatewayV2HTTPRequest], context: Any = None
    ) -> Dict[str, Any]:
        """
        Lambda entry point: takes the raw event dict and returns the response dict.
        """
        parsed = self.parse_event(event)
        self._bind_log_context(parsed, context)
        try:
            response = self.invoke(parsed, context)
        finally:
            request_context.clear_trace_id()
        return response.model_dump()

    def invoke(self, event: APIGatewayV2HTTPRequest, context: Any = None) -> APIGatewayV2HTTPResponse:
        """
        Process one event. Raises AdapterError if no request can be built;
        the handler is not called in that case.
        """
        scope = bind_event(context, event)

        try:
            request = self.request_builder.build(event, scope)
        except AdapterError as e:
            logger.warning(
                f"Rejecting event before handler: {e}",
                extra={"path": event.rawPath, "method": event.requestContext.http.method},
            )
            raise

        logger.info(f"Processing request ({request.method} {request.path})")

        writer = ResponseRecorder()
        try:
            self.handler(writer, request)
        except Exception as e:
            logger.exception(f"Handler raised an error: {e}")
            raise

        response = self.response_encoder.encode(writer)
        logger.info(
            f"Completed request ({request.method} {request.path}) -> {response.statusCode}",
            extra={"is_base64": response.isBase64Encoded},
        )
        return response

    @staticmethod
    def parse_event(event: Union[Dict[str, Any], APIGatewayV2HTTPRequest]) -> APIGatewayV2HTTPRequest:
        if isinstance(event, APIGatewayV2HTTPRequest):
            return event
        try:
            return APIGatewayV2HTTPRequest.model_validate(event)
        except ValidationError as e:
            logger.warning(f"Invalid API Gateway event: {e.error_count()} validation error(s)")
            raise InvalidEventError(e) from e

    @staticmethod
    def _bind_log_context(event: APIGatewayV2HTTPRequest, context: Any) -> None:
        request_id = getattr(context, "aws_request_id", None) or event.requestContext.requestId
        if request_id:
            request_context.set_request_id(request_id)
        else:
            request_context.generate_request_id()

        for name, value in event.headers.items():
            if name.lower() == TRACE_HEADER:
                request_context.set_trace_id(value)
                break


def adapt(handler: Handler, service_name: Optional[str] = None) -> Callable[[Dict[str, Any], Any], Dict[str, Any]]:
    """
    Return a Lambda handler function serving ``handler``.

    Usage:
        lambda_handler = adapt(WSGIHandler(flask_app))
    """
    adapter = LambdaHTTPAdapter(handler)

    @robust_lambda_logger(service_name=service_name)
    def lambda_handler(event, context):
        return adapter(event, context)

    lambda_handler.adapter = adapter
    return lambda_handler
