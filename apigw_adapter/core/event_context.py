"""
Request-scoped binding between a generic request and the event that produced it.

The binding is an immutable mapping created once per invocation and carried on
``Request.context``. Nothing here is global.
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from ..models.aws_v2 import APIGatewayV2HTTPRequest
from ..models.http import Request

EVENT_KEY = "apigw_adapter.event"
LAMBDA_CONTEXT_KEY = "apigw_adapter.lambda_context"


def bind_event(lambda_context: Any, event: APIGatewayV2HTTPRequest) -> Mapping[str, Any]:
    """Create the read-only request context holding the event and the Lambda context."""
    return MappingProxyType({EVENT_KEY: event, LAMBDA_CONTEXT_KEY: lambda_context})


def get_original_event(request: Request) -> Tuple[APIGatewayV2HTTPRequest, bool]:
    """
    Return the API Gateway event that was used to build ``request``.

    The second item tells whether an event is bound. When it is False the first
    item is an empty event and must not be consumed.
    """
    event = request.context.get(EVENT_KEY)
    if isinstance(event, APIGatewayV2HTTPRequest):
        return event, True
    return APIGatewayV2HTTPRequest(), False


def get_lambda_context(request: Request) -> Optional[Any]:
    """Return the Lambda context object bound to ``request``, if any."""
    return request.context.get(LAMBDA_CONTEXT_KEY)
