"""
Data model definitions package.

Aggregates the event envelopes and the generic request model.
"""

from .aws_v2 import (
    ApiGatewayV2Authorizer,
    ApiGatewayV2HTTPDescription,
    APIGatewayV2HTTPRequest,
    APIGatewayV2HTTPResponse,
    ApiGatewayV2JWTAuthorizer,
    ApiGatewayV2RequestContext,
)
from .http import HTTPHeaders, Request

__all__ = [
    "ApiGatewayV2Authorizer",
    "ApiGatewayV2HTTPDescription",
    "APIGatewayV2HTTPRequest",
    "APIGatewayV2HTTPResponse",
    "ApiGatewayV2JWTAuthorizer",
    "ApiGatewayV2RequestContext",
    "HTTPHeaders",
    "Request",
]
