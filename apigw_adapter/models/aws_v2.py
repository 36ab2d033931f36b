# apigw_adapter/models/aws_v2.py

"""
Pydantic models for AWS API Gateway HTTP API (payload format version 2.0) events.

Reference: https://docs.aws.amazon.com/apigateway/latest/developerguide/http-api-develop-integrations-lambda.html

Every field carries a default so that an instance built without arguments is the
"zero" event returned when no event is bound to a request.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiGatewayV2HTTPDescription(BaseModel):
    """requestContext.http object."""

    method: str = ""
    path: str = ""
    protocol: str = ""
    sourceIp: str = ""
    userAgent: str = ""

    model_config = ConfigDict(frozen=True)


class ApiGatewayV2JWTAuthorizer(BaseModel):
    """JWT authorizer claims and scopes."""

    claims: Dict[str, Any] = Field(default_factory=dict)
    scopes: Optional[List[str]] = None

    model_config = ConfigDict(frozen=True)


class ApiGatewayV2Authorizer(BaseModel):
    """requestContext.authorizer object."""

    jwt: Optional[ApiGatewayV2JWTAuthorizer] = None
    # "lambda" is a keyword, so the Lambda authorizer context uses an alias.
    lambda_: Optional[Dict[str, Any]] = Field(None, alias="lambda")
    iam: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ApiGatewayV2RequestContext(BaseModel):
    """API Gateway HTTP API request context."""

    accountId: str = ""
    apiId: str = ""
    domainName: str = ""
    domainPrefix: str = ""
    requestId: str = ""
    routeKey: str = ""
    stage: str = ""
    time: str = ""
    timeEpoch: int = 0
    http: ApiGatewayV2HTTPDescription = Field(default_factory=ApiGatewayV2HTTPDescription)
    authorizer: Optional[ApiGatewayV2Authorizer] = None
    authentication: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(frozen=True)


class APIGatewayV2HTTPRequest(BaseModel):
    """
    AWS API Gateway HTTP API (v2) Event Structure

    The inbound envelope delivered to the Lambda function. Read-only.
    """

    version: str = ""
    routeKey: str = ""
    rawPath: str = ""
    rawQueryString: str = ""
    # Local emulators send null when the request carries no cookies.
    cookies: Optional[List[str]] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    queryStringParameters: Optional[Dict[str, str]] = None
    pathParameters: Optional[Dict[str, str]] = None
    stageVariables: Optional[Dict[str, str]] = None
    requestContext: ApiGatewayV2RequestContext = Field(default_factory=ApiGatewayV2RequestContext)
    body: Optional[str] = None
    isBase64Encoded: bool = False

    model_config = ConfigDict(frozen=True)


class APIGatewayV2HTTPResponse(BaseModel):
    """
    AWS API Gateway HTTP API (v2) Response Structure

    Use model_dump() to convert to the dict returned from the Lambda handler.
    """

    statusCode: int = 0
    headers: Dict[str, str] = Field(default_factory=dict)
    multiValueHeaders: Dict[str, List[str]] = Field(default_factory=dict)
    body: str = ""
    isBase64Encoded: bool = False
    cookies: List[str] = Field(default_factory=list)
