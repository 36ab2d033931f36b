import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add project root to sys.path to allow imports like 'apigw_adapter.core...'
project_root = str(Path(__file__).parent.parent.parent.resolve())
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from apigw_adapter.core import request_context  # noqa: E402


def build_event(**overrides):
    """Return a raw API Gateway HTTP API v2 event dict, with top-level overrides."""
    event = {
        "version": "2.0",
        "routeKey": "$default",
        "rawPath": "/my/path",
        "rawQueryString": "parameter1=value1&parameter2=value2",
        "cookies": [],
        "headers": {
            "content-type": "application/json",
            "x-forwarded-proto": "https",
            "x-amzn-trace-id": "Root=1-5759e988-bd862e3fe1be46a994272793;Sampled=1",
        },
        "requestContext": {
            "accountId": "123456789012",
            "apiId": "api-id",
            "domainName": "id.execute-api.us-east-1.amazonaws.com",
            "domainPrefix": "id",
            "http": {
                "method": "POST",
                "path": "/my/path",
                "protocol": "HTTP/1.1",
                "sourceIp": "192.0.2.1",
                "userAgent": "agent",
            },
            "requestId": "gw-request-id",
            "routeKey": "$default",
            "stage": "$default",
            "time": "12/Mar/2020:19:03:58 +0000",
            "timeEpoch": 1583348638390,
        },
        "body": '{"key": "value"}',
        "isBase64Encoded": False,
    }
    event.update(overrides)
    return event


@pytest.fixture
def raw_event():
    return build_event()


@pytest.fixture
def lambda_context():
    return SimpleNamespace(
        aws_request_id="lambda-request-id",
        function_name="test-function",
        get_remaining_time_in_millis=lambda: 3000,
    )


@pytest.fixture(autouse=True)
def _clear_request_context():
    request_context.clear_trace_id()
    yield
    request_context.clear_trace_id()
