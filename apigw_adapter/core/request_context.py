"""
Log correlation context.

ContextVars holding the trace id and the Lambda request id of the invocation
currently being processed, read by the JSON log formatter. They are not used to
pass data to handlers; see event_context for that.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

from .trace import TraceId

# Trace ID (full header format).
_trace_id_var: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)
# Lambda request ID.
_request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_trace_id() -> Optional[str]:
    """Get the current Trace ID."""
    return _trace_id_var.get()


def get_request_id() -> Optional[str]:
    """Get the current Request ID."""
    return _request_id_var.get()


def set_request_id(request_id: str) -> str:
    _request_id_var.set(request_id)
    return request_id


def generate_request_id() -> str:
    """
    Generate and set a new Request ID (UUID) for the current context.
    """
    return set_request_id(str(uuid.uuid4()))


def set_trace_id(trace_id_str: str) -> str:
    """
    Set the Trace ID.

    Args:
        trace_id_str: X-Amzn-Trace-Id header string

    Returns:
        The normalized Trace ID string that was set
    """
    trace = str(TraceId.parse(trace_id_str))
    _trace_id_var.set(trace)
    return trace


def clear_trace_id() -> None:
    """Clear both correlation ids."""
    _trace_id_var.set(None)
    _request_id_var.set(None)
