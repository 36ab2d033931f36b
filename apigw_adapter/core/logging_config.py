"""
Logging Configuration
JSON log lines for CloudWatch Logs.

Provides:
- CustomJsonFormatter: one JSON object per record with correlation ids
- setup_logging: YAML dictConfig with environment substitution, JSON stdout fallback
"""

import json
import logging
import logging.config
import os
import string
import sys
from datetime import datetime, timezone

import yaml

from .request_context import get_request_id, get_trace_id

# LogRecord attributes that are not user supplied "extra" fields.
_STANDARD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


class CustomJsonFormatter(logging.Formatter):
    """
    CloudWatch friendly JSON Formatter.

    Fields:
      - _time: ISO8601 timestamp (millisecond precision)
      - level: Log level
      - logger: Logger name (e.g. apigw_adapter.adapter)
      - message: Log message
      - trace_id: X-Amzn-Trace-Id of the current invocation
      - aws_request_id: Lambda request id of the current invocation
    """

    def format(self, record: logging.LogRecord) -> str:
        trace_id = getattr(record, "trace_id", None) or get_trace_id()
        request_id = getattr(record, "aws_request_id", None) or get_request_id()

        log_data = {
            "_time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if trace_id:
            log_data["trace_id"] = trace_id
        if request_id:
            log_data["aws_request_id"] = request_id

        # Include extra fields
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_") and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(config_path: str = "logging.yml", level: str = "INFO"):
    """
    Load the YAML config, substitute environment variables, and initialize logging.

    Without a config file, a root logger that has no handlers yet gets a JSON
    handler on stdout; one that already has handlers is left as it is.
    """
    if not os.path.exists(config_path):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(CustomJsonFormatter())
        logging.basicConfig(level=level.upper(), handlers=[handler])
        return

    with open(config_path, "r", encoding="utf-8") as f:
        # Supports ${LOG_LEVEL} style placeholders.
        template = string.Template(f.read())

    mapping = os.environ.copy()
    mapping.setdefault("LOG_LEVEL", level.upper())

    content = template.safe_substitute(mapping)
    logging.config.dictConfig(yaml.safe_load(content))
