"""
Lambda Logging Utilities

Provides logging for short-lived Lambda environments.
Ensures logs are flushed before the Lambda execution context freezes.
"""

import functools
import logging
import sys

from ..config import config
from .logging_config import setup_logging

logger = logging.getLogger("apigw_adapter.lambda_logging")

_configured = False


class StreamToLogger:
    """
    Redirects stdout/stderr to a logger instance.
    Captures print() statements and sends them through the logging system.
    """

    def __init__(self, logger: logging.Logger, level: int):
        self.logger = logger
        self.level = level

    def write(self, buf: str):
        for line in buf.rstrip().splitlines():
            if line.strip():
                self.logger.log(self.level, line.rstrip())

    def flush(self):
        pass


def configure_once() -> None:
    """
    Initialize logging from the adapter config on the first invocation only.

    Logging the application configured before the first invocation is kept.
    """
    global _configured
    if _configured:
        return
    _configured = True
    if logging.getLogger().handlers:
        logger.debug("Root logger already has handlers; leaving logging configuration unchanged")
        return
    setup_logging(config.LOG_CONFIG_PATH, config.LOG_LEVEL)


def robust_lambda_logger(service_name: str = None, capture_stdout: bool = None):
    """
    Decorator for Lambda handlers to ensure logs are flushed and stdout is captured.

    Features:
    - Configures logging once per execution environment
    - Optionally captures stdout/stderr and sends it through logging
    - Flushes all handlers in finally block (important for Lambda freeze)

    Usage:
        @robust_lambda_logger(service_name="orders-api")
        def lambda_handler(event, context):
            print("This will be logged!")
            return {"statusCode": 200}
    """
    name = service_name or config.SERVICE_NAME
    capture = config.CAPTURE_STDOUT if capture_stdout is None else capture_stdout

    def decorator(func):
        @functools.wraps(func)
        def wrapper(event, context):
            configure_once()

            original_stdout = sys.stdout
            original_stderr = sys.stderr
            if capture:
                sys.stdout = StreamToLogger(logging.getLogger(f"{name}.stdout"), logging.INFO)
                sys.stderr = StreamToLogger(logging.getLogger(f"{name}.stderr"), logging.ERROR)

            try:
                return func(event, context)
            finally:
                sys.stdout = original_stdout
                sys.stderr = original_stderr

                for h in logging.getLogger().handlers:
                    h.flush()

        return wrapper

    return decorator
