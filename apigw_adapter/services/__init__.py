"""
Services package.

Provides the Lambda invocation adapter.
"""

from .adapter import Handler, LambdaHTTPAdapter, adapt

__all__ = [
    "Handler",
    "LambdaHTTPAdapter",
    "adapt",
]
