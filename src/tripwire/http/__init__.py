"""HTTP transport used by network checkers."""

from .client import HttpClient, HttpResponse

__all__ = ["HttpClient", "HttpResponse"]
