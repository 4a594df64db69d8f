"""Middleware package for FastAPI."""

from .correlation import CorrelationIdMiddleware, CORRELATION_ID_HEADER
from .exceptions import ExceptionHandlingMiddleware

__all__ = ["CorrelationIdMiddleware", "CORRELATION_ID_HEADER", "ExceptionHandlingMiddleware"]
