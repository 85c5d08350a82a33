"""Monitoring utilities for Prometheus instrumentation."""

from .middleware import MetricsMiddleware, record_sessions_swept
from .router import router

__all__ = ["MetricsMiddleware", "record_sessions_swept", "router"]
