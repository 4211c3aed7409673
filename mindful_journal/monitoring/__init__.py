"""Monitoring and observability module."""

from .health_checks import HealthCheckService
from .logging_config import setup_logging

__all__ = [
    "HealthCheckService",
    "setup_logging",
]
