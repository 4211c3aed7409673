"""Health reporting for the chat engine."""

import logging
import time
from typing import Any, Dict, List

from .. import __version__

logger = logging.getLogger(__name__)

# Without these nothing works; any other failing check only degrades service.
CRITICAL_CHECKS = frozenset({"database"})


class HealthCheckService:
    """Turns the container's per-dependency checks into one status.

    ``unhealthy`` when a critical check fails or the checks cannot run,
    ``degraded`` when only optional checks fail (a missing API key still
    leaves entries and saved sessions readable), ``healthy`` otherwise.
    """

    def __init__(self, container):
        self.container = container

    async def get_health_status(self) -> Dict[str, Any]:
        report: Dict[str, Any] = {
            "version": __version__,
            "checked_at": time.time(),
        }

        try:
            checks = await self.container.health_check()
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            report.update(status="unhealthy", services={}, error=str(e))
            return report

        failing: List[str] = [name for name, ok in checks.items() if not ok]
        report["services"] = checks

        if any(name in CRITICAL_CHECKS for name in failing):
            report["status"] = "unhealthy"
        elif failing:
            report["status"] = "degraded"
        else:
            report["status"] = "healthy"

        if failing:
            report["unhealthy_services"] = failing

        return report
