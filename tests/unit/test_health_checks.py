"""
Unit Tests: Health Check Service

Covers how dependency checks fold into one status:
- database failure is unhealthy
- missing API key is only degraded
- checks that cannot run are unhealthy
"""

from unittest.mock import AsyncMock, Mock

import pytest

from mindful_journal import __version__
from mindful_journal.monitoring import HealthCheckService


def container_reporting(**checks):
    container = Mock()
    container.health_check = AsyncMock(return_value=checks)
    return container


@pytest.mark.asyncio
async def test_all_checks_pass():
    health = await HealthCheckService(
        container_reporting(database=True, api_key_configured=True)
    ).get_health_status()

    assert health["status"] == "healthy"
    assert health["version"] == __version__
    assert "unhealthy_services" not in health


@pytest.mark.asyncio
async def test_missing_api_key_is_degraded():
    health = await HealthCheckService(
        container_reporting(database=True, api_key_configured=False)
    ).get_health_status()

    assert health["status"] == "degraded"
    assert health["unhealthy_services"] == ["api_key_configured"]


@pytest.mark.asyncio
@pytest.mark.parametrize("api_key_configured", [True, False])
async def test_database_down_is_unhealthy(api_key_configured):
    health = await HealthCheckService(
        container_reporting(database=False, api_key_configured=api_key_configured)
    ).get_health_status()

    assert health["status"] == "unhealthy"
    assert "database" in health["unhealthy_services"]


@pytest.mark.asyncio
async def test_check_failure_is_unhealthy():
    container = Mock()
    container.health_check = AsyncMock(side_effect=RuntimeError("Container not initialized"))

    health = await HealthCheckService(container).get_health_status()

    assert health["status"] == "unhealthy"
    assert health["error"] == "Container not initialized"
    assert health["services"] == {}
