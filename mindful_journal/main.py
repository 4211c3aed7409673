"""Application bootstrap."""

import logging
from typing import Iterable, Optional

from .config import Container, Settings, get_settings
from .domain.entities import NamedRecord
from .monitoring import HealthCheckService, setup_logging

logger = logging.getLogger(__name__)


async def bootstrap(
    settings: Optional[Settings] = None,
    emotions: Iterable[NamedRecord] = (),
    people_tags: Iterable[NamedRecord] = (),
    context_tags: Iterable[NamedRecord] = ()
) -> Container:
    """Configure logging, wire the container and report initial health."""

    settings = settings or get_settings()
    setup_logging(settings.log_level, json_format=settings.json_logs)

    logger.info(f"Starting {settings.app_name}...")

    container = Container(settings)
    await container.initialize(
        emotions=emotions,
        people_tags=people_tags,
        context_tags=context_tags
    )

    health = await HealthCheckService(container).get_health_status()
    logger.info(f"System health: {health['status']}")
    if health["status"] != "healthy":
        logger.warning(f"Unhealthy services: {health.get('unhealthy_services', [])}")

    return container
