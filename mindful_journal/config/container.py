"""Dependency injection container."""

import logging
from typing import Any, Dict, Iterable, Optional

import httpx

from ..application.use_cases import ChatSessionController
from ..domain.entities import NamedRecord
from ..domain.services import PromptResolver
from ..infrastructure.database import DatabaseManager
from ..infrastructure.external_services import OpenAICompletionClient
from ..infrastructure.repositories import (
    EmotionLookup,
    SQLJournalEntryRepository,
    SQLSettingsRepository,
    TagLookup,
)
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


class Container:
    """Dependency injection container."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self.http_client = http_client
        self._instances: Dict[str, Any] = {}
        self._initialized = False

    async def initialize(
        self,
        emotions: Iterable[NamedRecord] = (),
        people_tags: Iterable[NamedRecord] = (),
        context_tags: Iterable[NamedRecord] = ()
    ) -> None:
        """Initialize container and all dependencies."""
        if self._initialized:
            return

        try:
            db_manager = DatabaseManager(
                self.settings.database_url,
                echo=self.settings.database_echo
            )
            await db_manager.initialize()
            await db_manager.create_tables()
            self._instances["db_manager"] = db_manager

            self._register_repositories(db_manager, emotions, people_tags, context_tags)
            self._register_services()

            self._initialized = True
            logger.info("Dependency injection container initialized")

        except Exception as e:
            logger.error(f"Failed to initialize container: {e}")
            raise

    def _register_repositories(
        self,
        db_manager: DatabaseManager,
        emotions: Iterable[NamedRecord],
        people_tags: Iterable[NamedRecord],
        context_tags: Iterable[NamedRecord]
    ) -> None:
        self._instances["journal_repository"] = SQLJournalEntryRepository(db_manager)
        self._instances["settings_repository"] = SQLSettingsRepository(db_manager)
        self._instances["emotion_resolver"] = EmotionLookup(emotions)
        self._instances["tag_resolver"] = TagLookup(people_tags, context_tags)

    def _register_services(self) -> None:
        self._instances["completion_service"] = OpenAICompletionClient(
            settings_repository=self._instances["settings_repository"],
            model=self.settings.completion_model,
            temperature=self.settings.completion_temperature,
            max_tokens=self.settings.completion_max_tokens,
            base_url=self.settings.openai_base_url,
            api_key_setting_key=self.settings.api_key_setting_key,
            http_client=self.http_client
        )
        self._instances["prompt_resolver"] = PromptResolver(
            emotion_resolver=self._instances["emotion_resolver"],
            tag_resolver=self._instances["tag_resolver"]
        )
        self._instances["chat_controller"] = ChatSessionController(
            journal_repository=self._instances["journal_repository"],
            completion_service=self._instances["completion_service"],
            prompt_resolver=self._instances["prompt_resolver"]
        )

    def get(self, service_name: str) -> Any:
        """Get service instance."""
        if not self._initialized:
            raise RuntimeError("Container not initialized")

        instance = self._instances.get(service_name)
        if instance is None:
            raise ValueError(f"Service '{service_name}' not found")

        return instance

    async def health_check(self) -> Dict[str, bool]:
        """Check health of all services."""
        health_status = {}

        try:
            health_status["database"] = await self.get("db_manager").health_check()
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            health_status["database"] = False

        try:
            api_key = await self.get("settings_repository").get(self.settings.api_key_setting_key)
            health_status["api_key_configured"] = bool(api_key)
        except Exception as e:
            logger.error(f"API key check failed: {e}")
            health_status["api_key_configured"] = False

        return health_status

    async def close(self) -> None:
        """Close container and cleanup resources."""
        if not self._initialized:
            return

        try:
            await self._instances["completion_service"].aclose()
            await self._instances["db_manager"].close()
            logger.info("Container closed successfully")
        except Exception as e:
            logger.error(f"Error closing container: {e}")
            raise
        finally:
            self._initialized = False


_container: Optional[Container] = None


def get_container() -> Container:
    """Get the process-wide container instance."""
    global _container
    if _container is None:
        _container = Container(get_settings())
    return _container
