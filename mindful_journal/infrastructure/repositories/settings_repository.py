"""SQL user settings repository implementation."""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from ...domain.exceptions import PersistenceError
from ...domain.repositories import ISettingsRepository
from ..database import DatabaseManager, UserSettingModel

logger = logging.getLogger(__name__)


class SQLSettingsRepository(ISettingsRepository):
    """Key/value settings stored in the user_settings table."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    async def get(self, key: str) -> Optional[str]:
        stmt = select(UserSettingModel.value).where(UserSettingModel.key == key)
        try:
            async with self.db_manager.get_session() as session:
                result = await session.execute(stmt)
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            # Values may be secrets; only the key is logged.
            logger.error(f"Failed to get setting with key {key}")
            raise PersistenceError("retrieve setting", f"Failed to retrieve setting with key {key}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            async with self.db_manager.get_session() as session:
                model = await session.get(UserSettingModel, key)
                if model:
                    model.value = value
                else:
                    session.add(UserSettingModel(key=key, value=value))
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to set setting with key {key}")
            raise PersistenceError("save setting", f"Failed to save setting with key {key}") from e

    async def delete(self, key: str) -> None:
        stmt = delete(UserSettingModel).where(UserSettingModel.key == key)
        try:
            async with self.db_manager.get_session() as session:
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete setting with key {key}")
            raise PersistenceError("delete setting", f"Failed to delete setting with key {key}") from e
