"""
Application coordinator.
Builds the store and the repositories and hands them to the presentation layer.
"""

from typing import Optional

from config.logging_config import get_logger
from config import settings
from protouch.core.clock import Clock
from protouch.core.errors import StorageError
from protouch.password.generator import PasswordGenerator
from protouch.reminder.repository import ReminderRepository
from protouch.settings.repository import AppSettings, SettingsRepository
from protouch.storage.kv_store import KeyValueStore, SQLiteKeyValueStore
from protouch.tips.repository import SavedTipsRepository

logger = get_logger(__name__)


class AppCoordinator:
    """
    Owns the repository instances. Each repository owns exactly one store key;
    nothing else holds mutable app state.
    """

    def __init__(self, store: Optional[KeyValueStore] = None,
                 clock: Optional[Clock] = None):
        """
        Initialize coordinator.

        Args:
            store: Key-value store (SQLite at settings.DB_PATH by default)
            clock: Time source for reminders (wall clock by default)
        """
        logger.info("Initializing AppCoordinator")

        self.store = store if store is not None else SQLiteKeyValueStore(str(settings.DB_PATH))

        self.settings_repo = SettingsRepository(self.store)
        self.reminder_repo = ReminderRepository(self.store, clock=clock)
        self.saved_tips_repo = SavedTipsRepository(self.store)

        self.initialized = False

    async def initialize(self) -> AppSettings:
        """
        Prepare the store and load the process-wide settings document once.
        A store that cannot be prepared is logged; reads then fall back to
        defaults.

        Returns:
            Loaded settings
        """
        try:
            await self.store.initialize()
        except StorageError as e:
            logger.error(f"Store unavailable, continuing with defaults: {e}", exc_info=True)

        loaded = await self.settings_repo.load()
        self.initialized = True
        logger.info(f"Application state loaded: {loaded}")
        return loaded

    @property
    def app_settings(self) -> AppSettings:
        return self.settings_repo.current

    def password_generator(self) -> PasswordGenerator:
        """Password helper honoring the current hide-by-default preference."""
        return PasswordGenerator(hide_by_default=self.app_settings.hide_by_default)

    async def delete_app_data(self) -> None:
        """
        Remove reminders, saved tips and settings.

        One removal per key, in that order. Not atomic: if the process dies
        midway some keys stay behind. Callers confirm with the user first.
        """
        logger.info("Deleting app data")

        await self.reminder_repo.delete_all()
        await self.saved_tips_repo.clear()
        await self.settings_repo.clear()

        logger.info("App data deleted")
