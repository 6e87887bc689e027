"""
Repository for app preferences.
Always hands out a complete record, whatever the stored document holds.
"""

from dataclasses import dataclass, fields, replace
from typing import Optional

from config.logging_config import get_logger
from config.settings import STORE_SETTINGS, DEFAULT_SETTINGS
from protouch.core.errors import ValidationError
from protouch.storage.document_repository import DocumentRepository
from protouch.storage.kv_store import KeyValueStore

logger = get_logger(__name__)

# Python attribute -> persisted field name
WIRE_NAMES = {
    "notifications": "notifications",
    "vibration": "vibration",
    "hide_by_default": "hideByDefault",
}
_ATTRIBUTE_NAMES = {wire: attr for attr, wire in WIRE_NAMES.items()}


@dataclass(frozen=True)
class AppSettings:
    """User preferences. Stored only; nothing here schedules notifications."""
    notifications: bool = DEFAULT_SETTINGS["notifications"]
    vibration: bool = DEFAULT_SETTINGS["vibration"]
    hide_by_default: bool = DEFAULT_SETTINGS["hideByDefault"]

    def to_dict(self) -> dict:
        return {WIRE_NAMES[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> 'AppSettings':
        """Merge a stored (possibly partial or stale) document over the defaults."""
        values = {}
        for attr, wire in WIRE_NAMES.items():
            value = data.get(wire)
            if isinstance(value, bool):
                values[attr] = value
            elif value is not None:
                logger.warning(f"Ignoring non-boolean setting {wire}={value!r}")
        return cls(**values)


def _normalize(partial: dict) -> dict:
    """Map wire or attribute names to attribute names and check values."""
    changes = {}
    for name, value in partial.items():
        attr = name if name in WIRE_NAMES else _ATTRIBUTE_NAMES.get(name)
        if attr is None:
            raise ValidationError(f"Unknown setting: {name!r}")
        if not isinstance(value, bool):
            raise ValidationError(f"Setting {name!r} must be a boolean, got {value!r}")
        changes[attr] = value
    return changes


class SettingsRepository(DocumentRepository):
    """
    Preferences document, loaded once at startup and rewritten wholesale on
    every change.
    """

    def __init__(self, store: KeyValueStore):
        super().__init__(store, STORE_SETTINGS)
        self.current = AppSettings()

    async def _read(self) -> AppSettings:
        return AppSettings.from_dict(await self._read_document(dict, {}))

    async def load(self) -> AppSettings:
        """
        Load preferences from the store.

        Returns:
            Stored values merged over defaults; defaults if the read fails
        """
        self.current = await self._read()
        logger.debug(f"Settings loaded: {self.current}")
        return self.current

    async def update(self, partial: Optional[dict] = None, **changes) -> AppSettings:
        """
        Shallow-merge changes into the stored preferences and persist.

        Args:
            partial: Mapping of setting name to bool (wire or attribute names)
            **changes: Same, as keyword arguments

        Returns:
            The new complete settings

        Raises:
            ValidationError: On unknown names or non-boolean values
        """
        merged = _normalize({**(partial or {}), **changes})

        async with self.lock:
            settings = replace(await self._read(), **merged)
            await self._write_document(settings.to_dict())
            self.current = settings

        logger.info(f"Settings updated: {merged}")
        return settings

    async def toggle(self, name: str) -> AppSettings:
        """Flip one preference and persist."""
        attr = next(iter(_normalize({name: True})))

        async with self.lock:
            stored = await self._read()
            settings = replace(stored, **{attr: not getattr(stored, attr)})
            await self._write_document(settings.to_dict())
            self.current = settings

        logger.info(f"Setting {attr} toggled to {getattr(settings, attr)}")
        return settings

    async def reset(self) -> AppSettings:
        """Restore and persist the defaults."""
        settings = AppSettings()

        async with self.lock:
            await self._write_document(settings.to_dict())
            self.current = settings

        logger.info("Settings reset to defaults")
        return settings

    async def clear(self) -> AppSettings:
        """Remove the stored document; the cached settings revert to defaults."""
        async with self.lock:
            await self._remove_document()
            self.current = AppSettings()

        logger.info("Settings document removed")
        return self.current
