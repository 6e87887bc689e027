"""
Repository for bookmarked tips.
Only catalog ids are stored; tip content always comes from the catalog.
"""

from typing import FrozenSet, List

from config.logging_config import get_logger
from config.settings import STORE_SAVED_TIPS
from protouch.core.errors import ValidationError
from protouch.storage.document_repository import DocumentRepository
from protouch.storage.kv_store import KeyValueStore
from protouch.tips.catalog import TIP_CATALOG, Tip, is_known_tip

logger = get_logger(__name__)


class SavedTipsRepository(DocumentRepository):
    """Set of saved tip ids, persisted as a JSON list in save order."""

    def __init__(self, store: KeyValueStore):
        super().__init__(store, STORE_SAVED_TIPS)

    async def _load_ids(self) -> List[str]:
        """Stored ids, de-duplicated, in the order they were saved."""
        entries = await self._read_document(list, [])

        ids = []
        for entry in entries:
            if isinstance(entry, str) and entry not in ids:
                ids.append(entry)
            elif not isinstance(entry, str):
                logger.warning(f"Skipping non-string tip id: {entry!r}")
        return ids

    async def saved_ids(self) -> FrozenSet[str]:
        """Saved ids that still exist in the catalog."""
        return frozenset(i for i in await self._load_ids() if is_known_tip(i))

    async def list_saved(self) -> List[Tip]:
        """Saved tips in catalog order."""
        saved = await self.saved_ids()
        return [tip for tip in TIP_CATALOG if tip.id in saved]

    async def is_saved(self, tip_id: str) -> bool:
        return tip_id in await self.saved_ids()

    async def toggle(self, tip_id: str) -> bool:
        """
        Save the tip if it is not saved, otherwise unsave it.

        Returns:
            True if the tip is saved after the call

        Raises:
            ValidationError: If saving an id that is not in the catalog
        """
        async with self.lock:
            ids = await self._load_ids()

            if tip_id in ids:
                ids.remove(tip_id)
                saved = False
            elif is_known_tip(tip_id):
                ids.append(tip_id)
                saved = True
            else:
                raise ValidationError(f"Unknown tip id: {tip_id!r}")

            await self._write_document(ids)

        logger.debug(f"Tip {tip_id} {'saved' if saved else 'unsaved'}")
        return saved

    async def clear(self) -> None:
        """Forget every saved tip."""
        async with self.lock:
            await self._remove_document()

        logger.info("Saved tips cleared")
