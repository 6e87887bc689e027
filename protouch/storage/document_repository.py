"""
Base class for repositories that own a single JSON document in the store.
Storage failures stop here: reads degrade to a default, writes are tried once.
"""

import asyncio
import json
from typing import Any

from config.logging_config import get_logger
from protouch.core.errors import StorageError
from protouch.storage.kv_store import KeyValueStore

logger = get_logger(__name__)


class DocumentRepository:
    """
    Owns one store key and serializes read-modify-write cycles on it.

    Subclasses take `self.lock` around every mutation so two in-flight calls
    can never both read the same stale document.
    """

    def __init__(self, store: KeyValueStore, key: str):
        self.store = store
        self.key = key
        self.lock = asyncio.Lock()

    async def _read_document(self, expected_type: type, default: Any) -> Any:
        """
        Load and decode the document.

        Args:
            expected_type: JSON container type the document must have
            default: Value returned when the key is absent or unreadable

        Returns:
            Decoded document or default
        """
        try:
            raw = await self.store.get(self.key)
        except StorageError as e:
            logger.warning(f"Read of {self.key} failed, using default: {e}", exc_info=True)
            return default

        if raw is None:
            return default

        try:
            document = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Corrupt document under {self.key}, using default: {e}")
            return default

        if not isinstance(document, expected_type):
            logger.warning(
                f"Document under {self.key} is {type(document).__name__}, "
                f"expected {expected_type.__name__}; using default"
            )
            return default

        return document

    async def _write_document(self, document: Any) -> bool:
        """
        Encode and write the document once.

        Returns:
            True if the write reached the store
        """
        try:
            await self.store.set(self.key, json.dumps(document, ensure_ascii=False))
            return True
        except StorageError as e:
            logger.error(f"Write of {self.key} dropped: {e}", exc_info=True)
            return False

    async def _remove_document(self) -> bool:
        """Remove the key, best effort."""
        try:
            await self.store.remove({self.key})
            return True
        except StorageError as e:
            logger.error(f"Removal of {self.key} dropped: {e}", exc_info=True)
            return False
