"""
Key-Value Storage - persistent records for the offline cache and gamification

Every record is an independently overwritable string value. Writes are never
awaited against each other, so the last write for a key wins.

Backends:
1. InMemoryStore  - process-local dict (tests, ephemeral deployments)
2. JsonFileStore  - single JSON file on disk
3. MongoStore     - one document per key in a MongoDB collection (motor)
"""
import asyncio
import json
import os
from datetime import datetime
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import motor.motor_asyncio

from campus_assistant.config import Config
from campus_assistant.utils.logging_utils import get_logger

logger = get_logger()


class KeyValueStore(ABC):
    """Async string-keyed, string-valued persistent storage."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    async def remove(self, key: str) -> None:
        ...

    @abstractmethod
    async def clear(self) -> None:
        ...

    async def get_json(self, key: str, default: Any = None) -> Any:
        raw = await self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"[Storage] Unparsable value under '{key}', ignoring")
            return default

    async def set_json(self, key: str, value: Any) -> None:
        await self.set(key, json.dumps(value, ensure_ascii=False))


class InMemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    async def clear(self) -> None:
        self._data.clear()

    def keys(self):
        return list(self._data.keys())


class JsonFileStore(KeyValueStore):
    """All keys in one JSON object; each write rewrites the whole file."""

    def __init__(self, path: str):
        self.path = path
        self._data: Dict[str, str] = {}
        self._load()

    def _load(self):
        if os.path.exists(self.path):
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                self._data = {str(k): str(v) for k, v in data.items()} if isinstance(data, dict) else {}
            except (OSError, ValueError) as e:
                logger.error(f"[Storage] Could not load {self.path}: {e}")
                self._data = {}

    def _write(self, snapshot: Dict[str, str]):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(snapshot, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)

    async def _flush(self):
        await asyncio.to_thread(self._write, dict(self._data))

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value
        await self._flush()

    async def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            await self._flush()

    async def clear(self) -> None:
        self._data = {}
        await self._flush()


class MongoStore(KeyValueStore):
    """Documents shaped {_id: key, value: str, updated_at: datetime}."""

    def __init__(self, uri: str, collection_name: str = "OfflineStore"):
        self.client = motor.motor_asyncio.AsyncIOMotorClient(uri, serverSelectionTimeoutMS=5000)
        db_name = uri.split('/')[-1].split('?')[0] or "CAMPUS_DB"
        self.collection = self.client[db_name][collection_name]

    async def get(self, key: str) -> Optional[str]:
        doc = await self.collection.find_one({"_id": key})
        if not doc:
            return None
        return doc.get("value")

    async def set(self, key: str, value: str) -> None:
        await self.collection.replace_one(
            {"_id": key},
            {"_id": key, "value": value, "updated_at": datetime.now()},
            upsert=True,
        )

    async def remove(self, key: str) -> None:
        await self.collection.delete_one({"_id": key})

    async def clear(self) -> None:
        await self.collection.delete_many({})


def create_store(backend: Optional[str] = None) -> KeyValueStore:
    """Build the configured storage backend."""
    backend = (backend or Config.STORAGE_BACKEND or "json").lower()
    if backend == "memory":
        return InMemoryStore()
    if backend == "mongo":
        if not Config.MONGO_URI:
            raise ValueError("STORAGE_BACKEND=mongo requires MONGO_URI in .env")
        return MongoStore(Config.MONGO_URI, Config.STORAGE_COLLECTION)
    if backend == "json":
        return JsonFileStore(Config.STORAGE_FILE)
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend}")
