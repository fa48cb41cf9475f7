"""
Offline Cache Engine - connectivity-aware sync of campus data

State machine:
    OFFLINE --online signal--> ONLINE   (full resync of every category)
    ONLINE  --offline signal-> OFFLINE  (flag only; cache stays authoritative)

Startup asks the connectivity provider: online means an immediate sync,
offline means only the last sync timestamp is loaded from storage.

Sync failures are logged and leave the previous snapshot and timestamp in
place: records already rewritten by a failed sync are restored to what the
store held before it started. The next transition or a manual sync retries.
"""
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from campus_assistant.core.connectivity import ConnectivityProvider
from campus_assistant.core.storage import KeyValueStore
from campus_assistant.engines.data_engine import CATEGORIES, CampusDataSource
from campus_assistant.engines.tamper_engine import TamperDetector, compute_hash, tamper_detector, verify
from campus_assistant.utils.logging_utils import get_logger, log_audit

logger = get_logger()

LAST_SYNC_KEY = "lastSyncTime"
CACHE_KEY_PREFIX = "cache:"


class ConnectivityStatus(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"


@dataclass
class CacheEntry:
    category: str
    payload: Any
    synced_at: str
    hash: str
    synced_at_ms: int = 0
    # Computed on read, never persisted
    tampered: bool = field(default=False, compare=False)
    stale: bool = field(default=False, compare=False)

    def to_record(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "payload": self.payload,
            "syncedAt": self.synced_at,
            "syncedAtMs": self.synced_at_ms,
            "hash": self.hash,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "CacheEntry":
        return cls(
            category=str(record.get("category") or ""),
            payload=record.get("payload"),
            synced_at=str(record.get("syncedAt") or ""),
            hash=str(record.get("hash") or ""),
            synced_at_ms=int(record.get("syncedAtMs") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = self.to_record()
        data.update({"tampered": self.tampered, "stale": self.stale})
        return data


@dataclass(frozen=True)
class ConnectivityState:
    is_online: bool
    last_sync_time: str

    def to_dict(self) -> Dict[str, Any]:
        return {"isOnline": self.is_online, "lastSyncTime": self.last_sync_time}


class OfflineCacheManager:
    def __init__(
        self,
        store: KeyValueStore,
        source: CampusDataSource,
        connectivity: ConnectivityProvider,
        detector: Optional[TamperDetector] = None,
        categories: Iterable[str] = CATEGORIES,
        expiry_hours: float = 24,
    ):
        self.store = store
        self.source = source
        self.connectivity = connectivity
        self.detector = detector or tamper_detector
        self.categories = tuple(categories)
        self.expiry_hours = expiry_hours

        self.state = ConnectivityStatus.OFFLINE
        self.last_sync_time = ""
        self.sync_count = 0
        self.last_error: Optional[str] = None
        self.started = False

    @property
    def is_online(self) -> bool:
        return self.state is ConnectivityStatus.ONLINE

    # =========================================================================
    # LIFECYCLE / TRANSITIONS
    # =========================================================================

    async def start(self) -> ConnectivityState:
        try:
            online = await self.connectivity.is_online()
        except Exception as e:
            logger.error(f"[OfflineCache] Connectivity check failed, assuming offline: {e}")
            online = False

        self.started = True
        # Timestamp of the last good sync; only a successful sync replaces it
        await self.load_from_cache()
        if online:
            self.state = ConnectivityStatus.ONLINE
            await self.sync_now()
        else:
            self.state = ConnectivityStatus.OFFLINE
        return self.status()

    async def handle_online(self) -> bool:
        """OFFLINE -> ONLINE triggers one full resync. Returns True if a sync ran and succeeded."""
        if self.state is ConnectivityStatus.ONLINE:
            return False
        self.state = ConnectivityStatus.ONLINE
        log_audit("connectivity_online", "system", "resync triggered")
        return await self.sync_now()

    async def handle_offline(self) -> None:
        if self.state is ConnectivityStatus.OFFLINE:
            return
        self.state = ConnectivityStatus.OFFLINE
        log_audit("connectivity_offline", "system", f"serving cache from {self.last_sync_time or 'never'}")

    async def load_from_cache(self) -> str:
        try:
            cached = await self.store.get(LAST_SYNC_KEY)
        except Exception as e:
            logger.error(f"[OfflineCache] Error loading from cache: {e}")
            return self.last_sync_time
        if cached:
            self.last_sync_time = cached
        return self.last_sync_time

    # =========================================================================
    # SYNC
    # =========================================================================

    async def sync_now(self) -> bool:
        """Refresh every category from the source. Never raises."""
        if not self.is_online:
            logger.info("[OfflineCache] Sync skipped while offline")
            return False

        try:
            # Fetch everything first so a source failure writes nothing
            payloads = {}
            for category in self.categories:
                payloads[category] = await self.source.fetch(category)

            now = datetime.now()
            now_ms = int(time.time() * 1000)
            synced_at = now.isoformat(timespec="seconds")

            previous = {}
            for category in payloads:
                key = CACHE_KEY_PREFIX + category
                previous[key] = await self.store.get(key)
            previous[LAST_SYNC_KEY] = await self.store.get(LAST_SYNC_KEY)
        except Exception as e:
            self.last_error = str(e)
            logger.error(f"[OfflineCache] Error syncing data: {e}")
            return False

        try:
            for category, payload in payloads.items():
                entry = CacheEntry(
                    category=category,
                    payload=payload,
                    synced_at=synced_at,
                    hash=compute_hash(payload),
                    synced_at_ms=now_ms,
                )
                report = self.detector.inspect(category, payload)
                if report.tampered:
                    logger.warning(f"[OfflineCache] Source data for '{category}' failed tamper check: {report.reason}")
                await self.store.set_json(CACHE_KEY_PREFIX + category, entry.to_record())

            await self.store.set(LAST_SYNC_KEY, synced_at)
        except Exception as e:
            self.last_error = str(e)
            logger.error(f"[OfflineCache] Error syncing data: {e}")
            await self._restore(previous)
            return False

        self.last_sync_time = synced_at
        self.sync_count += 1
        self.last_error = None
        log_audit("sync", "system", f"{len(payloads)} categories at {synced_at}")
        return True

    async def _restore(self, previous: Dict[str, Optional[str]]) -> None:
        for key, value in previous.items():
            try:
                if value is None:
                    await self.store.remove(key)
                else:
                    await self.store.set(key, value)
            except Exception as e:
                logger.error(f"[OfflineCache] Could not restore '{key}' after failed sync: {e}")

    # =========================================================================
    # READS
    # =========================================================================

    async def get_cached(self, category: str) -> Optional[CacheEntry]:
        """Last synced snapshot for `category`, annotated with tamper/stale flags."""
        if category not in self.categories:
            raise ValueError(f"Unknown cache category: {category}")

        try:
            record = await self.store.get_json(CACHE_KEY_PREFIX + category)
        except Exception as e:
            logger.error(f"[OfflineCache] Error reading '{category}' from cache: {e}")
            return None
        if not isinstance(record, dict):
            return None

        entry = CacheEntry.from_record(record)
        integrity_ok = verify(entry.payload, entry.hash)
        if not integrity_ok:
            logger.warning(f"[OfflineCache] Integrity hash mismatch for '{category}'")
        entry.tampered = (not integrity_ok) or self.detector.is_tampered(category, entry.payload)

        if entry.synced_at_ms and self.expiry_hours:
            age_ms = int(time.time() * 1000) - entry.synced_at_ms
            entry.stale = age_ms > self.expiry_hours * 3600 * 1000
        return entry

    def status(self) -> ConnectivityState:
        return ConnectivityState(is_online=self.is_online, last_sync_time=self.last_sync_time)
