from dataclasses import dataclass
from typing import Optional

from campus_assistant.config import Config
from campus_assistant.core.connectivity import ConnectivityProvider, ManualConnectivity, create_connectivity
from campus_assistant.core.query_log import QueryLogStore
from campus_assistant.core.storage import KeyValueStore, create_store
from campus_assistant.engines.chat_engine import ChatEngine
from campus_assistant.engines.data_engine import CampusDataSource, MockCampusData
from campus_assistant.engines.gamification_engine import GamificationTracker
from campus_assistant.engines.offline_cache_engine import OfflineCacheManager
from campus_assistant.engines.sentiment_engine import SentimentClassifier, sentiment_classifier
from campus_assistant.engines.tamper_engine import TamperDetector


@dataclass
class Services:
    """Engines owned by one application instance (stored on app.state)."""
    store: KeyValueStore
    connectivity: ConnectivityProvider
    cache: OfflineCacheManager
    query_log: QueryLogStore
    classifier: SentimentClassifier
    detector: TamperDetector
    chat: ChatEngine

    def tracker_for(self, user_key: str) -> GamificationTracker:
        return self.chat.tracker_for(user_key)

    async def report_connectivity(self, online: bool):
        if isinstance(self.connectivity, ManualConnectivity):
            self.connectivity.set_online(online)
        if online:
            return await self.cache.handle_online()
        await self.cache.handle_offline()
        return False


def build_services(
    store: Optional[KeyValueStore] = None,
    connectivity: Optional[ConnectivityProvider] = None,
    source: Optional[CampusDataSource] = None,
    query_log: Optional[QueryLogStore] = None,
    detector: Optional[TamperDetector] = None,
) -> Services:
    store = store if store is not None else create_store()
    connectivity = connectivity if connectivity is not None else create_connectivity()
    detector = detector or TamperDetector(strict=Config.TAMPER_STRICT)
    query_log = query_log if query_log is not None else QueryLogStore(Config.QUERY_LOG_LIMIT)

    cache = OfflineCacheManager(
        store=store,
        source=source or MockCampusData(),
        connectivity=connectivity,
        detector=detector,
        expiry_hours=Config.CACHE_EXPIRY_HOURS,
    )
    chat = ChatEngine(
        cache=cache,
        store=store,
        query_log=query_log,
        classifier=sentiment_classifier,
        points_per_message=Config.POINTS_PER_MESSAGE,
        points_per_level=Config.POINTS_PER_LEVEL,
    )
    return Services(
        store=store,
        connectivity=connectivity,
        cache=cache,
        query_log=query_log,
        classifier=sentiment_classifier,
        detector=detector,
        chat=chat,
    )
