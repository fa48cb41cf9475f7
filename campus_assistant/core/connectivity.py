"""
Connectivity providers for the offline cache manager.

Clients report their browser online/offline events through the API; the
optional HTTP probe answers "is the source of truth reachable" at startup.
"""
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from campus_assistant.config import Config


class ConnectivityProvider(ABC):
    @abstractmethod
    async def is_online(self) -> bool:
        ...


class ManualConnectivity(ConnectivityProvider):
    """Connectivity flag driven by reported events."""

    def __init__(self, online: bool = True):
        self.online = online

    def set_online(self, online: bool):
        self.online = bool(online)

    async def is_online(self) -> bool:
        return self.online


class HttpConnectivityProbe(ConnectivityProvider):
    """Online when `url` answers with a non-5xx status within `timeout` seconds."""

    def __init__(self, url: str, timeout: float = 3.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def is_online(self) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.head(self.url)
            return resp.status_code < 500
        except httpx.HTTPError:
            return False


def create_connectivity() -> ConnectivityProvider:
    if Config.CONNECTIVITY_PROBE_URL:
        return HttpConnectivityProbe(Config.CONNECTIVITY_PROBE_URL, Config.CONNECTIVITY_PROBE_TIMEOUT)
    return ManualConnectivity(online=True)
