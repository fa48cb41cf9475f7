"""Tests for connectivity providers."""
import httpx
import pytest

from campus_assistant.core.connectivity import HttpConnectivityProbe, ManualConnectivity


def probe_with(handler):
    return HttpConnectivityProbe("http://campus.test/ping", timeout=1.0, transport=httpx.MockTransport(handler))


class TestManualConnectivity:
    @pytest.mark.asyncio
    async def test_reported_state(self):
        provider = ManualConnectivity(online=False)
        assert await provider.is_online() is False

        provider.set_online(True)
        assert await provider.is_online() is True


class TestHttpConnectivityProbe:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code,online", [(200, True), (404, True), (503, False)])
    async def test_status_codes(self, status_code, online):
        probe = probe_with(lambda request: httpx.Response(status_code))
        assert await probe.is_online() is online

    @pytest.mark.asyncio
    async def test_uses_head_request(self):
        seen = []

        def handler(request):
            seen.append(request.method)
            return httpx.Response(204)

        await probe_with(handler).is_online()
        assert seen == ["HEAD"]

    @pytest.mark.asyncio
    async def test_network_error_means_offline(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        assert await probe_with(handler).is_online() is False
