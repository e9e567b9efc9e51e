"""
Tests for the sliding-window rate limiter.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import RedisError

from division_sms.core import rate_limit
from division_sms.core.rate_limit import RateLimitExceeded, check_rate_limit, client_ip

MODULE = "division_sms.core.rate_limit"


@pytest.fixture(autouse=True)
def clear_memory_store():
    rate_limit._memory_store.clear()
    yield
    rate_limit._memory_store.clear()


class TestMemoryFallback:
    """Without Redis the limiter keeps hits in process."""

    @pytest.mark.asyncio
    async def test_allows_up_to_limit(self):
        with patch("division_sms.core.redis.redis_client", None):
            results = [await check_rate_limit("rate_limit:test:ip", 3, 60) for _ in range(4)]

        assert results == [True, True, True, False]

    @pytest.mark.asyncio
    async def test_old_hits_expire(self):
        rate_limit._memory_store["rate_limit:test:ip"] = [0.0, 1.0, 2.0]

        with patch("division_sms.core.redis.redis_client", None):
            assert await check_rate_limit("rate_limit:test:ip", 3, 60) is True

        assert len(rate_limit._memory_store["rate_limit:test:ip"]) == 1

    @pytest.mark.asyncio
    async def test_redis_failure_falls_back(self):
        client = MagicMock()
        pipe = MagicMock()
        pipe.execute = AsyncMock(side_effect=RedisError("down"))
        client.pipeline.return_value = pipe

        with patch("division_sms.core.redis.redis_client", client):
            assert await check_rate_limit("rate_limit:test:ip", 1, 60) is True

        assert "rate_limit:test:ip" in rate_limit._memory_store


class TestRedisWindow:
    @pytest.mark.asyncio
    async def test_uses_window_count(self):
        client = MagicMock()
        pipe = MagicMock()
        pipe.execute = AsyncMock(return_value=[0, 5, 1, True])
        client.pipeline.return_value = pipe

        with patch("division_sms.core.redis.redis_client", client):
            assert await check_rate_limit("rate_limit:test:ip", 5, 60) is False


class TestDependency:
    """Tests for the per-IP FastAPI dependency."""

    def test_forwarded_for_ignored_from_untrusted_peer(self):
        request = SimpleNamespace(
            headers={"x-forwarded-for": "203.0.113.7"},
            client=SimpleNamespace(host="198.51.100.4"),
        )

        assert client_ip(request) == "198.51.100.4"

    def test_forwarded_for_read_behind_trusted_proxy(self):
        request = SimpleNamespace(
            headers={"x-forwarded-for": "1.2.3.4, 203.0.113.7, 10.0.0.1"},
            client=SimpleNamespace(host="10.0.0.1"),
        )

        with patch(f"{MODULE}.settings", SimpleNamespace(trusted_proxies_list=["10.0.0.1"])):
            assert client_ip(request) == "203.0.113.7"

    @pytest.mark.asyncio
    async def test_rotating_forwarded_for_does_not_reset_login_limit(self):
        """A direct client cannot mint fresh buckets by changing the header."""
        dependency = rate_limit.rate_limit("login", limit=2, window_seconds=300)

        def request(n: int):
            return SimpleNamespace(
                headers={"x-forwarded-for": f"192.0.2.{n}"},
                client=SimpleNamespace(host="203.0.113.9"),
            )

        with patch("division_sms.core.redis.redis_client", None):
            await dependency(request(1))
            await dependency(request(2))
            with pytest.raises(RateLimitExceeded):
                await dependency(request(3))

        assert list(rate_limit._memory_store) == ["rate_limit:login:203.0.113.9"]

    @pytest.mark.asyncio
    async def test_raises_when_exceeded(self):
        request = SimpleNamespace(headers={}, client=SimpleNamespace(host="10.0.0.2"))
        dependency = rate_limit.rate_limit("lrn_lookup", limit=1, window_seconds=60)

        with patch("division_sms.core.redis.redis_client", None):
            await dependency(request)
            with pytest.raises(RateLimitExceeded) as exc_info:
                await dependency(request)

        assert exc_info.value.status_code == 429
        assert exc_info.value.headers["Retry-After"] == "60"
