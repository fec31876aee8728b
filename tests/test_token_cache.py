from unittest.mock import Mock

import pytest

from django_razorpay.token_cache import TokenCache


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


class TestTokenCache:
    def test_fetches_on_first_use(self):
        fetch = Mock(return_value="token-1")
        cache = TokenCache(ttl=60, clock=FakeClock())

        assert cache.get(fetch) == "token-1"
        fetch.assert_called_once()

    def test_reuses_token_within_ttl(self):
        clock = FakeClock()
        fetch = Mock(side_effect=["token-1", "token-2"])
        cache = TokenCache(ttl=60, clock=clock)

        cache.get(fetch)
        clock.now += 59

        assert cache.get(fetch) == "token-1"
        assert fetch.call_count == 1

    def test_refreshes_after_expiry(self):
        clock = FakeClock()
        fetch = Mock(side_effect=["token-1", "token-2"])
        cache = TokenCache(ttl=60, clock=clock)

        cache.get(fetch)
        clock.now += 60

        assert cache.get(fetch) == "token-2"
        assert fetch.call_count == 2

    def test_refresh_margin_refreshes_early(self):
        clock = FakeClock()
        fetch = Mock(side_effect=["token-1", "token-2"])
        cache = TokenCache(ttl=60, clock=clock, refresh_margin=10)

        cache.get(fetch)
        clock.now += 50

        assert not cache.is_valid
        assert cache.get(fetch) == "token-2"

    def test_invalidate(self):
        fetch = Mock(side_effect=["token-1", "token-2"])
        cache = TokenCache(ttl=60, clock=FakeClock())

        cache.get(fetch)
        cache.invalidate()

        assert not cache.is_valid
        assert cache.get(fetch) == "token-2"

    def test_failed_fetch_leaves_cache_empty(self):
        fetch = Mock(side_effect=RuntimeError("login failed"))
        cache = TokenCache(ttl=60, clock=FakeClock())

        with pytest.raises(RuntimeError):
            cache.get(fetch)

        assert not cache.is_valid
