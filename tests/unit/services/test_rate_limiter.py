from src.api.utils import rate_limit
from src.api.utils.rate_limit import InMemoryRateLimiter, RateLimit


def test_allows_up_to_limit_then_blocks():
    limiter = InMemoryRateLimiter()
    config = RateLimit(requests=3, window=60)

    statuses = [limiter.is_allowed("k", config) for _ in range(4)]

    assert [s.exceeded for s in statuses] == [False, False, False, True]
    assert [s.remaining for s in statuses[:3]] == [2, 1, 0]
    headers = statuses[3].to_headers()
    assert headers["X-RateLimit-Limit"] == "3"
    assert int(headers["Retry-After"]) >= 1


def test_keys_are_independent_and_reset_clears():
    limiter = InMemoryRateLimiter()
    config = RateLimit(requests=1, window=60)

    assert not limiter.is_allowed("a", config).exceeded
    assert not limiter.is_allowed("b", config).exceeded
    assert limiter.is_allowed("a", config).exceeded

    limiter.reset()
    assert not limiter.is_allowed("a", config).exceeded


def test_expired_windows_are_swept(monkeypatch):
    limiter = InMemoryRateLimiter()
    config = RateLimit(requests=1, window=60)
    clock = {"now": 1_000_020}
    monkeypatch.setattr(rate_limit.time, "time", lambda: clock["now"])

    for i in range(10):
        limiter.is_allowed(f"client-{i}", config)
    assert len(limiter.requests) == 10

    clock["now"] += 120
    limiter.is_allowed("late", config)

    assert set(limiter.requests) == {"late"}
    assert set(limiter.reset_times) == {"late"}
