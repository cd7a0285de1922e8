from config import TestConfig
from leettrack import create_app
from leettrack.ratelimit import LimitsRateLimitStore, RateLimitStore
from tests.conftest import auth


def test_fixed_window_limit():
    store = LimitsRateLimitStore("memory://")

    assert [store.check("u1_post", 3, 60) for _ in range(4)] == [True, True, True, False]
    # other keys are independent
    assert store.check("u2_post", 3, 60)


def test_reset_clears_counters():
    store = LimitsRateLimitStore()
    assert store.check("k", 1, 60)
    assert not store.check("k", 1, 60)
    store.reset()
    assert store.check("k", 1, 60)


def test_app_uses_configured_storage(app):
    assert isinstance(app.extensions["rate_limiter"], LimitsRateLimitStore)


def test_route_limit_returns_429(client, register):
    token, _ = register()
    for _ in range(5):
        client.post("/api/social/friends/request", json={"email": "ghost@example.com"}, headers=auth(token))

    res = client.post("/api/social/friends/request", json={"email": "ghost@example.com"}, headers=auth(token))
    assert res.status_code == 429
    assert res.get_json()["error"] == "rate_limited"


class RecordingStore(RateLimitStore):
    def __init__(self):
        self.keys = []

    def check(self, key, limit, window):
        self.keys.append((key, limit, window))
        return False


def test_injected_store_is_used():
    store = RecordingStore()
    app = create_app(TestConfig, rate_limiter=store)
    client = app.test_client()

    res = client.post("/api/auth/register", json={"email": "x@example.com", "password": "secret123"})
    token = res.get_json()["token"]
    user_id = res.get_json()["user"]["id"]

    res = client.get("/api/streaks", headers=auth(token))
    assert res.status_code == 429
    assert store.keys == [(f"{user_id}_streaks_get", 30, 60)]
