from fastapi.testclient import TestClient

from signature_studio.core.rate_limit import MemoryRateLimitStore, RateLimitPolicy

from conftest import API, PASSWORD


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


LOGIN = RateLimitPolicy("login", max_attempts=3, window_seconds=60)


async def test_blocks_after_max_attempts():
    store = MemoryRateLimitStore(clock=FakeClock())
    decisions = [await store.hit("10.0.0.1", LOGIN) for _ in range(4)]
    assert [d.allowed for d in decisions] == [True, True, True, False]
    assert [d.remaining for d in decisions[:3]] == [2, 1, 0]
    assert decisions[3].retry_after == 60


async def test_window_resets_after_expiry():
    clock = FakeClock()
    store = MemoryRateLimitStore(clock=clock)
    for _ in range(3):
        await store.hit("10.0.0.1", LOGIN)
    clock.now += 30
    blocked = await store.hit("10.0.0.1", LOGIN)
    assert not blocked.allowed
    assert blocked.retry_after == 30

    clock.now += 31
    assert (await store.hit("10.0.0.1", LOGIN)).allowed


async def test_keys_and_policies_are_independent():
    store = MemoryRateLimitStore(clock=FakeClock())
    register = RateLimitPolicy("register", max_attempts=1, window_seconds=60)
    for _ in range(3):
        await store.hit("10.0.0.1", LOGIN)
    assert not (await store.hit("10.0.0.1", LOGIN)).allowed
    assert (await store.hit("10.0.0.2", LOGIN)).allowed
    assert (await store.hit("10.0.0.1", register)).allowed


async def test_reset_clears_counters():
    store = MemoryRateLimitStore(clock=FakeClock())
    for _ in range(4):
        await store.hit("10.0.0.1", LOGIN)
    await store.reset()
    assert (await store.hit("10.0.0.1", LOGIN)).allowed


def test_login_endpoint_returns_429_with_retry_after(app_factory):
    app = app_factory(RATE_LIMIT__LOGIN_MAX_ATTEMPTS=2, RATE_LIMIT__LOGIN_WINDOW_SECONDS=900)
    with TestClient(app) as client:
        payload = {"email": "nobody@acme.com", "password": PASSWORD}
        assert client.post(f"{API}/auth/login", json=payload).status_code == 401
        assert client.post(f"{API}/auth/login", json=payload).status_code == 401
        response = client.post(f"{API}/auth/login", json=payload)

    assert response.status_code == 429
    body = response.json()
    assert body["code"] == "RATE_LIMIT_EXCEEDED"
    assert 0 < body["details"]["retryAfter"] <= 900
    assert int(response.headers["Retry-After"]) == body["details"]["retryAfter"]


def test_register_limit_is_separate_from_login(app_factory):
    app = app_factory(RATE_LIMIT__LOGIN_MAX_ATTEMPTS=1)
    with TestClient(app) as client:
        payload = {"email": "nobody@acme.com", "password": PASSWORD}
        client.post(f"{API}/auth/login", json=payload)
        assert client.post(f"{API}/auth/login", json=payload).status_code == 429
        response = client.post(
            f"{API}/auth/register",
            json={
                "organization_name": "Acme Corporation",
                "domain": "acme.com",
                "first_name": "Ada",
                "last_name": "Admin",
                "email": "admin@acme.com",
                "password": PASSWORD,
                "confirm_password": PASSWORD,
            },
        )
    assert response.status_code == 201
