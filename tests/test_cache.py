import asyncio
from fnmatch import fnmatch

from nuschedule.core.cache import ResponseCache


class FakeRedis:
    """In-memory stand-in for the handful of redis.asyncio calls the cache makes"""

    def __init__(self):
        self.store = {}

    async def get(self, key):
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self.store[key] = value

    async def scan_iter(self, match="*"):
        for key in list(self.store):
            if fnmatch(key, match):
                yield key

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
        return removed

    async def aclose(self):
        pass


def test_course_list_served_from_cache(client, storage):
    cache = ResponseCache(FakeRedis())
    client.app.state.cache = cache

    first = client.get("/api/courses").json()
    assert len(first) == 5
    assert any(key.startswith("api:/api/courses:") for key in cache.client.store)

    # Cached response survives the rows going away
    storage.reset_course_data()
    assert client.get("/api/courses").json() == first

    assert asyncio.run(cache.clear()) == 1
    assert client.get("/api/courses").json() == []


def test_query_params_get_their_own_entry(client):
    cache = ResponseCache(FakeRedis())
    client.app.state.cache = cache

    client.get("/api/courses")
    client.get("/api/courses?semester=Spring 2026")
    assert len(cache.client.store) == 2


def test_invalidate_by_pattern(client):
    cache = ResponseCache(FakeRedis())
    client.app.state.cache = cache

    course_id = client.get("/api/courses").json()[0]["id"]
    client.get(f"/api/courses/{course_id}/sections")
    assert len(cache.client.store) == 2

    assert asyncio.run(cache.invalidate(f"api:/api/courses/{course_id}/*")) == 1
    assert len(cache.client.store) == 1


def test_missing_course_not_cached(client):
    cache = ResponseCache(FakeRedis())
    client.app.state.cache = cache

    assert client.get("/api/courses/9999/sections").status_code == 404
    assert cache.client.store == {}
