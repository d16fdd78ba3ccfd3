"""Tests for the in-memory TTL cache."""

from datetime import UTC, datetime, timedelta

from meal_nutrition.services.cache import InMemoryCache


def test_entries_expire_after_ttl() -> None:
    now = [datetime(2024, 3, 1, tzinfo=UTC)]
    cache = InMemoryCache(clock=lambda: now[0])

    cache.set("composition:table", ["arroz"], ttl_seconds=10)
    now[0] += timedelta(seconds=9)
    fresh = cache.get("composition:table")
    now[0] += timedelta(seconds=1)
    expired = cache.get("composition:table")

    assert fresh == ["arroz"]
    assert expired is None


def test_delete_drops_entry() -> None:
    cache = InMemoryCache()
    cache.set("key", 1, ttl_seconds=60)

    cache.delete("key")
    cache.delete("missing")

    assert cache.get("key") is None
