from concurrent.futures import ThreadPoolExecutor

from services.cache import TTLCache, prediction_key


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_set_then_get_returns_value():
    cache = TTLCache()
    cache.set("k", {"pick": "Home"}, ttl_seconds=20)
    assert cache.get("k") == {"pick": "Home"}


def test_entry_readable_until_ttl_boundary():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.set("k", "v", ttl_seconds=20)

    clock.now += 20
    assert cache.get("k") == "v"


def test_expired_entry_is_absent_and_purged():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.set("k", "v", ttl_seconds=20)
    assert len(cache) == 1

    clock.now += 20.5
    assert cache.get("k") is None
    assert len(cache) == 0


def test_missing_and_expired_look_the_same():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.set("old", "v", ttl_seconds=1)
    clock.now += 5
    assert cache.get("old") == cache.get("never-set")


def test_set_overwrites_with_fresh_timestamp():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.set("k", "first", ttl_seconds=10)
    clock.now += 8
    cache.set("k", "second", ttl_seconds=10)
    clock.now += 8

    assert cache.get("k") == "second"


def test_prediction_keys_are_separated():
    cache = TTLCache()
    cache.set(prediction_key("A", False), "summary")

    assert cache.get(prediction_key("A", False)) == "summary"
    assert cache.get(prediction_key("A", True)) is None
    assert cache.get(prediction_key("B", False)) is None


def test_equal_queries_share_a_key():
    assert prediction_key("A", True) == prediction_key("A", True)
    assert hash(prediction_key("A", False)) == hash(prediction_key("A", False))


def test_delete_and_clear():
    cache = TTLCache()
    cache.set("a", 1)
    cache.set("b", 2)
    cache.delete("a")
    cache.delete("missing")
    assert cache.get("a") is None
    assert len(cache) == 1

    cache.clear()
    assert len(cache) == 0


def test_concurrent_writers_leave_whole_values():
    cache = TTLCache()

    def write(i: int) -> None:
        cache.set("shared", {"writer": i, "payload": [i] * 10})
        value = cache.get("shared")
        assert value["payload"] == [value["writer"]] * 10

    with ThreadPoolExecutor(max_workers=16) as pool:
        list(pool.map(write, range(200)))

    assert len(cache) == 1
