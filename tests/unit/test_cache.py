from talentlink.services.cache import ExpiringCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_entry_expires_at_ttl_boundary():
    clock = FakeClock()
    cache = ExpiringCache(ttl_seconds=300, clock=clock)
    cache.set("mentors_20", ["a"])

    clock.now += 299
    assert cache.is_valid("mentors_20")
    assert cache.get("mentors_20") == ["a"]

    clock.now += 1
    assert not cache.is_valid("mentors_20")
    assert cache.get("mentors_20") is None


def test_per_entry_ttl_overrides_default():
    clock = FakeClock()
    cache = ExpiringCache(ttl_seconds=300, clock=clock)
    cache.set("mentor_stats", {"total_mentors": 1}, ttl=600)

    clock.now += 450
    assert cache.get("mentor_stats") == {"total_mentors": 1}
    clock.now += 150
    assert cache.get("mentor_stats", "gone") == "gone"


def test_clear_empties_cache():
    cache = ExpiringCache(ttl_seconds=300, clock=FakeClock())
    cache.set("a", 1)
    cache.set("b", 2)
    cache.clear()
    assert len(cache) == 0
    assert not cache.is_valid("a")


def test_unknown_key_is_not_valid():
    assert not ExpiringCache(ttl_seconds=1).is_valid("missing")
