from school_timetable.timetable.query_cache import CacheScope, QueryCache, RequestGenerations


def test_cache_returns_stored_value_without_recomputing():
    cache = QueryCache(max_entries=4)
    calls = []

    def compute():
        calls.append(1)
        return ("a",)

    assert cache.get_or_compute(("q", "2024-09-09"), compute) == ("a",)
    assert cache.get_or_compute(("q", "2024-09-09"), compute) == ("a",)
    assert len(calls) == 1


def test_cache_evicts_least_recently_used():
    cache = QueryCache(max_entries=2)
    cache.get_or_compute("a", lambda: 1)
    cache.get_or_compute("b", lambda: 2)
    cache.get_or_compute("a", lambda: 99)
    cache.get_or_compute("c", lambda: 3)

    assert len(cache) == 2
    assert cache.get_or_compute("a", lambda: 99) == 1
    assert cache.get_or_compute("b", lambda: 42) == 42


def test_invalidate_clears_and_bumps_revision():
    cache = QueryCache()
    cache.get_or_compute("a", lambda: 1)

    cache.invalidate()

    assert len(cache) == 0
    assert cache.revision == 1
    assert cache.get_or_compute("a", lambda: 2) == 2


def test_value_computed_across_an_invalidation_is_not_stored():
    cache = QueryCache()

    def compute():
        cache.invalidate()
        return "stale"

    assert cache.get_or_compute("a", compute) == "stale"
    assert len(cache) == 0
    assert cache.get_or_compute("a", lambda: "fresh") == "fresh"


def test_only_the_newest_request_is_applied():
    generations = RequestGenerations()
    shown = []

    old = generations.begin()
    new = generations.begin()

    assert generations.apply(new, ["fresh"], shown.append)
    assert not generations.apply(old, ["stale"], shown.append)
    assert shown == [["fresh"]]
    assert generations.is_current(new)
    assert not generations.is_current(old)


def test_scope_memoizes_only_inside_a_cycle():
    scope = CacheScope()
    calls = []

    def compute():
        calls.append(1)
        return len(calls)

    assert scope.get_or_compute("a", compute) == 1
    assert scope.get_or_compute("a", compute) == 2
    assert scope.current is None

    with scope.cycle():
        assert scope.get_or_compute("a", compute) == 3
        assert scope.get_or_compute("a", compute) == 3
        scope.invalidate()
        assert scope.get_or_compute("a", compute) == 4

    with scope.cycle():
        assert scope.get_or_compute("a", compute) == 5


def test_generations_are_tracked_per_view():
    generations = RequestGenerations()

    assert generations.begin("week", 3) == 3
    assert generations.begin("day", 1) == 1
    assert generations.begin("week", 2) == 2

    assert generations.is_current(3, "week")
    assert not generations.is_current(2, "week")
    assert generations.is_current(1, "day")
    assert generations.begin("day") == 2
