import threading

import pytest

from pymeerkat.core.metadata import MetadataCache, type_key
from pymeerkat.utils.exceptions import ConfigurationError


class Widget:
    class Settings:
        collection = "widgets_v1"
        track_timestamps = True


class Gadget:
    pass


def _make_twin():
    class Gadget:
        pass

    return Gadget


class TestMemoizedGetters:
    def test_name_is_computed_once(self):
        cache = MetadataCache()
        assert cache.get_or_compute_name(Widget) == "widgets_v1"

        Widget.Settings.collection = "widgets_v2"
        try:
            assert cache.get_or_compute_name(Widget) == "widgets_v1"
        finally:
            Widget.Settings.collection = "widgets_v1"

    def test_tracking_is_computed_once(self):
        cache = MetadataCache()
        assert cache.get_or_compute_tracking(Widget) is True

        Widget.Settings.track_timestamps = False
        try:
            assert cache.get_or_compute_tracking(Widget) is True
        finally:
            Widget.Settings.track_timestamps = True

    def test_tracking_defaults_to_false(self):
        assert MetadataCache().get_or_compute_tracking(Gadget) is False

    def test_configuration_errors_are_not_cached(self):
        cache = MetadataCache()
        nameless = type("   ", (), {})
        with pytest.raises(ConfigurationError):
            cache.get_or_compute_name(nameless)
        nameless.Settings = type("Settings", (), {"collection": "named_now"})
        assert cache.get_or_compute_name(nameless) == "named_now"

    def test_reset_clears_state(self):
        cache = MetadataCache()
        cache.get_or_compute_name(Widget)
        cache.ensure_indexes_once(Widget, lambda: None)

        cache.reset()

        assert not cache.indexes_ensured(Widget)
        Widget.Settings.collection = "widgets_v2"
        try:
            assert cache.get_or_compute_name(Widget) == "widgets_v2"
        finally:
            Widget.Settings.collection = "widgets_v1"


class TestEnsureIndexesOnce:
    def test_runs_once(self):
        cache = MetadataCache()
        calls = []

        assert cache.ensure_indexes_once(Gadget, lambda: calls.append(1)) is True
        assert cache.ensure_indexes_once(Gadget, lambda: calls.append(1)) is False
        assert calls == [1]
        assert cache.indexes_ensured(Gadget)

    def test_failure_leaves_flag_unset(self):
        cache = MetadataCache()

        def boom():
            raise RuntimeError("store unavailable")

        with pytest.raises(RuntimeError):
            cache.ensure_indexes_once(Gadget, boom)
        assert not cache.indexes_ensured(Gadget)
        assert cache.ensure_indexes_once(Gadget, lambda: None) is True

    def test_keyed_by_qualified_name(self):
        twin = _make_twin()
        assert type_key(twin) != type_key(Gadget)

        cache = MetadataCache()
        cache.ensure_indexes_once(Gadget, lambda: None)
        assert not cache.indexes_ensured(twin)

    async def test_async_runs_once(self):
        cache = MetadataCache()
        calls = []

        async def ensure():
            calls.append(1)

        assert await cache.ensure_indexes_once_async(Gadget, ensure) is True
        assert await cache.ensure_indexes_once_async(Gadget, ensure) is False
        assert calls == [1]

    def test_concurrent_first_access_settles(self):
        cache = MetadataCache()
        calls = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            cache.ensure_indexes_once(Gadget, lambda: calls.append(1))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        # Racing threads may each run it, but it ran at least once and is now done
        assert 1 <= len(calls) <= 8
        before = len(calls)
        cache.ensure_indexes_once(Gadget, lambda: calls.append(1))
        assert len(calls) == before
