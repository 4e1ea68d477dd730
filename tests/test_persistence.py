"""Tests for the JSON save store and the debounced saver."""

from game.persistence import SaveScheduler, SaveStore


# ── SaveStore ───────────────────────────────────────────────


def test_missing_file_is_no_save(store):
    assert store.load() is None


def test_save_and_load(store):
    store.save({"version": 2, "coins": 11})
    assert store.load() == {"version": 2, "coins": 11}
    assert not store.path.with_suffix(".json.tmp").exists()


def test_corrupt_file_is_no_save(store):
    store.path.write_text("{not json", encoding="utf-8")
    assert store.load() is None


def test_non_object_is_no_save(store):
    store.path.write_text("[1, 2]", encoding="utf-8")
    assert store.load() is None


def test_clear(store):
    store.save({"version": 2})
    store.clear()
    assert not store.path.exists()
    store.clear()


def test_save_creates_parent_dirs(tmp_path):
    store = SaveStore(tmp_path / "nested" / "dir" / "save.json")
    store.save({"version": 2})
    assert store.load() == {"version": 2}


# ── SaveScheduler ───────────────────────────────────────────


def test_debounced_save(store):
    blob = {"version": 2, "coins": 1}
    saver = SaveScheduler(store, lambda: blob, debounce_ms=500)

    saver.request(1000)
    assert saver.pending
    assert saver.poll(1499) is False
    assert store.load() is None
    assert saver.poll(1500) is True
    assert store.load() == blob
    assert not saver.pending
    assert saver.poll(5000) is False
    assert saver.saves == 1


def test_request_rearms_timer(store):
    saver = SaveScheduler(store, lambda: {"version": 2}, debounce_ms=500)
    saver.request(0)
    saver.request(400)
    assert saver.poll(600) is False
    assert saver.poll(900) is True


def test_cancel(store):
    saver = SaveScheduler(store, lambda: {"version": 2}, debounce_ms=10)
    saver.request(0)
    saver.cancel()
    assert saver.poll(100) is False


def test_no_store_never_writes():
    saver = SaveScheduler(None, lambda: {"version": 2})
    assert saver.save_now() is False


class BrokenStore(SaveStore):
    def save(self, blob):
        raise OSError("disk full")


def test_write_failure_is_swallowed(tmp_path):
    saver = SaveScheduler(BrokenStore(tmp_path / "s.json"), lambda: {"version": 2})
    saver.request(0)
    assert saver.poll(10_000) is False
    assert not saver.pending
    assert saver.saves == 0


def test_non_finite_json_loads(store):
    # json accepts Infinity; decoding it is migration's job
    store.path.write_text('{"version": 2, "coins": Infinity}', encoding="utf-8")
    assert store.load()["coins"] == float("inf")


def test_deeply_nested_file_is_no_save(store):
    store.path.write_text("[" * 200_000 + "]" * 200_000, encoding="utf-8")
    assert store.load() is None
