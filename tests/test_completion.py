import pytest

from engine.completion import CompletionStore, completion_percentage
from engine.models import SectionKey
from engine.schedule import ScheduleRepository


@pytest.mark.parametrize(
    "completed,total,expected",
    [
        (0, 0, 100),
        (3, 0, 100),
        (0, 3, 0),
        (1, 3, 33),
        (2, 3, 67),
        (1, 2, 50),
        (1, 8, 13),
        (3, 3, 100),
        (5, 3, 100),
    ],
)
def test_completion_percentage(completed, total, expected):
    assert completion_percentage(completed, total) == expected


@pytest.fixture
def store(engine_db):
    ScheduleRepository(engine_db).schedule("wk-1", "full", "2026-10-19")
    return CompletionStore(engine_db)


def test_totals_come_from_scheduled_template(store):
    assert store.get_completion(SectionKey("wk-1", "warmup")).total_items == 1
    assert store.get_completion(SectionKey("wk-1", "main")).total_items == 4
    assert store.get_completion(SectionKey("wk-1", "core")).total_items == 1


def test_marking_twice_is_idempotent(store):
    key = SectionKey("wk-1", "main")
    store.mark_complete(key, "bench-set-0")
    once = store.get_completion(key)
    store.mark_complete(key, "bench-set-0")
    twice = store.get_completion(key)
    assert once == twice
    assert twice.completed_items == 1
    assert twice.percentage == 25


def test_sections_are_tracked_separately(store):
    store.mark_complete(SectionKey("wk-1", "main"), "bench-set-0")
    assert store.completed_tokens(SectionKey("wk-1", "warmup")) == set()
    assert store.completed_tokens(SectionKey("wk-1", "main")) == {"bench-set-0"}


def test_reset_is_idempotent(store):
    key = SectionKey("wk-1", "main")
    store.mark_many(key, ["bench-set-0", "bench-set-1"])
    store.reset(key)
    store.reset(key)
    assert store.get_completion(key).completed_items == 0
    assert store.get_completion(key).percentage == 0


def test_unscheduled_or_empty_section_is_complete(engine_db, store):
    summary = store.get_completion(SectionKey("nope", "main"))
    assert summary.total_items == 0
    assert summary.percentage == 100

    ScheduleRepository(engine_db).schedule("wk-2", "single", "2026-10-19")
    assert store.get_completion(SectionKey("wk-2", "core")).percentage == 100


def test_all_sections_complete(store):
    assert not store.all_sections_complete("wk-1")
    store.mark_complete(SectionKey("wk-1", "warmup"), "circles-set-0")
    store.mark_many(SectionKey("wk-1", "main"), [f"{e}-set-{r}" for e in ("bench", "row") for r in range(2)])
    assert not store.all_sections_complete("wk-1")
    store.mark_complete(SectionKey("wk-1", "core"), "plank-set-0")
    assert store.all_sections_complete("wk-1")


def test_rekey_moves_tokens(store):
    key = SectionKey("wk-1", "main")
    store.mark_many(key, ["bench-set-0", "bench-set-1"])
    store.rekey(key, {"bench-set-0": "incline-set-0", "bench-set-1": "incline-set-1"})
    assert store.completed_tokens(key) == {"incline-set-0", "incline-set-1"}


def test_tokens_outside_the_section_are_not_counted(store):
    key = SectionKey("wk-1", "main")
    store.mark_many(key, ["bench-set-0", "ghost-set-0", "bench-set-7"])
    summary = store.get_completion(key)
    assert summary.completed_items == 1
    assert summary.percentage == 25


def test_recorded_swap_rebuilds_section_items(store):
    key = SectionKey("wk-1", "main")
    store.mark_many(key, ["bench-set-0", "row-set-0"])
    store.record_swap(key, "bench", "incline", "m-incline", {"bench-set-0": "incline-set-0"})
    assert store.swaps(key) == [("bench", "incline", "m-incline")]
    assert store.swaps(SectionKey("wk-1", "warmup")) == []

    items = store.section_items(key)
    assert [i.id for i in items] == ["incline", "row"]
    assert items[0].stable_id == "bench"
    assert store.completed_tokens(key) == {"incline-set-0", "row-set-0"}
    assert store.get_completion(key).completed_items == 2

    store.reset(key)
    assert [i.id for i in store.section_items(key)] == ["incline", "row"]
