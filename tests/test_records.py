from engine.models import MODE_REPS, MODE_TIME, SetCompleted
from engine.records import PersonalRecordStore, PRDetector


def _event(mode=MODE_REPS, weight=100.0, reps=5, date="2026-10-19"):
    return SetCompleted(
        workout_key="wk-1",
        section="main",
        exercise_id="bench",
        movement_id="m-bench",
        round_index=0,
        mode=mode,
        weight=weight,
        reps=reps,
        date=date,
    )


def test_update_pr_replaces_unconditionally(engine_db):
    store = PersonalRecordStore(engine_db)
    store.update_pr("m-bench", 140, 3, "2026-10-01")
    store.update_pr("m-bench", 100, 5, "2026-10-19")
    record = store.get_pr("m-bench")
    assert (record.weight, record.reps, record.date) == (100, 5, "2026-10-19")
    assert store.get_pr("m-row") is None
    assert [r.movement_id for r in store.get_all()] == ["m-bench"]


def test_is_new_record_compares_window(engine_db):
    store = PersonalRecordStore(engine_db)
    store.update_pr("m-bench", 140, 3, "2026-10-15")
    assert store.is_new_record("m-bench", "2026-10-13")
    assert not store.is_new_record("m-bench", "2026-10-16")
    assert not store.is_new_record("m-row", "2026-01-01")


def test_detector_forwards_weighted_rep_sets(engine_db):
    store = PersonalRecordStore(engine_db)
    detector = PRDetector(store)
    detector(_event(weight=0))
    detector.on_set_completed(_event(mode=MODE_TIME, weight=20, reps=30))
    assert store.get_pr("m-bench") is None

    detector.on_set_completed(_event(weight=102.5, reps=4))
    assert store.get_pr("m-bench").weight == 102.5
