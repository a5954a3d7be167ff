import json
import logging

from engine.execution import STATE_ACTIVE, STATE_COMPLETE
from engine.models import SetValue
from engine.timers import PHASE_REST


def test_recovery_files_mirror_state(make_execution):
    execution = make_execution("single")
    execution.start()
    f1, f2 = execution.recovery_files
    assert f1.exists() and f2.exists()
    with f1.open() as fh:
        data1 = json.load(fh)
    with f2.open() as fh:
        data2 = json.load(fh)
    assert data1 == data2 == execution.export_state()


def test_backup_file_used_when_primary_lost(make_execution):
    execution = make_execution("single")
    execution.set_value("bench", 1, weight=140)
    f1, f2 = execution.recovery_files
    expected = json.loads(f2.read_text())

    f1.unlink()
    assert execution.load_recovery_state() == expected

    f1.write_text("{not json")
    assert execution.load_recovery_state() == expected


def test_recovery_of_other_workout_is_ignored(make_execution):
    execution = make_execution("single")
    f1, _f2 = execution.recovery_files
    f1.write_text(json.dumps({"workout_key": "other", "section": "main"}))
    assert execution.load_recovery_state() is None


def test_resume_mid_group_restores_edits(make_execution, clock):
    first = make_execution("single")
    first.set_value("bench", 2, weight=150)
    first.start()

    resumed = make_execution("single")
    assert resumed.status == STATE_ACTIVE
    assert resumed.current_group.id == "bench"
    assert resumed.current_round == 1
    assert resumed.has_logged_any_set
    assert resumed.resolver.edits["bench-set-2"] == SetValue(150, 10)
    assert resumed.resolve_value("bench", 0) == SetValue(100, 10)


def test_resume_after_finished_group_wraps(make_execution):
    first = make_execution("wrap", section="warmup")
    first.select("w3")
    first.start()

    resumed = make_execution("wrap", section="warmup")
    assert resumed.current_group.id == "w1"
    assert not resumed.has_logged_any_set
    assert resumed.completion_timestamps == first.completion_timestamps
    assert resumed.completed_group_order() == ["w3"]


def test_resume_restores_selection_without_logged_sets(make_execution):
    first = make_execution("full")
    first.select("row")

    resumed = make_execution("full")
    assert resumed.current_group.id == "row"
    assert not resumed.has_logged_any_set


def test_finished_section_reloads_complete(make_execution):
    make_execution("full", section="warmup").start()
    resumed = make_execution("full", section="warmup")
    assert resumed.status == STATE_COMPLETE
    assert resumed.current_group is None


def test_completion_survives_without_recovery_files(make_execution):
    first = make_execution("superset")
    first.start()
    first.clear_recovery_files()

    resumed = make_execution("superset")
    assert resumed.completed == {"a-set-0"}
    assert resumed.current_exercise.id == "b"
    assert resumed.resolver.edits == {}


def test_recovery_write_failure_is_logged(make_execution, tmp_path, caplog):
    execution = make_execution("single")
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    execution.recovery_dir = blocker
    execution.recovery_files = (blocker / "a.json", blocker / "b.json")
    with caplog.at_level(logging.ERROR, logger="engine.execution"):
        execution.save_recovery_state()
    assert "Could not write recovery state" in caplog.text


def test_swap_survives_restart(make_execution, clock):
    first = make_execution("single")
    first.start()
    clock.advance(first.timer.remaining())
    first.start()
    clock.advance(first.timer.remaining())
    assert first.swap_exercise("bench", "incline", movement_id="m-incline")

    resumed = make_execution("single")
    assert [item.id for item in resumed.items] == ["incline"]
    assert resumed.find_item("incline").stable_id == "bench"
    assert resumed.exercise_name("incline") == "Incline Press"
    assert resumed.completed == {"incline-set-0", "incline-set-1"}
    assert resumed.current_rounds == {"incline": 2}
    assert resumed.current_exercise.id == "incline"
    assert resumed.current_round == 2
    assert resumed.has_logged_any_set
    summary = resumed.get_completion()
    assert (summary.completed_items, summary.total_items, summary.percentage) == (2, 3, 67)

    resumed.start()
    assert resumed.status == STATE_COMPLETE
    assert resumed.get_completion().percentage == 100
    assert resumed.completed == {f"incline-set-{r}" for r in range(3)}


def test_swap_is_kept_after_reset(make_execution):
    first = make_execution("full")
    first.swap_exercise("row", "incline", movement_id="m-incline")
    first.reset_section()

    resumed = make_execution("full")
    assert [item.id for item in resumed.items] == ["bench", "incline"]
    assert resumed.get_completion().total_items == 4


def test_stop_during_rest_keeps_group_finish_time(make_execution, clock):
    first = make_execution("full")
    first.start()
    clock.advance(first.timer.remaining())
    first.start()
    assert first.timer_phase == PHASE_REST
    finished_at = first.completion_timestamps["bench"]
    assert finished_at == clock.now

    resumed = make_execution("full")
    assert resumed.completion_timestamps == {"bench": finished_at}
    assert resumed.completed_group_order() == ["bench"]
    assert resumed.current_group.id == "row"
    assert not resumed.has_logged_any_set

    # the interrupted engine keeps the time the last set was logged
    clock.advance(first.timer.remaining())
    assert first.current_group.id == "row"
    assert first.completion_timestamps["bench"] == finished_at
