from pathlib import Path
import sys
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from engine.db import init_db
from engine.exercises import ExerciseLibrary
from engine.execution import WorkoutExecution
from engine.models import MODE_TIME, WorkoutTemplate
from engine.settings import Settings
from engine.templates import TemplateRepository
from tests.utils import FakeClock, make_item

TEST_DATE = "2026-10-19"


@pytest.fixture
def engine_db(tmp_path: Path) -> Path:
    """Create a temporary database with a handful of templates.

    ``single``    main: bench, 3 sets of 100 x 10.
    ``superset``  main: a/b superset, 2 rounds.
    ``full``      warmup: circles; main: bench + row; core: plank (timed).
    ``unequal``   main: superset where ``long`` has 3 sets and ``short`` 2.
    ``wrap``      warmup: three single-set exercises w1, w2, w3.
    ``timed``     warmup: 30s hold and a per-side 20s stretch.
    """
    db_path = init_db(tmp_path / "engine.db")

    library = ExerciseLibrary(db_path)
    for movement_id, name in [
        ("m-bench", "Bench Press"),
        ("m-row", "Barbell Row"),
        ("m-a", "Pull-up"),
        ("m-b", "Dip"),
        ("m-circles", "Arm Circles"),
        ("m-plank", "Plank"),
        ("m-incline", "Incline Press"),
    ]:
        library.add_movement(movement_id, name)

    templates = TemplateRepository(db_path)
    templates.add_template(
        WorkoutTemplate(id="single", name="Single", items=[make_item("bench", 3)])
    )
    templates.add_template(
        WorkoutTemplate(
            id="superset",
            name="Superset",
            items=[
                make_item("b", 2, cycle_id="c1", cycle_order=1, weight=0, reps=12),
                make_item("a", 2, cycle_id="c1", cycle_order=0, weight=20, reps=8),
            ],
        )
    )
    templates.add_template(
        WorkoutTemplate(
            id="full",
            name="Full",
            warmup_items=[make_item("circles", 1, weight=0, reps=15)],
            items=[make_item("bench", 2), make_item("row", 2, weight=80, reps=12)],
            accessory_items=[make_item("plank", 1, mode=MODE_TIME, weight=0, duration=30)],
        )
    )
    templates.add_template(
        WorkoutTemplate(
            id="unequal",
            name="Unequal",
            items=[
                make_item("long", 3, cycle_id="c2", cycle_order=0),
                make_item("short", 2, cycle_id="c2", cycle_order=1),
            ],
        )
    )
    templates.add_template(
        WorkoutTemplate(
            id="wrap",
            name="Wrap",
            warmup_items=[make_item("w1"), make_item("w2"), make_item("w3")],
        )
    )
    templates.add_template(
        WorkoutTemplate(
            id="timed",
            name="Timed",
            warmup_items=[
                make_item("hold", 1, mode=MODE_TIME, weight=0, duration=30),
                make_item("stretch", 1, mode=MODE_TIME, weight=0, duration=20, per_side=True),
            ],
        )
    )
    return db_path


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(tmp_path / "settings.json")


@pytest.fixture
def make_execution(engine_db, clock, settings):
    """Factory building a :class:`WorkoutExecution` on the test database."""

    def factory(template_id: str, section: str = "main", workout_key: str = "wk-1"):
        return WorkoutExecution(
            workout_key,
            template_id,
            section,
            TEST_DATE,
            db_path=engine_db,
            settings=settings,
            clock=clock,
            time_func=clock.time,
        )

    return factory
