"""Turn a flat list of exercise items into execution groups.

Groups are never stored.  They are rebuilt from the item list whenever the
list changes, and every question about progress (which round a group is on,
which exercise comes next, where to resume) is answered by the pure helpers
in this module from ``(groups, current_rounds, completed)``.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, NamedTuple, Optional, Set

from engine.models import ExerciseGroup, ExerciseItem, set_key

NEXT_EXERCISE = "next_exercise"
NEXT_ROUND = "next_round"
NEXT_GROUP = "next_group"
SECTION_COMPLETE = "section_complete"


class Advance(NamedTuple):
    """Where execution goes after the current set has been logged."""

    kind: str
    group_index: Optional[int] = None
    exercise_index: Optional[int] = None
    round_index: Optional[int] = None


def build_groups(items: Iterable[ExerciseItem]) -> List[ExerciseGroup]:
    """Return execution groups for ``items`` in authoring order.

    Items sharing a ``cycle_id`` form one superset ordered by ``cycle_order``
    (ties keep their source order).  Items without a cycle become their own
    group.  A group is emitted where its first member first appears.
    """

    items = list(items)
    cycles: Dict[str, List[ExerciseItem]] = {}
    for item in items:
        if item.cycle_id:
            cycles.setdefault(item.cycle_id, []).append(item)
    for members in cycles.values():
        # ``sort`` is stable, equal orders keep the source order
        members.sort(key=lambda i: i.cycle_order or 0)

    groups: List[ExerciseGroup] = []
    emitted: Set[str] = set()
    for item in items:
        if item.cycle_id:
            if item.cycle_id in emitted:
                continue
            members = cycles[item.cycle_id]
            groups.append(
                ExerciseGroup(
                    id=item.cycle_id,
                    is_cycle=True,
                    total_rounds=max(len(m.sets) for m in members),
                    exercises=tuple(members),
                )
            )
            emitted.add(item.cycle_id)
        else:
            groups.append(
                ExerciseGroup(
                    id=item.id,
                    is_cycle=False,
                    total_rounds=len(item.sets),
                    exercises=(item,),
                )
            )
    return groups


def is_satisfied(item: ExerciseItem, round_index: int, completed: Set[str]) -> bool:
    """Return ``True`` if ``item`` needs nothing more for ``round_index``.

    A superset member with fewer sets than its siblings has nothing to do in
    the rounds past its own set count.
    """

    if not item.has_round(round_index):
        return True
    return set_key(item.id, round_index) in completed


def is_round_complete(
    group: ExerciseGroup, round_index: int, completed: Set[str]
) -> bool:
    return all(is_satisfied(ex, round_index, completed) for ex in group.exercises)


def compute_current_rounds(
    groups: Iterable[ExerciseGroup], completed: Set[str]
) -> Dict[str, int]:
    """Count the leading run of fully completed rounds of every group."""

    rounds: Dict[str, int] = {}
    for group in groups:
        done = 0
        for round_index in range(group.total_rounds):
            if not is_round_complete(group, round_index, completed):
                break
            done = round_index + 1
        rounds[group.id] = done
    return rounds


def is_group_complete(group: ExerciseGroup, current_rounds: Dict[str, int]) -> bool:
    return current_rounds.get(group.id, 0) >= group.total_rounds


def has_progress(group: ExerciseGroup, current_rounds: Dict[str, int], completed: Set[str]) -> bool:
    """Return ``True`` if any set of ``group`` has been logged."""

    if current_rounds.get(group.id, 0) > 0:
        return True
    return any(
        set_key(ex.id, r) in completed
        for ex in group.exercises
        for r in range(len(ex.sets))
    )


def find_next_incomplete_group(
    groups: List[ExerciseGroup], current_rounds: Dict[str, int], from_index: int
) -> Optional[int]:
    """Index of the next incomplete group after ``from_index``.

    Scans forward to the end of the list first, then wraps around to the
    groups before ``from_index``.  ``from_index`` itself is never returned.
    """

    count = len(groups)
    order = list(range(from_index + 1, count)) + list(range(0, max(from_index, 0)))
    for index in order:
        if not is_group_complete(groups[index], current_rounds):
            return index
    return None


def first_open_exercise(
    group: ExerciseGroup, round_index: int, completed: Set[str]
) -> int:
    """Index of the first member still owing a set in ``round_index``."""

    for index, ex in enumerate(group.exercises):
        if not is_satisfied(ex, round_index, completed):
            return index
    return 0


def next_open_exercise(
    group: ExerciseGroup, round_index: int, completed: Set[str], after: int
) -> int:
    """Next member owing a set in ``round_index``, starting after ``after``."""

    count = len(group.exercises)
    for step in range(1, count + 1):
        index = (after + step) % count
        if not is_satisfied(group.exercises[index], round_index, completed):
            return index
    return after


def plan_advance(
    groups: List[ExerciseGroup],
    current_rounds: Dict[str, int],
    completed: Set[str],
    group_index: int,
    exercise_index: int,
) -> Advance:
    """Decide what follows the set just logged at ``group_index``.

    ``completed`` must already contain the logged set while
    ``current_rounds`` still holds the round it was logged in.  Both the
    state machine and the rest timer's look-ahead call this, so they always
    agree on the next exercise.
    """

    group = groups[group_index]
    round_index = current_rounds.get(group.id, 0)

    if not is_round_complete(group, round_index, completed):
        nxt = next_open_exercise(group, round_index, completed, exercise_index)
        return Advance(NEXT_EXERCISE, group_index, nxt, round_index)

    next_round = round_index + 1
    if next_round < group.total_rounds:
        return Advance(
            NEXT_ROUND,
            group_index,
            first_open_exercise(group, next_round, completed),
            next_round,
        )

    rounds = dict(current_rounds)
    rounds[group.id] = group.total_rounds
    target_index = find_next_incomplete_group(groups, rounds, group_index)
    if target_index is None:
        return Advance(SECTION_COMPLETE)
    target = groups[target_index]
    target_round = rounds.get(target.id, 0)
    return Advance(
        NEXT_GROUP,
        target_index,
        first_open_exercise(target, target_round, completed),
        target_round,
    )


def find_resume_position(
    groups: List[ExerciseGroup],
    current_rounds: Dict[str, int],
    completed: Set[str],
) -> Optional[tuple[int, int]]:
    """Return ``(group_index, exercise_index)`` to resume at, or ``None``.

    Resumes inside the last group with any progress.  When that group is
    already finished execution continues at the next incomplete group,
    wrapping around.  ``None`` means every group is complete.
    """

    if not groups:
        return None
    last = None
    for index in range(len(groups) - 1, -1, -1):
        if has_progress(groups[index], current_rounds, completed):
            last = index
            break

    if last is None:
        target = find_next_incomplete_group(groups, current_rounds, -1)
    elif is_group_complete(groups[last], current_rounds):
        target = find_next_incomplete_group(groups, current_rounds, last)
    else:
        target = last
    if target is None:
        return None
    group = groups[target]
    return target, first_open_exercise(group, current_rounds.get(group.id, 0), completed)


def planned_tokens(items: Iterable[ExerciseItem]) -> Set[str]:
    """Every set token the items plan for."""

    return {set_key(item.id, r) for item in items for r in range(len(item.sets))}


def swap_item(
    items: List[ExerciseItem], old_id: str, new_id: str, movement_id: Optional[str] = None
) -> Optional[ExerciseItem]:
    """Replace item ``old_id`` of ``items`` in place with one named ``new_id``.

    The new item keeps the sets, mode and cycle of the old one and its
    ``stable_id``.  Returns the replaced item, or ``None`` when ``old_id`` is
    missing or ``new_id`` is already taken.
    """

    if old_id == new_id or any(item.id == new_id for item in items):
        return None
    for position, item in enumerate(items):
        if item.id == old_id:
            items[position] = replace(
                item,
                id=new_id,
                movement_id=movement_id or item.movement_id,
                source_id=item.stable_id,
            )
            return item
    return None
