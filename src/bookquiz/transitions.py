"""
Quiz Transition Resolver.

A single table of age-guarded edges drives both directions of navigation.
Forward navigation takes the first outgoing edge whose guard holds; backward
navigation takes the incoming edge whose guard holds and whose source sits on
the path for the current age.

Only `age` influences branching. An unset age follows the 11+ path.
"""

from dataclasses import dataclass
from typing import Any, Callable

from .stages import (
    Stage,
    applies_to_age,
    is_early_reader,
    is_read_to,
    is_teen_reader,
    is_young_reader,
)

AgeGuard = Callable[[int | None], bool]


def _always(age: int | None) -> bool:
    return True


def _skips_parent_reading(age: int | None) -> bool:
    # Age 7 is read to even though the young genre screen covers 6-10
    return age is not None and 8 <= age <= 10


@dataclass(frozen=True)
class Edge:
    """Directed transition between two stages."""
    source: Stage
    target: Stage
    guard: AgeGuard = _always
    forward: bool = True   # Used by next_stage
    backward: bool = True  # Used by previous_stage


EDGES: tuple[Edge, ...] = (
    Edge(Stage.START, Stage.CONSENT),
    Edge(Stage.CONSENT, Stage.IDENTIFY_NAME),
    Edge(Stage.IDENTIFY_NAME, Stage.IDENTIFY_AGE),

    # Age entry branches; the teen edge comes last and doubles as the fallback
    Edge(Stage.IDENTIFY_AGE, Stage.PARENT_READING_HABIT, is_read_to),
    Edge(Stage.IDENTIFY_AGE, Stage.GENRE_SELECTION_YOUNG, _skips_parent_reading),
    Edge(Stage.IDENTIFY_AGE, Stage.GENRE_SELECTION_FICTION, is_teen_reader),

    Edge(Stage.PARENT_READING_HABIT, Stage.INTERESTS_YOUNG, is_early_reader),
    Edge(Stage.PARENT_READING_HABIT, Stage.GENRE_SELECTION_YOUNG, is_young_reader),
    Edge(Stage.PARENT_READING_HABIT, Stage.GENRE_SELECTION_FICTION, is_teen_reader),

    # Age 5 and under
    Edge(Stage.INTERESTS_YOUNG, Stage.SERIES_REACTIONS),

    # Age 6-10
    Edge(Stage.GENRE_SELECTION_YOUNG, Stage.GENRE_SELECTION_EXTRA_YOUNG),
    Edge(Stage.GENRE_SELECTION_EXTRA_YOUNG, Stage.SERIES_REACTIONS),

    # Age 11+
    Edge(Stage.GENRE_SELECTION_FICTION, Stage.GENRE_SELECTION_FICTION_EXTRA),
    Edge(Stage.GENRE_SELECTION_FICTION_EXTRA, Stage.GENRE_SELECTION_NONFICTION),
    Edge(Stage.GENRE_SELECTION_NONFICTION, Stage.GENRE_SELECTION_EXTRA),
    Edge(Stage.GENRE_SELECTION_EXTRA, Stage.FICTION_RATIO),
    Edge(Stage.FICTION_RATIO, Stage.SERIES_REACTIONS),

    # Dormant stage: never entered going forward, but navigable if entered
    Edge(Stage.GENRE_SELECTION_NONFICTION, Stage.GENRE_SELECTION_NONFICTION_EXTRA, forward=False),
    Edge(Stage.GENRE_SELECTION_NONFICTION_EXTRA, Stage.GENRE_SELECTION_EXTRA),

    Edge(Stage.SERIES_REACTIONS, Stage.RESULTS),
    # Restart only; start never steps back into results
    Edge(Stage.RESULTS, Stage.START, backward=False),
)


def _age_of(profile_or_age: Any) -> int | None:
    """Accept either a Profile or a bare age."""
    if profile_or_age is None or isinstance(profile_or_age, int):
        return profile_or_age
    return getattr(profile_or_age, "age", None)


def outgoing(stage: Stage) -> list[Edge]:
    """Forward edges leaving a stage, in table order."""
    return [e for e in EDGES if e.source == stage and e.forward]


def incoming(stage: Stage) -> list[Edge]:
    """Backward-navigable edges entering a stage, in table order."""
    return [e for e in EDGES if e.target == stage and e.backward]


def next_stage(stage: Stage, profile_or_age: Any = None) -> Stage:
    """
    Resolve the stage after `stage`.

    Args:
        stage: Current stage
        profile_or_age: Profile (only `age` is read) or a bare age

    Returns:
        Next stage. Never raises for a missing age.
    """
    age = _age_of(profile_or_age)
    edges = outgoing(stage)
    for edge in edges:
        if edge.guard(age):
            return edge.target
    # Guards cover every age, so this only guards against table edits
    return edges[-1].target if edges else stage


def previous_stage(stage: Stage, profile_or_age: Any = None) -> Stage:
    """
    Resolve the stage before `stage`.

    Inverts next_stage for every stage reachable under the given age,
    including merges such as series-reactions, which steps back to the branch
    terminal the current age implies.
    """
    age = _age_of(profile_or_age)
    edges = incoming(stage)
    if not edges:
        return stage

    on_path = [e for e in edges if e.guard(age) and applies_to_age(e.source, age)]
    if on_path:
        return on_path[0].source

    # Stage not reachable for this age; step back along any permitted edge
    guarded = [e for e in edges if e.guard(age)]
    return (guarded or edges)[0].source


def path_from_start(profile_or_age: Any = None) -> list[Stage]:
    """Stages visited by repeated next_stage from start through results."""
    path = [Stage.START]
    while path[-1] != Stage.RESULTS:
        path.append(next_stage(path[-1], profile_or_age))
    return path
