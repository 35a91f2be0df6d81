"""
Progress Estimator.

Completion percentage over the age-filtered stage sequence. Display only.
"""

from .stages import Stage, applies_to_age, stages_in_order


def path_for_age(age: int | None) -> list[Stage]:
    """Canonical stage order with stages off this age's branch removed."""
    return [s for s in stages_in_order() if applies_to_age(s, age)]


def progress(stage: Stage, age: int | None) -> float:
    """
    Completion percentage in [0, 100] for `stage` on the path for `age`.

    Returns 0 when the stage is not on that path.
    """
    path = path_for_age(age)
    if stage not in path or len(path) < 2:
        return 0.0
    return path.index(stage) / (len(path) - 1) * 100
