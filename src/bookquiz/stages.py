"""
Quiz Stage Registry.

Enumerates every step of the reading quiz and the profile fields each step
captures. The canonical ordering follows path order, so every age branch is a
subsequence of it.
"""

from enum import Enum


class Stage(Enum):
    """Quiz stages."""
    START = "start"
    CONSENT = "consent"                                              # Parent contact + consent
    IDENTIFY_NAME = "identify-name"
    IDENTIFY_AGE = "identify-age"
    PARENT_READING_HABIT = "parent-reading-habit"                    # Age <= 7
    GENRE_SELECTION_YOUNG = "genre-selection-young"                  # Age 6-10: top 3
    GENRE_SELECTION_NONFICTION = "genre-selection-nonfiction"        # Age 11+
    INTERESTS_YOUNG = "interests-young"                              # Age <= 5
    GENRE_SELECTION_FICTION = "genre-selection-fiction"              # Age 11+: top 1-3
    GENRE_SELECTION_FICTION_EXTRA = "genre-selection-fiction-extra"  # Age 11+
    GENRE_SELECTION_NONFICTION_EXTRA = "genre-selection-nonfiction-extra"  # Dormant
    GENRE_SELECTION_EXTRA = "genre-selection-extra"                  # Age 11+
    GENRE_SELECTION_EXTRA_YOUNG = "genre-selection-extra-young"      # Age 6-10
    FICTION_RATIO = "fiction-ratio"                                  # Age 11+
    SERIES_REACTIONS = "series-reactions"
    RESULTS = "results"


_CANONICAL_ORDER: tuple[Stage, ...] = (
    Stage.START,
    Stage.CONSENT,
    Stage.IDENTIFY_NAME,
    Stage.IDENTIFY_AGE,
    Stage.PARENT_READING_HABIT,
    Stage.INTERESTS_YOUNG,
    Stage.GENRE_SELECTION_YOUNG,
    Stage.GENRE_SELECTION_EXTRA_YOUNG,
    Stage.GENRE_SELECTION_FICTION,
    Stage.GENRE_SELECTION_FICTION_EXTRA,
    Stage.GENRE_SELECTION_NONFICTION,
    Stage.GENRE_SELECTION_NONFICTION_EXTRA,
    Stage.GENRE_SELECTION_EXTRA,
    Stage.FICTION_RATIO,
    Stage.SERIES_REACTIONS,
    Stage.RESULTS,
)

_CAPTURED_FIELDS: dict[Stage, frozenset[str]] = {
    Stage.START: frozenset(),
    Stage.CONSENT: frozenset({"parent_email", "parent_phone"}),
    Stage.IDENTIFY_NAME: frozenset({"name"}),
    Stage.IDENTIFY_AGE: frozenset({"age"}),
    Stage.PARENT_READING_HABIT: frozenset({"parent_reading_habit"}),
    Stage.GENRE_SELECTION_YOUNG: frozenset({"young_genre_picks"}),
    Stage.GENRE_SELECTION_NONFICTION: frozenset({"nonfiction_genres"}),
    Stage.INTERESTS_YOUNG: frozenset({"young_interests"}),
    Stage.GENRE_SELECTION_FICTION: frozenset({"fiction_genre_picks"}),
    Stage.GENRE_SELECTION_FICTION_EXTRA: frozenset({"fiction_extra_genres"}),
    Stage.GENRE_SELECTION_NONFICTION_EXTRA: frozenset({"nonfiction_interests"}),
    Stage.GENRE_SELECTION_EXTRA: frozenset({"extra_genres"}),
    Stage.GENRE_SELECTION_EXTRA_YOUNG: frozenset({"young_additional_genres"}),
    Stage.FICTION_RATIO: frozenset({"fiction_ratio"}),
    Stage.SERIES_REACTIONS: frozenset({"reactions"}),
    Stage.RESULTS: frozenset(),
}


# =============================================================================
# Age Brackets
# =============================================================================
# An unset age follows the 11+ path wherever the flow branches.

def is_early_reader(age: int | None) -> bool:
    """Age 5 and under."""
    return age is not None and age <= 5


def is_young_reader(age: int | None) -> bool:
    """Age 6-10."""
    return age is not None and 6 <= age <= 10


def is_teen_reader(age: int | None) -> bool:
    """Age 11+, or age not given."""
    return age is None or age >= 11


def is_read_to(age: int | None) -> bool:
    """Age 7 and under gets the parent reading question."""
    return age is not None and age <= 7


_TEEN_ONLY = {
    Stage.GENRE_SELECTION_FICTION,
    Stage.GENRE_SELECTION_FICTION_EXTRA,
    Stage.GENRE_SELECTION_NONFICTION,
    Stage.GENRE_SELECTION_EXTRA,
    Stage.FICTION_RATIO,
}

_YOUNG_ONLY = {
    Stage.GENRE_SELECTION_YOUNG,
    Stage.GENRE_SELECTION_EXTRA_YOUNG,
}


# =============================================================================
# Registry API
# =============================================================================

def stages_in_order() -> tuple[Stage, ...]:
    """Maximal canonical stage ordering, independent of age."""
    return _CANONICAL_ORDER


def captured_fields(stage: Stage) -> frozenset[str]:
    """Profile field names the given stage is responsible for."""
    return _CAPTURED_FIELDS[stage]


def applies_to_age(stage: Stage, age: int | None) -> bool:
    """Check whether a stage sits on the path for the given age."""
    if stage == Stage.GENRE_SELECTION_NONFICTION_EXTRA:
        return False
    if stage == Stage.PARENT_READING_HABIT:
        return is_read_to(age)
    if stage == Stage.INTERESTS_YOUNG:
        return is_early_reader(age)
    if stage in _YOUNG_ONLY:
        return is_young_reader(age)
    if stage in _TEEN_ONLY:
        return is_teen_reader(age)
    return True
