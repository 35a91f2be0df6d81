"""
Quiz Profile.

The accumulated answer set for one quiz session. Field constraints are
enforced on every assignment, so out-of-range input is rejected at the setter
rather than discovered at submission.
"""

from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator


MIN_AGE = 4
MAX_AGE = 18
MAX_TOP_PICKS = 3
DEFAULT_FICTION_RATIO = 50


class ParentReadingHabit(Enum):
    """How often a parent still reads to the child."""
    ALWAYS = "always"
    MOSTLY = "mostly"
    SOMETIMES = "sometimes"
    NEVER = "never"  # "Not anymore, I read myself"


class ReactionResponse(Enum):
    """Opinion about a series the reader has read."""
    LOVE = "love"
    LIKE = "like"
    STOP_READING = "stop-reading"
    DISLIKED = "disliked"


NEGATIVE_RESPONSES = frozenset({ReactionResponse.STOP_READING, ReactionResponse.DISLIKED})


class Reaction(BaseModel):
    """Read/not-read choice for one item, plus an optional opinion."""

    model_config = ConfigDict(validate_assignment=True)

    has_read: bool
    response: ReactionResponse | None = None

    def to_wire(self) -> dict:
        return {
            "hasRead": self.has_read,
            "response": self.response.value if self.response else None,
        }


def _clean_selection(values: Iterable[Any] | None) -> list[str]:
    """Strip, drop blanks, and dedupe keeping first-seen order."""
    if not values:
        return []
    seen: list[str] = []
    for v in values:
        if v is None:
            continue
        item = str(v).strip()
        if item and item not in seen:
            seen.append(item)
    return seen


class Profile(BaseModel):
    """
    Quiz answers for one session.

    One instance per session, owned by the engine and passed explicitly.
    Setters replace a field wholesale; there is no incremental diffing.
    """

    model_config = ConfigDict(validate_assignment=True)

    # Identity
    name: str = ""
    age: int | None = Field(default=None, ge=MIN_AGE, le=MAX_AGE)

    # Branch answers
    parent_reading_habit: ParentReadingHabit | None = None
    young_genre_picks: list[str] = Field(default_factory=list, max_length=MAX_TOP_PICKS)
    young_additional_genres: list[str] = Field(default_factory=list)
    fiction_genre_picks: list[str] = Field(default_factory=list, max_length=MAX_TOP_PICKS)
    fiction_extra_genres: list[str] = Field(default_factory=list)
    nonfiction_genres: list[str] = Field(default_factory=list)
    extra_genres: list[str] = Field(default_factory=list)
    fiction_ratio: int = Field(default=DEFAULT_FICTION_RATIO, ge=0, le=100)
    young_interests: list[str] = Field(default_factory=list)
    nonfiction_interests: list[str] = Field(default_factory=list)

    # Contact
    parent_email: str = ""
    parent_phone: str = ""

    # Reactions keyed by item id, in the order choices were first made
    reactions: dict[str, Reaction] = Field(default_factory=dict)

    # Assigned once contact info is first persisted
    session_id: str | None = None

    @field_validator(
        "young_genre_picks",
        "young_additional_genres",
        "fiction_genre_picks",
        "fiction_extra_genres",
        "nonfiction_genres",
        "extra_genres",
        "young_interests",
        "nonfiction_interests",
        mode="before",
    )
    @classmethod
    def normalize_selection(cls, v: Any) -> list[str]:
        """Selections behave as sets; duplicates collapse."""
        if isinstance(v, str):
            v = [v]
        return _clean_selection(v)

    @field_validator("name", "parent_email", "parent_phone", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip()

    def snapshot(self, fields: Iterable[str]) -> dict:
        """
        JSON-ready copy of the selected fields.

        Persistence jobs carry this copy so later edits cannot leak into an
        earlier save.
        """
        return self.model_dump(mode="json", include=set(fields))

    def is_empty(self) -> bool:
        return self == Profile()
