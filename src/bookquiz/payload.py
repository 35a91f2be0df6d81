"""
Canonical Submission Payload.

The CanonicalPayload is the contract between the quiz and the recommendation
service. Branch-specific answers are reconciled into one genre list and one
interest list according to the reader's age bracket.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping
import json

from .profile import Profile
from .reactions import ReaderSignal, classify
from .stages import is_teen_reader, is_young_reader


class AgeBracket(Enum):
    """Which branch of the quiz produced the genre answers."""
    EARLY = "early"  # 5 and under, or age not given
    YOUNG = "young"  # 6-10
    TEEN = "teen"    # 11+


def age_bracket(age: int | None) -> AgeBracket:
    """Bracket used for genre reconciliation."""
    if is_young_reader(age):
        return AgeBracket.YOUNG
    if age is not None and is_teen_reader(age):
        return AgeBracket.TEEN
    return AgeBracket.EARLY


def _merge(*groups: Iterable[str]) -> list[str]:
    """Union in first-seen order, dropping blanks."""
    merged: list[str] = []
    for group in groups:
        for item in group:
            item = item.strip() if item else ""
            if item and item not in merged:
                merged.append(item)
    return merged


def canonical_interests(profile: Profile) -> list[str]:
    return _merge(profile.young_interests, profile.nonfiction_interests)


def canonical_genres(profile: Profile) -> list[str]:
    """
    Flatten branch-specific genre answers into one list.

    - 6-10: young picks + young additional genres
    - 11+: fiction picks + fiction extras + non-fiction + extra genres
    - 5 and under (or unset): young interests; no genres are asked

    Falls back to the interest lists when no genre survives cleaning.
    """
    bracket = age_bracket(profile.age)
    if bracket == AgeBracket.YOUNG:
        genres = _merge(profile.young_genre_picks, profile.young_additional_genres)
    elif bracket == AgeBracket.TEEN:
        genres = _merge(
            profile.fiction_genre_picks,
            profile.fiction_extra_genres,
            profile.nonfiction_genres,
            profile.extra_genres,
        )
    else:
        genres = _merge(profile.young_interests)

    if not genres:
        genres = canonical_interests(profile)
    return genres


@dataclass(frozen=True)
class CanonicalPayload:
    """
    Reconciled, submission-ready profile.

    Built once when the quiz reaches results and never modified afterwards.
    """
    session_id: str | None
    name: str
    age: int | None
    age_bracket: AgeBracket
    parent_email: str
    parent_phone: str
    parent_reading_habit: str | None
    fiction_ratio: int
    genres: tuple[str, ...]
    interests: tuple[str, ...]
    reactions: Mapping[str, Mapping] = field(default_factory=lambda: MappingProxyType({}))
    # Each: {"hasRead": bool, "response": str | None}
    reader_signal: ReaderSignal = ReaderSignal.NEW_READER
    completed_at: str = ""

    def to_dict(self) -> dict:
        """Serialize for the recommendation service."""
        return {
            "sessionId": self.session_id,
            "name": self.name,
            "age": self.age,
            "ageBracket": self.age_bracket.value,
            "parentEmail": self.parent_email,
            "parentPhone": self.parent_phone,
            "parentReading": self.parent_reading_habit,
            "fictionNonFictionRatio": self.fiction_ratio,
            "genres": list(self.genres),
            "interests": list(self.interests),
            "bookSeries": {k: dict(v) for k, v in self.reactions.items()},
            "readerSignal": self.reader_signal.value,
            "completedAt": self.completed_at,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


def build_payload(
    profile: Profile,
    visible_items: Iterable[str] | None = None,
) -> CanonicalPayload:
    """
    Build the CanonicalPayload from the accumulated Profile.

    Called when the quiz reaches results, before any recommendation request.
    """
    habit = profile.parent_reading_habit
    return CanonicalPayload(
        session_id=profile.session_id,
        name=profile.name,
        age=profile.age,
        age_bracket=age_bracket(profile.age),
        parent_email=profile.parent_email,
        parent_phone=profile.parent_phone,
        parent_reading_habit=habit.value if habit else None,
        fiction_ratio=profile.fiction_ratio,
        genres=tuple(canonical_genres(profile)),
        interests=tuple(canonical_interests(profile)),
        reactions=MappingProxyType({
            item_id: MappingProxyType(r.to_wire()) for item_id, r in profile.reactions.items()
        }),
        reader_signal=classify(profile.reactions, visible_items),
        completed_at=datetime.now(timezone.utc).isoformat(),
    )
