"""
Bookquiz Reading Quiz.

Adaptive questionnaire that builds a reader profile for book recommendations.
The path through the quiz depends on the reader's age:

1. Everyone - Start, parent consent/contact, name, age
2. Age 7 and under - Parent reading habits
3. Age 5 and under - Interests instead of genres
4. Age 6-10 - Top 3 genres, then any extra genres
5. Age 11+ (or age not given) - Fiction, non-fiction, extra genres, fiction ratio
6. Everyone - Book series reactions, then results

The engine reconciles the branch answers into a CanonicalPayload for the
recommendation service.
"""

from .engine import QuizEngine, StepResult
from .payload import AgeBracket, CanonicalPayload, build_payload, canonical_genres
from .persistence import InMemoryPersistenceClient, PersistenceClient
from .profile import ParentReadingHabit, Profile, Reaction, ReactionResponse
from .progress import path_for_age, progress
from .reactions import ReaderSignal, classify, upsert
from .recommendations import RecommendationClient, RecommendationPlan
from .stages import Stage, captured_fields, stages_in_order
from .transitions import next_stage, previous_stage

__all__ = [
    "QuizEngine",
    "StepResult",
    "AgeBracket",
    "CanonicalPayload",
    "build_payload",
    "canonical_genres",
    "InMemoryPersistenceClient",
    "PersistenceClient",
    "ParentReadingHabit",
    "Profile",
    "Reaction",
    "ReactionResponse",
    "path_for_age",
    "progress",
    "ReaderSignal",
    "classify",
    "upsert",
    "RecommendationClient",
    "RecommendationPlan",
    "Stage",
    "captured_fields",
    "stages_in_order",
    "next_stage",
    "previous_stage",
]
