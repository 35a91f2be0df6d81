"""
Quiz Engine.

Owns one session's Profile and current Stage. UI events call the setters;
`advance()` validates, queues a best-effort save of the stage's fields, and
moves forward; `retreat()` just moves back. Arriving at results assembles the
CanonicalPayload handed to the recommendation service.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable

from .catalog import series_page
from .config import QuizSettings, get_settings
from .errors import PayloadNotReadyError, QuizError
from .payload import CanonicalPayload, build_payload
from .persistence import PersistenceClient, PersistenceQueue, PersistenceWarning
from .profile import ParentReadingHabit, Profile, ReactionResponse
from .progress import progress
from .reactions import ENCOURAGEMENT, ReaderSignal, classify, needs_auto_advance, upsert
from .recommendations import RecommendationClient, RecommendationPlan
from .stages import Stage, captured_fields
from .transitions import next_stage, previous_stage
from .validation import validate_stage

logger = logging.getLogger(__name__)


@dataclass
class StepResult:
    """Outcome of a navigation request."""
    advanced: bool
    stage: Stage           # Stage after the request
    from_stage: Stage
    errors: list[str] = field(default_factory=list)


class QuizEngine:
    """
    Adaptive quiz workflow for a single session.

    Usage:
        engine = QuizEngine(persistence=InMemoryPersistenceClient())
        await engine.advance()                 # start -> consent
        engine.set_contact(email="parent@example.com")
        await engine.advance()                 # consent -> identify-name
        ...
        plan = await engine.request_plan()     # at results
        await engine.close()
    """

    def __init__(
        self,
        persistence: PersistenceClient,
        recommendations: RecommendationClient | None = None,
        settings: QuizSettings | None = None,
        profile: Profile | None = None,
    ):
        self.settings = settings or get_settings()
        self._persistence = persistence
        self._recommendations = recommendations

        self.profile = profile or Profile()
        self.stage = Stage.START
        self.visible_items: list[str] = []
        self.payload: CanonicalPayload | None = None
        self._queue = self._new_queue()

    def _new_queue(self) -> PersistenceQueue:
        profile = self.profile

        def assign_session(session_id: str) -> None:
            # Bound to the profile of the session that asked; a reset profile is untouched
            if profile.session_id is None:
                profile.session_id = session_id

        return PersistenceQueue(
            self._persistence,
            maxsize=self.settings.persistence_queue_size,
            on_session=assign_session,
        )

    # =========================================================================
    # Setters (total replace)
    # =========================================================================

    def set_name(self, name: str) -> None:
        self.profile.name = name

    def set_age(self, age: int | None) -> None:
        self.profile.age = age

    def set_parent_reading_habit(self, habit: ParentReadingHabit | str | None) -> None:
        self.profile.parent_reading_habit = habit

    def set_young_genre_picks(self, genres: Iterable[str]) -> None:
        self.profile.young_genre_picks = list(genres)

    def set_young_additional_genres(self, genres: Iterable[str]) -> None:
        self.profile.young_additional_genres = list(genres)

    def set_fiction_genre_picks(self, genres: Iterable[str]) -> None:
        self.profile.fiction_genre_picks = list(genres)

    def set_fiction_extra_genres(self, genres: Iterable[str]) -> None:
        self.profile.fiction_extra_genres = list(genres)

    def set_nonfiction_genres(self, genres: Iterable[str]) -> None:
        self.profile.nonfiction_genres = list(genres)

    def set_extra_genres(self, genres: Iterable[str]) -> None:
        self.profile.extra_genres = list(genres)

    def set_fiction_ratio(self, ratio: int) -> None:
        self.profile.fiction_ratio = ratio

    def set_young_interests(self, interests: Iterable[str]) -> None:
        self.profile.young_interests = list(interests)

    def set_nonfiction_interests(self, interests: Iterable[str]) -> None:
        self.profile.nonfiction_interests = list(interests)

    def set_contact(self, email: str = "", phone: str = "") -> None:
        self.profile.parent_email = email
        self.profile.parent_phone = phone

    def set_visible_items(self, item_ids: Iterable[str]) -> None:
        """Series currently shown on the reactions screen."""
        self.visible_items = list(item_ids)

    def record_reaction(
        self,
        item_id: str,
        has_read: bool,
        response: ReactionResponse | str | None = None,
    ) -> None:
        upsert(self.profile.reactions, item_id, has_read, response)

    # =========================================================================
    # Navigation
    # =========================================================================

    async def advance(self) -> StepResult:
        """
        Validate the current stage, queue its save, and move forward.

        The save is not awaited: the transition happens as soon as validation
        passes, whether or not the store is reachable. Results is terminal;
        use reset() to start over.
        """
        current = self.stage
        if current == Stage.RESULTS:
            return StepResult(advanced=False, stage=current, from_stage=current)

        is_valid, errors = validate_stage(current, self.profile, self.shown_items)
        if not is_valid:
            logger.info(f"Validation failed at {current.value}: {errors}")
            return StepResult(advanced=False, stage=current, from_stage=current, errors=errors)

        self._persist(current)

        self.stage = next_stage(current, self.profile)
        logger.info(f"Quiz stage {current.value} -> {self.stage.value}")

        if self.stage == Stage.RESULTS:
            self.payload = build_payload(self.profile, self.shown_items)
            logger.info(
                f"Quiz complete: {len(self.payload.genres)} genres, "
                f"signal={self.payload.reader_signal.value}"
            )

        return StepResult(advanced=True, stage=self.stage, from_stage=current)

    def retreat(self) -> Stage:
        """Step back. No validation, no persistence."""
        current = self.stage
        if current == Stage.RESULTS:
            # Answers may change before results is reached again
            self.payload = None
        self.stage = previous_stage(current, self.profile)
        logger.info(f"Quiz stage {current.value} <- {self.stage.value}")
        return self.stage

    def _persist(self, stage: Stage) -> None:
        fields = captured_fields(stage)
        if not fields:
            return
        snapshot = self.profile.snapshot(fields)
        if stage == Stage.CONSENT:
            self._queue.request_session(stage, snapshot)
        else:
            self._queue.save(stage, snapshot)

    def reset(self) -> None:
        """Discard the session; the next consent creates a new session id."""
        logger.info(f"Quiz reset (session {self.profile.session_id})")
        self._queue.stop()
        self.profile = Profile()
        self.stage = Stage.START
        self.visible_items = []
        self.payload = None
        self._queue = self._new_queue()

    # =========================================================================
    # Derived state
    # =========================================================================

    @property
    def progress(self) -> float:
        return progress(self.stage, self.profile.age)

    @property
    def session_id(self) -> str | None:
        return self.profile.session_id

    @property
    def shown_items(self) -> list[str]:
        """
        Series the reactions screen is asking about.

        Falls back to the first page of series for the reader's age until the
        caller reports what is on screen.
        """
        if self.visible_items:
            return list(self.visible_items)
        return [s["id"] for s in series_page(self.profile.age, 0)]

    @property
    def reader_signal(self) -> ReaderSignal:
        return classify(self.profile.reactions, self.shown_items)

    @property
    def encouragement(self) -> str:
        return ENCOURAGEMENT[self.reader_signal]

    @property
    def auto_advance_delay(self) -> float | None:
        """Seconds before the encouragement narrative moves on by itself."""
        if needs_auto_advance(self.reader_signal):
            return self.settings.auto_advance_seconds
        return None

    @property
    def persistence_warnings(self) -> list[PersistenceWarning]:
        return list(self._queue.warnings)

    @property
    def pending_saves(self) -> int:
        return self._queue.pending

    # =========================================================================
    # Recommendations
    # =========================================================================

    async def request_plan(self) -> RecommendationPlan:
        """
        Send the CanonicalPayload to the recommendation client.

        Not retried or cached here; call again to refresh.
        """
        if self.stage != Stage.RESULTS or self.payload is None:
            raise PayloadNotReadyError(f"Quiz is at {self.stage.value}, not results")
        if self._recommendations is None:
            raise QuizError("No recommendation client configured")
        return await self._recommendations.request_plan(self.payload)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def drain(self) -> None:
        """Wait for queued saves to finish."""
        await self._queue.drain()

    async def close(self) -> None:
        await self._queue.close()
