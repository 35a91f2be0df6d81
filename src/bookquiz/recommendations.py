"""
Recommendation Client contract.

The quiz hands its CanonicalPayload to a recommendation service and gets back
a reading plan. The engine neither retries nor caches this call; callers may
re-request on a user-initiated refresh.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from .payload import AgeBracket, CanonicalPayload


class Item(BaseModel):
    """A recommended book or series."""
    title: str
    author: str = ""
    link: str | None = None


class MonthlyPlan(BaseModel):
    """Books suggested for one month of the reading plan."""
    month: str
    books: list[str] = Field(default_factory=list)


class RecommendationPlan(BaseModel):
    """Response from the recommendation service."""
    current: list[Item] = Field(default_factory=list)
    future: list[MonthlyPlan] = Field(default_factory=list)
    series_recommendations: list[Item] = Field(default_factory=list)


class RecommendationClient(ABC):
    """Black-box recommendation service."""

    @abstractmethod
    async def request_plan(self, payload: CanonicalPayload) -> RecommendationPlan:
        """Request a reading plan for a completed quiz."""


# =============================================================================
# Static client (local runs / demos)
# =============================================================================

_STARTER_PICKS = {
    AgeBracket.EARLY: [
        Item(title="Elephant & Piggie series", author="Mo Willems"),
        Item(title="Pete the Cat books", author="James Dean"),
        Item(title="Princess in Black series", author="Shannon Hale"),
    ],
    AgeBracket.YOUNG: [
        Item(title="Magic Tree House series", author="Mary Pope Osborne"),
        Item(title="Wings of Fire series", author="Tui T. Sutherland"),
        Item(title="The One and Only Ivan", author="Katherine Applegate"),
    ],
    AgeBracket.TEEN: [
        Item(title="The Inheritance Games", author="Jennifer Lynn Barnes"),
        Item(title="Six of Crows", author="Leigh Bardugo"),
        Item(title="The Giver", author="Lois Lowry"),
    ],
}

PLAN_MONTHS = ["January", "February", "March"]


class StaticRecommendationClient(RecommendationClient):
    """Fixed picks per age bracket with a three-month plan."""

    async def request_plan(self, payload: CanonicalPayload) -> RecommendationPlan:
        picks = [item.model_copy() for item in _STARTER_PICKS[payload.age_bracket]]
        titles = [p.title for p in picks]
        return RecommendationPlan(
            current=picks,
            future=[MonthlyPlan(month=m, books=list(titles)) for m in PLAN_MONTHS],
            series_recommendations=[],
        )
