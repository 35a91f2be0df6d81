"""
Reaction Reducer.

Upserts per-series reactions and classifies the reaction set into the signal
that picks the encouragement shown before recommendations.
"""

import logging
from enum import Enum
from typing import Iterable

from .profile import NEGATIVE_RESPONSES, Reaction, ReactionResponse

logger = logging.getLogger(__name__)


class ReaderSignal(Enum):
    """Aggregate reading signal for the results screen."""
    NEW_READER = "new_reader"              # Hasn't read any of the series shown
    MISMATCHED_TASTE = "mismatched_taste"  # Read some, didn't like any
    MIXED = "mixed"


ENCOURAGEMENT = {
    ReaderSignal.NEW_READER: (
        "Every great reader starts somewhere! We've picked some brilliant "
        "first series to get you hooked."
    ),
    ReaderSignal.MISMATCHED_TASTE: (
        "Those weren't quite your thing, and that's fine. Let's find books "
        "that feel like they were written just for you."
    ),
    ReaderSignal.MIXED: "",
}

# Signals whose narrative moves on by itself after a short pause
AUTO_ADVANCE_SIGNALS = frozenset({ReaderSignal.NEW_READER, ReaderSignal.MISMATCHED_TASTE})


def upsert(
    reactions: dict[str, Reaction],
    item_id: str,
    has_read: bool,
    response: ReactionResponse | str | None = None,
) -> dict[str, Reaction]:
    """
    Record a read/not-read choice for an item.

    Creates the entry if missing. Otherwise `has_read` is overwritten and
    `response` only when a new one is supplied, so un-marking a series keeps
    the opinion given earlier.

    Returns:
        The same (mutated) mapping
    """
    if response is not None and not isinstance(response, ReactionResponse):
        response = ReactionResponse(response)

    existing = reactions.get(item_id)
    if existing is None:
        reactions[item_id] = Reaction(has_read=has_read, response=response)
    else:
        existing.has_read = has_read
        if response is not None:
            existing.response = response

    logger.debug(f"Reaction for {item_id}: has_read={has_read} response={response}")
    return reactions


def classify(
    reactions: dict[str, Reaction],
    visible_item_ids: Iterable[str] | None = None,
) -> ReaderSignal:
    """
    Classify reactions over the visible items.

    Args:
        reactions: Reactions keyed by item id
        visible_item_ids: Items currently shown; None means every entry

    Returns:
        NEW_READER when nothing visible was read, MISMATCHED_TASTE when every
        read item carries a negative response, MIXED otherwise.
    """
    if visible_item_ids is None:
        considered = list(reactions.values())
    else:
        considered = [reactions[i] for i in visible_item_ids if i in reactions]

    read = [r for r in considered if r.has_read]
    if not read:
        return ReaderSignal.NEW_READER
    if all(r.response in NEGATIVE_RESPONSES for r in read):
        return ReaderSignal.MISMATCHED_TASTE
    return ReaderSignal.MIXED


def needs_auto_advance(signal: ReaderSignal) -> bool:
    """Check if the narrative for this signal advances on a timer."""
    return signal in AUTO_ADVANCE_SIGNALS
