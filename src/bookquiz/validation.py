"""
Stage Validation.

Checks run before leaving a stage. Failures block the transition and come back
as user-facing messages; the user fixes the input and tries again.
"""

import logging
import re
from typing import Iterable

from .profile import MAX_TOP_PICKS, Profile
from .stages import Stage

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[\d\s-]{10,}$")

MIN_NAME_LENGTH = 2


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def is_valid_phone(phone: str) -> bool:
    return bool(PHONE_PATTERN.match(phone))


def _validate_contact(profile: Profile) -> list[str]:
    errors = []
    email, phone = profile.parent_email, profile.parent_phone
    if not email and not phone:
        errors.append("Please enter a parent email address or phone number.")
        return errors
    if email and not is_valid_email(email):
        errors.append("Please enter a valid email address.")
    if phone and not is_valid_phone(phone):
        errors.append("Please enter a valid phone number.")
    return errors


def _validate_name(profile: Profile) -> list[str]:
    if len(profile.name.strip()) < MIN_NAME_LENGTH:
        return [f"Please enter your name (at least {MIN_NAME_LENGTH} characters)"]
    return []


def _validate_young_genres(profile: Profile) -> list[str]:
    if len(profile.young_genre_picks) != MAX_TOP_PICKS:
        return [f"Please select exactly {MAX_TOP_PICKS} favorites before continuing!"]
    return []


def _validate_fiction_genres(profile: Profile) -> list[str]:
    count = len(profile.fiction_genre_picks)
    if count == 0:
        return ["Please select at least 1 fiction genre"]
    if count > MAX_TOP_PICKS:
        return [f"Please select no more than {MAX_TOP_PICKS} fiction genres"]
    return []


def _validate_series(profile: Profile, visible_items: Iterable[str]) -> list[str]:
    missing = [i for i in visible_items if i not in profile.reactions]
    if missing:
        logger.debug(f"Series without a read/not-read choice: {missing}")
        return ["Please tell us whether you've read each of these series."]
    return []


def validate_stage(
    stage: Stage,
    profile: Profile,
    visible_items: Iterable[str] = (),
) -> tuple[bool, list[str]]:
    """
    Validate the fields the current stage is responsible for.

    Stages without requirements always pass: the additional-genre screens
    accept zero selections, and an unset age is handled by navigation
    fallbacks.

    Returns:
        (is_valid, error_messages)
    """
    if stage == Stage.CONSENT:
        errors = _validate_contact(profile)
    elif stage == Stage.IDENTIFY_NAME:
        errors = _validate_name(profile)
    elif stage == Stage.GENRE_SELECTION_YOUNG:
        errors = _validate_young_genres(profile)
    elif stage == Stage.GENRE_SELECTION_FICTION:
        errors = _validate_fiction_genres(profile)
    elif stage == Stage.SERIES_REACTIONS:
        errors = _validate_series(profile, visible_items)
    else:
        errors = []

    return (len(errors) == 0, errors)
