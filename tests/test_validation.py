"""
Tests for per-stage validation.
"""

import pytest

from bookquiz.profile import Profile
from bookquiz.reactions import upsert
from bookquiz.stages import Stage
from bookquiz.validation import is_valid_email, is_valid_phone, validate_stage


class TestContact:
    """Consent requires at least one well-formed contact method."""

    def test_nothing_given(self):
        is_valid, errors = validate_stage(Stage.CONSENT, Profile())
        assert not is_valid
        assert len(errors) == 1

    def test_email_only(self):
        assert validate_stage(Stage.CONSENT, Profile(parent_email="parent@example.com"))[0]

    def test_phone_only(self):
        assert validate_stage(Stage.CONSENT, Profile(parent_phone="+44 7700 900123"))[0]

    def test_bad_email_with_good_phone(self):
        profile = Profile(parent_email="not-an-email", parent_phone="0123456789")
        is_valid, errors = validate_stage(Stage.CONSENT, profile)
        assert not is_valid
        assert errors == ["Please enter a valid email address."]

    @pytest.mark.parametrize("email", ["a@b.co", "first.last@school.org.uk"])
    def test_valid_emails(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize("email", ["a@b", "a b@c.com", "@c.com"])
    def test_invalid_emails(self, email):
        assert not is_valid_email(email)

    @pytest.mark.parametrize("phone", ["0123456789", "+1 555-123-4567"])
    def test_valid_phones(self, phone):
        assert is_valid_phone(phone)

    @pytest.mark.parametrize("phone", ["12345", "phone-number"])
    def test_invalid_phones(self, phone):
        assert not is_valid_phone(phone)


class TestStageRules:
    """Test the remaining stage requirements."""

    def test_name_length(self):
        assert not validate_stage(Stage.IDENTIFY_NAME, Profile(name="A"))[0]
        assert not validate_stage(Stage.IDENTIFY_NAME, Profile(name="  A  "))[0]
        assert validate_stage(Stage.IDENTIFY_NAME, Profile(name="Al"))[0]

    def test_young_genres_exactly_three(self):
        assert not validate_stage(Stage.GENRE_SELECTION_YOUNG, Profile(young_genre_picks=["a", "b"]))[0]
        assert validate_stage(Stage.GENRE_SELECTION_YOUNG, Profile(young_genre_picks=["a", "b", "c"]))[0]

    def test_fiction_genres_one_to_three(self):
        assert not validate_stage(Stage.GENRE_SELECTION_FICTION, Profile())[0]
        assert validate_stage(Stage.GENRE_SELECTION_FICTION, Profile(fiction_genre_picks=["Horror"]))[0]
        assert validate_stage(
            Stage.GENRE_SELECTION_FICTION, Profile(fiction_genre_picks=["Horror", "Drama", "Comedy"])
        )[0]

    def test_series_requires_choice_for_each_visible_item(self):
        profile = Profile()
        upsert(profile.reactions, "dog-man", True, "love")
        assert not validate_stage(Stage.SERIES_REACTIONS, profile, ["dog-man", "beast-quest"])[0]
        upsert(profile.reactions, "beast-quest", False)
        assert validate_stage(Stage.SERIES_REACTIONS, profile, ["dog-man", "beast-quest"])[0]

    def test_series_with_nothing_visible(self):
        assert validate_stage(Stage.SERIES_REACTIONS, Profile())[0]

    @pytest.mark.parametrize("stage", [
        Stage.START,
        Stage.IDENTIFY_AGE,
        Stage.PARENT_READING_HABIT,
        Stage.GENRE_SELECTION_EXTRA_YOUNG,
        Stage.GENRE_SELECTION_FICTION_EXTRA,
        Stage.GENRE_SELECTION_NONFICTION,
        Stage.GENRE_SELECTION_EXTRA,
        Stage.INTERESTS_YOUNG,
        Stage.FICTION_RATIO,
    ])
    def test_stages_without_requirements(self, stage):
        assert validate_stage(stage, Profile()) == (True, [])
