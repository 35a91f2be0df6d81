"""
Tests for the profile model and canonical payload reconciliation.
"""

import json

import pytest
from pydantic import ValidationError

from bookquiz.payload import AgeBracket, age_bracket, build_payload, canonical_genres, canonical_interests
from bookquiz.profile import ParentReadingHabit, Profile
from bookquiz.reactions import ReaderSignal, upsert


class TestProfile:
    """Test field constraints and normalization."""

    def test_defaults(self):
        profile = Profile()
        assert profile.age is None
        assert profile.fiction_ratio == 50
        assert profile.reactions == {}
        assert profile.session_id is None
        assert profile.is_empty()

    @pytest.mark.parametrize("age", [3, 19, -1])
    def test_age_out_of_range_rejected(self, age):
        profile = Profile()
        with pytest.raises(ValidationError):
            profile.age = age
        assert profile.age is None

    def test_age_bounds_accepted(self):
        profile = Profile()
        profile.age = 4
        profile.age = 18
        assert profile.age == 18

    def test_top_picks_capped_at_three(self):
        profile = Profile()
        with pytest.raises(ValidationError):
            profile.young_genre_picks = ["a", "b", "c", "d"]
        with pytest.raises(ValidationError):
            profile.fiction_genre_picks = ["a", "b", "c", "d"]

    def test_ratio_range(self):
        profile = Profile()
        profile.fiction_ratio = 0
        profile.fiction_ratio = 100
        with pytest.raises(ValidationError):
            profile.fiction_ratio = 101

    def test_selections_behave_as_sets(self):
        profile = Profile()
        profile.extra_genres = ["Poetry", "Poetry", " ", "History"]
        assert profile.extra_genres == ["Poetry", "History"]

    def test_setters_replace(self):
        profile = Profile()
        profile.young_interests = ["space"]
        profile.young_interests = ["dinosaurs"]
        assert profile.young_interests == ["dinosaurs"]

    def test_parent_reading_accepts_value(self):
        profile = Profile()
        profile.parent_reading_habit = "mostly"
        assert profile.parent_reading_habit == ParentReadingHabit.MOSTLY

    def test_snapshot_is_detached(self):
        profile = Profile(name="Sam", extra_genres=["Poetry"])
        snap = profile.snapshot({"name", "extra_genres"})
        profile.name = "Alex"
        profile.extra_genres = ["Drama"]
        assert snap == {"name": "Sam", "extra_genres": ["Poetry"]}

    def test_snapshot_reactions_json_ready(self):
        profile = Profile()
        upsert(profile.reactions, "dog-man", True, "love")
        snap = profile.snapshot({"reactions"})
        assert snap == {"reactions": {"dog-man": {"has_read": True, "response": "love"}}}
        json.dumps(snap)


class TestAgeBracket:
    def test_brackets(self):
        assert age_bracket(None) == AgeBracket.EARLY
        assert age_bracket(5) == AgeBracket.EARLY
        assert age_bracket(6) == AgeBracket.YOUNG
        assert age_bracket(10) == AgeBracket.YOUNG
        assert age_bracket(11) == AgeBracket.TEEN


class TestCanonicalGenres:
    """Test branch reconciliation into one genre list."""

    def test_young_branch(self):
        profile = Profile(
            age=9,
            young_genre_picks=["Adventure", "Fantasy", "Mystery"],
            young_additional_genres=["Comedy"],
        )
        assert set(canonical_genres(profile)) == {"Adventure", "Fantasy", "Mystery", "Comedy"}

    def test_teen_branch(self):
        profile = Profile(
            age=12,
            fiction_genre_picks=["Horror"],
            nonfiction_genres=["History"],
            fiction_extra_genres=[],
            extra_genres=["Poetry"],
        )
        assert set(canonical_genres(profile)) == {"Horror", "History", "Poetry"}

    def test_deduplicates_across_branch_fields(self):
        profile = Profile(
            age=14,
            fiction_genre_picks=["Fantasy", "Mystery"],
            extra_genres=["Fantasy", "Poetry"],
        )
        assert canonical_genres(profile) == ["Fantasy", "Mystery", "Poetry"]

    def test_other_branch_answers_ignored(self):
        profile = Profile(
            age=9,
            young_genre_picks=["humor", "adventure", "spooky"],
            fiction_genre_picks=["Horror"],
        )
        assert "Horror" not in canonical_genres(profile)

    def test_early_reader_uses_interests(self):
        profile = Profile(age=5, young_interests=["dinosaurs", "space"])
        assert canonical_genres(profile) == ["dinosaurs", "space"]

    def test_unset_age_uses_interests(self):
        profile = Profile(young_interests=["robots"], fiction_genre_picks=["Horror"])
        assert canonical_genres(profile) == ["robots"]

    def test_empty_genres_fall_back_to_interests(self):
        profile = Profile(age=12, nonfiction_interests=["Space", "History"])
        assert canonical_genres(profile) == ["Space", "History"]

    def test_nothing_collected_is_empty(self):
        assert canonical_genres(Profile(age=12)) == []

    def test_interests_union(self):
        profile = Profile(young_interests=["space"], nonfiction_interests=["space", "art"])
        assert canonical_interests(profile) == ["space", "art"]


class TestBuildPayload:
    """Test the assembled payload."""

    def test_payload_fields(self):
        profile = Profile(
            name="Sam",
            age=9,
            parent_email="parent@example.com",
            parent_reading_habit="sometimes",
            young_genre_picks=["humor", "adventure", "spooky"],
            session_id="sess-1",
        )
        upsert(profile.reactions, "dog-man", True, "love")
        upsert(profile.reactions, "beast-quest", False)

        payload = build_payload(profile, ["dog-man", "beast-quest"])

        assert payload.session_id == "sess-1"
        assert payload.age_bracket == AgeBracket.YOUNG
        assert payload.genres == ("humor", "adventure", "spooky")
        assert payload.parent_reading_habit == "sometimes"
        assert payload.reader_signal == ReaderSignal.MIXED
        assert payload.reactions == {
            "dog-man": {"hasRead": True, "response": "love"},
            "beast-quest": {"hasRead": False, "response": None},
        }
        assert payload.completed_at

    def test_payload_is_frozen(self):
        payload = build_payload(Profile(age=12))
        with pytest.raises(AttributeError):
            payload.genres = ("Horror",)

    def test_reactions_read_only(self):
        profile = Profile(age=9)
        upsert(profile.reactions, "dog-man", True, "love")
        payload = build_payload(profile)
        with pytest.raises(TypeError):
            payload.reactions["beast-quest"] = {"hasRead": False, "response": None}
        with pytest.raises(TypeError):
            payload.reactions["dog-man"]["response"] = "disliked"
        assert payload.to_dict()["bookSeries"] == {"dog-man": {"hasRead": True, "response": "love"}}

    def test_payload_detached_from_profile(self):
        profile = Profile(age=12, fiction_genre_picks=["Horror"])
        payload = build_payload(profile)
        profile.fiction_genre_picks = ["Romance"]
        upsert(profile.reactions, "divergent", True, "like")
        assert payload.genres == ("Horror",)
        assert payload.reactions == {}

    def test_to_json(self):
        payload = build_payload(Profile(name="Sam", age=12, fiction_genre_picks=["Horror"]))
        data = json.loads(payload.to_json())
        assert data["genres"] == ["Horror"]
        assert data["ageBracket"] == "teen"
        assert data["readerSignal"] == "new_reader"
        assert data["fictionNonFictionRatio"] == 50
