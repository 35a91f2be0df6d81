"""
Quiz Option Catalog.

Options shown on each quiz screen. Genre and interest ids here are what end up
in the profile and, after reconciliation, in the canonical payload.
"""

from .profile import ParentReadingHabit


# =============================================================================
# Parent Reading (age 7 and under)
# =============================================================================

PARENT_READING_OPTIONS = [
    {"id": ParentReadingHabit.ALWAYS.value, "label": "Always"},
    {"id": ParentReadingHabit.MOSTLY.value, "label": "Mostly"},
    {"id": ParentReadingHabit.SOMETIMES.value, "label": "Sometimes"},
    {"id": ParentReadingHabit.NEVER.value, "label": "Not anymore, I read myself"},
]


# =============================================================================
# Young Readers (6-10)
# =============================================================================

YOUNG_GENRE_OPTIONS = [
    {"id": "graphic-novels", "label": "Graphic Novels & Comics"},
    {"id": "humor", "label": "Funny Stories"},
    {"id": "adventure", "label": "Adventure"},
    {"id": "spooky", "label": "Spooky Stories"},
    {"id": "fantasy", "label": "Magic & Fantasy"},
    {"id": "fairy-tales", "label": "Fairy Tales"},
    {"id": "sci-fi", "label": "Space & Sci-Fi"},
    {"id": "superhero", "label": "Superheroes"},
    {"id": "puzzles", "label": "Puzzles & Mysteries"},
    {"id": "non-fiction", "label": "Facts & Real Life"},
]


# =============================================================================
# Early Readers (5 and under)
# =============================================================================

YOUNG_INTEREST_OPTIONS = [
    {"id": "dinosaurs", "label": "Dinosaurs", "icon": "🦖"},
    {"id": "space", "label": "Space and planets", "icon": "🚀"},
    {"id": "animals", "label": "Animals and nature", "icon": "🦁"},
    {"id": "vehicles", "label": "Cars, trucks, and machines", "icon": "🚗"},
    {"id": "planes", "label": "Planes, airports, and flying", "icon": "✈️"},
    {"id": "sports", "label": "Football, cricket, Basketball or other sports", "icon": "⚽"},
    {"id": "science", "label": "Science experiments and fun facts", "icon": "🧪"},
    {"id": "jobs", "label": "People who do amazing jobs", "icon": "👩‍🚒"},
    {"id": "art", "label": "Art, coloring, and crafts", "icon": "🎨"},
    {"id": "robots", "label": "Robots and inventions", "icon": "🤖"},
    {"id": "aliens", "label": "Aliens and weird creatures", "icon": "👽"},
]


# =============================================================================
# Older Readers (11+)
# =============================================================================

FICTION_GENRES = [
    "Adventure",
    "Fantasy",
    "Mystery",
    "Science Fiction",
    "Historical Fiction",
    "Contemporary Fiction",
    "Horror",
    "Romance",
    "Thriller",
    "Comedy",
    "Drama",
]

NONFICTION_GENRES = [
    "Poetry",
    "Biography",
    "Science",
    "History",
    "Arts & Music",
    "Sports",
    "Technology",
    "Self-Help",
    "Nature",
    "Travel",
    "Cooking",
    "Philosophy",
]

EXTRA_GENRES = FICTION_GENRES + [
    "Poetry",
    "Biography",
    "Science",
    "History",
    "Arts & Music",
    "Sports",
    "Technology",
]

# Fiction share presets, fiction percentage first
RATIO_PRESETS = [
    {"fiction": 70, "nonfiction": 30},
    {"fiction": 60, "nonfiction": 40},
    {"fiction": 50, "nonfiction": 50},
    {"fiction": 40, "nonfiction": 60},
    {"fiction": 30, "nonfiction": 70},
]


# =============================================================================
# Book Series (series-reactions screen)
# =============================================================================

SERIES_PER_PAGE = 4

_SERIES_READ_TO = [
    {"id": "peppa", "title": "Peppa Pig"},
    {"id": "hungry-caterpillar", "title": "The Very Hungry Caterpillar"},
    {"id": "gruffalo", "title": "The Gruffalo"},
    {"id": "spot", "title": "Spot the Dog"},
    {"id": "thomas", "title": "Thomas the Tank Engine"},
    {"id": "paddington", "title": "Paddington Bear"},
    {"id": "peter-rabbit", "title": "Peter Rabbit"},
    {"id": "mog", "title": "Mog the Cat"},
]

_SERIES_YOUNG = [
    {"id": "harry-potter", "title": "Harry Potter"},
    {"id": "diary-wimpy-kid", "title": "Diary of a Wimpy Kid"},
    {"id": "captain-underpants", "title": "Captain Underpants"},
    {"id": "dog-man", "title": "Dog Man"},
    {"id": "beast-quest", "title": "Beast Quest"},
    {"id": "roald-dahl", "title": "Roald Dahl books"},
    {"id": "rainbow-magic", "title": "Rainbow Magic"},
    {"id": "horrid-henry", "title": "Horrid Henry"},
]

_SERIES_TEEN = [
    {"id": "harry-potter", "title": "Harry Potter"},
    {"id": "percy-jackson", "title": "Percy Jackson"},
    {"id": "hunger-games", "title": "The Hunger Games"},
    {"id": "maze-runner", "title": "The Maze Runner"},
    {"id": "divergent", "title": "Divergent"},
    {"id": "shadowhunters", "title": "Shadowhunters"},
    {"id": "wings-of-fire", "title": "Wings of Fire"},
    {"id": "lord-of-rings", "title": "The Lord of the Rings"},
]


def series_for_age(age: int | None) -> list[dict]:
    """Series shown on the reactions screen for a given age."""
    if age is not None and age <= 7:
        return _SERIES_READ_TO
    if age is not None and age <= 10:
        return _SERIES_YOUNG
    return _SERIES_TEEN


def series_page(age: int | None, page: int) -> list[dict]:
    """One page of series; an out-of-range page is empty."""
    if page < 0:
        return []
    start = page * SERIES_PER_PAGE
    return series_for_age(age)[start:start + SERIES_PER_PAGE]


def series_page_count(age: int | None) -> int:
    total = len(series_for_age(age))
    return (total + SERIES_PER_PAGE - 1) // SERIES_PER_PAGE


# =============================================================================
# API Response Helpers
# =============================================================================

def remaining_options(options: list, taken: list[str]) -> list:
    """
    Options not already picked on an earlier screen.

    Works for plain strings and for {"id": ...} option dicts.
    """
    def _key(option):
        return option["id"] if isinstance(option, dict) else option

    return [o for o in options if _key(o) not in taken]


def get_form_options(age: int | None = None) -> dict:
    """
    Get every option list for frontend rendering.

    Returns dict with:
    - parent_reading: Parent reading habit choices
    - young_genres / young_interests: Options for readers 10 and under
    - fiction_genres / nonfiction_genres / extra_genres: Options for 11+
    - ratio_presets: Fiction/non-fiction split presets
    - series: Series shown on the reactions screen for this age
    """
    return {
        "parent_reading": PARENT_READING_OPTIONS,
        "young_genres": YOUNG_GENRE_OPTIONS,
        "young_interests": YOUNG_INTEREST_OPTIONS,
        "fiction_genres": FICTION_GENRES,
        "nonfiction_genres": NONFICTION_GENRES,
        "extra_genres": EXTRA_GENRES,
        "ratio_presets": RATIO_PRESETS,
        "series": series_for_age(age),
    }
