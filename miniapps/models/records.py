"""Record schemas for the three mini-app domains.

Records are plain deserialized JSON objects. They are described with
``TypedDict`` so that fetched payloads are returned exactly as served, without
coercion or validation of individual fields.
"""

from typing import Final, TypedDict


class GameRecord(TypedDict):
    """A Steam game entry used by the game comparison view."""
    name: str
    appid: str
    total_reviews: int
    rating: float  # Percentage of positive reviews, 0-100
    image_url: str
    library_image: str
    max_players: str  # Peak player count, string-encoded as served


class MovieRecord(TypedDict):
    """A movie entry used by the guessing game."""
    id: int
    title: str
    year: int
    director: str
    actors: list[str]
    plot: str
    poster: str
    rating: float  # 0-10 scale


class VideoRecord(TypedDict):
    """A video entry used by the video watcher."""
    id: str  # Platform-native identifier
    url: str
    platform: str  # e.g. "youtube"


FALLBACK_GAMES: Final[tuple[GameRecord, ...]] = (
    {
        "name": "PUBG: BATTLEGROUNDS",
        "appid": "578080",
        "total_reviews": 276279,
        "rating": 63.12,
        "image_url": "https://shared.akamai.steamstatic.com/store_item_assets/steam/apps/578080/header.jpg",
        "library_image": "https://cdn.akamai.steamstatic.com/steam/apps/578080/library_600x900.jpg",
        "max_players": "3257248",
    },
    {
        "name": "Black Myth: Wukong",
        "appid": "2358720",
        "total_reviews": 59063,
        "rating": 94.18,
        "image_url": "https://shared.akamai.steamstatic.com/store_item_assets/steam/apps/2358720/header.jpg",
        "library_image": "https://cdn.akamai.steamstatic.com/steam/apps/2358720/library_600x900.jpg",
        "max_players": "2415714",
    },
)

FALLBACK_MOVIES: Final[tuple[MovieRecord, ...]] = (
    {
        "id": 1,
        "title": "The Shawshank Redemption",
        "year": 1994,
        "director": "Frank Darabont",
        "actors": ["Tim Robbins", "Morgan Freeman", "Bob Gunton"],
        "plot": (
            "Two imprisoned men bond over a number of years, finding solace and "
            "eventual redemption through acts of common decency."
        ),
        "poster": (
            "https://m.media-amazon.com/images/M/"
            "MV5BNDE3ODcxYzMtY2YzZC00NmNlLWJiNDMtZDViZWM2MzIxZDYwXkEyXkFqcGdeQXVyNjAwNDUxODI@._V1_.jpg"
        ),
        "rating": 9.3,
    },
)

FALLBACK_VIDEOS: Final[tuple[VideoRecord, ...]] = (
    {"id": "nBMtB2L3UjI", "url": "https://www.youtube.com/watch?v=nBMtB2L3UjI", "platform": "youtube"},
    {"id": "NDsO1LT_0lw", "url": "https://www.youtube.com/watch?v=NDsO1LT_0lw", "platform": "youtube"},
)
