"""
HTML fragments for the results region, rendered with the app's Jinja2 templates.
"""

from pathlib import Path
from typing import Iterable, Optional

from fastapi.templating import Jinja2Templates

from streamify.catalog.tmdb import format_rating, get_image_url
from streamify.models import ALL, Genre, Movie, ViewState

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
SKELETON_CELLS = 12
MISSING_YEAR = "N/A"
RATING_OPTIONS = [
    (ALL, "All Ratings"),
    ("9", "9+ Stars"),
    ("8", "8+ Stars"),
    ("7", "7+ Stars"),
    ("6", "6+ Stars"),
]

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def _render(name: str, **context) -> str:
    return templates.get_template(name).render(**context)


def movie_card_context(movie: Movie) -> dict:
    return {
        "id": movie.id,
        "title": movie.title,
        "image_url": get_image_url(movie.poster_path),
        "rating": format_rating(movie.vote_average),
        "year": str(movie.release_date.year) if movie.release_date else MISSING_YEAR,
        "overview": movie.overview,
    }


def render_movie_card(movie: Movie) -> str:
    return _render("partials/movie_card.html", card=movie_card_context(movie))


def render_movie_grid(movies: Iterable[Movie]) -> str:
    cards = [movie_card_context(movie) for movie in movies]
    return _render("partials/movie_grid.html", cards=cards)


def render_loading_skeleton() -> str:
    return _render("partials/loading_skeleton.html", cells=SKELETON_CELLS)


def render_error_message(message: str, retry_url: Optional[str] = None) -> str:
    return _render("partials/error_message.html", message=message, retry_url=retry_url)


def render_filter_bar(genres: Iterable[Genre], selected_genre: str, selected_rating: str) -> str:
    return _render(
        "partials/filter_bar.html",
        genres=list(genres),
        selected_genre=selected_genre,
        selected_rating=selected_rating,
        rating_options=RATING_OPTIONS,
    )


def render_results(view: ViewState, retry_url: Optional[str] = "/retry") -> str:
    """Error panel first, then the loading skeleton, then the grid."""
    if view.error:
        return render_error_message(view.error, retry_url)
    if view.loading:
        return render_loading_skeleton()
    return render_movie_grid(view.movies)
