from datetime import date

from streamify.models import Genre, Movie, ViewState
from streamify.presentation import (movie_card_context, render_error_message,
                                    render_filter_bar, render_loading_skeleton,
                                    render_movie_card, render_movie_grid,
                                    render_results)

ARRIVAL = Movie(
    id=1,
    title="Arrival",
    poster_path="/arrival.jpg",
    vote_average=7.6,
    release_date=date(2016, 11, 10),
    overview="Linguist meets heptapods.",
)
UNDATED = Movie(id=2, title="Untitled <Project>", vote_average=5)


def test_card_context():
    card = movie_card_context(ARRIVAL)
    assert card["year"] == "2016"
    assert card["rating"] == "7.6"
    assert card["image_url"].endswith("/arrival.jpg")


def test_card_without_date_or_poster():
    card = movie_card_context(UNDATED)
    assert card["year"] == "N/A"
    assert "placeholder" in card["image_url"]
    assert card["rating"] == "5.0"


def test_card_escapes_title():
    html = render_movie_card(UNDATED)
    assert "Untitled &lt;Project&gt;" in html
    assert "overview" not in html


def test_grid_renders_every_movie():
    html = render_movie_grid([ARRIVAL, UNDATED])
    assert html.count('class="movie-card"') == 2
    assert "Linguist meets heptapods." in html
    assert "No movies found" not in html


def test_empty_grid_shows_placeholder():
    html = render_movie_grid([])
    assert "No movies found" in html
    assert "Try adjusting your search or filters" in html


def test_skeleton_has_twelve_cells():
    assert render_loading_skeleton().count("skeleton-cell") == 12


def test_error_message_retry_is_optional():
    assert "Try Again" in render_error_message("boom", "/retry")
    html = render_error_message("boom")
    assert "boom" in html
    assert "Try Again" not in html


def test_results_prefer_error_then_loading():
    assert "Try Again" in render_results(ViewState(loading=True, error="boom"))
    assert "skeleton-cell" in render_results(ViewState(loading=True))
    assert "No movies found" in render_results(ViewState(loading=False))
    assert "Arrival" in render_results(ViewState(movies=[ARRIVAL], loading=False))


def test_filter_bar_marks_selection():
    html = render_filter_bar([Genre(id=878, name="Science Fiction")], "878", "7")
    assert "All Genres" in html
    assert '<option value="878" selected>Science Fiction</option>' in html
    assert '<option value="7" selected>7+ Stars</option>' in html
    assert '<option value="all">All Ratings</option>' in html
