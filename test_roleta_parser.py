"""
Tests for the Letterboxd list parser strategies.
"""

import pytest

from core.exceptions import ExtractionFailed
from plugins.roleta.parser import UNKNOWN_FILM_ID, parse_film_list


POSTER_LIST_HTML = """
<ul class="poster-list -p125 -grid">
  <li class="poster-container" data-film-slug="the-room" data-film-name="  The Room " data-film-id="9846"></li>
  <li class="poster-container" data-film-slug="troll-2" data-film-name="Troll 2" data-film-id="17812"></li>
  <li class="poster-container" data-film-slug="no-id" data-film-name="No Id"></li>
</ul>
<div class="film-poster" data-film-slug="ignored" data-film-id="1"><img alt="Ignored"></div>
"""

POSTER_CONTAINER_HTML = """
<ul class="js-list-entries">
  <li class="poster-container">
    <div class="poster film-poster" data-film-slug="birdemic" data-film-name="Birdemic" data-film-id="4321"></div>
  </li>
  <li class="poster-container"><span>broken</span></li>
  <li class="poster-container">
    <div class="poster" data-film-slug="no-title" data-film-id="55"></div>
  </li>
</ul>
"""

FILM_POSTER_HTML = """
<section>
  <div class="film-poster" data-film-slug="manos"><img alt=" Manos: The Hands of Fate "></div>
  <div class="film-poster" data-film-slug="plan-9" data-film-id="7"><img alt="Plan 9"></div>
  <div class="film-poster" data-film-slug="no-image"></div>
</section>
"""


def test_poster_list_strategy():
    films = parse_film_list(POSTER_LIST_HTML)

    assert [f.slug for f in films] == ["the-room", "troll-2"]
    room = films[0]
    assert room.title == "The Room"
    assert room.film_id == "9846"
    assert room.url == "https://letterboxd.com/film/the-room"
    assert room.poster_url is None


def test_first_matching_strategy_wins_without_merging():
    films = parse_film_list(POSTER_LIST_HTML)
    assert "ignored" not in {f.slug for f in films}


def test_poster_container_fallback_skips_malformed_nodes():
    films = parse_film_list(POSTER_CONTAINER_HTML)

    assert len(films) == 1
    assert films[0].title == "Birdemic"
    assert films[0].film_id == "4321"
    assert films[0].slug == "birdemic"


def test_film_poster_fallback_uses_alt_and_sentinel_id():
    films = parse_film_list(FILM_POSTER_HTML)

    assert [f.slug for f in films] == ["manos", "plan-9"]
    assert films[0].title == "Manos: The Hands of Fate"
    assert films[0].film_id == UNKNOWN_FILM_ID
    assert films[1].film_id == "7"


def test_poster_list_without_complete_nodes_falls_through():
    html = """
    <ul class="poster-list"><li data-film-slug="half" data-film-name="Half"></li></ul>
    <div class="film-poster" data-film-slug="half"><img alt="Half"></div>
    """
    films = parse_film_list(html)

    assert len(films) == 1
    assert films[0].film_id == UNKNOWN_FILM_ID


def test_duplicate_ids_are_dropped():
    html = """
    <ul class="poster-list">
      <li data-film-slug="a" data-film-name="A" data-film-id="1"></li>
      <li data-film-slug="a" data-film-name="A again" data-film-id="1"></li>
      <li data-film-slug="b" data-film-name="B" data-film-id="2"></li>
    </ul>
    """
    films = parse_film_list(html)
    assert [f.title for f in films] == ["A", "B"]


def test_sentinel_ids_are_not_deduplicated():
    html = """
    <div class="film-poster" data-film-slug="x"><img alt="X"></div>
    <div class="film-poster" data-film-slug="y"><img alt="Y"></div>
    """
    assert len(parse_film_list(html)) == 2


def test_no_films_raises_with_snippet():
    html = "<html><body>" + "nothing here " * 200 + "</body></html>"

    with pytest.raises(ExtractionFailed) as exc_info:
        parse_film_list(html)

    assert exc_info.value.snippet == html[:1000]
    assert len(exc_info.value.snippet) == 1000
