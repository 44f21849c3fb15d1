"""Tests for the rich-text sanitizer and city canonicalization."""

from nwcommunity.content.cities import canonical_city, dedupe_cities, normalize_city
from nwcommunity.content.sanitizer import sanitize_html, text_to_html


# --- Sanitizer ---


def test_script_is_removed_with_its_content():
    out = sanitize_html("<p>hi<script>alert(1)</script></p>")
    assert "<p>hi</p>" in out
    assert "<script" not in out
    assert "alert" not in out


def test_allowed_markup_survives():
    html = "<h2>Events</h2><ul><li><strong>Fri</strong> <em>market</em></li></ul><blockquote>q</blockquote>"
    assert sanitize_html(html) == html


def test_disallowed_tags_are_stripped_not_escaped():
    out = sanitize_html("<div><marquee>Sale</marquee> today</div>")
    assert out == "<div>Sale today</div>"
    assert "&lt;" not in out


def test_event_handlers_and_styles_are_removed():
    out = sanitize_html('<p onclick="steal()" style="color:red" class="x">Hello</p>')
    assert out == "<p>Hello</p>"


def test_link_attributes_and_schemes():
    out = sanitize_html('<a href="https://nwc.example/e/1" target="_blank" rel="noopener" id="x">go</a>')
    assert 'href="https://nwc.example/e/1"' in out
    assert 'target="_blank"' in out
    assert 'rel="noopener"' in out
    assert "id=" not in out

    bad = sanitize_html('<a href="javascript:alert(1)">click</a>')
    assert "javascript" not in bad
    assert "click" in bad


def test_images_and_iframes_are_dropped():
    out = sanitize_html('<p>a<img src="x" onerror="boom()">b<iframe src="https://evil"></iframe></p>')
    assert "<img" not in out
    assert "<iframe" not in out
    assert "onerror" not in out


def test_sanitize_is_idempotent():
    samples = [
        "<p>hi<script>alert(1)</script></p>",
        '<a href="https://x.test" onclick="y()">x</a><br/>tail',
        "<div><span>nested <b>bold</b></span></div><style>p{}</style>",
        "1 < 2 & 3 > 2",
        "<p>unclosed <em>tags",
    ]
    for html in samples:
        once = sanitize_html(html)
        assert sanitize_html(once) == once


def test_empty_input():
    assert sanitize_html("") == ""
    assert sanitize_html(None) == ""


def test_text_to_html_converts_newlines():
    assert text_to_html("line one\nline two") == "line one<br>line two"
    assert "<script" not in text_to_html("hey\n<script>x()</script>")
    assert text_to_html(None) == ""


# --- Cities ---


def test_dedupe_canonicalizes_and_drops_blanks():
    cities = ["Coeur D'Alene", "coeur d'alene", "Spokane", None, ""]
    assert dedupe_cities(cities) == ["Coeur d'Alene", "Spokane"]


def test_apostrophe_variants_collapse():
    cities = ["Coeur d’Alene", "COEUR D´ALENE", "coeur d`alene"]
    assert dedupe_cities(cities) == ["Coeur d'Alene"]


def test_first_seen_spelling_wins_for_unknown_cities():
    assert dedupe_cities(["spokane valley", "Spokane Valley", "  "]) == ["spokane valley"]


def test_result_is_sorted_regardless_of_input_order():
    forward = ["Sandpoint", "Airway Heights", "Hayden"]
    assert dedupe_cities(forward) == ["Airway Heights", "Hayden", "Sandpoint"]
    assert dedupe_cities(list(reversed(forward))) == ["Airway Heights", "Hayden", "Sandpoint"]


def test_normalize_is_idempotent():
    for raw in ["  Coeur D’Alene ", "Post Falls", "liberty LAKE"]:
        key = normalize_city(raw)
        assert normalize_city(key) == key
    assert normalize_city("  Coeur D’Alene ") == "coeur d'alene"


def test_canonical_city():
    assert canonical_city("coeur d’alene") == "Coeur d'Alene"
    assert canonical_city(" Rathdrum ") == "Rathdrum"
