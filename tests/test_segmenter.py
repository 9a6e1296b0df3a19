import pytest
from conftest import frag

from pdfparse_lib.models import Line
from pdfparse_lib.segmenter import ParagraphClusterer, majority_font_name, median_gap


def lines_at(*baselines):
    return [Line(frag(f"line {i}", 50, b)) for i, b in enumerate(baselines)]


def test_median_gap_odd_count():
    assert median_gap(lines_at(0, 10, 22, 36)) == 12


def test_median_gap_even_count_takes_lower_middle():
    assert median_gap(lines_at(0, 10, 22)) == 10


def test_median_gap_ignores_jitter():
    assert median_gap(lines_at(0, 0.3, 10)) == pytest.approx(9.7)


def test_median_gap_defaults_without_gaps():
    assert median_gap(lines_at(100)) == 12.0
    assert median_gap(lines_at(100, 100.2), default=7.0) == 7.0


def test_majority_font_tie_goes_to_first_seen():
    fragments = [frag("a", 0, 0, font="A"), frag("b", 0, 0, font="B")] * 2
    assert majority_font_name(fragments) == "A"


def test_majority_font_of_nothing_is_unknown():
    assert majority_font_name([]) == "Unknown"


def test_word_gap_becomes_a_space():
    line = Line(frag("Hello", 0, 100, width=10))
    line.add(frag("world", 13, 100, width=10))

    paragraph = ParagraphClusterer()._merge([line])

    assert paragraph.text == "Hello world"


def test_touching_fragments_are_joined():
    line = Line(frag("Hel", 0, 100, width=10))
    line.add(frag("lo", 11, 100, width=10))

    assert ParagraphClusterer()._merge([line]).text == "Hello"


def test_baseline_shift_becomes_a_newline():
    line = Line(frag("first", 0, 100))
    line.add(frag("second", 0, 102.5))

    assert ParagraphClusterer()._merge([line]).text == "first\nsecond"


def test_cluster_splits_on_large_gaps():
    lines = lines_at(100, 112, 124, 160, 172)

    paragraphs = ParagraphClusterer().cluster(lines)

    assert len(paragraphs) <= len(lines)
    assert [p.text for p in paragraphs] == [
        "line 0\nline 1\nline 2",
        "line 3\nline 4",
    ]


def test_paragraph_geometry_and_serialization():
    lines = [
        Line(frag("top", 50, 100, width=30, size=10.0, font="Body")),
        Line(frag("bottom", 40, 112, width=60, size=12.0, font="Body")),
    ]

    (paragraph,) = ParagraphClusterer().cluster(lines)
    data = paragraph.to_dict()

    assert data["isParagraph"] is True
    assert data["position"] == {
        "x": 40,
        "y": 90,
        "width": 60,
        "height": 22,
        "baseline": 112,
    }
    assert data["fontSize"] == pytest.approx(11.0)
    assert data["fontName"] == "Body"


def test_cluster_of_nothing_is_empty():
    assert ParagraphClusterer().cluster([]) == []


def test_paragraph_keeps_its_fragments_in_merged_order():
    second = Line(frag("second", 50, 112))
    first = Line(frag("b", 40, 100))
    first.add(frag("a", 10, 100))

    (paragraph,) = ParagraphClusterer().cluster([first, second])

    assert [f.text for f in paragraph.fragments] == ["a", "b", "second"]
