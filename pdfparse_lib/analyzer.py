"""
pdfparse_lib/analyzer.py: Contains the HeadingClassifier, which finds the
body font size of a run of lines and picks out the headings.
"""
import logging
from collections import Counter

from .constants import DEFAULT_HEADING_LEVEL, HEADING_LEVEL_THRESHOLDS
from .models import Heading

log_layout = logging.getLogger("pdfparse.layout")


def get_body_font_size(lines):
    """
    Returns the most frequent line font size, or None for no lines.

    When several sizes share the highest count, the smallest of them wins.
    """
    counts = Counter(line.font_size for line in lines)
    if not counts:
        return None
    top = max(counts.values())
    body_size = min(size for size, count in counts.items() if count == top)
    log_layout.debug(
        "Body font size %.2f (%d of %d lines, %d distinct sizes).",
        body_size,
        top,
        sum(counts.values()),
        len(counts),
    )
    return body_size


def heading_level(font_size, body_size) -> int:
    """Maps the size excess over body text to an outline level (1-4)."""
    delta = font_size - body_size
    for min_delta, level in HEADING_LEVEL_THRESHOLDS:
        if delta > min_delta:
            return level
    return DEFAULT_HEADING_LEVEL


class HeadingClassifier:
    """Classifies lines set in a larger font than the body text as headings."""

    def __init__(self):
        self.body_font_size = None

    def classify(self, lines) -> list[Heading]:
        self.body_font_size = get_body_font_size(lines)
        if self.body_font_size is None:
            return []
        headings = []
        for line in lines:
            text = line.text.strip()
            if line.font_size > self.body_font_size and text:
                level = heading_level(line.font_size, self.body_font_size)
                log_layout.debug(
                    "  - H%d (%.2fpt) on page %d: '%s'",
                    level,
                    line.font_size,
                    line.page_number,
                    text,
                )
                headings.append(Heading(text, level, line.page_number, line.y_baseline))
        logging.getLogger("pdfparse").info(
            "Classified %d of %d lines as headings.", len(headings), len(lines)
        )
        return headings
