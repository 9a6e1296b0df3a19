"""
pdfparse_lib/segmenter.py: Contains the ParagraphClusterer, which groups the
lines of a page into paragraphs using a gap threshold derived from the page
itself.
"""
import logging
from collections import Counter

from .constants import (
    DEFAULT_MEDIAN_GAP,
    FRAGMENT_BREAK_TOLERANCE,
    GAP_NOISE_FLOOR,
    PARAGRAPH_BREAK_FACTOR,
    UNKNOWN_FONT,
    WORD_GAP_TOLERANCE,
)
from .models import Paragraph, compute_bbox

log_structure = logging.getLogger("pdfparse.structure")


def median_gap(lines, noise_floor=GAP_NOISE_FLOOR, default=DEFAULT_MEDIAN_GAP):
    """
    Median of the baseline gaps between consecutive lines.

    Gaps at or below `noise_floor` are ignored. With an even number of gaps
    the lower of the two middle values is used.
    """
    gaps = sorted(
        gap
        for prev, line in zip(lines, lines[1:])
        if (gap := abs(line.y_baseline - prev.y_baseline)) > noise_floor
    )
    if not gaps:
        return default
    return gaps[(len(gaps) - 1) // 2]


def majority_font_name(fragments):
    """Most frequent font name; ties go to the name seen first."""
    counts = Counter(f.font_name for f in fragments)
    if not counts:
        return UNKNOWN_FONT
    # Counter keeps first-insertion order and max() returns the first maximum.
    return max(counts, key=counts.get)


class ParagraphClusterer:
    """Two-pass clustering of lines into paragraphs."""

    def __init__(
        self,
        noise_floor=GAP_NOISE_FLOOR,
        default_median=DEFAULT_MEDIAN_GAP,
        break_factor=PARAGRAPH_BREAK_FACTOR,
        line_break_tolerance=FRAGMENT_BREAK_TOLERANCE,
        word_gap=WORD_GAP_TOLERANCE,
    ):
        self.noise_floor, self.default_median = noise_floor, default_median
        self.break_factor = break_factor
        self.line_break_tolerance, self.word_gap = line_break_tolerance, word_gap

    def cluster(self, lines) -> list[Paragraph]:
        if not lines:
            return []
        median = median_gap(lines, self.noise_floor, self.default_median)
        threshold = median * self.break_factor
        log_structure.debug(
            "Median line gap %.2f, paragraph break threshold %.2f.", median, threshold
        )
        groups = self._split_into_paragraphs(lines, threshold)
        paragraphs = [self._merge(group) for group in groups]
        logging.getLogger("pdfparse").info(
            "Clustered %d lines into %d paragraphs.", len(lines), len(paragraphs)
        )
        return paragraphs

    def _split_into_paragraphs(self, lines, threshold):
        """Starts a new group wherever the baseline gap exceeds the threshold."""
        groups, current, prev_baseline = [], [], None
        for line in lines:
            if prev_baseline is not None and abs(line.y_baseline - prev_baseline) > threshold:
                groups.append(current)
                current = []
            current.append(line)
            prev_baseline = line.y_baseline
        if current:
            groups.append(current)
        return groups

    def _merge(self, lines) -> Paragraph:
        """Renders a group of lines back into one paragraph record."""
        fragments = sorted(
            (f for line in lines for f in line.fragments),
            key=lambda f: (f.y_baseline, f.x),
        )
        parts, last = [], None
        for fragment in fragments:
            if last is not None:
                if abs(fragment.y_baseline - last.y_baseline) > self.line_break_tolerance:
                    parts.append("\n")
                elif fragment.x > last.x1 + self.word_gap:
                    parts.append(" ")
            parts.append(fragment.text)
            last = fragment
        font_size = sum(f.font_size for f in fragments) / len(fragments)
        return Paragraph(
            "".join(parts),
            compute_bbox(fragments),
            font_size,
            majority_font_name(fragments),
            lines[0].page_number,
            fragments,
        )
