"""
pdfparse_lib/lines.py: Merges fragments that share a baseline into lines.
"""
import logging

from .constants import OUTLINE_LINE_TOLERANCE
from .models import Line

log_layout = logging.getLogger("pdfparse.layout")


def sort_fragments(fragments):
    """Sorts fragments page-major, then by baseline. The sort is stable."""
    return sorted(fragments, key=lambda f: f.sort_key)


class _LineBuilder:
    """Accumulates the open line during a single assembly pass."""

    def __init__(self, tolerance):
        self.tolerance = tolerance
        self.lines, self.current = [], None

    def starts_new_line(self, fragment) -> bool:
        if self.current is None:
            return True
        if fragment.page_number != self.current.page_number:
            return True
        return abs(fragment.y_baseline - self.current.y_baseline) > self.tolerance

    def feed(self, fragment):
        if self.starts_new_line(fragment):
            self.flush()
            self.current = Line(fragment)
        else:
            self.current.add(fragment)

    def flush(self):
        if self.current is not None:
            self.lines.append(self.current)
            self.current = None


class LineAssembler:
    """
    Groups a document-ordered fragment sequence into lines.

    A new line starts when the page changes or when a fragment's baseline
    is more than `tolerance` points away from the baseline the current line
    started at.
    """

    def __init__(self, tolerance=OUTLINE_LINE_TOLERANCE):
        self.tolerance = tolerance

    def assemble(self, fragments) -> list[Line]:
        fragments = list(fragments)
        builder = _LineBuilder(self.tolerance)
        for fragment in fragments:
            builder.feed(fragment)
        builder.flush()
        log_layout.debug(
            "Assembled %d fragments into %d lines (tolerance %.2f).",
            len(fragments),
            len(builder.lines),
            self.tolerance,
        )
        return builder.lines
