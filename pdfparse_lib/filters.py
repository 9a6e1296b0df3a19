"""
pdfparse_lib/filters.py: Rejects fragments whose center falls outside the
configured content rectangle.
"""
import logging

from .models import Fragment, Margins, PageGeometry, Rect

log_layout = logging.getLogger("pdfparse.layout")


def content_rect(geometry: PageGeometry, margins: Margins | None) -> Rect:
    """Returns the content rectangle of a page, or the full page without margins."""
    if margins is None:
        return Rect(0, 0, geometry.layout_width, geometry.layout_height)
    return margins.content_rect(geometry)


def accept(fragment: Fragment, geometry: PageGeometry, margins: Margins | None) -> bool:
    """True if the fragment's box center lies inside the content rectangle."""
    if margins is None:
        return True
    cx, cy = fragment.center
    return margins.content_rect(geometry).contains(cx, cy)


class MarginFilter:
    """Applies the margin test to fragments spanning one or more pages."""

    def __init__(self, margins=None):
        self.margins = margins

    def filter(self, fragments, geometry_for_page):
        """
        Returns the accepted fragments in their original order.

        `geometry_for_page` is called once per distinct page number.
        """
        if self.margins is None:
            return list(fragments)
        geometries, kept = {}, []
        for fragment in fragments:
            page = fragment.page_number
            if page not in geometries:
                geometries[page] = geometry_for_page(page)
            if accept(fragment, geometries[page], self.margins):
                kept.append(fragment)
        log_layout.debug(
            "Margin filter kept %d of %d fragments (%r).",
            len(kept),
            len(fragments),
            self.margins,
        )
        return kept
