"""
pdfparse_lib/regions.py: Splits a page's content rectangle into named
regions and collects the text inside each one.
"""
import logging

from .constants import REGION_NAMES
from .models import Rect

log_structure = logging.getLogger("pdfparse.structure")


def split_regions(content: Rect) -> dict[str, Rect]:
    """
    Returns the content rectangle and its four quadrants.

    The quadrants share their inner edges at the midpoints, so together they
    cover the content rectangle exactly.
    """
    mid_x = content.x + content.width / 2
    mid_y = content.y + content.height / 2
    regions = (
        content,
        Rect(content.x, content.y, mid_x - content.x, mid_y - content.y),
        Rect(mid_x, content.y, content.x1 - mid_x, mid_y - content.y),
        Rect(content.x, mid_y, mid_x - content.x, content.y1 - mid_y),
        Rect(mid_x, mid_y, content.x1 - mid_x, content.y1 - mid_y),
    )
    return dict(zip(REGION_NAMES, regions))


class RegionSplitter:
    """Requests per-region text from the page reader."""

    def capture(self, reader, page_number, content: Rect) -> dict[str, str]:
        regions = split_regions(content)
        for name, rect in regions.items():
            log_structure.debug("Region %-11s %s", name, rect.to_dict())
        text = reader.capture_regions(page_number, regions)
        return {name: text.get(name, "") for name in REGION_NAMES}
