"""
pdfparse_lib/extractor.py: The extraction pipelines.

HierarchicalExtractor reconstructs a whole-document outline from font-size
statistics. SinglePageExtractor gathers a detailed record of one page,
including paragraph clusters and region text. Both take a page reader
(normally a PdfPageReader) and perform no I/O of their own.
"""
import logging

from .analyzer import HeadingClassifier
from .constants import LAYOUT_DEFAULTS
from .filters import MarginFilter, content_rect
from .lines import LineAssembler, sort_fragments
from .models import ImageInfo, PageDetail
from .reconstructor import DocumentReconstructor
from .regions import RegionSplitter
from .segmenter import ParagraphClusterer

log_layout = logging.getLogger("pdfparse.layout")
log_structure = logging.getLogger("pdfparse.structure")


def _layout_settings(settings):
    return {**LAYOUT_DEFAULTS, **(settings or {})}


class HierarchicalExtractor:
    """
    Builds a DocumentStructure for a page range of a document.

    Args:
        reader: The page content reader.
        margins (Margins): Optional margins; text outside them is ignored.
        settings (dict): Layout setting overrides (see constants.LAYOUT_DEFAULTS).
    """

    def __init__(self, reader, margins=None, settings=None):
        self.reader = reader
        self.margins = margins
        self.settings = _layout_settings(settings)
        self.page_range_start, self.page_range_end = -1, -1

    def set_page_range(self, start, end):
        """Restricts extraction to pages `start`..`end` (1-based, inclusive)."""
        if start <= 0 or end < start:
            raise ValueError(
                "Invalid page range: start must be positive and end must be >= start"
            )
        self.page_range_start, self.page_range_end = start, end

    def _resolve_page_range(self, total_pages):
        start, end = self.page_range_start, self.page_range_end
        if start <= 0:
            return 1, total_pages
        if end > total_pages:
            logging.getLogger("pdfparse").warning(
                "Requested end page %d exceeds document length. Using last page (%d) instead.",
                end,
                total_pages,
            )
            end = total_pages
        if start > end:
            raise ValueError(f"Start page {start} exceeds document length {total_pages}")
        return start, end

    def extract_hierarchy(self, title=None):
        """Runs the outline pipeline and returns the DocumentStructure."""
        total_pages = self.reader.page_count
        start, end = self._resolve_page_range(total_pages)
        logging.getLogger("pdfparse").info(
            "--- Extracting Outline from Pages %d-%d of %d ---", start, end, total_pages
        )

        fragments = self.reader.read_fragments(range(start, end + 1))
        fragments = MarginFilter(self.margins).filter(fragments, self.reader.page_geometry)
        assembler = LineAssembler(self.settings["outline_line_tolerance"])
        lines = [
            line for line in assembler.assemble(sort_fragments(fragments)) if line.text.strip()
        ]

        headings = HeadingClassifier().classify(lines)
        document = DocumentReconstructor().build(headings, lines, title)

        document.add_metadata("pageRange", f"{start}-{end}")
        document.add_metadata("totalPages", total_pages)
        if self.margins:
            document.add_metadata("marginLeft", float(self.margins.left))
            document.add_metadata("marginTop", float(self.margins.top))
            document.add_metadata("marginRight", float(self.margins.right))
            document.add_metadata("marginBottom", float(self.margins.bottom))
        return document


class SinglePageExtractor:
    """
    Extracts detailed information about a single page.

    Args:
        reader: The page content reader.
        margins (Margins): Optional margins bounding the content area.
        normalize_text (bool): Cluster text into paragraphs. When False the
            raw fragments are returned as positioned text.
        settings (dict): Layout setting overrides.
    """

    def __init__(self, reader, margins=None, normalize_text=True, settings=None):
        self.reader = reader
        self.margins = margins
        self.normalize_text = normalize_text
        self.settings = _layout_settings(settings)

    def extract_page(self, page_number) -> PageDetail:
        if page_number < 1:
            raise ValueError("Page index must be 1 or greater")
        total_pages = self.reader.page_count
        if page_number > total_pages:
            raise ValueError(
                f"Page index {page_number} exceeds document length {total_pages}"
            )
        logging.getLogger("pdfparse").info(
            "--- Extracting Details for Page %d of %d ---", page_number, total_pages
        )

        geometry = self.reader.page_geometry(page_number)
        detail = PageDetail(page_number, total_pages, geometry, self.margins)
        self._add_resources(detail, page_number)
        detail.plain_text = self.reader.plain_text(page_number)

        fragments = self.reader.read_fragments([page_number])
        raw = MarginFilter(self.margins).filter(fragments, lambda _: geometry)
        detail.raw_positioned_text = list(raw)
        if self.normalize_text:
            detail.positioned_text = self._cluster(raw)
        else:
            detail.positioned_text = list(raw)

        detail.region_text = RegionSplitter().capture(
            self.reader, page_number, content_rect(geometry, self.margins)
        )
        return detail

    def _add_resources(self, detail, page_number):
        resources = self.reader.page_resources(page_number)
        detail.fonts = {font.id: font for font in resources.fonts}
        detail.images = list(resources.images)
        # Form XObjects are listed with the images, flagged by name and colour space.
        detail.images.extend(
            ImageInfo(f"{form.name} (Form)", form.width, form.height, "form", 0)
            for form in resources.forms
        )

    def _cluster(self, fragments):
        s = self.settings
        lines = LineAssembler(s["paragraph_line_tolerance"]).assemble(
            sort_fragments(fragments)
        )
        log_structure.debug("Page has %d lines before clustering.", len(lines))
        clusterer = ParagraphClusterer(
            noise_floor=s["gap_noise_floor"],
            default_median=s["default_median_gap"],
            break_factor=s["paragraph_break_factor"],
            line_break_tolerance=s["fragment_break_tolerance"],
            word_gap=s["word_gap_tolerance"],
        )
        return clusterer.cluster(lines)
