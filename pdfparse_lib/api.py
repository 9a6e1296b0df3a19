# --- pdfparse_lib/api.py ---
import logging
import math
import os

from .extractor import HierarchicalExtractor, SinglePageExtractor
from .models import DocumentStructure, Margins, PageDetail
from .reader import PdfPageReader

log = logging.getLogger("pdfparse.api")


def parse_page_range(pages_str: str) -> tuple[int, int]:
    """Parses a page selection ('3-7' or '5') into an inclusive (start, end) pair."""
    text = pages_str.strip()
    if "-" in text:
        parts = text.split("-")
        if len(parts) != 2:
            raise ValueError(f"Invalid page range format: {pages_str}")
        return int(parts[0].strip()), int(parts[1].strip())
    page = int(text)
    return page, page


def parse_margins(margins_str: str) -> Margins:
    """Parses 'left,top,right,bottom' into Margins. Values must be finite and non-negative."""
    parts = margins_str.split(",")
    if len(parts) != 4:
        raise ValueError("Margins must be specified as four values: left,top,right,bottom")
    values = [float(p.strip()) for p in parts]
    if not all(math.isfinite(v) for v in values):
        raise ValueError("Margin values must be finite numbers")
    if any(v < 0 for v in values):
        raise ValueError("Margin values cannot be negative")
    return Margins(*values)


def _document_title(pdf_path: str) -> str:
    return os.path.splitext(os.path.basename(pdf_path))[0]


def extract_structure(
    pdf_path: str,
    page_range: tuple[int, int] | None = None,
    margins: Margins | None = None,
    settings: dict | None = None,
) -> DocumentStructure:
    """
    Reconstructs the heading outline of a PDF file.
    """
    if not os.path.exists(pdf_path):
        raise FileNotFoundError(f"PDF file not found: {pdf_path}")

    extractor = HierarchicalExtractor(PdfPageReader(pdf_path), margins, settings)
    if page_range:
        extractor.set_page_range(*page_range)
    structure = extractor.extract_hierarchy(title=_document_title(pdf_path))
    log.info(
        "Extracted %d top-level sections from %s.",
        len(structure.sections),
        os.path.basename(pdf_path),
    )
    return structure


def extract_page_detail(
    pdf_path: str,
    page_number: int = 1,
    margins: Margins | None = None,
    normalize_text: bool = True,
    settings: dict | None = None,
) -> PageDetail:
    """
    Extracts geometry, resources, paragraphs and region text for one page.
    """
    if not os.path.exists(pdf_path):
        raise FileNotFoundError(f"PDF file not found: {pdf_path}")

    extractor = SinglePageExtractor(
        PdfPageReader(pdf_path), margins, normalize_text=normalize_text, settings=settings
    )
    return extractor.extract_page(page_number)
