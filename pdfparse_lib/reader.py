"""
pdfparse_lib/reader.py: The page content reader. Wraps pdfminer.six to turn
PDF pages into positioned fragments, page geometry, resource listings and
area-restricted text.

pdfminer reports coordinates from the bottom-left corner; everything this
module returns is converted to the top-left, y-down convention used by the
rest of the library.
"""
import logging
import os

from pdfminer.high_level import extract_pages, extract_text
from pdfminer.layout import LAParams, LTAnno, LTChar, LTTextLineHorizontal
from pdfminer.pdfpage import PDFPage
from pdfminer.pdftypes import resolve1
from pdfminer.psparser import PSLiteral, literal_name

from .models import (
    FontInfo,
    FormInfo,
    Fragment,
    ImageInfo,
    PageGeometry,
    PageResources,
)

log_reader = logging.getLogger("pdfparse.reader")

FONT_FILE_KEYS = ("FontFile", "FontFile2", "FontFile3")


def _find_elements_by_type(obj, t):
    """Recursively finds all layout elements of a specific type."""
    e = []
    if isinstance(obj, t):
        e.append(obj)
    if hasattr(obj, "_objs"):
        for child in obj:
            e.extend(_find_elements_by_type(child, t))
    return e


def _name(value, default="unknown"):
    """Best-effort conversion of a PDF name-like object to a string."""
    value = resolve1(value)
    if isinstance(value, PSLiteral):
        return literal_name(value)
    if isinstance(value, list) and value:
        return _name(value[0], default)
    if isinstance(value, bytes):
        return value.decode("latin-1")
    if isinstance(value, str):
        return value
    return default


def _box_size(box):
    x0, y0, x1, y1 = (float(v) for v in resolve1(box))
    return abs(x1 - x0), abs(y1 - y0)


def _is_embedded(font_dict) -> bool:
    """Checks whether a font dictionary carries its own font program."""
    subtype = _name(font_dict.get("Subtype"), "")
    if subtype == "Type3":
        return True
    if subtype == "Type0":
        descendants = resolve1(font_dict.get("DescendantFonts")) or []
        if not descendants:
            return False
        font_dict = resolve1(descendants[0]) or {}
    descriptor = resolve1(font_dict.get("FontDescriptor")) or {}
    return any(key in descriptor for key in FONT_FILE_KEYS)


class PdfPageReader:
    """
    Reads positioned text and page metadata from a PDF file.

    Page numbers are 1-based throughout. Parsed page layouts are cached on
    the instance, so one reader should serve one extraction run.

    Args:
        pdf_path (str): The file path to the PDF.
        laparams (LAParams): Layout analysis parameters for pdfminer.
    """

    def __init__(self, pdf_path, laparams=None):
        if not os.path.exists(pdf_path):
            raise FileNotFoundError(f"PDF file not found: {pdf_path}")
        self.pdf_path = pdf_path
        self.laparams = laparams or LAParams()
        self._geometries = None
        self._layouts = {}

    @property
    def page_count(self) -> int:
        return len(self._page_geometries())

    def _page_geometries(self):
        if self._geometries is None:
            with open(self.pdf_path, "rb") as fp:
                self._geometries = [self._read_geometry(p) for p in PDFPage.get_pages(fp)]
            log_reader.debug(
                "Opened %s: %d pages.", os.path.basename(self.pdf_path), len(self._geometries)
            )
        return self._geometries

    @staticmethod
    def _read_geometry(page):
        crop_w, crop_h = _box_size(page.cropbox)
        media_w, media_h = _box_size(page.mediabox)
        return PageGeometry(crop_w, crop_h, media_w, media_h, (page.rotate or 0) % 360)

    def page_geometry(self, page_number) -> PageGeometry:
        return self._page_geometries()[page_number - 1]

    def _layouts_for(self, page_numbers):
        """Returns {page_number: LTPage}, parsing only pages not yet cached."""
        missing = sorted(n for n in set(page_numbers) if n not in self._layouts)
        if missing:
            log_reader.debug("Running layout analysis on %d page(s).", len(missing))
            layouts = list(
                extract_pages(
                    self.pdf_path,
                    page_numbers=[n - 1 for n in missing],
                    laparams=self.laparams,
                )
            )
            # pdfminer numbers the pages it yields sequentially, so the real
            # page numbers are paired up here.
            for page_number, layout in zip(missing, layouts):
                self._layouts[page_number] = layout
        return {n: self._layouts[n] for n in page_numbers if n in self._layouts}

    def read_fragments(self, page_numbers) -> list[Fragment]:
        """Returns one fragment per text line on the requested pages."""
        page_numbers = sorted(set(page_numbers))
        layouts = self._layouts_for(page_numbers)
        fragments = []
        for page_number in page_numbers:
            if page_number in layouts:
                fragments.extend(self._fragments_from_layout(layouts[page_number], page_number))
        log_reader.info("Read %d text fragments from %d page(s).", len(fragments), len(layouts))
        return fragments

    def _fragments_from_layout(self, layout, page_number):
        height, fragments = layout.height, []
        for line in _find_elements_by_type(layout, LTTextLineHorizontal):
            chars = [c for c in line if isinstance(c, LTChar)]
            text = line.get_text().rstrip("\n")
            if not chars or not text.strip():
                continue
            first = chars[0]
            baseline = height - first.matrix[5]
            top = height - line.y1
            fragments.append(
                Fragment(
                    text,
                    line.x0,
                    baseline,
                    line.width,
                    max(0.0, baseline - top),
                    round(first.size, 2),
                    first.fontname,
                    page_number,
                )
            )
        return sorted(fragments, key=lambda f: (f.y_baseline, f.x))

    def page_resources(self, page_number) -> PageResources:
        """Lists the fonts, images and forms declared by a page."""
        with open(self.pdf_path, "rb") as fp:
            page = next(PDFPage.get_pages(fp, pagenos={page_number - 1}))
            resources = resolve1(page.resources) or {}
            result = PageResources(
                fonts=self._read_fonts(resources),
                **self._read_xobjects(resources),
            )
        log_reader.debug(
            "Page %d resources: %d fonts, %d images, %d forms.",
            page_number,
            len(result.fonts),
            len(result.images),
            len(result.forms),
        )
        return result

    @staticmethod
    def _read_fonts(resources):
        fonts = []
        for font_id, ref in (resolve1(resources.get("Font")) or {}).items():
            font_dict = resolve1(ref)
            if not isinstance(font_dict, dict):
                continue
            name = _name(font_dict.get("BaseFont"), font_id)
            fonts.append(FontInfo(font_id, name, _is_embedded(font_dict)))
        return fonts

    @staticmethod
    def _read_xobjects(resources):
        images, forms = [], []
        for name, ref in (resolve1(resources.get("XObject")) or {}).items():
            attrs = getattr(resolve1(ref), "attrs", None)
            if attrs is None:
                continue
            subtype = _name(attrs.get("Subtype"), "")
            if subtype == "Image":
                images.append(
                    ImageInfo(
                        name,
                        int(resolve1(attrs.get("Width", 0))),
                        int(resolve1(attrs.get("Height", 0))),
                        _name(attrs.get("ColorSpace")),
                        int(resolve1(attrs.get("BitsPerComponent", 0)) or 0),
                    )
                )
            elif subtype == "Form" and attrs.get("BBox") is not None:
                width, height = _box_size(attrs["BBox"])
                forms.append(FormInfo(name, int(width), int(height)))
        return {"images": images, "forms": forms}

    def plain_text(self, page_number) -> str:
        return extract_text(
            self.pdf_path, page_numbers=[page_number - 1], laparams=self.laparams
        )

    def capture_regions(self, page_number, regions) -> dict[str, str]:
        """
        Collects the text of each named rectangle on a page.

        A glyph belongs to a region when its origin (left edge, baseline)
        lies inside the rectangle, edges included. Regions are independent,
        so text on a shared edge shows up in both.
        """
        layout = self._layouts_for([page_number])[page_number]
        lines = sorted(
            _find_elements_by_type(layout, LTTextLineHorizontal),
            key=lambda line: (-line.y1, line.x0),
        )
        result = {}
        for name, rect in regions.items():
            texts = [self._text_in_rect(line, rect, layout.height) for line in lines]
            result[name] = "\n".join(t for t in texts if t.strip())
        return result

    @staticmethod
    def _text_in_rect(line, rect, page_height):
        parts, inside = [], False
        for item in line:
            if isinstance(item, LTChar):
                inside = rect.contains(item.x0, page_height - item.matrix[5])
                if inside:
                    parts.append(item.get_text())
            elif isinstance(item, LTAnno) and inside:
                parts.append(item.get_text())
        return "".join(parts).rstrip()
