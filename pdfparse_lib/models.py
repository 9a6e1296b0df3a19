"""
pdfparse_lib/models.py: Data models for positioned text and the structures
reconstructed from it.

Coordinates are PDF points in a top-left origin system where y grows
downwards. A fragment's box spans from `y_top` down to its baseline.
"""


def compute_bbox(elements):
    """Computes a bounding box (x0, y0, x1, y1) enclosing all given elements."""
    elements = [e for e in elements if e]
    if not elements:
        return 0, 0, 0, 0
    return (
        min(e.x for e in elements),
        min(e.y_top for e in elements),
        max(e.x1 for e in elements),
        max(e.y_top + e.height for e in elements),
    )


# --- GEOMETRY ---
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    def __init__(self, x, y, width, height):
        self.x, self.y, self.width, self.height = x, y, width, height

    @property
    def x1(self):
        return self.x + self.width

    @property
    def y1(self):
        return self.y + self.height

    def contains(self, px, py) -> bool:
        """Inclusive point test; points on any edge are inside."""
        return self.x <= px <= self.x1 and self.y <= py <= self.y1

    def to_dict(self):
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    def __eq__(self, other):
        if not isinstance(other, Rect):
            return NotImplemented
        return (self.x, self.y, self.width, self.height) == (
            other.x,
            other.y,
            other.width,
            other.height,
        )

    def __repr__(self):
        return f"Rect(x={self.x}, y={self.y}, width={self.width}, height={self.height})"


class PageGeometry:
    """
    Page dimensions as reported by the reader.

    The crop and media sizes are the unrotated box sizes. pdfminer lays a
    page out after applying /Rotate, so fragment coordinates live in a frame
    of `layout_width` x `layout_height`, which is swapped for quarter turns.
    """

    def __init__(self, crop_width, crop_height, media_width=None, media_height=None, rotation=0):
        self.crop_width, self.crop_height = crop_width, crop_height
        self.media_width = crop_width if media_width is None else media_width
        self.media_height = crop_height if media_height is None else media_height
        self.rotation = rotation

    @property
    def is_quarter_turn(self) -> bool:
        return self.rotation % 180 == 90

    @property
    def layout_width(self):
        return self.crop_height if self.is_quarter_turn else self.crop_width

    @property
    def layout_height(self):
        return self.crop_width if self.is_quarter_turn else self.crop_height


class Margins:
    """Configured page margins, in points from each edge."""

    def __init__(self, left, top, right, bottom):
        self.left, self.top, self.right, self.bottom = left, top, right, bottom

    def content_rect(self, geometry: PageGeometry) -> Rect:
        """Returns the page area left after subtracting the margins."""
        return Rect(
            self.left,
            self.top,
            geometry.layout_width - self.left - self.right,
            geometry.layout_height - self.top - self.bottom,
        )

    def to_dict(self):
        return {"left": self.left, "top": self.top, "right": self.right, "bottom": self.bottom}

    def __repr__(self):
        return f"Margins({self.left}, {self.top}, {self.right}, {self.bottom})"


# --- POSITIONED TEXT ---
class Fragment:
    """An atomic piece of positioned text reported by the page reader."""

    is_paragraph = False

    def __init__(
        self, text, x, y_baseline, width, height, font_size, font_name, page_number=1
    ):
        self.text = text
        self.x, self.y_baseline = x, y_baseline
        self.width, self.height = width, height
        self.font_size, self.font_name = font_size, font_name
        self.page_number = page_number

    @property
    def y_top(self):
        return self.y_baseline - self.height

    @property
    def x1(self):
        return self.x + self.width

    @property
    def center(self):
        return self.x + self.width / 2, self.y_top + self.height / 2

    @property
    def sort_key(self):
        return self.page_number, self.y_baseline

    def to_dict(self):
        data = {
            "text": self.text,
            "position": {
                "x": self.x,
                "y": self.y_top,
                "width": self.width,
                "height": self.height,
                "baseline": self.y_baseline,
            },
            "fontSize": self.font_size,
            "fontName": self.font_name,
        }
        if self.is_paragraph:
            data["isParagraph"] = True
        return data

    def __repr__(self):
        return (
            f"Fragment({self.text!r}, x={self.x}, baseline={self.y_baseline}, "
            f"page={self.page_number})"
        )


class Paragraph(Fragment):
    """
    A cluster of lines merged back into a single fragment-like record.

    Every fragment box ends at its baseline, so the bottom of the union box
    is the baseline of the paragraph's last line.
    """

    is_paragraph = True

    def __init__(self, text, bbox, font_size, font_name, page_number=1, fragments=None):
        x0, y0, x1, y1 = bbox
        super().__init__(text, x0, y1, x1 - x0, y1 - y0, font_size, font_name, page_number)
        self.fragments = fragments or []


class Line:
    """Fragments that share a baseline, in reading order."""

    def __init__(self, first):
        self.page_number = first.page_number
        self.y_baseline = first.y_baseline
        self.font_size, self.font_name = first.font_size, first.font_name
        self.fragments = [first]

    def add(self, fragment):
        self.fragments.append(fragment)

    @property
    def ordered_fragments(self):
        return sorted(self.fragments, key=lambda f: f.x)

    @property
    def text(self) -> str:
        """Concatenated text of the fragments, left to right."""
        return "".join(f.text for f in self.ordered_fragments)

    @property
    def sort_key(self):
        return self.page_number, self.y_baseline

    def to_fragment(self) -> Fragment:
        """Collapses the line into a single fragment at the line's baseline."""
        x0, y0, x1, _ = compute_bbox(self.fragments)
        return Fragment(
            self.text,
            x0,
            self.y_baseline,
            x1 - x0,
            self.y_baseline - y0,
            self.font_size,
            self.font_name,
            self.page_number,
        )

    def __repr__(self):
        return f"Line({self.text!r}, page={self.page_number}, baseline={self.y_baseline})"


class Heading:
    """A line classified as a heading, with its outline level."""

    def __init__(self, text, level, page_number, y_baseline):
        self.text, self.level = text, level
        self.page_number, self.y_baseline = page_number, y_baseline

    @property
    def sort_key(self):
        return self.page_number, self.y_baseline

    def __repr__(self):
        return f"Heading({self.text!r}, level={self.level}, page={self.page_number})"


# --- DOCUMENT MODEL CLASSES (LOGICAL HIERARCHY) ---
class Section:
    """A node of the outline tree."""

    def __init__(self, title, level, content=""):
        self.title, self.level, self.content = title, level, content
        self.sub_sections: list[Section] = []

    def add_sub_section(self, section):
        self.sub_sections.append(section)

    @property
    def last_sub_section(self):
        return self.sub_sections[-1] if self.sub_sections else None

    def to_dict(self):
        data = {"title": self.title, "level": self.level}
        if self.content:
            data["content"] = self.content
        data["subSections"] = [s.to_dict() for s in self.sub_sections]
        return data

    def to_markdown(self) -> str:
        parts = [f"{'#' * self.level} {self.title}\n\n"]
        if self.content:
            parts.append(f"{self.content}\n\n")
        parts.extend(s.to_markdown() for s in self.sub_sections)
        return "".join(parts)

    def __repr__(self):
        return (
            f"Section({self.title!r}, level={self.level}, "
            f"children={len(self.sub_sections)})"
        )


class DocumentStructure:
    """The reconstructed outline of a document."""

    def __init__(self, title=None, content=None):
        self.title, self.content = title, content
        self.metadata: dict[str, str] = {}
        self.sections: list[Section] = []

    def add_metadata(self, key, value):
        self.metadata[key] = str(value)

    def to_dict(self):
        data = {"title": self.title, "metadata": dict(self.metadata)}
        if self.content:
            data["content"] = self.content
        data["sections"] = [s.to_dict() for s in self.sections]
        return data

    def to_markdown(self) -> str:
        """Renders the outline as Markdown text."""
        parts = []
        if self.title:
            parts.append(f"# {self.title}\n\n")
        if self.content:
            parts.append(f"{self.content}\n\n")
        parts.extend(s.to_markdown() for s in self.sections)
        return "".join(parts)


# --- PAGE DETAIL MODEL ---
class FontInfo:
    def __init__(self, font_id, name, embedded):
        self.id, self.name, self.embedded = font_id, name, embedded

    def to_dict(self):
        return {"name": self.name, "id": self.id, "embedded": self.embedded}


class ImageInfo:
    def __init__(self, name, width, height, color_space="unknown", bits_per_component=0):
        self.name, self.width, self.height = name, width, height
        self.color_space, self.bits_per_component = color_space, bits_per_component

    def to_dict(self):
        return {
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "colorSpace": self.color_space,
            "bitsPerComponent": self.bits_per_component,
        }


class FormInfo:
    def __init__(self, name, width, height):
        self.name, self.width, self.height = name, width, height


class PageResources:
    """Fonts, images and form XObjects declared by a page."""

    def __init__(self, fonts=None, images=None, forms=None):
        self.fonts: list[FontInfo] = fonts or []
        self.images: list[ImageInfo] = images or []
        self.forms: list[FormInfo] = forms or []


class PageDetail:
    """Everything extracted from a single page in detailed mode."""

    def __init__(self, page_number, total_pages, geometry: PageGeometry, margins=None):
        self.page_number, self.total_pages = page_number, total_pages
        self.width, self.height = geometry.crop_width, geometry.crop_height
        self.media_width, self.media_height = geometry.media_width, geometry.media_height
        self.rotation = geometry.rotation
        self.margins = margins
        self.fonts: dict[str, FontInfo] = {}
        self.images: list[ImageInfo] = []
        self.plain_text = ""
        self.positioned_text: list[Fragment] = []
        self.raw_positioned_text: list[Fragment] = []
        self.region_text: dict[str, str] = {}

    def to_dict(self):
        data = {
            "pageNumber": self.page_number,
            "totalPages": self.total_pages,
            "dimensions": {
                "width": self.width,
                "height": self.height,
                "mediaBoxWidth": self.media_width,
                "mediaBoxHeight": self.media_height,
                "rotation": self.rotation,
            },
        }
        if self.margins:
            data["margins"] = self.margins.to_dict()
        data.update(
            {
                "fonts": [f.to_dict() for f in self.fonts.values()],
                "images": [i.to_dict() for i in self.images],
                "plainText": self.plain_text,
                "positionedText": [t.to_dict() for t in self.positioned_text],
                "rawPositionedText": [t.to_dict() for t in self.raw_positioned_text],
                "regionText": dict(self.region_text),
            }
        )
        return data
