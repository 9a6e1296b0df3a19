import pytest

from pdfparse_lib.models import (
    FontInfo,
    FormInfo,
    Fragment,
    ImageInfo,
    PageGeometry,
    PageResources,
)


def frag(text, x, baseline, width=None, height=10.0, size=10.0, font="Body", page=1):
    """Builds a fragment; width defaults to 5pt per character."""
    if width is None:
        width = 5.0 * len(text)
    return Fragment(text, x, baseline, width, height, size, font, page)


class FakeReader:
    """An in-memory stand-in for PdfPageReader."""

    def __init__(self, pages, geometry=None, resources=None):
        self.pages = pages
        self.geometry = geometry or PageGeometry(600.0, 800.0)
        self.resources = resources or PageResources()
        self.fragment_requests = []
        self.captured_regions = None

    @property
    def page_count(self):
        return len(self.pages)

    def page_geometry(self, page_number):
        return self.geometry

    def read_fragments(self, page_numbers):
        page_numbers = list(page_numbers)
        self.fragment_requests.append(page_numbers)
        return [f for n in page_numbers for f in self.pages[n - 1]]

    def page_resources(self, page_number):
        return self.resources

    def plain_text(self, page_number):
        return "\n".join(f.text for f in self.pages[page_number - 1])

    def capture_regions(self, page_number, regions):
        self.captured_regions = regions
        return {name: f"{name} text" for name in regions}


@pytest.fixture
def fake_reader_factory():
    return FakeReader


@pytest.fixture
def outline_reader():
    """Two pages: a title, two level-2 headings and body text in 10pt."""
    page1 = [
        frag("Introduction", 50, 100, size=18.0, font="Bold"),
        frag("Intro body one.", 50, 120),
        frag("Intro body two.", 50, 132),
        frag("Scope", 50, 160, size=15.0, font="Bold"),
        frag("Scope body.", 50, 180),
    ]
    page2 = [
        frag("Details", 50, 80, size=15.0, font="Bold", page=2),
        frag("Detail body.", 50, 100, page=2),
    ]
    return FakeReader([page1, page2])


@pytest.fixture
def page_resources():
    return PageResources(
        fonts=[FontInfo("F1", "Helvetica", False), FontInfo("F2", "ABCDEF+Minion", True)],
        images=[ImageInfo("Im1", 640, 480, "DeviceRGB", 8)],
        forms=[FormInfo("Fm1", 100, 50)],
    )
