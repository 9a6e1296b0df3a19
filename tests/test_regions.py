from pdfparse_lib.models import Rect
from pdfparse_lib.regions import RegionSplitter, split_regions


def test_quadrants_tile_the_content_rectangle():
    content = Rect(50, 50, 500, 700)

    regions = split_regions(content)

    assert list(regions) == ["content", "topLeft", "topRight", "bottomLeft", "bottomRight"]
    assert regions["content"] == content
    assert regions["topLeft"] == Rect(50, 50, 250, 350)
    assert regions["topRight"] == Rect(300, 50, 250, 350)
    assert regions["bottomLeft"] == Rect(50, 400, 250, 350)
    assert regions["bottomRight"] == Rect(300, 400, 250, 350)
    quadrant_area = sum(r.width * r.height for name, r in regions.items() if name != "content")
    assert quadrant_area == content.width * content.height


def test_rect_contains_is_inclusive():
    rect = Rect(0, 0, 10, 10)
    assert rect.contains(0, 0)
    assert rect.contains(10, 10)
    assert not rect.contains(10.01, 5)


def test_capture_fills_missing_regions(mocker):
    reader = mocker.Mock()
    reader.capture_regions.return_value = {"content": "all", "topLeft": "tl"}

    text = RegionSplitter().capture(reader, 3, Rect(0, 0, 100, 100))

    assert text == {
        "content": "all",
        "topLeft": "tl",
        "topRight": "",
        "bottomLeft": "",
        "bottomRight": "",
    }
    page_number, regions = reader.capture_regions.call_args.args
    assert page_number == 3
    assert regions["bottomRight"] == Rect(50, 50, 50, 50)


def test_rect_serializes_its_corner_and_size():
    assert split_regions(Rect(0, 0, 100, 60))["bottomLeft"].to_dict() == {
        "x": 0,
        "y": 30.0,
        "width": 50.0,
        "height": 30.0,
    }
