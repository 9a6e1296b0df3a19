import pytest

from pdfparse_lib.api import (
    extract_page_detail,
    extract_structure,
    parse_margins,
    parse_page_range,
)
from pdfparse_lib.models import Margins


@pytest.mark.parametrize(
    "text, expected",
    [("3-7", (3, 7)), ("5", (5, 5)), (" 2 - 4 ", (2, 4))],
)
def test_parse_page_range(text, expected):
    assert parse_page_range(text) == expected


@pytest.mark.parametrize("text", ["a-b", "1-2-3", "", "x"])
def test_parse_page_range_rejects_malformed_input(text):
    with pytest.raises(ValueError):
        parse_page_range(text)


def test_parse_margins():
    margins = parse_margins("50, 40,30.5,20")
    assert (margins.left, margins.top, margins.right, margins.bottom) == (50, 40, 30.5, 20)


@pytest.mark.parametrize(
    "text", ["50,50,50", "1,2,3,4,5", "a,b,c,d", "10,-1,10,10", "nan,0,0,0", "0,inf,0,0"]
)
def test_parse_margins_rejects_bad_values(text):
    with pytest.raises(ValueError):
        parse_margins(text)


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / "annual-report.pdf"
    path.write_bytes(b"%PDF-1.4\n%%EOF\n")
    return str(path)


def test_missing_file_raises(tmp_path):
    missing = str(tmp_path / "missing.pdf")
    with pytest.raises(FileNotFoundError):
        extract_structure(missing)
    with pytest.raises(FileNotFoundError):
        extract_page_detail(missing)


def test_extract_structure_uses_file_stem_as_title(mocker, pdf_file, outline_reader):
    reader_cls = mocker.patch("pdfparse_lib.api.PdfPageReader", return_value=outline_reader)

    structure = extract_structure(pdf_file, page_range=(1, 1))

    reader_cls.assert_called_once_with(pdf_file)
    assert structure.title == "annual-report"
    assert structure.metadata["pageRange"] == "1-1"
    assert outline_reader.fragment_requests == [[1]]


def test_extract_page_detail(mocker, pdf_file, outline_reader):
    mocker.patch("pdfparse_lib.api.PdfPageReader", return_value=outline_reader)

    detail = extract_page_detail(pdf_file, 2, margins=Margins(0, 0, 0, 0), normalize_text=False)

    assert detail.page_number == 2
    assert [f.text for f in detail.positioned_text] == ["Details", "Detail body."]
    assert detail.to_dict()["margins"] == {"left": 0, "top": 0, "right": 0, "bottom": 0}
