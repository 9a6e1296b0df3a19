import json
import logging

import pytest

import pdfparse
from core.log_utils import ContextFilter
from pdfparse_lib.models import DocumentStructure, Margins, PageDetail, PageGeometry


@pytest.fixture(autouse=True)
def quiet_logging(mocker):
    """Keeps the CLI from replacing the test session's log handlers."""
    mocker.patch("pdfparse.setup_logging", return_value=ContextFilter())
    mocker.patch("pdfparse.logging.basicConfig")


@pytest.fixture
def structure():
    document = DocumentStructure("doc", content="hello")
    document.add_metadata("pageRange", "1-1")
    return document


def test_parse_arguments():
    args = pdfparse.Application.parse_arguments(
        ["doc.pdf", "-p", "5", "-d", "-r", "-m", "1,2,3,4", "--debug", "layout"]
    )

    assert args.pdf_file == "doc.pdf"
    assert args.pages == "5"
    assert args.detailed and args.raw
    assert args.margins == "1,2,3,4"
    assert args.debug_topics == "layout"
    assert not args.markdown and not args.pretty and not args.verbose


def test_debug_without_topics_means_all():
    args = pdfparse.Application.parse_arguments(["doc.pdf", "--debug"])
    assert args.debug_topics == "all"


def test_outline_is_printed_as_json(mocker, capsys, structure):
    extract = mocker.patch("pdfparse.extract_structure", return_value=structure)

    pdfparse.main(["doc.pdf", "-p", "1-1", "-m", "50,50,50,50"])

    kwargs = extract.call_args.kwargs
    assert extract.call_args.args == ("doc.pdf",)
    assert kwargs["page_range"] == (1, 1)
    assert isinstance(kwargs["margins"], Margins)
    assert kwargs["settings"]["paragraph_break_factor"] == 1.5
    assert json.loads(capsys.readouterr().out) == {
        "title": "doc",
        "metadata": {"pageRange": "1-1"},
        "content": "hello",
        "sections": [],
    }


def test_malformed_options_are_ignored(mocker, caplog, structure):
    extract = mocker.patch("pdfparse.extract_structure", return_value=structure)

    with caplog.at_level(logging.ERROR):
        pdfparse.main(["doc.pdf", "-p", "one-two", "-m", "1,2,3"])

    assert extract.call_args.kwargs["page_range"] is None
    assert extract.call_args.kwargs["margins"] is None
    assert "Invalid page range format: one-two" in caplog.text
    assert "Invalid margin format: 1,2,3" in caplog.text


def test_detailed_mode_extracts_the_first_page_of_the_range(mocker, capsys):
    detail = PageDetail(3, 5, PageGeometry(600, 800))
    extract = mocker.patch("pdfparse.extract_page_detail", return_value=detail)
    outline = mocker.patch("pdfparse.extract_structure")

    pdfparse.main(["doc.pdf", "-p", "3-4", "-d", "-r"])

    outline.assert_not_called()
    assert extract.call_args.args == ("doc.pdf", 3)
    assert extract.call_args.kwargs["normalize_text"] is False
    assert json.loads(capsys.readouterr().out)["pageNumber"] == 3


def test_detailed_mode_defaults_to_page_one(mocker):
    extract = mocker.patch(
        "pdfparse.extract_page_detail", return_value=PageDetail(1, 1, PageGeometry(10, 10))
    )

    pdfparse.main(["doc.pdf", "-d"])

    assert extract.call_args.args == ("doc.pdf", 1)
    assert extract.call_args.kwargs["normalize_text"] is True


def test_markdown_output(mocker, capsys, structure):
    mocker.patch("pdfparse.extract_structure", return_value=structure)

    pdfparse.main(["doc.pdf", "--markdown"])

    assert capsys.readouterr().out.startswith("# doc\n\nhello")


def test_pretty_output_uses_rich(mocker, structure):
    mocker.patch("pdfparse.extract_structure", return_value=structure)
    console_cls = mocker.patch("pdfparse.Console")

    pdfparse.main(["doc.pdf", "--pretty"])

    (text,) = console_cls.return_value.print_json.call_args.args
    assert json.loads(text)["title"] == "doc"


@pytest.mark.parametrize("error", [FileNotFoundError("PDF file not found"), ValueError("bad")])
def test_errors_exit_with_status_one(mocker, caplog, error):
    mocker.patch("pdfparse.extract_structure", side_effect=error)

    with pytest.raises(SystemExit) as exc_info:
        pdfparse.main(["missing.pdf"])

    assert exc_info.value.code == 1
    assert str(error) in caplog.text
