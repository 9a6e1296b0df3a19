#!/usr/bin/env python3
"""
pdfparse: Infers document structure from the positioned text of a PDF.

By default the whole document (or a page range) is turned into a nested
outline of sections, using font-size statistics to find headings. With
--detailed a single page is described instead: dimensions, resources,
paragraph clusters and the text of each page quadrant.

The result is printed to standard output as JSON.
"""

import argparse
import json
import logging
import sys

from rich.console import Console

# --- Local Application Imports ---
from core.log_utils import setup_logging
from pdfparse_lib.api import (
    extract_page_detail,
    extract_structure,
    parse_margins,
    parse_page_range,
)
from pdfparse_lib.config import ConfigService


# --- CUSTOM ARGPARSE FORMATTER ---
class CustomHelpFormatter(
    argparse.ArgumentDefaultsHelpFormatter, argparse.RawTextHelpFormatter
):
    """
    A custom argparse formatter that combines showing default values with
    preserving newline formatting in help text.
    """

    pass


class Application:
    """Orchestrates the extraction workflow based on command-line arguments."""

    def __init__(self, args):
        self.args = args
        self.page_range = None
        self.margins = None
        self.context_filter = None

    def run(self):
        """Main entry point for the application logic."""
        self.context_filter = setup_logging(
            project_name="pdfparse",
            level=logging.INFO if self.args.verbose else logging.WARNING,
            color_logs=self.args.color_logs,
            debug_topics=self.args.debug_topics,
            log_file=self.args.log_file,
        )
        self._parse_options()
        settings = ConfigService(self.args.config).get_layout_settings()

        if self.args.detailed:
            self._run_detailed(settings)
        else:
            self._run_outline(settings)

    def _parse_options(self):
        """Parses --pages and --margins. Malformed values are reported and ignored."""
        app_log = logging.getLogger("pdfparse")
        if self.args.pages is not None:
            try:
                self.page_range = parse_page_range(self.args.pages)
            except ValueError:
                app_log.error(
                    "Invalid page range format: %s. Expected format: startPage-endPage "
                    "(e.g., 1-10) or singlePage (e.g., 5)",
                    self.args.pages,
                )
        if self.args.margins is not None:
            try:
                self.margins = parse_margins(self.args.margins)
            except ValueError as e:
                app_log.error(
                    "Invalid margin format: %s (%s). Expected format: "
                    "left,top,right,bottom (e.g., 50,50,50,50)",
                    self.args.margins,
                    e,
                )
        if self.margins:
            app_log.info("Using margins: %r", self.margins)

    def _run_detailed(self, settings):
        """Extracts detailed information for a single page."""
        page_number = self.page_range[0] if self.page_range else 1
        self.context_filter.context_str = f"page {page_number}"
        if self.args.markdown:
            logging.getLogger("pdfparse").warning(
                "--markdown only applies to outline extraction. Emitting JSON."
            )
        logging.getLogger("pdfparse").info(
            "Text normalization: %s", "disabled" if self.args.raw else "enabled"
        )
        detail = extract_page_detail(
            self.args.pdf_file,
            page_number,
            margins=self.margins,
            normalize_text=not self.args.raw,
            settings=settings,
        )
        self._emit_json(detail.to_dict())

    def _run_outline(self, settings):
        """Extracts the hierarchical outline of the document."""
        self.context_filter.context_str = "outline"
        if self.page_range:
            logging.getLogger("pdfparse").info(
                "Processing page range: %d to %d", *self.page_range
            )
        else:
            logging.getLogger("pdfparse").info("Processing all pages")
        structure = extract_structure(
            self.args.pdf_file,
            page_range=self.page_range,
            margins=self.margins,
            settings=settings,
        )
        if self.args.markdown:
            print(structure.to_markdown())
        else:
            self._emit_json(structure.to_dict())

    def _emit_json(self, data):
        """Writes the result to stdout, optionally highlighted with rich."""
        text = json.dumps(data, indent=2, ensure_ascii=False)
        if self.args.pretty:
            Console().print_json(text)
        else:
            print(text)

    @staticmethod
    def parse_arguments(args=None):
        """Parses command-line arguments for the script."""
        examples = [
            "\nExamples:",
            "  python pdfparse.py document.pdf",
            "  python pdfparse.py document.pdf -p 10-20",
            "  python pdfparse.py document.pdf -p 5 -d",
            "  python pdfparse.py document.pdf -p 5 -d -r",
            "  python pdfparse.py document.pdf -m 50,50,50,50",
            "  python pdfparse.py document.pdf --debug layout,struct --color-logs",
        ]
        parser = argparse.ArgumentParser(
            description="Infers sections and paragraphs from PDF text positions.",
            formatter_class=CustomHelpFormatter,
            add_help=False,
            epilog="\n".join(examples),
        )

        g_opts = parser.add_argument_group("Main Options")
        g_opts.add_argument("pdf_file", help="Path to the input PDF file.")
        g_opts.add_argument(
            "-h",
            "--help",
            action="help",
            help="Show this help message and exit.",
        )

        g_proc = parser.add_argument_group("Processing Control")
        g_proc.add_argument(
            "-p",
            "--pages",
            default=None,
            metavar="RANGE",
            help="Page range to process (e.g., '1-10' or '5'). (default: all)",
        )
        g_proc.add_argument(
            "-d",
            "--detailed",
            action="store_true",
            help="Extract detailed information for a single page. (default: %(default)s)",
        )
        g_proc.add_argument(
            "-r",
            "--raw",
            action="store_true",
            help="Disable paragraph clustering in detailed mode. (default: %(default)s)",
        )
        g_proc.add_argument(
            "-m",
            "--margins",
            default=None,
            metavar="L,T,R,B",
            help="Margins bounding the content area, in points (left,top,right,bottom).",
        )
        g_proc.add_argument(
            "--config",
            metavar="FILE",
            default=None,
            help="INI file with [Layout] tolerance overrides.",
        )

        g_out = parser.add_argument_group("Script Output")
        g_out.add_argument(
            "--markdown",
            action="store_true",
            help="Print the outline as Markdown instead of JSON. (default: %(default)s)",
        )
        g_out.add_argument(
            "--pretty",
            action="store_true",
            help="Syntax-highlight the JSON output. (default: %(default)s)",
        )
        g_out.add_argument(
            "--log-file",
            metavar="FILE",
            default=None,
            help="Also write logging output to a specified file.",
        )
        g_out.add_argument(
            "--color-logs",
            action="store_true",
            help="Enable colored logging output. (default: %(default)s)",
        )
        g_out.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Enable INFO logging for detailed progress. (default: %(default)s)",
        )
        g_out.add_argument(
            "--debug",
            nargs="?",
            const="all",
            dest="debug_topics",
            metavar="TOPICS",
            help="Enable DEBUG logging (all,layout,structure,reconstruct,reader,api,config).",
        )

        return parser.parse_args(args)


def main(argv=None):
    """Main entry point for the script."""
    # Basic logging config for early errors before full setup
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        args = Application.parse_arguments(sys.argv[1:] if argv is None else argv)
        app = Application(args)
        app.run()
    except (FileNotFoundError, ValueError) as e:
        logging.getLogger("pdfparse").critical(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logging.getLogger("pdfparse").info("\nProcess interrupted by user. Exiting.")
        sys.exit(0)
    except Exception as e:
        logging.getLogger("pdfparse").critical(
            "\nError processing PDF: %s", e, exc_info=True
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
