#!/usr/bin/env python3
"""
core/log_utils.py: Logging setup shared by the command-line tools.

This module contains:
- setup_logging: Configures console/file handlers and per-topic debug levels.
- RichLogFormatter: A custom logging formatter for colorful console output.
- ContextFilter: A logging filter to add contextual data (like the page being
  processed) to log records.
"""

import logging

PROJECT_TOPICS = {
    "pdfparse": {"layout", "structure", "reconstruct", "reader", "api", "config"},
}


def setup_logging(
    project_name: str,
    level=logging.WARNING,
    color_logs=False,
    debug_topics=None,
    log_file: str = None,
):
    """Configures logging for the application."""
    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        for h in root_logger.handlers[:]:
            root_logger.removeHandler(h)
            h.close()

    context_filter = ContextFilter()

    # Console Handler (always enabled, writes to stderr)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(RichLogFormatter(use_color=color_logs))
    console_handler.addFilter(context_filter)
    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)

    # File Handler (optional)
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="w")
            # File logs should not be colored
            file_handler.setFormatter(RichLogFormatter(use_color=False))
            file_handler.addFilter(context_filter)
            root_logger.addHandler(file_handler)
            logging.getLogger(project_name).info("Logging to file: %s", log_file)
        except IOError as e:
            logging.getLogger(project_name).error(
                "Could not open log file %s: %s", log_file, e
            )

    # Silence noisy libraries
    logging.getLogger("pdfminer").setLevel(logging.WARNING)

    if debug_topics:
        valid_topics = PROJECT_TOPICS.get(project_name, set())
        user_topics = [t.strip() for t in debug_topics.split(",")]
        if "all" in user_topics:
            topics_to_set = valid_topics
        else:
            topics_to_set = {
                full for u in user_topics for full in valid_topics if u and full.startswith(u)
            }
        for topic in topics_to_set:
            logging.getLogger(f"{project_name}.{topic}").setLevel(logging.DEBUG)
    return context_filter


class ContextFilter(logging.Filter):
    """
    A logging filter that injects contextual information into log records.
    """

    def __init__(self, context_str=""):
        super().__init__()
        self.context_str = context_str

    def filter(self, record):
        record.context = self.context_str
        return True


# --- CUSTOM LOGGING FORMATTER ---
class RichLogFormatter(logging.Formatter):
    """A custom logging formatter for colorful, aligned console output.

    Each line is prefixed with a color-coded level and the logger's topic
    (the part of the logger name after the project name).

    Args:
        use_color (bool): If True, ANSI color codes are used. Defaults to False.
    """

    def __init__(self, use_color=False):
        super().__init__()
        if use_color:
            # ANSI escape codes for 256-color terminal
            self.COLORS = {
                logging.DEBUG: "\033[38;5;252m",  # Light Grey
                logging.INFO: "\033[38;5;111m",  # Pastel Blue
                logging.WARNING: "\033[38;5;229m",  # Pale Yellow
                logging.ERROR: "\033[38;5;210m",  # Soft Red
                logging.CRITICAL: "\033[38;5;217m",  # Light Magenta
            }
            self.BOLD = "\033[1m"
            self.RESET = "\033[0m"
        else:
            self.COLORS = {}
            self.BOLD = ""
            self.RESET = ""

    def format(self, record):
        color = self.COLORS.get(record.levelno, self.RESET)
        level_name = record.levelname[:5]

        name_parts = record.name.split(".")
        topic = name_parts[1][:6] if len(name_parts) > 1 else record.name[:6]

        has_ctx = hasattr(record, "context") and record.context
        context_str = f"[{record.context}]" if has_ctx else ""

        prefix = (
            f"{color}{level_name:<5}{self.RESET}:"
            f"{self.BOLD}{topic:<6}{self.RESET}{context_str}: "
        )
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        lines = message.split("\n")
        return "\n".join([f"{prefix}{line}" for line in lines])
