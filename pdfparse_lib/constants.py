"""
pdfparse_lib/constants.py: Layout tolerances and thresholds shared by the
extraction pipelines. Values can be overridden through the [Layout] section
of a config file (see config.py).
"""

# --- LINE ASSEMBLY ---
OUTLINE_LINE_TOLERANCE = 1.0  # pt, baseline tolerance for the outline pipeline
PARAGRAPH_LINE_TOLERANCE = 2.0  # pt, baseline tolerance for the page pipeline

# --- HEADING CLASSIFICATION ---
# (minimum size delta over body text, level); checked in order, strict >
HEADING_LEVEL_THRESHOLDS = ((6.0, 1), (4.0, 2), (2.0, 3))
DEFAULT_HEADING_LEVEL = 4

# --- PARAGRAPH CLUSTERING ---
GAP_NOISE_FLOOR = 0.5  # gaps at or below this are treated as same-line jitter
DEFAULT_MEDIAN_GAP = 12.0
PARAGRAPH_BREAK_FACTOR = 1.5
FRAGMENT_BREAK_TOLERANCE = 2.0  # baseline delta that becomes a newline
WORD_GAP_TOLERANCE = 2.0  # horizontal gap that becomes a space
UNKNOWN_FONT = "Unknown"

# --- REGIONS ---
REGION_NAMES = ("content", "topLeft", "topRight", "bottomLeft", "bottomRight")

# --- SETTINGS REGISTRY ---
LAYOUT_DEFAULTS = {
    "outline_line_tolerance": OUTLINE_LINE_TOLERANCE,
    "paragraph_line_tolerance": PARAGRAPH_LINE_TOLERANCE,
    "gap_noise_floor": GAP_NOISE_FLOOR,
    "default_median_gap": DEFAULT_MEDIAN_GAP,
    "paragraph_break_factor": PARAGRAPH_BREAK_FACTOR,
    "fragment_break_tolerance": FRAGMENT_BREAK_TOLERANCE,
    "word_gap_tolerance": WORD_GAP_TOLERANCE,
}
