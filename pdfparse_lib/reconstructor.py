"""
pdfparse_lib/reconstructor.py: Builds the section tree from classified
headings and attributes body text to the sections.
"""
import logging

from .models import DocumentStructure, Section

log_reconstruct = logging.getLogger("pdfparse.reconstruct")


def _find_in_last_chain(section, target_level):
    """Follows the most recently added child at each depth."""
    while section is not None:
        if section.level == target_level:
            return section
        section = section.last_sub_section
    return None


def find_parent(roots, level):
    """
    Finds the section a heading of `level` should be attached to.

    Roots are tried from the last one backwards; within a root only the
    chain of last children is searched. Returns None if no section at
    `level - 1` is on any of those chains.
    """
    target_level = level - 1
    for root in reversed(roots):
        parent = _find_in_last_chain(root, target_level)
        if parent is not None:
            return parent
    return None


class HierarchyBuilder:
    """Assembles a section tree from a flat, document-ordered heading list."""

    def build(self, headings, contents=None) -> list[Section]:
        roots = []
        for i, heading in enumerate(headings):
            content = contents[i] if contents else ""
            section = Section(heading.text, heading.level, content)
            if heading.level == 1:
                roots.append(section)
                continue
            parent = find_parent(roots, heading.level)
            if parent is None:
                log_reconstruct.debug(
                    "No level %d ancestor for '%s' (H%d). Adding as a root.",
                    heading.level - 1,
                    heading.text,
                    heading.level,
                )
                roots.append(section)
            else:
                parent.add_sub_section(section)
        return roots


def assign_content(headings, lines) -> list[str]:
    """
    Returns the body text of each heading's section.

    Section `i` gets every line strictly between heading `i` and heading
    `i + 1` in document order, whatever their levels. Lines before the first
    heading belong to no section.
    """
    contents = [[] for _ in headings]
    if not headings:
        return []
    idx, skipped = -1, 0
    for line in lines:
        key = line.sort_key
        while idx + 1 < len(headings) and key >= headings[idx + 1].sort_key:
            idx += 1
        if idx < 0:
            skipped += 1
            continue
        if key == headings[idx].sort_key:
            continue
        contents[idx].append(line.text.strip())
    if skipped:
        log_reconstruct.debug("%d lines precede the first heading.", skipped)
    return ["\n".join(parts).strip() for parts in contents]


class DocumentReconstructor:
    """Turns classified headings and body lines into a DocumentStructure."""

    def __init__(self):
        self.builder = HierarchyBuilder()

    def build(self, headings, lines, title=None) -> DocumentStructure:
        logging.getLogger("pdfparse").info(
            "--- Reconstructing Outline from %d Headings ---", len(headings)
        )
        document = DocumentStructure(title)
        if not headings:
            document.content = "\n".join(line.text.strip() for line in lines).strip()
            return document
        contents = assign_content(headings, lines)
        document.sections = self.builder.build(headings, contents)
        log_reconstruct.debug("Outline has %d root sections.", len(document.sections))
        return document
