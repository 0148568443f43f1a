import logging
from typing import Dict, Any, Optional

from ..schema import SectionTree, is_placeholder

logger = logging.getLogger(__name__)

STATUS_EMPTY = "empty"
STATUS_FAILED = "extraction-failed"
STATUS_OK = "ok"


def content_status(content: Optional[str]) -> str:
    """Classify section content as empty, extraction-failed or ok."""
    if not content or not content.strip():
        return STATUS_EMPTY
    if is_placeholder(content):
        return STATUS_FAILED
    return STATUS_OK


def count_words(content: Optional[str]) -> int:
    """Whitespace word count; the extraction-failure placeholder counts as zero."""
    if content_status(content) != STATUS_OK:
        return 0
    return len(content.split())


class SelectionStats:
    """
    Collects outline statistics for the section picker and context budget.
    """

    @staticmethod
    def calculate(tree: SectionTree) -> Dict[str, Any]:
        total = 0
        selected = 0
        selected_words = 0
        selected_chars = 0
        total_words = 0
        failed = 0
        max_depth = 0

        for section, depth in tree.walk():
            total += 1
            max_depth = max(max_depth, depth + 1)
            status = content_status(section.content)
            words = count_words(section.content)
            total_words += words
            if status == STATUS_FAILED:
                failed += 1
            if section.selected:
                selected += 1
                selected_words += words
                if status == STATUS_OK:
                    selected_chars += len(section.content.strip())

        return {
            "total_sections": total,
            "selected_sections": selected,
            "total_words": total_words,
            "selected_words": selected_words,
            "selected_chars": selected_chars,
            "extraction_failures": failed,
            "max_depth": max_depth,
        }
