import logging
from typing import Dict

from .config import OutlineConfig
from .schema import SectionTree, is_placeholder

logger = logging.getLogger(__name__)


def get_selected_content(tree: SectionTree, config: OutlineConfig = None) -> str:
    """
    Concatenate selected sections as "## title" blocks for AI context.

    Pre-order over the whole tree: a deselected parent still contributes its
    selected descendants. Sections holding the extraction-failure placeholder
    are left out unless INCLUDE_UNEXTRACTED_IN_CONTEXT is set.
    """
    config = config or OutlineConfig()
    parts = []
    skipped = 0
    for section in tree:
        if not section.selected:
            continue
        if is_placeholder(section.content) and not config.INCLUDE_UNEXTRACTED_IN_CONTEXT:
            skipped += 1
            continue
        parts.append(f"\n\n## {section.title}\n\n{section.content}")

    if skipped:
        logger.info(f"Selection: Skipped {skipped} selected sections without extracted content")
    return "".join(parts).strip()


def count_selected(tree: SectionTree) -> Dict[str, int]:
    selected = 0
    total = 0
    for section in tree:
        total += 1
        if section.selected:
            selected += 1
    return {"selected": selected, "total": total}
