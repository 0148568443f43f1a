import logging
from typing import List

from ..schema import Section, SectionTree

logger = logging.getLogger(__name__)


class HierarchyBuilder:
    """
    Converts a flat, ordered section list into a SectionTree.

    Single pass with an explicit stack of open sections: pop while the top's
    level is >= the current level; the remaining top (if any) becomes the
    parent. Level jumps (1 -> 3) attach to the nearest open ancestor.
    """

    @staticmethod
    def build(sections: List[Section]) -> SectionTree:
        tree = SectionTree()
        stack: List[Section] = []

        for section in sections:
            while stack and stack[-1].level >= section.level:
                stack.pop()
            parent_id = stack[-1].id if stack else None
            tree.add(section, parent_id)
            stack.append(section)

        logger.debug(f"Hierarchy: {len(sections)} sections -> {len(tree.root_ids)} roots")
        return tree
