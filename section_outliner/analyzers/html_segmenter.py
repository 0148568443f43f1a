import re
import logging
from typing import List, Optional, Callable

from bs4 import BeautifulSoup

from ..config import OutlineConfig
from ..schema import Section

logger = logging.getLogger(__name__)

HEADING_TAG_RE = re.compile(r'^h([1-6])$')
LIST_TAGS = {"ul", "ol", "dl"}


class HtmlHeadingSegmenter:
    """
    Structural segmentation of DOCX-derived HTML.

    Heading tags h1..h6 open sections at the tag's level; the text of the
    following top-level block elements, up to the next heading, becomes the
    content (blocks joined by a blank line).
    """

    def __init__(self, config: OutlineConfig = None):
        self.config = config or OutlineConfig()

    def segment(self, html: str, next_id: Callable[[], str]) -> List[Section]:
        if not html or not html.strip():
            return []

        soup = BeautifulSoup(html, "html.parser")
        container = soup.body or soup

        sections: List[Section] = []
        current: Optional[Section] = None
        blocks: List[str] = []

        def close():
            if current is not None:
                current.content = "\n\n".join(blocks)
                sections.append(current)

        for element in container.find_all(recursive=False):
            text = self._block_text(element)
            match = HEADING_TAG_RE.match(element.name or "")
            if match:
                close()
                section_id = next_id()
                current = Section(
                    id=section_id,
                    title=text or f"Section {section_id.rsplit('-', 1)[-1]}",
                    level=int(match.group(1)),
                    selected=self.config.SELECTED_BY_DEFAULT,
                )
                blocks = []
            elif current is not None and text:
                blocks.append(text)
        close()

        logger.info(f"HtmlSegmenter: Extracted {len(sections)} sections from heading tags")
        return sections

    @staticmethod
    def _block_text(element) -> str:
        # Inline tags keep their text joined; list items go on their own lines
        if element.name in LIST_TAGS:
            entries = element.find_all(["li", "dt", "dd"], recursive=False)
            items = [item.get_text().strip() for item in entries]
            return "\n".join(item for item in items if item)
        return element.get_text().strip()
