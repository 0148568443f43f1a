import logging
from typing import List, Optional, Callable

from ..config import OutlineConfig
from ..schema import Section
from ..detectors.line_classifier import HeadingClassifier
from ..utils.text_cleaning import split_lines, clean_heading_title, is_underline

logger = logging.getLogger(__name__)


class PatternSegmenter:
    """
    Fallback segmentation for documents without a TOC.

    Walks every line once, asks the HeadingClassifier whether it is a heading
    (with one line of lookahead and lookback) and accumulates body lines under
    the most recent heading. Text before the first heading is dropped.
    """

    def __init__(self, config: OutlineConfig = None):
        self.config = config or OutlineConfig()

    def segment(self, text: str, next_id: Callable[[], str]) -> List[Section]:
        lines = split_lines(text)
        classifier = HeadingClassifier.for_lines(lines, self.config)

        sections: List[Section] = []
        current: Optional[Section] = None
        body: List[str] = []

        for i, raw in enumerate(lines):
            line = raw.strip()
            if not line or is_underline(line):
                continue

            next_line = lines[i + 1] if i < len(lines) - 1 else None
            prev_line = lines[i - 1] if i > 0 else None
            level = classifier.classify(line, next_line, prev_line)

            if level is not None:
                if current is not None:
                    current.content = "\n".join(body).strip()
                    sections.append(current)
                current = Section(
                    id=next_id(),
                    title=clean_heading_title(line),
                    level=level,
                    selected=self.config.SELECTED_BY_DEFAULT,
                )
                body = []
            elif current is not None:
                body.append(line)

        if current is not None:
            current.content = "\n".join(body).strip()
            sections.append(current)

        logger.info(f"PatternSegmenter: Detected {len(sections)} headings in {len(lines)} lines")
        return sections
