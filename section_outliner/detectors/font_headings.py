import logging
from typing import List, Dict, Optional, Callable

from ..config import OutlineConfig
from ..schema import TextLine, Section

logger = logging.getLogger(__name__)


class FontHeadingDetector:
    """
    Detects headings in PDF text by font size.

    Pipeline:
    1. Merge positioned items into lines (same page, |dy| within tolerance)
    2. Threshold = mean item font size * FONT_HEADING_RATIO
    3. Lines at or above the threshold with a sane length are headings
    4. Body lines accumulate under the preceding heading

    Distinct heading sizes are ranked into levels, biggest first.
    """

    def __init__(self, config: OutlineConfig = None):
        self.config = config or OutlineConfig()

    def _size(self, item: TextLine) -> float:
        if item.font_size is None or item.font_size <= 0:
            return self.config.DEFAULT_FONT_SIZE
        return float(item.font_size)

    def group_lines(self, items: List[TextLine]) -> List[TextLine]:
        """Merge consecutive items on the same visual line."""
        lines: List[TextLine] = []
        parts: List[str] = []
        current: Optional[TextLine] = None
        last_y: Optional[float] = None

        for item in items:
            y = item.y_position if item.y_position is not None else last_y
            same_line = (
                current is not None
                and item.page_number == current.page_number
                and (y is None or last_y is None or abs(y - last_y) <= self.config.FONT_LINE_Y_TOLERANCE)
            )
            if same_line:
                parts.append(item.text)
                current.font_size = max(current.font_size, self._size(item))
            else:
                if current is not None:
                    current.text = " ".join(p.strip() for p in parts if p.strip())
                    lines.append(current)
                current = TextLine(
                    text="",
                    page_number=item.page_number,
                    font_size=self._size(item),
                    y_position=y,
                )
                parts = [item.text]
            last_y = y

        if current is not None:
            current.text = " ".join(p.strip() for p in parts if p.strip())
            lines.append(current)

        return [l for l in lines if l.text]

    def threshold(self, items: List[TextLine]) -> float:
        if not items:
            return 0.0
        avg = sum(self._size(i) for i in items) / len(items)
        return avg * self.config.FONT_HEADING_RATIO

    def is_heading(self, line: TextLine, threshold: float) -> bool:
        length = len(line.text.strip())
        return (line.font_size >= threshold
                and self.config.FONT_HEADING_MIN_CHARS <= length <= self.config.FONT_HEADING_MAX_CHARS)

    def detect(self, items: List[TextLine], next_id: Callable[[], str]) -> List[Section]:
        """Build flat sections from positioned items; ids come from next_id in document order."""
        if not items:
            return []

        threshold = self.threshold(items)
        lines = self.group_lines(items)
        headings = [l for l in lines if self.is_heading(l, threshold)]
        logger.info(f"FontHeadings: {len(lines)} lines, threshold {threshold:.2f}, {len(headings)} heading candidates")
        if not headings:
            return []

        levels = self._rank_levels(headings)
        sections: List[Section] = []
        current: Optional[Section] = None
        body: List[str] = []

        def close():
            if current is not None and body:
                current.content = "\n".join(body).strip()
                current.id = next_id()
                sections.append(current)

        for line in lines:
            if self.is_heading(line, threshold):
                close()
                current = Section(
                    id="",
                    title=line.text.strip(),
                    level=levels[line.font_size],
                    page_number=line.page_number,
                    selected=self.config.SELECTED_BY_DEFAULT,
                )
                body = []
            elif current is not None:
                body.append(line.text.strip())
        close()

        logger.info(f"FontHeadings: Emitted {len(sections)} sections")
        return sections

    def _rank_levels(self, headings: List[TextLine]) -> Dict[float, int]:
        sizes = sorted({h.font_size for h in headings}, reverse=True)
        max_level = self.config.FONT_MAX_HEADING_LEVELS
        return {size: min(rank + 1, max_level) for rank, size in enumerate(sizes)}
