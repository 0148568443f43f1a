import logging
from typing import List, Optional, Callable, Tuple

from ..config import OutlineConfig
from ..schema import Section, make_placeholder

logger = logging.getLogger(__name__)


class TitleMatcher:
    """
    Locates a section title inside body text.

    Five strategies, strongest first:
    1. Exact line equality
    2. Line contains the title
    3. Title contains the line (short lines)
    4. Fuzzy overlap of significant words
    5. Every title word appears in a short line

    A strategy is tried against every candidate line before the next, weaker
    one is considered. All comparisons are case-insensitive on trimmed text.
    """

    def __init__(self, config: OutlineConfig = None):
        self.config = config or OutlineConfig()
        self.strategies: List[Tuple[str, Callable[[str, str], bool]]] = [
            ("exact", self._exact),
            ("line_contains_title", self._line_contains_title),
            ("title_contains_line", self._title_contains_line),
            ("fuzzy_words", self._fuzzy_words),
            ("all_words", self._all_words),
        ]

    def locate(self, title: str, lines: List[str], start: int = 0) -> Optional[int]:
        """Index of the first line at or after start matching title, or None."""
        index, _ = self.locate_with_strategy(title, lines, start)
        return index

    def locate_with_strategy(self, title: str, lines: List[str], start: int = 0) -> Tuple[Optional[int], Optional[str]]:
        needle = title.lower().strip()
        if not needle:
            return None, None
        candidates = [(i, lines[i].lower().strip()) for i in range(max(start, 0), len(lines))]
        # Strategy-major: a stronger match further down beats a weaker one on an
        # earlier line, so topmost-wins only holds within a single strategy.
        for name, strategy in self.strategies:
            for i, line in candidates:
                if line and strategy(needle, line):
                    return i, name
        return None, None

    def _exact(self, title: str, line: str) -> bool:
        return line == title

    def _line_contains_title(self, title: str, line: str) -> bool:
        return len(title) > self.config.CONTAINS_MIN_TITLE_CHARS and title in line

    def _title_contains_line(self, title: str, line: str) -> bool:
        if len(line) <= self.config.CONTAINED_MIN_LINE_CHARS or line not in title:
            return False
        return len(line) / len(title) > self.config.CONTAINED_MIN_RATIO

    def _fuzzy_words(self, title: str, line: str) -> bool:
        cfg = self.config
        if len(title) <= cfg.FUZZY_MIN_CHARS or len(line) <= cfg.FUZZY_MIN_CHARS:
            return False
        title_words = [w for w in title.split() if len(w) > cfg.FUZZY_MIN_WORD_CHARS]
        line_words = [w for w in line.split() if len(w) > cfg.FUZZY_MIN_WORD_CHARS]
        if len(title_words) < cfg.FUZZY_MIN_WORDS:
            return False
        matching = [tw for tw in title_words if any(tw in lw or lw in tw for lw in line_words)]
        return len(matching) >= len(title_words) * cfg.FUZZY_MATCH_RATIO

    def _all_words(self, title: str, line: str) -> bool:
        cfg = self.config
        if len(line) >= cfg.ALL_WORDS_MAX_LINE_CHARS:
            return False
        title_words = [w for w in title.split() if len(w) > cfg.ALL_WORDS_MIN_WORD_CHARS]
        line_words = [w for w in line.split() if len(w) > cfg.ALL_WORDS_MIN_WORD_CHARS]
        if len(title_words) < cfg.ALL_WORDS_MIN_WORDS:
            return False
        return all(any(tw == lw or tw in lw or lw in tw for lw in line_words) for tw in title_words)


class ContentBoundaryFiller:
    """
    Fills the content of TOC-derived sections from the document body.

    Each section starts on the line after its title match and ends on the
    line where the next section's title matches (or at end of document).
    Titles are searched forward from the previous match, falling back to a
    full body rescan, which keeps the common case linear in document size.
    """

    def __init__(self, config: OutlineConfig = None, matcher: TitleMatcher = None):
        self.config = config or OutlineConfig()
        self.matcher = matcher or TitleMatcher(self.config)
        self._stats = {"located": 0, "missing": 0, "rescans": 0}

    def fill(self, sections: List[Section], lines: List[str], body_start: int = 0) -> List[Section]:
        if not sections:
            return sections

        self._stats = {"located": 0, "missing": 0, "rescans": 0}
        starts = self._locate_all(sections, lines, body_start)

        for i, section in enumerate(sections):
            start = starts[i]
            if start is None:
                logger.warning(f"Boundary: Could not find content for section '{section.title}'")
                section.content = make_placeholder(section.title)
                continue

            end = len(lines)
            if i < len(sections) - 1:
                next_start = starts[i + 1]
                if next_start is not None and next_start > start:
                    end = next_start

            body = [l for l in lines[start + 1:end] if l.strip()]
            section.content = "\n".join(body).strip()
            logger.debug(f"Boundary: '{section.title}' lines {start + 1}-{end} ({len(section.content)} chars)")

        logger.info(f"Boundary: Located {self._stats['located']}/{len(sections)} sections "
                    f"({self._stats['rescans']} full rescans).")
        return sections

    def _locate_all(self, sections: List[Section], lines: List[str], body_start: int) -> List[Optional[int]]:
        starts: List[Optional[int]] = []
        cursor = body_start
        for section in sections:
            index, strategy = self.matcher.locate_with_strategy(section.title, lines, cursor)
            if index is None and cursor > body_start:
                self._stats["rescans"] += 1
                index, strategy = self.matcher.locate_with_strategy(section.title, lines, body_start)

            if index is None:
                self._stats["missing"] += 1
            else:
                self._stats["located"] += 1
                logger.debug(f"Boundary: '{section.title}' matched line {index} via {strategy}")
                cursor = max(cursor, index + 1)
            starts.append(index)
        return starts

    def get_stats(self):
        return dict(self._stats)
