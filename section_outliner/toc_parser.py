import re
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .config import OutlineConfig
from .utils.text_cleaning import split_lines

logger = logging.getLogger(__name__)

_NUMBERING_RE = re.compile(r'^\d+(\.\d+)*\.?\s+')
_BULLET_RE = re.compile(r'^[•\-]\s+')
_ENTRY_START_RE = re.compile(r'^[A-Z0-9•]')
_HAS_LETTER_RE = re.compile(r'[A-Za-z]')


@dataclass
class TOCEntry:
    level: int
    title: str
    page: int
    raw_text: str
    line_index: int


@dataclass
class TOCResult:
    """Entries of a detected TOC block; body_start is the first line after the last entry."""
    entries: List[TOCEntry] = field(default_factory=list)
    header_index: int = -1
    body_start: int = 0


class TOCParser:
    """
    Finds a Table of Contents block in plain text and parses its entries.

    States: SEARCHING (looking for a TOC header line) -> IN_TOC (parsing
    "Title ..... 12" entries) -> DONE.
    """
    SEARCHING = "searching"
    IN_TOC = "in_toc"
    DONE = "done"

    def __init__(self, config: OutlineConfig = None):
        self.config = config or OutlineConfig()
        self._entry_pattern = re.compile(self.config.TOC_ENTRY_PATTERN)
        self._keywords = {k.lower() for k in self.config.TOC_KEYWORDS}
        self._fragment_endings = set(self.config.TOC_FRAGMENT_ENDINGS)

    def parse(self, text: str) -> Optional[TOCResult]:
        """
        Parse the TOC block of a document.

        Returns None when no TOC header is found or the block yields no
        entries, so the caller can try another strategy.
        """
        lines = split_lines(text)
        state = self.SEARCHING
        result = TOCResult()
        i = 0

        while state != self.DONE and i < len(lines):
            line = lines[i]

            if state == self.SEARCHING:
                if line.strip().lower() in self._keywords:
                    logger.info(f"TOC: Found header '{line.strip()}' at line {i}")
                    result.header_index = i
                    state = self.IN_TOC
                i += 1
                continue

            # IN_TOC
            if i - result.header_index > self.config.TOC_MAX_BLOCK_LINES:
                logger.debug(f"TOC: Block capped at line {i}")
                state = self.DONE
                break

            if not line.strip():
                i += 1
                continue

            entry = self.parse_entry(line, i)
            if entry:
                result.entries.append(entry)
            elif len(result.entries) >= self.config.TOC_MIN_ENTRIES_BEFORE_END:
                logger.debug(f"TOC: Block ended at line {i}: '{line.strip()[:60]}'")
                state = self.DONE
                break
            i += 1

        if result.header_index == -1:
            logger.info("TOC: No TOC header found.")
            return None
        if not result.entries:
            logger.info("TOC: Header found but no entries parsed.")
            return None

        # Body begins right after the last entry, not where scanning stopped
        result.body_start = result.entries[-1].line_index + 1
        logger.info(f"TOC: Parsed {len(result.entries)} entries; body starts at line {result.body_start}.")
        return result

    def parse_entry(self, line: str, line_index: int = -1) -> Optional[TOCEntry]:
        """Parse one "Title ..... page" line; None when it is not a TOC entry."""
        stripped = line.strip()
        if len(stripped) < 3:
            return None
        if not _ENTRY_START_RE.match(stripped):
            return None

        match = self._entry_pattern.match(stripped)
        if not match:
            return None

        page = int(match.group(2))
        if page < self.config.TOC_MIN_PAGE or page > self.config.TOC_MAX_PAGE:
            logger.debug(f"TOC: Rejected page {page} out of range: '{stripped}'")
            return None

        title = match.group(1).strip()
        title = re.sub(r'^\.+', '', title).strip()
        title = _NUMBERING_RE.sub('', title).strip()
        title = _BULLET_RE.sub('', title).strip()

        if not self._is_valid_title(title):
            return None

        return TOCEntry(
            level=self._infer_level(line),
            title=title,
            page=page,
            raw_text=line,
            line_index=line_index,
        )

    def _is_valid_title(self, title: str) -> bool:
        if len(title) < self.config.TOC_MIN_TITLE_CHARS or not _HAS_LETTER_RE.search(title):
            return False
        if len(title) > self.config.TOC_MAX_TITLE_CHARS:
            return False
        lower = title.lower()
        if lower in self._keywords or lower == 'page':
            return False
        # Prose fragments end in articles/prepositions; real titles rarely do
        last_word = lower.split()[-1]
        if last_word in self._fragment_endings:
            return False
        return True

    def _infer_level(self, raw_line: str) -> int:
        """Infer hierarchy level from leading indentation."""
        expanded = raw_line.expandtabs(self.config.TOC_TAB_WIDTH)
        leading = len(expanded) - len(expanded.lstrip(' '))
        if leading >= 4:
            return 3
        if leading >= 2:
            return 2
        return 1
