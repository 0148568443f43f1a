import re
from typing import List

# Heading decorations stripped from titles, applied in order
_TITLE_PREFIX_PATTERNS = [
    re.compile(r'^#{1,6}\s+'),             # Markdown #
    re.compile(r'^\d+(\.\d+)*\.?\s+'),     # 1 / 1.2 / 1.2.3.
    re.compile(r'^[IVXLCDM]+\.\s+'),       # Roman numerals
    re.compile(r'^[A-Z]\.\s+'),            # A. B. C.
    re.compile(r'^\([a-z]\)\s+', re.IGNORECASE),  # (a) (b)
]

UNDERLINE_RE = re.compile(r'^[=\-_]{3,}$')


def clean_text(text: str, collapse_spaces: bool = True) -> str:
    """
    Normalise whitespace in extracted document text.

    Runs of spaces/tabs collapse to one space, 3+ newlines collapse to a blank
    line, and spaces hugging a newline are removed. With collapse_spaces=False
    runs inside a line are kept, so space-filled TOC leaders survive.
    """
    if collapse_spaces:
        text = re.sub(r'[^\S\n]+', ' ', text)
    text = re.sub(r'\n{3,}', '\n\n', text)
    text = re.sub(r' +\n', '\n', text)
    text = re.sub(r'\n +', '\n', text)
    return text.strip()


def split_lines(text: str) -> List[str]:
    return text.replace('\r\n', '\n').replace('\r', '\n').split('\n')


def clean_heading_title(line: str) -> str:
    """Strip markdown, numbering, bold markers and a trailing colon from a heading line."""
    original = line.strip()
    title = original
    for pattern in _TITLE_PREFIX_PATTERNS:
        title = pattern.sub('', title)
    title = title.replace('**', '').replace('__', '')
    title = re.sub(r':$', '', title).strip()
    return title or original


def is_underline(line: str) -> bool:
    return bool(UNDERLINE_RE.match(line.strip()))
