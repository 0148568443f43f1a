import re
import logging
from dataclasses import dataclass
from typing import List, Optional, Callable, Tuple, Iterable

from ..config import OutlineConfig
from ..utils.text_cleaning import UNDERLINE_RE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineContext:
    """A candidate line with its neighbours and the document's average line length."""
    text: str                      # trimmed candidate line
    next_line: Optional[str]
    prev_line: Optional[str]
    avg_line_length: float
    config: OutlineConfig


MARKDOWN_RE = re.compile(r'^(#{1,6})\s+')
ALL_CAPS_RE = re.compile(r"^[A-Z][A-Z\s&\-']{2,79}$")
MULTI_LEVEL_RE = re.compile(r'^(\d+(?:\.\d+)*\.?)\s+[A-Z]')
SIMPLE_NUMBER_RE = re.compile(r'^\d+\.?\s+[A-Z].{2,}$')
KEYWORD_RE = re.compile(r'^(Chapter|Section|Part|Article|Appendix)\s+[\dA-Z]+', re.IGNORECASE)
ROMAN_RE = re.compile(r'^[IVXLCDM]+\.\s+[A-Z]')
LETTER_RE = re.compile(r'^[A-Z]\.\s+[A-Z].{2,}$')
PAREN_LETTER_RE = re.compile(r'^\([a-z]\)\s+[A-Z].{2,}$', re.IGNORECASE)
COLON_RE = re.compile(r'^[A-Z].{3,50}:$')
BOLD_RE = re.compile(r'^\*\*[^*]+\*\*$|^__[^_]+__$')


def markdown_heading(ctx: LineContext) -> Optional[int]:
    match = MARKDOWN_RE.match(ctx.text)
    return len(match.group(1)) if match else None


def all_caps_heading(ctx: LineContext) -> Optional[int]:
    if ALL_CAPS_RE.match(ctx.text) and len(ctx.text) <= ctx.config.MAX_ALL_CAPS_CHARS:
        return 1
    return None


def multi_level_numbered(ctx: LineContext) -> Optional[int]:
    # Every dot in the numbering counts, a trailing one included: "1." -> 2, "1.1" -> 2
    match = MULTI_LEVEL_RE.match(ctx.text)
    if not match:
        return None
    dots = match.group(1).count('.')
    return min(dots + 1, ctx.config.MAX_HEADING_LEVEL)


def simple_numbered(ctx: LineContext) -> Optional[int]:
    return 2 if SIMPLE_NUMBER_RE.match(ctx.text) else None


def structural_keyword(ctx: LineContext) -> Optional[int]:
    return 1 if KEYWORD_RE.match(ctx.text) else None


def roman_numeral(ctx: LineContext) -> Optional[int]:
    return 2 if ROMAN_RE.match(ctx.text) else None


def letter_prefix(ctx: LineContext) -> Optional[int]:
    if LETTER_RE.match(ctx.text) or PAREN_LETTER_RE.match(ctx.text):
        return 3
    return None


def title_case(ctx: LineContext) -> Optional[int]:
    cfg = ctx.config
    text = ctx.text
    words = text.split()
    capitalized = [w for w in words if w[0].isupper()]
    if (len(text) < ctx.avg_line_length * cfg.TITLE_CASE_LENGTH_RATIO
            and cfg.TITLE_CASE_MIN_WORDS <= len(words) <= cfg.TITLE_CASE_MAX_WORDS
            and len(capitalized) >= len(words) * cfg.TITLE_CASE_CAPITALIZED_RATIO
            and not text.endswith('.')
            and not text.endswith(',')):
        return 2
    return None


def trailing_colon(ctx: LineContext) -> Optional[int]:
    if COLON_RE.match(ctx.text) and len(ctx.text) < ctx.avg_line_length * ctx.config.COLON_HEADING_LENGTH_RATIO:
        return 2
    return None


def domain_keyword(ctx: LineContext) -> Optional[int]:
    lower = ctx.text.lower()
    for keyword in ctx.config.HEADING_KEYWORDS:
        if lower == keyword or lower.startswith(keyword + ' '):
            return 2
    return None


def short_line_before_long(ctx: LineContext) -> Optional[int]:
    cfg = ctx.config
    text = ctx.text
    if (len(text) < ctx.avg_line_length * cfg.SHORT_LINE_LENGTH_RATIO
            and len(text) >= cfg.SHORT_LINE_MIN_CHARS
            and ctx.next_line is not None
            and len(ctx.next_line.strip()) > len(text) * cfg.SHORT_LINE_NEXT_RATIO
            and text[0].isupper()):
        return 2
    return None


def underlined(ctx: LineContext) -> Optional[int]:
    if ctx.next_line is None:
        return None
    underline = ctx.next_line.strip()
    if not UNDERLINE_RE.match(underline):
        return None
    return 1 if underline[0] == '=' else 2


def bold_wrapped(ctx: LineContext) -> Optional[int]:
    return 2 if BOLD_RE.match(ctx.text) else None


Rule = Tuple[str, Callable[[LineContext], Optional[int]]]

# Evaluated top to bottom; the first rule returning a level wins
HEADING_RULES: List[Rule] = [
    ("markdown", markdown_heading),
    ("all_caps", all_caps_heading),
    ("multi_level_numbered", multi_level_numbered),
    ("simple_numbered", simple_numbered),
    ("structural_keyword", structural_keyword),
    ("roman_numeral", roman_numeral),
    ("letter_prefix", letter_prefix),
    ("title_case", title_case),
    ("trailing_colon", trailing_colon),
    ("domain_keyword", domain_keyword),
    ("short_line_before_long", short_line_before_long),
    ("underlined", underlined),
    ("bold_wrapped", bold_wrapped),
]


def average_line_length(lines: Iterable[str]) -> float:
    """Mean trimmed length over non-empty lines; 0.0 for a blank document."""
    lengths = [len(l.strip()) for l in lines if l.strip()]
    return sum(lengths) / len(lengths) if lengths else 0.0


class HeadingClassifier:
    """
    Decides whether a line is a heading and at which level (1-6).

    The result depends only on the line, its neighbours and the document
    average passed at construction; the classifier holds no other state.
    """

    def __init__(self, avg_line_length: float, config: OutlineConfig = None, rules: List[Rule] = None):
        self.config = config or OutlineConfig()
        self.avg_line_length = avg_line_length
        self.rules = rules if rules is not None else HEADING_RULES

    @classmethod
    def for_lines(cls, lines: List[str], config: OutlineConfig = None) -> "HeadingClassifier":
        return cls(average_line_length(lines), config)

    def classify(self, line: str, next_line: Optional[str] = None, prev_line: Optional[str] = None) -> Optional[int]:
        level, _ = self.explain(line, next_line, prev_line)
        return level

    def explain(self, line: str, next_line: Optional[str] = None,
                prev_line: Optional[str] = None) -> Tuple[Optional[int], Optional[str]]:
        """Like classify, but also returns the name of the rule that fired."""
        text = line.strip()
        if len(text) < self.config.MIN_HEADING_CHARS or len(text) > self.config.MAX_HEADING_CHARS:
            return None, None

        ctx = LineContext(
            text=text,
            next_line=next_line,
            prev_line=prev_line,
            avg_line_length=self.avg_line_length,
            config=self.config,
        )
        for name, rule in self.rules:
            level = rule(ctx)
            if level is not None:
                return level, name
        return None, None
