# Configuration for section outline extraction.

class OutlineConfig:
    """Configuration for section outline extraction."""
    # Line classifier bounds
    MIN_HEADING_CHARS = 3                 # Shorter lines are never headings
    MAX_HEADING_CHARS = 100               # Longer lines are paragraphs
    MAX_ALL_CAPS_CHARS = 80
    MAX_HEADING_LEVEL = 6

    # Relative-length heuristics (fractions of the document's average line length)
    TITLE_CASE_LENGTH_RATIO = 0.7
    TITLE_CASE_MIN_WORDS = 2
    TITLE_CASE_MAX_WORDS = 12
    TITLE_CASE_CAPITALIZED_RATIO = 0.6
    COLON_HEADING_LENGTH_RATIO = 0.6
    SHORT_LINE_LENGTH_RATIO = 0.5
    SHORT_LINE_MIN_CHARS = 10
    SHORT_LINE_NEXT_RATIO = 1.5           # Next line must be this much longer

    HEADING_KEYWORDS = [
        'introduction', 'background', 'overview', 'summary', 'conclusion',
        'objective', 'purpose', 'scope', 'methodology', 'approach',
        'requirements', 'specifications', 'deliverables', 'timeline',
        'budget', 'costs', 'pricing', 'terms', 'conditions',
        'references', 'appendix', 'glossary', 'definitions'
    ]

    # TOC detection
    TOC_KEYWORDS = {
        'table of contents', 'contents', 'index',
        'table des matières', 'sommaire',      # French
        'índice', 'tabla de contenidos',       # Spanish/Portuguese
    }
    TOC_ENTRY_PATTERN = r'^(.+?)[\s.]{2,}(\d+)\s*$'
    TOC_MIN_PAGE = 1
    TOC_MAX_PAGE = 1000
    TOC_MIN_ENTRIES_BEFORE_END = 3        # Non-entry line ends the block after this many
    TOC_MAX_BLOCK_LINES = 100             # Safety bound from the TOC header
    TOC_MIN_TITLE_CHARS = 3
    TOC_MAX_TITLE_CHARS = 80
    TOC_TAB_WIDTH = 4
    TOC_FRAGMENT_ENDINGS = [
        'our', 'for', 'the', 'and', 'with', 'that', 'this', 'are', 'has',
        'have', 'its', 'from', 'into', 'upon', 'about', 'after', 'before',
        'under', 'over'
    ]

    # Content boundary matching
    CONTAINS_MIN_TITLE_CHARS = 5          # Strategy 2: line contains title
    CONTAINED_MIN_LINE_CHARS = 5          # Strategy 3: title contains line
    CONTAINED_MIN_RATIO = 0.5
    FUZZY_MIN_CHARS = 10                  # Strategy 4: both title and line longer than this
    FUZZY_MIN_WORD_CHARS = 3              # Only words longer than this count
    FUZZY_MATCH_RATIO = 0.6
    FUZZY_MIN_WORDS = 2
    ALL_WORDS_MIN_WORD_CHARS = 2          # Strategy 5
    ALL_WORDS_MIN_WORDS = 2
    ALL_WORDS_MAX_LINE_CHARS = 100        # Avoid matching whole paragraphs

    # Font-based heading detection (PDF)
    DEFAULT_FONT_SIZE = 12.0
    FONT_LINE_Y_TOLERANCE = 5.0
    FONT_HEADING_RATIO = 1.15             # Heading if size >= mean * ratio
    FONT_HEADING_MIN_CHARS = 10
    FONT_HEADING_MAX_CHARS = 100
    FONT_MAX_HEADING_LEVELS = 3           # Distinct heading sizes ranked into levels
    ENABLE_PATTERN_FALLBACK_FOR_PDF = True  # Pattern segmenter when no font headings
    PDF_SPAN_GAP_RATIO = 0.5              # Horizontal gap (x font size) joined with two spaces

    # Sections
    SECTION_ID_PREFIX = "section"
    SELECTED_BY_DEFAULT = True
    PLACEHOLDER_TEMPLATE = '[Content for "{title}" could not be extracted]'
    PLACEHOLDER_PATTERN = r'^\[Content for ".*" could not be extracted\]$'

    # Context assembly
    INCLUDE_UNEXTRACTED_IN_CONTEXT = False  # Sentinel sections never feed AI context
