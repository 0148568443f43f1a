import logging
from typing import List, Optional

from .config import OutlineConfig
from .schema import Section, SectionTree, TextLine
from .toc_parser import TOCParser
from .detectors.font_headings import FontHeadingDetector
from .analyzers.boundary import ContentBoundaryFiller
from .analyzers.pattern_segmenter import PatternSegmenter
from .analyzers.html_segmenter import HtmlHeadingSegmenter
from .analyzers.hierarchy import HierarchyBuilder
from .utils.text_cleaning import split_lines

logger = logging.getLogger(__name__)


class ExtractionRun:
    """
    State owned by a single extraction: the section id counter.

    One run per document, so parallel extractions never share ids.
    """

    def __init__(self, prefix: str = OutlineConfig.SECTION_ID_PREFIX):
        self.prefix = prefix
        self._counter = 0
        self.strategy: Optional[str] = None

    def next_id(self) -> str:
        self._counter += 1
        return f"{self.prefix}-{self._counter}"

    @property
    def issued(self) -> int:
        return self._counter


class SectionExtractor:
    """
    Derives a section outline from extracted document text.

    Strategy order:
    1. Table of Contents + content boundary matching
    2. Font-size headings (PDF items only)
    3. Heading-pattern classification of plain lines
    The flat result is nested by HierarchyBuilder.
    """

    def __init__(self, config: OutlineConfig = None):
        self.config = config or OutlineConfig()
        self.toc_parser = TOCParser(self.config)
        self.boundary_filler = ContentBoundaryFiller(self.config)
        self.font_detector = FontHeadingDetector(self.config)
        self.pattern_segmenter = PatternSegmenter(self.config)
        self.html_segmenter = HtmlHeadingSegmenter(self.config)
        self.last_strategy: Optional[str] = None

    def extract_from_text(self, text: str) -> SectionTree:
        """Outline for plain text (DOCX raw text, TXT, CSV, JSON)."""
        return self._extract(text, items=None)

    def extract_from_pdf_items(self, text: str, items: List[TextLine]) -> SectionTree:
        """Outline for a PDF given its text and positioned font-size runs."""
        return self._extract(text, items=items or [])

    def extract_from_html(self, html: str) -> SectionTree:
        """Outline from heading tags of DOCX-converted HTML."""
        run = ExtractionRun(self.config.SECTION_ID_PREFIX)
        sections = self.html_segmenter.segment(html, run.next_id)
        self.last_strategy = "html" if sections else None
        return HierarchyBuilder.build(sections)

    def extract_pdf(self, pdf_path: str) -> SectionTree:
        """Read a PDF with PyMuPDF and outline it."""
        from .utils.pdf_reader import read_pdf
        text, items = read_pdf(pdf_path, self.config)
        return self.extract_from_pdf_items(text, items)

    def _extract(self, text: str, items: Optional[List[TextLine]]) -> SectionTree:
        run = ExtractionRun(self.config.SECTION_ID_PREFIX)
        if not text or not text.strip():
            logger.info("Extractor: Empty document, no sections.")
            self.last_strategy = None
            return SectionTree()

        sections = self._detect_sections(text, items, run)
        self.last_strategy = run.strategy
        logger.info(f"Extractor: {len(sections)} sections via {run.strategy}")
        return HierarchyBuilder.build(sections)

    def _detect_sections(self, text: str, items: Optional[List[TextLine]], run: ExtractionRun) -> List[Section]:
        # 1. Table of Contents
        toc = self.toc_parser.parse(text)
        if toc:
            sections = [
                Section(
                    id=run.next_id(),
                    title=entry.title,
                    level=entry.level,
                    page_number=entry.page,
                    selected=self.config.SELECTED_BY_DEFAULT,
                )
                for entry in toc.entries
            ]
            run.strategy = "toc"
            return self.boundary_filler.fill(sections, split_lines(text), toc.body_start)

        # 2. Font sizes (PDF only)
        if items is not None:
            sections = self.font_detector.detect(items, run.next_id)
            if sections:
                run.strategy = "font"
                return sections
            if not self.config.ENABLE_PATTERN_FALLBACK_FOR_PDF:
                run.strategy = None
                return []
            logger.info("Extractor: No font headings, falling back to pattern segmentation.")

        # 3. Heading patterns
        sections = self.pattern_segmenter.segment(text, run.next_id)
        run.strategy = "pattern" if sections else None
        return sections
