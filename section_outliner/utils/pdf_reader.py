import fitz  # PyMuPDF
import logging
from typing import List, Tuple

from ..config import OutlineConfig
from ..schema import TextLine
from .text_cleaning import clean_text

logger = logging.getLogger(__name__)


def join_spans(spans: List[dict], config: OutlineConfig = None) -> str:
    """
    Join the spans of one PDF line.

    Spans separated by a visible horizontal gap get two spaces so that
    tab-stop TOC leaders still read as a filler; touching spans get one.
    """
    config = config or OutlineConfig()
    parts: List[str] = []
    prev = None
    for span in spans:
        if prev is not None:
            gap = span["bbox"][0] - prev["bbox"][2]
            size = prev.get("size") or config.DEFAULT_FONT_SIZE
            parts.append("  " if gap > size * config.PDF_SPAN_GAP_RATIO else " ")
        parts.append(span["text"].strip())
        prev = span
    return "".join(parts)


def read_pdf(pdf_path: str, config: OutlineConfig = None) -> Tuple[str, List[TextLine]]:
    """
    Extract plain text and positioned text runs from a PDF.

    Returns (text, items) where text has one line per PDF text line and items
    carry each span's font size, top y coordinate and 1-based page number.
    Spacing inside a line is preserved for TOC detection.
    PyMuPDF errors (missing or corrupt file) propagate to the caller.
    """
    config = config or OutlineConfig()
    items: List[TextLine] = []
    text_lines: List[str] = []

    doc = fitz.open(pdf_path)
    try:
        for page_num, page in enumerate(doc, 1):
            blocks = page.get_text("dict")["blocks"]
            for block in blocks:
                if block.get("type") != 0:
                    continue
                for line in block["lines"]:
                    spans = [s for s in line["spans"] if s["text"].strip()]
                    if not spans:
                        continue
                    text_lines.append(join_spans(spans, config))
                    for span in spans:
                        items.append(TextLine(
                            text=span["text"],
                            page_number=page_num,
                            font_size=span.get("size"),
                            y_position=span["bbox"][1],
                        ))
            text_lines.append("")
        logger.info(f"PDFReader: Read {len(doc)} pages, {len(items)} text runs from {pdf_path}")
    finally:
        doc.close()

    return clean_text("\n".join(text_lines), collapse_spaces=False), items
