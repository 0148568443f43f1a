from .config import OutlineConfig
from .schema import Section, SectionTree, TextLine
from .extractor import SectionExtractor, ExtractionRun
from .selection import get_selected_content, count_selected

__all__ = [
    "SectionExtractor",
    "ExtractionRun",
    "OutlineConfig",
    "Section",
    "SectionTree",
    "TextLine",
    "get_selected_content",
    "count_selected",
]
