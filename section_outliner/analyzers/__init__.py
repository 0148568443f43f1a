from .boundary import ContentBoundaryFiller, TitleMatcher
from .pattern_segmenter import PatternSegmenter
from .html_segmenter import HtmlHeadingSegmenter
from .hierarchy import HierarchyBuilder

__all__ = [
    "ContentBoundaryFiller",
    "TitleMatcher",
    "PatternSegmenter",
    "HtmlHeadingSegmenter",
    "HierarchyBuilder",
]
