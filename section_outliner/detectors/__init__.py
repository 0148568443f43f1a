from .line_classifier import HeadingClassifier
from .font_headings import FontHeadingDetector

__all__ = ["HeadingClassifier", "FontHeadingDetector"]
