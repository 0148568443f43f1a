import pytest

from section_outliner.config import OutlineConfig
from section_outliner.schema import Section


TOC_DOCUMENT = """Table of Contents
Introduction ..... 1
Background ..... 5
Conclusion ..... 20

Introduction
This report explains the project.
It has two lines.

Background
The background body.

Conclusion
Final remarks here.
"""


@pytest.fixture
def config():
    return OutlineConfig()


@pytest.fixture
def toc_document():
    return TOC_DOCUMENT


def make_sections(*rows):
    """Build flat sections from (title, level) or (title, level, content, selected) tuples."""
    sections = []
    for n, row in enumerate(rows, 1):
        title, level = row[0], row[1]
        content = row[2] if len(row) > 2 else ""
        selected = row[3] if len(row) > 3 else True
        sections.append(Section(id=f"section-{n}", title=title, level=level,
                                content=content, selected=selected))
    return sections


@pytest.fixture
def sections_factory():
    return make_sections
