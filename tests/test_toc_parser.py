import pytest

from section_outliner.toc_parser import TOCParser


@pytest.fixture
def parser(config):
    return TOCParser(config)


def test_parses_dotted_entries(parser, toc_document):
    result = parser.parse(toc_document)

    assert result is not None
    assert [e.title for e in result.entries] == ["Introduction", "Background", "Conclusion"]
    assert [e.page for e in result.entries] == [1, 5, 20]
    assert [e.level for e in result.entries] == [1, 1, 1]
    assert result.header_index == 0
    assert result.body_start == 4


def test_no_header_means_not_found(parser):
    assert parser.parse("Introduction ..... 1\nBackground ..... 5\nConclusion ..... 9") is None


def test_header_without_entries_means_not_found(parser):
    text = "Contents\nThis document has no real table of contents.\nJust prose follows."
    assert parser.parse(text) is None


def test_keywords_are_case_insensitive_and_multilingual(parser):
    for header in ["CONTENTS", "  Table Of Contents  ", "Table des matières", "Índice"]:
        result = parser.parse(f"{header}\nPreface ..... 3\nMain Part ..... 8")
        assert result is not None, header
        assert len(result.entries) == 2


@pytest.mark.parametrize("line", [
    "Introduction ..... 0",
    "Appendix ..... 1001",
])
def test_page_number_bounds(parser, line):
    assert parser.parse_entry(line) is None
    assert parser.parse(f"Contents\n{line}") is None


def test_page_number_bounds_inclusive(parser):
    assert parser.parse_entry("Foreword ..... 1").page == 1
    assert parser.parse_entry("Index Of Terms ..... 1000").page == 1000


@pytest.mark.parametrize("line", [
    "Services we offer for ..... 12",      # ends with a fragment word
    "see the appendix ..... 4",            # lowercase start
    "Introduction 1",                      # single separator char
    "Overview",                            # no page number
    "12 ..... 4",                          # no letters in the title
    "Page ..... 2",                        # repeated column header
])
def test_rejected_entries(parser, line):
    assert parser.parse_entry(line) is None


def test_title_cleanup(parser):
    assert parser.parse_entry("1.2 Scope of Work ..... 3").title == "Scope of Work"
    assert parser.parse_entry("• Overview ..... 2").title == "Overview"
    assert parser.parse_entry("Summary          14").title == "Summary"


def test_indentation_levels(parser):
    assert parser.parse_entry("Top Level ..... 1").level == 1
    assert parser.parse_entry(" Top Level ..... 1").level == 1
    assert parser.parse_entry("  Sub Item ..... 6").level == 2
    assert parser.parse_entry("   Sub Item ..... 6").level == 2
    assert parser.parse_entry("    Detail Item ..... 7").level == 3
    assert parser.parse_entry("\tDetail Item ..... 7").level == 3


def test_block_ends_after_three_entries(parser):
    text = "\n".join([
        "Contents",
        "Alpha Part ..... 1",
        "Beta Part ..... 2",
        "Gamma Part ..... 3",
        "Alpha Part",
        "Delta Part ..... 4",
    ])
    result = parser.parse(text)
    assert [e.title for e in result.entries] == ["Alpha Part", "Beta Part", "Gamma Part"]
    assert result.body_start == 4


def test_block_is_capped(parser):
    lines = ["Contents", "Alpha Part ..... 1", "Beta Part ..... 2"]
    lines += ["Lorem ipsum dolor sit amet prose line"] * 120
    lines.append("Late Entry ..... 9")
    result = parser.parse("\n".join(lines))

    assert [e.title for e in result.entries] == ["Alpha Part", "Beta Part"]
    assert result.body_start == 3


def test_blank_lines_inside_block_are_skipped(parser):
    text = "Contents\n\nAlpha Part ..... 1\n\nBeta Part ..... 2\n\nGamma Part ..... 3\n\nBody"
    result = parser.parse(text)
    assert len(result.entries) == 3
