from section_outliner.config import OutlineConfig
from section_outliner.extractor import SectionExtractor, ExtractionRun
from section_outliner.schema import TextLine, is_placeholder
from section_outliner.selection import get_selected_content, count_selected


def test_run_ids_are_sequential():
    run = ExtractionRun()
    assert [run.next_id(), run.next_id(), run.next_id()] == ["section-1", "section-2", "section-3"]
    assert run.issued == 3
    assert ExtractionRun().next_id() == "section-1"


def test_empty_input():
    extractor = SectionExtractor()
    assert len(extractor.extract_from_text("")) == 0
    assert len(extractor.extract_from_text("   \n\t \n")) == 0
    assert extractor.last_strategy is None


def test_toc_round_trip(toc_document):
    extractor = SectionExtractor()
    tree = extractor.extract_from_text(toc_document)

    roots = tree.roots
    assert extractor.last_strategy == "toc"
    assert [s.id for s in roots] == ["section-1", "section-2", "section-3"]
    assert [s.title for s in roots] == ["Introduction", "Background", "Conclusion"]
    assert [s.page_number for s in roots] == [1, 5, 20]
    assert roots[0].content == "This report explains the project.\nIt has two lines."
    assert roots[1].content == "The background body."
    assert roots[2].content == "Final remarks here."
    assert all(s.selected for s in roots)


def test_toc_indentation_nests_sections():
    text = "\n".join([
        "Contents",
        "Overview ..... 1",
        "  Goals ..... 2",
        "  Constraints ..... 3",
        "Delivery ..... 4",
        "",
        "Overview",
        "overview body",
        "Goals",
        "goals body",
        "Constraints",
        "constraints body",
        "Delivery",
        "delivery body",
    ])
    tree = SectionExtractor().extract_from_text(text)

    assert [s.title for s in tree.roots] == ["Overview", "Delivery"]
    assert [s.title for s in tree.children("section-1")] == ["Goals", "Constraints"]
    assert tree.get("section-3").content == "constraints body"


def test_unlocatable_toc_entry_keeps_placeholder():
    text = "\n".join([
        "Table of Contents",
        "Introduction ..... 1",
        "Vanished Chapter ..... 3",
        "Closing Notes ..... 9",
        "",
        "Introduction",
        "intro body",
        "Closing Notes",
        "closing body",
    ])
    tree = SectionExtractor().extract_from_text(text)

    lost = tree.get("section-2")
    assert is_placeholder(lost.content)
    assert lost.page_number == 3
    assert lost.selected is True
    assert count_selected(tree) == {"selected": 3, "total": 3}
    assert "could not be extracted" not in get_selected_content(tree)


def test_markdown_fallback_builds_tree():
    extractor = SectionExtractor()
    tree = extractor.extract_from_text("# Title\n\nBody text\n\n## Sub\n\nMore text")

    assert extractor.last_strategy == "pattern"
    assert len(tree.roots) == 1
    root = tree.roots[0]
    assert (root.title, root.level, root.content) == ("Title", 1, "Body text")
    children = tree.children(root.id)
    assert [(c.title, c.level, c.content) for c in children] == [("Sub", 2, "More text")]


def test_pdf_items_use_font_sizes():
    items = [
        TextLine("Quarterly Report Title", page_number=1, font_size=20, y_position=50),
        TextLine("Body line one of text", page_number=1, font_size=10, y_position=100),
        TextLine("Market Analysis Part", page_number=2, font_size=18, y_position=40),
        TextLine("Analysis body", page_number=2, font_size=10, y_position=80),
    ]
    text = "Quarterly Report Title\nBody line one of text\nMarket Analysis Part\nAnalysis body"
    extractor = SectionExtractor()
    tree = extractor.extract_from_pdf_items(text, items)

    assert extractor.last_strategy == "font"
    assert [s.title for s in tree.roots] == ["Quarterly Report Title"]
    assert [s.title for s in tree.children("section-1")] == ["Market Analysis Part"]
    assert tree.get("section-2").page_number == 2


def test_pdf_toc_takes_priority_over_fonts(toc_document):
    items = [TextLine("Some Large Heading Text", page_number=1, font_size=30, y_position=0),
             TextLine("body", page_number=1, font_size=10, y_position=40)]
    extractor = SectionExtractor()
    tree = extractor.extract_from_pdf_items(toc_document, items)

    assert extractor.last_strategy == "toc"
    assert len(tree) == 3


def test_pdf_without_font_headings_falls_back_to_patterns():
    items = [TextLine("uniform text", page_number=1, font_size=11, y_position=0)]
    extractor = SectionExtractor()
    tree = extractor.extract_from_pdf_items("# Title\n\nBody text", items)

    assert extractor.last_strategy == "pattern"
    assert [s.title for s in tree.roots] == ["Title"]


def test_pdf_pattern_fallback_can_be_disabled():
    config = OutlineConfig()
    config.ENABLE_PATTERN_FALLBACK_FOR_PDF = False
    items = [TextLine("uniform text", page_number=1, font_size=11, y_position=0)]
    extractor = SectionExtractor(config)

    assert len(extractor.extract_from_pdf_items("# Title\n\nBody text", items)) == 0


def test_html_headings():
    html = ("<h1>Guide</h1><p>Intro para</p>"
            "<h2>Setup</h2><p>Step <b>one</b></p><p>Step two</p>"
            "<h1></h1><p>tail</p>")
    extractor = SectionExtractor()
    tree = extractor.extract_from_html(html)

    assert extractor.last_strategy == "html"
    assert [s.title for s in tree.roots] == ["Guide", "Section 3"]
    assert tree.roots[0].content == "Intro para"
    setup = tree.children("section-1")[0]
    assert (setup.title, setup.level, setup.content) == ("Setup", 2, "Step one\n\nStep two")
    assert tree.get("section-3").content == "tail"


def test_html_body_and_leading_content():
    html = "<html><body><p>preamble</p><h3>Only</h3><ul><li>a</li><li>b</li></ul></body></html>"
    tree = SectionExtractor().extract_from_html(html)

    assert len(tree) == 1
    assert tree.roots[0].level == 3
    assert tree.roots[0].content == "a\nb"


def test_html_inline_tags_do_not_split_words():
    html = "<h1>Intro</h1><p>Hel<b>lo</b> world, see <a href='#'>here</a>.</p>"
    tree = SectionExtractor().extract_from_html(html)

    assert tree.roots[0].content == "Hello world, see here."


def test_html_empty():
    assert len(SectionExtractor().extract_from_html("")) == 0


def test_each_extraction_restarts_ids():
    extractor = SectionExtractor()
    first = extractor.extract_from_text("# A\nbody")
    second = extractor.extract_from_text("# B\nbody")
    assert first.root_ids == ["section-1"]
    assert second.root_ids == ["section-1"]
