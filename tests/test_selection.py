from section_outliner.analyzers.hierarchy import HierarchyBuilder
from section_outliner.config import OutlineConfig
from section_outliner.schema import make_placeholder, is_placeholder
from section_outliner.selection import get_selected_content, count_selected
from section_outliner.utils.metrics import SelectionStats, count_words, content_status


def test_deselected_parent_still_contributes_selected_child(sections_factory):
    tree = HierarchyBuilder.build(sections_factory(
        ("A", 1, "a body", False),
        ("B", 2, "b body", True),
    ))

    content = get_selected_content(tree)
    assert content == "## B\n\nb body"
    assert "## A" not in content


def test_selected_content_is_pre_order(sections_factory):
    tree = HierarchyBuilder.build(sections_factory(
        ("A", 1, "a body"), ("B", 2, "b body"), ("C", 1, "c body"),
    ))
    assert get_selected_content(tree) == "## A\n\na body\n\n## B\n\nb body\n\n## C\n\nc body"


def test_nothing_selected(sections_factory):
    tree = HierarchyBuilder.build(sections_factory(("A", 1, "a", False)))
    assert get_selected_content(tree) == ""


def test_count_selected(sections_factory):
    tree = HierarchyBuilder.build(sections_factory(
        ("A", 1, "", False), ("B", 2, ""), ("C", 3, ""), ("D", 1, "", False),
    ))
    assert count_selected(tree) == {"selected": 2, "total": 4}

    tree.toggle("section-1")
    tree.set_selected("section-2", False)
    assert count_selected(tree) == {"selected": 2, "total": 4}
    assert tree.selected_ids() == ["section-1", "section-3"]

    tree.select_all(False)
    assert count_selected(tree) == {"selected": 0, "total": 4}


def test_selection_is_independent_per_node(sections_factory):
    tree = HierarchyBuilder.build(sections_factory(("A", 1), ("B", 2)))
    tree.set_selected("section-1", False)
    assert tree.get("section-2").selected is True


def test_placeholder_contributes_no_words():
    placeholder = make_placeholder("Risk Register")
    assert placeholder == '[Content for "Risk Register" could not be extracted]'
    assert len(placeholder) > 0
    assert is_placeholder(placeholder)
    assert count_words(placeholder) == 0
    assert content_status(placeholder) == "extraction-failed"


def test_count_words_and_status():
    assert count_words("one two\nthree   four") == 4
    assert count_words("") == 0
    assert count_words(None) == 0
    assert content_status("   ") == "empty"
    assert content_status("text") == "ok"
    # Only the whole-content marker is a placeholder
    assert not is_placeholder('See [Content for "X" could not be extracted] above')


def test_placeholder_sections_are_left_out_of_context(sections_factory):
    tree = HierarchyBuilder.build(sections_factory(
        ("Found", 1, "real body"),
        ("Lost", 1, make_placeholder("Lost")),
    ))

    assert get_selected_content(tree) == "## Found\n\nreal body"
    assert count_selected(tree) == {"selected": 2, "total": 2}


def test_placeholder_sections_can_be_included(sections_factory):
    config = OutlineConfig()
    config.INCLUDE_UNEXTRACTED_IN_CONTEXT = True
    tree = HierarchyBuilder.build(sections_factory(("Lost", 1, make_placeholder("Lost"))))

    assert get_selected_content(tree, config) == '## Lost\n\n[Content for "Lost" could not be extracted]'


def test_selection_stats(sections_factory):
    tree = HierarchyBuilder.build(sections_factory(
        ("A", 1, "one two three"),
        ("B", 2, make_placeholder("B")),
        ("C", 3, "four five", False),
        ("D", 1, ""),
    ))

    assert SelectionStats.calculate(tree) == {
        "total_sections": 4,
        "selected_sections": 3,
        "total_words": 5,
        "selected_words": 3,
        "selected_chars": len("one two three"),
        "extraction_failures": 1,
        "max_depth": 3,
    }
