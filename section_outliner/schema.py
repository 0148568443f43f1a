import re
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional, Iterator, Tuple

from .config import OutlineConfig

_PLACEHOLDER_RE = re.compile(OutlineConfig.PLACEHOLDER_PATTERN, re.DOTALL)


@dataclass
class TextLine:
    """
    A positioned run of PDF text, or a merged line of such runs.

    font_size and y_position are None when the extractor could not supply them.
    """
    text: str
    page_number: int = 1
    font_size: Optional[float] = None
    y_position: Optional[float] = None


@dataclass
class Section:
    """
    Core Schema - one titled span of document content.

    Fields:
    - id: Unique per extraction run ("section-<n>"), assigned in document order
    - title: Cleaned heading text (no markdown, numbering or bold markers)
    - level: Relative nesting depth used only while building the tree
    - content: Body text, possibly empty or the extraction-failure placeholder
    - page_number: Set for TOC entries and PDF font headings
    - selected: Whether the section feeds AI context; independent per node
    """
    id: str
    title: str
    level: int
    content: str = ""
    page_number: Optional[int] = None
    selected: bool = True


def make_placeholder(title: str) -> str:
    """Content marker for a section whose body could not be located."""
    return OutlineConfig.PLACEHOLDER_TEMPLATE.format(title=title)


def is_placeholder(content: Optional[str]) -> bool:
    if not content:
        return False
    return bool(_PLACEHOLDER_RE.match(content.strip()))


class SectionTree:
    """
    Arena of sections addressed by id.

    Parent -> children links are id lists, so selection flags can be flipped
    on any node without copying the tree. Each section has exactly one parent
    (or is a root).
    """

    def __init__(self):
        self._sections: Dict[str, Section] = {}
        self._children: Dict[str, List[str]] = {}
        self._parent: Dict[str, Optional[str]] = {}
        self.root_ids: List[str] = []

    def add(self, section: Section, parent_id: Optional[str] = None) -> Section:
        if section.id in self._sections:
            raise ValueError(f"Duplicate section id: {section.id}")
        if parent_id is not None and parent_id not in self._sections:
            raise KeyError(f"Unknown parent section: {parent_id}")

        self._sections[section.id] = section
        self._children[section.id] = []
        self._parent[section.id] = parent_id
        if parent_id is None:
            self.root_ids.append(section.id)
        else:
            self._children[parent_id].append(section.id)
        return section

    def get(self, section_id: str) -> Section:
        return self._sections[section_id]

    def __contains__(self, section_id: str) -> bool:
        return section_id in self._sections

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[Section]:
        for section, _ in self.walk():
            yield section

    @property
    def roots(self) -> List[Section]:
        return [self._sections[i] for i in self.root_ids]

    def children(self, section_id: str) -> List[Section]:
        return [self._sections[i] for i in self._children[section_id]]

    def parent(self, section_id: str) -> Optional[Section]:
        parent_id = self._parent[section_id]
        return self._sections[parent_id] if parent_id is not None else None

    def walk(self) -> Iterator[Tuple[Section, int]]:
        """Pre-order traversal yielding (section, depth); roots have depth 0."""
        stack = [(i, 0) for i in reversed(self.root_ids)]
        while stack:
            section_id, depth = stack.pop()
            yield self._sections[section_id], depth
            for child_id in reversed(self._children[section_id]):
                stack.append((child_id, depth + 1))

    # Selection is the only mutation allowed after the tree is built
    def set_selected(self, section_id: str, selected: bool) -> None:
        self._sections[section_id].selected = selected

    def toggle(self, section_id: str) -> bool:
        section = self._sections[section_id]
        section.selected = not section.selected
        return section.selected

    def select_all(self, selected: bool = True) -> None:
        for section in self._sections.values():
            section.selected = selected

    def selected_ids(self) -> List[str]:
        return [s.id for s in self if s.selected]

    def to_dict(self) -> List[Dict[str, Any]]:
        """Nested JSON shape: each section dict carries a 'children' list."""
        def build(section_id: str) -> Dict[str, Any]:
            data = asdict(self._sections[section_id])
            if data.get('page_number') is None:
                data.pop('page_number')
            data['children'] = [build(c) for c in self._children[section_id]]
            return data
        return [build(i) for i in self.root_ids]

    @classmethod
    def from_dict(cls, data: List[Dict[str, Any]]) -> "SectionTree":
        tree = cls()

        def load(node: Dict[str, Any], parent_id: Optional[str]):
            section = Section(
                id=node['id'],
                title=node.get('title', ''),
                level=int(node.get('level', 1)),
                content=node.get('content', ''),
                page_number=node.get('page_number'),
                selected=bool(node.get('selected', True)),
            )
            tree.add(section, parent_id)
            for child in node.get('children') or []:
                load(child, section.id)

        for node in data:
            load(node, None)
        return tree
