from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from utils.text import split_whitespace


EXCLUDED_TAGS = {
    "script",
    "style",
    "pre",
    "code",
    "kbd",
    "samp",
    "var",
    "math",
    "svg",
    "canvas",
    "iframe",
    "noscript",
}
# Anything below one of these is never translated
EXCLUDED_ANCESTOR_TAGS = {"script", "style", "pre", "code"}
NO_TRANSLATE_CLASS = "notranslate"
TRANSLATABLE_ATTRIBUTES = ("placeholder", "title", "alt")
TEXT = "text"


def _classes(element: Tag) -> List[str]:
    value = element.get("class") or []
    return value.split() if isinstance(value, str) else list(value)


def _is_excluded(element: Tag) -> bool:
    return (
        element.name in EXCLUDED_TAGS
        or element.has_attr("hidden")
        or element.get("translate") == "no"
        or NO_TRANSLATE_CLASS in _classes(element)
    )


def _ancestor_excluded(element: Tag | None) -> bool:
    while isinstance(element, Tag) and not isinstance(element, BeautifulSoup):
        if element.name in EXCLUDED_ANCESTOR_TAGS or NO_TRANSLATE_CLASS in _classes(element):
            return True
        element = element.parent
    return False


@dataclass(slots=True)
class TextSlot:
    """One translatable value in the page: a text node or a single attribute."""

    slot_id: int
    kind: str
    element: Tag
    node: NavigableString | None
    original: str

    @property
    def source_text(self) -> str:
        return split_whitespace(self.original)[1]

    def render(self, translated: str) -> str:
        leading, _, trailing = split_whitespace(self.original)
        return f"{leading}{translated}{trailing}"


class HTMLDocument:
    """Finds translatable text in an HTML page and remembers what it said originally.

    Originals are recorded the first time a slot is seen, so translating
    twice always starts from the source text and ``restore()`` undoes
    every change.
    """

    def __init__(self, markup: str, source_path: Path | None = None) -> None:
        self.soup = BeautifulSoup(markup, "html.parser")
        self.source_path = source_path
        self._next_id = 0
        self._text_slots: Dict[int, TextSlot] = {}
        self._attr_slots: Dict[Tuple[int, str], TextSlot] = {}

    @classmethod
    def from_file(cls, file_path: str | Path) -> "HTMLDocument":
        path = Path(file_path)
        return cls(path.read_text(encoding="utf-8"), source_path=path)

    @classmethod
    def from_string(cls, markup: str) -> "HTMLDocument":
        return cls(markup)

    @property
    def body(self) -> Tag:
        return self.soup.body or self.soup

    def _new_slot(self, kind: str, element: Tag, node: NavigableString | None, original: str) -> TextSlot:
        slot = TextSlot(slot_id=self._next_id, kind=kind, element=element, node=node, original=original)
        self._next_id += 1
        return slot

    def _iter_text_nodes(self, root: Tag) -> Iterable[NavigableString]:
        for node in root.find_all(string=True):
            if isinstance(node, PreformattedString):
                continue
            if not node.strip() or node.parent is None:
                continue
            if _ancestor_excluded(node.parent):
                continue
            yield node

    def _iter_attribute_elements(self, root: Tag) -> Iterable[Tag]:
        for element in root.find_all(True):
            if not any(element.get(attr) for attr in TRANSLATABLE_ATTRIBUTES):
                continue
            if _is_excluded(element) or _ancestor_excluded(element):
                continue
            yield element

    def collect(self, root: Tag | None = None) -> List[TextSlot]:
        """Return the translatable slots under ``root`` in document order, text nodes first."""
        root = root if root is not None else self.body
        slots: List[TextSlot] = []
        for node in self._iter_text_nodes(root):
            slot = self._text_slots.get(id(node))
            if slot is None:
                slot = self._new_slot(TEXT, node.parent, node, str(node))
                self._text_slots[id(node)] = slot
            slots.append(slot)
        for element in self._iter_attribute_elements(root):
            for attr in TRANSLATABLE_ATTRIBUTES:
                key = (id(element), attr)
                slot = self._attr_slots.get(key)
                if slot is None:
                    value = element.get(attr)
                    if not value:
                        continue
                    slot = self._new_slot(attr, element, None, value)
                    self._attr_slots[key] = slot
                slots.append(slot)
        return slots

    def iter_texts(self, slots: Sequence[TextSlot]) -> Iterable[str]:
        for slot in slots:
            yield slot.source_text

    def apply(self, slots: Sequence[TextSlot], translated_texts: Sequence[str]) -> None:
        if len(translated_texts) != len(slots):
            raise ValueError("Translation count does not match slot count")
        for slot, translated in zip(slots, translated_texts):
            self._write(slot, slot.render(translated))

    def restore(self) -> None:
        for slot in list(self._text_slots.values()) + list(self._attr_slots.values()):
            self._write(slot, slot.original)

    def _write(self, slot: TextSlot, value: str) -> None:
        if slot.kind != TEXT:
            slot.element[slot.kind] = value
            return
        if slot.node is None or slot.node.parent is None or str(slot.node) == value:
            return
        replacement = NavigableString(value)
        slot.node.replace_with(replacement)
        self._text_slots.pop(id(slot.node), None)
        slot.node = replacement
        self._text_slots[id(replacement)] = slot

    def render(self) -> str:
        return str(self.soup)

    def write(self, output_path: str | Path) -> Path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(), encoding="utf-8")
        return path
