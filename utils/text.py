from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, TypeVar

T = TypeVar("T")


@dataclass(slots=True)
class DeduplicationResult:
    unique_texts: List[str]
    index_map: List[int]  # One entry per source position, pointing into unique_texts

    def expand(self, values: Sequence[T]) -> List[T]:
        return [values[idx] for idx in self.index_map]


def deduplicate_texts(texts: Sequence[str]) -> DeduplicationResult:
    unique: List[str] = []
    positions: Dict[str, int] = {}
    index_map: List[int] = []
    for text in texts:
        idx = positions.get(text)
        if idx is None:
            idx = len(unique)
            positions[text] = idx
            unique.append(text)
        index_map.append(idx)
    return DeduplicationResult(unique_texts=unique, index_map=index_map)


def split_whitespace(text: str) -> tuple[str, str, str]:
    """Split ``text`` into leading whitespace, core and trailing whitespace."""
    core = text.strip()
    if not core:
        return text, "", ""
    start = text.index(core)
    return text[:start], core, text[start + len(core):]
