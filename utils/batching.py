from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence


@dataclass(slots=True)
class Batch:
    texts: List[str]
    indices: List[int]  # Positions in the unique set covered by this batch

    def __len__(self) -> int:
        return len(self.texts)


def build_batches(texts: Sequence[str], indices: Sequence[int], *, max_size: int) -> List[Batch]:
    if len(texts) != len(indices):
        raise ValueError("texts and indices must have the same length")
    if max_size < 1:
        raise ValueError("max_size must be at least 1")
    batches: List[Batch] = []
    for start in range(0, len(texts), max_size):
        batches.append(
            Batch(
                texts=list(texts[start:start + max_size]),
                indices=list(indices[start:start + max_size]),
            )
        )
    return batches
