"""
Classify a node sequence against an adjacency.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from .grid import Adjacency


class SequenceID(Enum):
    EMPTY = "empty"
    DUPLICATES = "duplicates"
    INCOMPLETE = "incomplete"
    BROKEN = "broken"
    HAM_PATH = "ham_path"
    HAM_CYCLE = "ham_cycle"


def classify(solution: Sequence[int], adj: Adjacency) -> SequenceID:
    seq = list(solution)
    if not seq:
        return SequenceID.EMPTY
    if len(set(seq)) != len(seq):
        return SequenceID.DUPLICATES
    if set(seq) != set(adj):
        return SequenceID.INCOMPLETE
    if any(b not in adj[a] for a, b in zip(seq, seq[1:])):
        return SequenceID.BROKEN
    if len(seq) >= 3 and seq[0] in adj[seq[-1]]:
        return SequenceID.HAM_CYCLE
    return SequenceID.HAM_PATH
