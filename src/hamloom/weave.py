"""
Cycle weaving: splice every loop of the loom into one Hamiltonian cycle.

The first loop is the warp; the rest are wefts keyed by a stable index. For a
pending weft i:

  bridge     = warp.edges() & weft_i.eadjs()        (warp edges on a shared square)
  e          = min(bridge)
  candidates = edge_adj[e] & weft_i.edges()
  f          = min(candidates)
  warp.join(e, f, weft_i)                            (swap e, f for the two rungs)

Misses are re-enqueued. A full round over the queue that merges nothing counts
as a stall; `max_stalled_rounds` consecutive stalls raise WeavingError. Edge
choice is by minimum, so output is reproducible.
"""

from __future__ import annotations

from collections import deque
from typing import Sequence

import numpy as np

from .cycle import Cycle
from .grid import Adjacency, EdgeAdjacency, VertIdx
from .loom import warp_loom


class WeavingError(RuntimeError):
    """No legal stitching found for the remaining wefts."""


def weave_loom(
    loom: Sequence[Cycle],
    adj: Adjacency,
    edge_adj: EdgeAdjacency,
    *,
    max_stalled_rounds: int = 1,
) -> Cycle:
    if not loom:
        raise ValueError("loom must be non-empty.")
    if int(max_stalled_rounds) < 1:
        raise ValueError("max_stalled_rounds must be >= 1.")

    warp = loom[0].copy()
    wefts: dict[int, Cycle] = {i: c.copy() for i, c in enumerate(loom[1:])}
    processed: set[int] = set()
    pending = deque(sorted(wefts))
    if not pending:
        warp.closed = True
        return warp

    stalled = 0
    while pending:
        merged = 0
        for _ in range(len(pending)):
            idx = pending.popleft()
            weft = wefts[idx]
            bridge = warp.edges() & weft.eadjs(edge_adj)
            if not bridge:
                pending.append(idx)
                continue
            e = min(bridge)
            candidates = edge_adj[e] & weft.edges()
            if not candidates:
                pending.append(idx)
                continue
            f = min(candidates)
            warp.join(e, f, weft, adj, closed=not pending)
            processed.add(idx)
            del wefts[idx]
            merged += 1
        if merged:
            stalled = 0
            continue
        stalled += 1
        if stalled >= int(max_stalled_rounds):
            raise WeavingError(
                f"No legal stitching found: {len(pending)} weft(s) unmerged "
                f"after {stalled} stalled round(s), pending={sorted(pending)}, "
                f"processed={len(processed)}."
            )
    return warp


def weave(
    verts: np.ndarray,
    adj: Adjacency,
    vert_idx: VertIdx,
    edge_adj: EdgeAdjacency,
    *,
    yarn_mode: str = "natural",
    max_stalled_rounds: int = 1,
) -> list[int]:
    """Loom assembly followed by weaving; returns the tour's node sequence."""
    loom = warp_loom(verts, adj, vert_idx, yarn_mode=yarn_mode)
    warp = weave_loom(loom, adj, edge_adj, max_stalled_rounds=max_stalled_rounds)
    return warp.nodes()
