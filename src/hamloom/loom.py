"""
Loom assembly: stitch per-level chains into open threads, then close them.

Levels are processed from the outermost (most negative z) to z = -1:

  1. yarn  = spool(radius)[natural | colored]   -> node chain of the level
  2. warps = cut(chain, pinch_points)            -> pieces starting on thread ends
  3. assemble_level(threads, warps)              -> threads grow / new threads
  4. pinch_points = wind(threads)                -> ends pushed to the next level

After z = -1 every thread has both ends on z = -1, and mirroring across the
midplane closes it:

  [t0, ..., tm]  ->  [t0, ..., tm, m(tm), ..., m(t0)]

tm -> m(tm) and m(t0) -> t0 are vertical steps through the midplane, so the
result is a cycle of even length.
"""

from __future__ import annotations

from collections import deque
from typing import Callable, Sequence

import numpy as np

from . import thread as thread_ops
from .cycle import Cycle
from .grid import Adjacency, VertIdx, level_radius, shrink_adjacency

YARN_MODES = ("natural", "colored")


def _attach(thread: deque, chain: Sequence[int]) -> bool:
    """Attach chain at whichever thread end it shares; the shared node is kept once."""
    head, tail = chain[0], chain[-1]
    if thread[0] == head:
        thread.extendleft(chain[1:])
    elif thread[0] == tail:
        thread.extendleft(reversed(chain[:-1]))
    elif thread[-1] == head:
        thread.extend(chain[1:])
    elif thread[-1] == tail:
        thread.extend(reversed(chain[:-1]))
    else:
        return False
    return True


def assemble_level(threads: list[deque], chains: Sequence[Sequence[int]]) -> list[deque]:
    """
    Merge one level's chains into the running threads.

    Each chain is consumed by at most one attachment, so a chain whose two
    endpoints coincide with two thread ends is still used once. A chain that
    matches no thread starts a new one immediately, and later chains in the same
    scan may attach to it.
    """
    for chain in chains:
        if len(chain) == 0:
            continue
        for thread in threads:
            if _attach(thread, chain):
                break
        else:
            threads.append(deque(chain))
    return threads


def close_thread(thread: Sequence[int], mirror_of: Callable[[int], int]) -> Cycle:
    nodes = list(thread)
    return Cycle(nodes + [mirror_of(node) for node in reversed(nodes)])


def level_yarn(yarns: dict[str, np.ndarray], yarn_mode: str) -> np.ndarray:
    """Colored yarn is the x -> -x image of natural yarn on every level; the two looms are mirror images."""
    if yarn_mode not in YARN_MODES:
        raise ValueError(f"Unknown yarn_mode: {yarn_mode}")
    return yarns[yarn_mode]


def check_level_chain(chain: Sequence[int], level_adj: Adjacency, z: int) -> None:
    """Raise RuntimeError unless chain is a Hamiltonian path of the level graph."""
    if len(chain) != len(level_adj) or set(chain) != set(level_adj):
        raise RuntimeError(f"Chain for level z={z} does not cover the level exactly once.")
    for a, b in zip(chain, chain[1:]):
        if b not in level_adj[a]:
            raise RuntimeError(f"Chain for level z={z} steps off the level graph at {a} -> {b}.")


def warp_loom(
    verts: np.ndarray,
    adj: Adjacency,
    vert_idx: VertIdx,
    *,
    yarn_mode: str = "natural",
) -> list[Cycle]:
    """
    Build the loom: node-disjoint cycles covering every lattice node.

    Returns:
      cycles sorted by ascending length (stable).
    """
    verts = np.asarray(verts, dtype=np.int64)
    max_xyz = int(np.abs(verts).max())
    level_adj, level_length = shrink_adjacency(verts, adj)

    threads: list[deque] = []
    pinch_points: list[int] = []
    for z, n_nodes in level_length:
        yarn = level_yarn(thread_ops.spool(level_radius(z, max_xyz)), yarn_mode)
        if yarn.shape[0] != n_nodes:
            raise RuntimeError(f"Yarn for level z={z} has {yarn.shape[0]} points, expected {n_nodes}.")
        chain = thread_ops.yarn_to_nodes(yarn, z, vert_idx)
        check_level_chain(chain, level_adj[z], z)
        warps = thread_ops.cut(chain, pinch_points) if pinch_points else [chain]
        assemble_level(threads, warps)
        if z != -1:
            pinch_points = thread_ops.wind(threads, verts, vert_idx)

    loom = [close_thread(t, lambda node: thread_ops.mirror(node, verts, vert_idx)) for t in threads]
    loom.sort(key=len)
    return loom
