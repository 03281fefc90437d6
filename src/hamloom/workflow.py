"""
Workflow: build the lattice tables once, weave repeatedly, certify the result.

The grid tables are built once and are read-only afterwards; every repetition
of `weave` starts from the same inputs and shares no mutable state.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

import numpy as np
from tqdm import tqdm

from . import grid
from .certify import SequenceID, classify
from .loom import YARN_MODES, warp_loom
from .weave import weave


@dataclass(frozen=True)
class WeaveConfig:
    order: int = 80
    repeats: int = 10
    yarn_mode: str = "natural"
    max_stalled_rounds: int = 1

    def __post_init__(self):
        grid.order_to_n(self.order)
        if int(self.repeats) < 1:
            raise ValueError("repeats must be >= 1.")
        if self.yarn_mode not in YARN_MODES:
            raise ValueError(f"yarn_mode must be one of {YARN_MODES}, got {self.yarn_mode!r}.")
        if int(self.max_stalled_rounds) < 1:
            raise ValueError("max_stalled_rounds must be >= 1.")


@dataclass(frozen=True)
class Grid:
    """Lattice tables shared by every repetition."""

    verts: np.ndarray
    vert_idx: dict
    adj: dict
    edges: frozenset
    edge_adj: dict

    @property
    def order(self) -> int:
        return int(self.verts.shape[0])

    @property
    def max_xyz(self) -> int:
        return int(np.abs(self.verts).max())


def build_grid(order: int) -> Grid:
    max_xyz = grid.max_xyz_for_order(order)
    verts = grid.vertices(max_xyz)
    vert_idx = grid.vi_map(verts)
    adj = grid.adjacency_map(verts, max_xyz, vert_idx)
    edges = grid.edges_from_adjacency(adj)
    edge_adj = grid.edge_adjacency_map(adj, edges, verts)
    return Grid(verts=verts, vert_idx=vert_idx, adj=adj, edges=frozenset(edges), edge_adj=edge_adj)


def run_weave(
    cfg: WeaveConfig,
    *,
    timings: dict | None = None,
    progress: bool = True,
) -> tuple[list[int], SequenceID]:
    """
    Weave `cfg.repeats` times and certify the last tour.

    If timings is not None, fill with stage keys (grid_s, loom_s, weave_total_s,
    weave_per_rep_s, certify_s). Raises RuntimeError when the tour is not a
    Hamiltonian cycle.
    """
    t0 = time.perf_counter()
    g = build_grid(cfg.order)
    t_grid = time.perf_counter() - t0
    print(
        f"[grid] order={g.order} max_xyz={g.max_xyz} edges={len(g.edges)} levels={(g.max_xyz + 1) // 2}",
        flush=True,
    )

    t0 = time.perf_counter()
    loom = warp_loom(g.verts, g.adj, g.vert_idx, yarn_mode=cfg.yarn_mode)
    t_loom = time.perf_counter() - t0
    print(f"[loom] {cfg.yarn_mode}: {len(loom)} loop(s), lengths={[len(c) for c in loom]}", flush=True)

    solution: list[int] = []
    t0 = time.perf_counter()
    for _ in tqdm(range(int(cfg.repeats)), desc="weave", leave=False, disable=not progress):
        solution = weave(
            g.verts,
            g.adj,
            g.vert_idx,
            g.edge_adj,
            yarn_mode=cfg.yarn_mode,
            max_stalled_rounds=cfg.max_stalled_rounds,
        )
    t_weave = time.perf_counter() - t0
    per_rep = t_weave / float(cfg.repeats)
    print(f"[weave] merged {len(loom) - 1} weft(s) into n={len(solution)}", flush=True)
    print(f"[time] weave: {per_rep * 1e3:.3f} ms/rep over {cfg.repeats} rep(s)", flush=True)

    t0 = time.perf_counter()
    seq_id = classify(solution, g.adj)
    t_cert = time.perf_counter() - t0
    print(f"[certify] {seq_id.name} n={len(solution)}", flush=True)

    if timings is not None:
        timings["grid_s"] = t_grid
        timings["loom_s"] = t_loom
        timings["weave_total_s"] = t_weave
        timings["weave_per_rep_s"] = per_rep
        timings["certify_s"] = t_cert

    if seq_id is not SequenceID.HAM_CYCLE:
        raise RuntimeError(f"Woven sequence is {seq_id.name}, expected HAM_CYCLE.")
    return solution, seq_id
