"""
Octahedral odd-coordinate lattice: vertices, adjacency, edge adjacency, levels.

Lattice of order n (n >= 1):
  - points (x, y, z), all coordinates odd, with |x| + |y| + |z| <= 2n + 1
  - max_xyz = 2n - 1 is the largest absolute coordinate
  - node count 4n(n+1)(n+2)/3  ->  8, 32, 80, 160, 280, 448, ...
  - two points are adjacent when they differ by 2 along exactly one axis

Node ids are row indices into the (N, 3) `verts` array. The lattice is symmetric
under z -> -z, so every level z < 0 has a mirror level -z.

Level z = -(2k+1) is a 2D "diamond" of radius r = n - k:
  |x| + |y| <= 2r,  2r(r+1) points.
"""

from __future__ import annotations

import numpy as np
from scipy.spatial import cKDTree

Edge = tuple[int, int]
Adjacency = dict[int, set[int]]
EdgeAdjacency = dict[Edge, set[Edge]]
VertIdx = dict[tuple[int, int, int], int]

STEP = 2


def n_to_order(n: int) -> int:
    if int(n) < 1:
        raise ValueError("n must be >= 1.")
    n = int(n)
    return 4 * n * (n + 1) * (n + 2) // 3


def order_to_n(order: int) -> int:
    """
    Invert n_to_order. Raises ValueError for node counts outside the family.
    """
    order = int(order)
    n = 1
    while n_to_order(n) < order:
        n += 1
    if n_to_order(n) != order:
        raise ValueError(
            f"No octahedral lattice with {order} nodes; "
            f"nearest are {n_to_order(max(n - 1, 1))} and {n_to_order(n)}."
        )
    return n


def max_xyz_for_order(order: int) -> int:
    return 2 * order_to_n(order) - 1


def vertices(max_xyz: int) -> np.ndarray:
    """
    Enumerate lattice points for a given max absolute coordinate.

    Returns:
      verts: (N, 3) int64, sorted by (x^2+y^2+z^2, x, y, z).
    """
    max_xyz = int(max_xyz)
    if max_xyz < 1 or max_xyz % 2 == 0:
        raise ValueError("max_xyz must be a positive odd integer.")
    axis = np.arange(-max_xyz, max_xyz + 1, STEP, dtype=np.int64)
    X, Y, Z = np.meshgrid(axis, axis, axis, indexing="ij")
    pts = np.stack([X.ravel(), Y.ravel(), Z.ravel()], axis=1)
    inside = np.abs(pts).sum(axis=1) <= max_xyz + 2
    pts = pts[inside]
    r2 = (pts**2).sum(axis=1)
    order = np.lexsort((pts[:, 2], pts[:, 1], pts[:, 0], r2))
    return pts[order]


def vi_map(verts: np.ndarray) -> VertIdx:
    return {(int(x), int(y), int(z)): i for i, (x, y, z) in enumerate(np.asarray(verts))}


def adjacency_map(verts: np.ndarray, max_xyz: int, vert_idx: VertIdx) -> Adjacency:
    """
    Axis neighbours (Euclidean distance exactly STEP).

    Diagonal neighbours sit at 2*sqrt(2) > STEP, so a radius-STEP ball query
    returns exactly the lattice edges.
    """
    verts = np.asarray(verts, dtype=np.int64)
    if len(vert_idx) != verts.shape[0]:
        raise ValueError("vert_idx must index every row of verts.")
    if int(np.abs(verts).max()) > int(max_xyz):
        raise ValueError("verts exceed max_xyz.")
    adj: Adjacency = {i: set() for i in range(verts.shape[0])}
    tree = cKDTree(verts.astype(np.float64))
    for a, b in tree.query_pairs(r=float(STEP) + 1e-9):
        adj[int(a)].add(int(b))
        adj[int(b)].add(int(a))
    return adj


def canonical(a: int, b: int) -> Edge:
    return (a, b) if a < b else (b, a)


def edges_from_adjacency(adj: Adjacency) -> set[Edge]:
    return {canonical(a, b) for a, neighs in adj.items() for b in neighs}


def edge_adjacency_map(adj: Adjacency, edges: set[Edge], verts: np.ndarray) -> EdgeAdjacency:
    """
    Splice-legal partners of every edge.

    For an edge (a, b) along axis k, the partners are the translates
    (a + t, b + t) for the four unit steps t perpendicular to k that stay in the
    lattice. Edge and partner bound a unit square face, so replacing the pair by
    the two rungs keeps every step adjacent.
    """
    verts = np.asarray(verts, dtype=np.int64)
    vert_idx = vi_map(verts)
    steps = STEP * np.vstack([np.eye(3, dtype=np.int64), -np.eye(3, dtype=np.int64)])

    edge_adj: EdgeAdjacency = {}
    for a, b in edges:
        if b not in adj[a]:
            raise ValueError(f"Edge {(a, b)} is not in the adjacency.")
        along = verts[b] - verts[a]
        partners: set[Edge] = set()
        for t in steps:
            if int(np.dot(t, along)) != 0:
                continue
            c = vert_idx.get(tuple(int(v) for v in verts[a] + t))
            d = vert_idx.get(tuple(int(v) for v in verts[b] + t))
            if c is None or d is None:
                continue
            partners.add(canonical(c, d))
        edge_adj[(a, b)] = partners
    return edge_adj


def shrink_adjacency(verts: np.ndarray, adj: Adjacency) -> tuple[dict[int, Adjacency], list[tuple[int, int]]]:
    """
    Per-level adjacency for the lower half (z < 0) of the lattice.

    Returns:
      level_adj: {z: adjacency restricted to the nodes of level z}
      level_length: [(z, n_nodes)] ordered outermost (most negative z) first.
    """
    verts = np.asarray(verts, dtype=np.int64)
    zs = sorted({int(z) for z in verts[:, 2] if z < 0})
    level_adj: dict[int, Adjacency] = {}
    level_length: list[tuple[int, int]] = []
    for z in zs:
        members = {int(i) for i in np.nonzero(verts[:, 2] == z)[0]}
        level_adj[z] = {i: adj[i] & members for i in sorted(members)}
        level_length.append((z, len(members)))
    return level_adj, level_length


def level_radius(z: int, max_xyz: int) -> int:
    """Diamond radius of level z: r = n - k for z = -(2k+1)."""
    n = (int(max_xyz) + 1) // 2
    k = (abs(int(z)) - 1) // 2
    return n - k
