"""
Per-level thread generation: spin, color, cut, wind, mirror.

Yarn
----
A yarn is an (n, 2) int64 array of (x, y) positions: an ordered Hamiltonian
path over one diamond level |x| + |y| <= 2r (odd x, y).

Spin
----
The diamond of radius r splits into concentric staircase cycles
  S_r, S_{r-2}, S_{r-4}, ...
where S_m covers the two rings |x|+|y| = 2m and |x|+|y| = 2m-2 (S_1 is the
central 2x2 square). Each staircase is walked counter-clockwise from its
top-right tip (1, 2m-1) and ends on (1, 2m-3), directly above the next
staircase's tip (1, 2m-5). Concatenating the walks gives one path.

Wind / cut
----------
After a level is assembled, `wind` pushes both ends of every open thread one
level up (z + 2) and returns those nodes as pinch points. The next level's yarn
is `cut` in front of every pinch point, so every piece except the leading one
starts on a thread end. Yarns start on two outer-ring points, which are never
above the smaller level below, so the leading piece never has length one.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable

import numpy as np

from .grid import STEP, VertIdx

Thread = deque


def _staircase(m: int) -> np.ndarray:
    """Clockwise staircase cycle S_m starting at the top-right tip (1, 2m-1)."""
    q1 = []
    for i in range(m):
        q1.append((2 * i + 1, 2 * m - 2 * i - 1))
        if i < m - 1:
            q1.append((2 * i + 1, 2 * m - 2 * i - 3))
    q1 = np.asarray(q1, dtype=np.int64)
    q4 = q1[::-1] * np.array([1, -1], dtype=np.int64)
    q3 = q1 * np.array([-1, -1], dtype=np.int64)
    q2 = q1[::-1] * np.array([-1, 1], dtype=np.int64)
    return np.concatenate([q1, q4, q3, q2], axis=0)


def spin(radius: int) -> np.ndarray:
    """
    Hamiltonian path over the diamond of the given radius.

    Returns:
      yarn: (2r(r+1), 2) int64, consecutive rows differ by STEP along one axis.
    """
    radius = int(radius)
    if radius < 1:
        raise ValueError("radius must be >= 1.")
    segments = []
    for m in range(radius, 0, -2):
        cyc = _staircase(m)
        segments.append(np.concatenate([cyc[:1], cyc[1:][::-1]], axis=0))
    return np.concatenate(segments, axis=0)


def color(yarn: np.ndarray) -> np.ndarray:
    """Mirror image of a yarn across the y axis (x -> -x)."""
    out = np.array(yarn, dtype=np.int64, copy=True)
    out[:, 0] *= -1
    return out


def spool(radius: int) -> dict[str, np.ndarray]:
    natural = spin(radius)
    return {"natural": natural, "colored": color(natural)}


def yarn_to_nodes(yarn: np.ndarray, z: int, vert_idx: VertIdx) -> list[int]:
    return [vert_idx[(int(x), int(y), int(z))] for x, y in np.asarray(yarn)]


def cut(chain: list[int], pinch_points: Iterable[int]) -> list[list[int]]:
    """
    Split a chain in front of every pinch point.

    The pieces partition the chain in order; with no pinch points the chain is
    returned whole.
    """
    pins = set(pinch_points)
    pieces: list[list[int]] = []
    current: list[int] = []
    for node in chain:
        if node in pins and current:
            pieces.append(current)
            current = []
        current.append(node)
    if current:
        pieces.append(current)
    return pieces


def _above(node: int, verts: np.ndarray, vert_idx: VertIdx) -> int:
    x, y, z = (int(v) for v in verts[node])
    key = (x, y, z + STEP)
    if key not in vert_idx:
        raise KeyError(f"No lattice point above node {node} at {key}.")
    return vert_idx[key]


def wind(loom: list[Thread], verts: np.ndarray, vert_idx: VertIdx) -> list[int]:
    """
    Extend both ends of every thread one level up; return the new ends.

    Threads are deques and are modified in place.
    """
    verts = np.asarray(verts)
    pinch_points: list[int] = []
    for thread in loom:
        if len(thread) < 2:
            raise ValueError("Cannot wind a thread with fewer than two nodes.")
        front = _above(thread[0], verts, vert_idx)
        back = _above(thread[-1], verts, vert_idx)
        thread.appendleft(front)
        thread.append(back)
        pinch_points.extend([front, back])
    return pinch_points


def mirror(node: int, verts: np.ndarray, vert_idx: VertIdx) -> int:
    """Mirror of a node across the z midplane."""
    x, y, z = (int(v) for v in verts[node])
    return vert_idx[(x, y, -z)]
