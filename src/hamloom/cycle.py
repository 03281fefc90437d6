"""
Cycle: an ordered node sequence closed by the wrap-around step.

Invariant: every consecutive pair, including (data[-1], data[0]), is an edge.
Rotation and reversal change only presentation order.

Adjacency and edge-adjacency tables are owned by the caller and passed into
the operations that need them; a Cycle only holds its nodes.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from .grid import Adjacency, Edge, EdgeAdjacency, canonical


class Cycle:
    def __init__(self, data: Iterable[int], closed: bool = False):
        self.data: list[int] = list(data)
        self.closed = bool(closed)

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[int]:
        return iter(self.data)

    def __repr__(self) -> str:
        return f"Cycle(n={len(self.data)}, closed={self.closed})"

    def copy(self) -> "Cycle":
        return Cycle(self.data, closed=self.closed)

    def nodes(self) -> list[int]:
        return list(self.data)

    def edges(self) -> set[Edge]:
        d = self.data
        return {canonical(a, b) for a, b in zip(d, d[1:] + d[:1])}

    def eadjs(self, edge_adj: EdgeAdjacency) -> set[Edge]:
        """Union of edge_adj[e] over this cycle's edges. A missing edge raises KeyError."""
        out: set[Edge] = set()
        for e in self.edges():
            out |= edge_adj[e]
        return out

    def rotate_to_edge(self, u: int, v: int) -> None:
        """
        Reorder so that data[0] == u and data[-1] == v (the edge sits on the seam).

        If (u, v) already sits on the seam reversed, reverse. Otherwise rotate
        left to the larger of the two positions, and reverse when that position
        was v's.
        """
        d = self.data
        if u not in d or v not in d:
            missing = u if u not in d else v
            raise ValueError(f"Endpoint {missing} not found in cycle.")
        if d[0] == u and d[-1] == v:
            return
        if d[-1] == u and d[0] == v:
            d.reverse()
            return
        iu = d.index(u)
        iv = d.index(v)
        if abs(iu - iv) != 1:
            raise ValueError(f"({u}, {v}) is not an edge of this cycle.")
        if iu > iv:
            self.data = d[iu:] + d[:iu]
        else:
            rotated = d[iv:] + d[:iv]
            rotated.reverse()
            self.data = rotated

    def join(
        self,
        edge: Edge,
        other_edge: Edge,
        other: "Cycle",
        adj: Adjacency,
        *,
        closed: bool = False,
    ) -> None:
        """
        Absorb `other` by swapping `edge` (ours) and `other_edge` (theirs) for the
        two rungs of the square they bound.

        After rotation self is [e0 .. e1] and other is [f0 .. f1] with f0 adjacent
        to e1; appending gives the steps e1 -> f0 and f1 -> e0 (wrap-around).
        """
        self.rotate_to_edge(edge[0], edge[1])
        f0, f1 = other_edge
        if f0 not in adj[edge[1]]:
            f0, f1 = f1, f0
        other.rotate_to_edge(f0, f1)
        self.data.extend(other.data)
        self.closed = bool(closed)

    def is_valid(self, adj: Adjacency) -> bool:
        d = self.data
        if len(d) < 3 or len(set(d)) != len(d):
            return False
        return all(b in adj.get(a, ()) for a, b in zip(d, d[1:] + d[:1]))
