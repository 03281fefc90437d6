"""
Tests for loom assembly: chain matching, mirroring and the full loom.
"""
from __future__ import annotations

from collections import deque

import pytest

from hamloom.cycle import Cycle
from hamloom.loom import assemble_level, check_level_chain, close_thread, level_yarn, warp_loom
from hamloom.thread import spool
from hamloom.workflow import build_grid


# --- assemble_level ---

def test_shared_endpoint_merges_into_one_thread():
    threads = assemble_level([], [[1, 2, 3], [3, 4, 5]])
    assert len(threads) == 1
    assert list(threads[0]) in ([1, 2, 3, 4, 5], [5, 4, 3, 2, 1])


@pytest.mark.parametrize(
    "thread,chain,expected",
    [
        ([3, 2, 1], [3, 4, 5], [5, 4, 3, 2, 1]),
        ([3, 2, 1], [5, 4, 3], [5, 4, 3, 2, 1]),
        ([1, 2, 3], [3, 4, 5], [1, 2, 3, 4, 5]),
        ([1, 2, 3], [5, 4, 3], [1, 2, 3, 4, 5]),
    ],
)
def test_attach_orientation(thread, chain, expected):
    threads = assemble_level([deque(thread)], [chain])
    assert [list(t) for t in threads] == [expected]


def test_chain_is_used_once():
    """
    A chain touching two thread ends attaches to the first thread only.

    Node 5 ends up in both threads: the input is not a valid level, it only
    pins down that the chain is consumed by a single attachment.
    """
    threads = assemble_level([deque([1, 2]), deque([5, 6])], [[2, 3, 5]])
    assert [list(t) for t in threads] == [[1, 2, 3, 5], [5, 6]]


def test_unmatched_chain_starts_new_thread():
    threads = assemble_level([deque([1, 2])], [[7, 8], [8, 9]])
    assert [list(t) for t in threads] == [[1, 2], [7, 8, 9]]


def test_single_node_chain_on_thread_end_adds_nothing():
    threads = assemble_level([deque([1, 2, 3])], [[3]])
    assert [list(t) for t in threads] == [[1, 2, 3]]


# --- close_thread ---

def test_close_thread_mirrors_in_reverse():
    m = {1: 6, 2: 5, 3: 4}
    c = close_thread([1, 2, 3], m.__getitem__)
    assert isinstance(c, Cycle)
    assert c.data == [1, 2, 3, 4, 5, 6]
    ring = {i: {(i - 2) % 6 + 1, i % 6 + 1} for i in range(1, 7)}
    assert c.is_valid(ring)
    assert len(c) % 2 == 0


# --- level_yarn ---

def test_level_yarn_modes():
    yarns = spool(2)
    assert level_yarn(yarns, "natural") is yarns["natural"]
    assert level_yarn(yarns, "colored") is yarns["colored"]
    with pytest.raises(ValueError):
        level_yarn(yarns, "plaid")


# --- check_level_chain ---

def _square_level():
    return {0: {1, 3}, 1: {0, 2}, 2: {1, 3}, 3: {0, 2}}


def test_check_level_chain_accepts_hamiltonian_path():
    check_level_chain([0, 1, 2, 3], _square_level(), -1)


@pytest.mark.parametrize(
    "chain",
    [
        [0, 1, 2],
        [0, 1, 2, 2],
        [0, 2, 1, 3],
    ],
)
def test_check_level_chain_rejects_bad_chain(chain):
    with pytest.raises(RuntimeError, match="z=-1"):
        check_level_chain(chain, _square_level(), -1)


# --- warp_loom ---

def _assert_partition(loom, g):
    seen = [n for c in loom for n in c]
    assert len(seen) == len(set(seen))
    assert set(seen) == set(g.adj)
    for c in loom:
        assert c.is_valid(g.adj)
        assert len(c) % 2 == 0


@pytest.mark.parametrize("order", [8, 32, 80, 160])
def test_warp_loom_partitions_lattice(order):
    g = build_grid(order)
    loom = warp_loom(g.verts, g.adj, g.vert_idx)
    _assert_partition(loom, g)
    assert [len(c) for c in loom] == sorted(len(c) for c in loom)


@pytest.mark.parametrize("order", [32, 80, 160])
def test_colored_loom_is_mirror_of_natural(order):
    """Colored yarn on every level gives the x -> -x image of the natural loom."""
    g = build_grid(order)
    natural = warp_loom(g.verts, g.adj, g.vert_idx)
    colored = warp_loom(g.verts, g.adj, g.vert_idx, yarn_mode="colored")
    _assert_partition(colored, g)
    flip = {i: g.vert_idx[(-int(x), int(y), int(z))] for i, (x, y, z) in enumerate(g.verts)}
    assert [c.data for c in colored] == [[flip[n] for n in c] for c in natural]


def test_warp_loom_lengths_order_80():
    g = build_grid(80)
    loom = warp_loom(g.verts, g.adj, g.vert_idx)
    assert [len(c) for c in loom] == [24, 28, 28]


def test_warp_loom_single_loop_order_8():
    g = build_grid(8)
    loom = warp_loom(g.verts, g.adj, g.vert_idx)
    assert len(loom) == 1
    assert len(loom[0]) == 8
