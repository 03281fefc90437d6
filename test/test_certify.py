"""
Tests for sequence classification.
"""
from __future__ import annotations

import pytest

from hamloom.certify import SequenceID, classify

SQUARE = {0: {1, 3}, 1: {0, 2}, 2: {1, 3}, 3: {0, 2}}
PATH = {0: {1}, 1: {0, 2}, 2: {1, 3}, 3: {2}}


@pytest.mark.parametrize(
    "seq,adj,expected",
    [
        ([], SQUARE, SequenceID.EMPTY),
        ([0, 1, 1, 2], SQUARE, SequenceID.DUPLICATES),
        ([0, 1, 2], SQUARE, SequenceID.INCOMPLETE),
        ([0, 2, 1, 3], SQUARE, SequenceID.BROKEN),
        ([0, 1, 2, 3], PATH, SequenceID.HAM_PATH),
        ([0, 1, 2, 3], SQUARE, SequenceID.HAM_CYCLE),
        ([2, 1, 0, 3], SQUARE, SequenceID.HAM_CYCLE),
    ],
)
def test_classify(seq, adj, expected):
    assert classify(seq, adj) is expected
