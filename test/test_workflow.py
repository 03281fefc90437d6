"""
Tests for the workflow: config validation and the timed, certified pipeline.
"""
from __future__ import annotations

import pytest

from hamloom.certify import SequenceID
from hamloom.workflow import WeaveConfig, build_grid, run_weave


# --- config ---

@pytest.mark.parametrize(
    "kwargs",
    [
        dict(order=81),
        dict(repeats=0),
        dict(yarn_mode="tweed"),
        dict(max_stalled_rounds=0),
    ],
)
def test_config_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        WeaveConfig(**kwargs)


def test_build_grid_properties():
    g = build_grid(80)
    assert g.order == 80
    assert g.max_xyz == 5
    assert set(g.edge_adj) == set(g.edges)


# --- pipeline ---

@pytest.mark.parametrize("order", [8, 32, 80])
def test_run_weave_certifies_ham_cycle(order, capsys):
    timings: dict = {}
    solution, seq_id = run_weave(WeaveConfig(order=order, repeats=2), timings=timings, progress=False)
    assert seq_id is SequenceID.HAM_CYCLE
    assert sorted(solution) == list(range(order))
    assert {"grid_s", "loom_s", "weave_total_s", "weave_per_rep_s", "certify_s"} <= set(timings)
    out = capsys.readouterr().out
    for tag in ("[grid]", "[loom]", "[weave]", "[time]"):
        assert tag in out
    assert "[certify] HAM_CYCLE" in out


def test_run_weave_colored_yarn(capsys):
    solution, seq_id = run_weave(WeaveConfig(order=80, repeats=1, yarn_mode="colored"), progress=False)
    assert seq_id is SequenceID.HAM_CYCLE
    assert len(solution) == 80
    assert "[loom] colored: 3 loop(s)" in capsys.readouterr().out
