"""
hamloom: Hamiltonian cycles on octahedral odd-coordinate lattices.

The main public entry points are:
  - `warp_loom` (per-level chains -> closed loops)
  - `weave_loom` / `weave` (loops -> one cycle)
  - `run_weave` (grid + repeated weave + certification)
"""

from .certify import SequenceID, classify
from .cycle import Cycle
from .loom import assemble_level, close_thread, warp_loom
from .weave import WeavingError, weave, weave_loom
from .workflow import Grid, WeaveConfig, build_grid, run_weave

__all__ = [
    "Cycle",
    "SequenceID",
    "classify",
    "assemble_level",
    "close_thread",
    "warp_loom",
    "WeavingError",
    "weave",
    "weave_loom",
    "Grid",
    "WeaveConfig",
    "build_grid",
    "run_weave",
]
