#!/usr/bin/env python3
"""
Weave a Hamiltonian cycle on the octahedral lattice and time it.

Usage:
  python analysis/run_weave.py [order] [repeats] [yarn_mode]

Example:
  python analysis/run_weave.py 80 1000
  python analysis/run_weave.py 80 10 colored

yarn_mode is "natural" (default) or "colored", the x -> -x mirror of every level.

Prints the node count, the classification, elapsed time per repetition and the
node sequence.
"""

from __future__ import annotations

import pathlib
import sys

BASE_DIR = pathlib.Path(__file__).resolve().parent
REPO_DIR = BASE_DIR.parent

if str(REPO_DIR / "src") not in sys.path:
    sys.path.insert(0, str(REPO_DIR / "src"))

from hamloom.workflow import WeaveConfig, run_weave

# Defaults (override via argv or edit)
ORDER = 80
REPEATS = 100
YARN_MODE = "natural"


def main() -> None:
    argv = sys.argv[1:]
    order = int(argv[0]) if len(argv) >= 1 else ORDER
    repeats = int(argv[1]) if len(argv) >= 2 else REPEATS
    yarn_mode = argv[2] if len(argv) >= 3 else YARN_MODE
    cfg = WeaveConfig(order=order, repeats=repeats, yarn_mode=yarn_mode)

    timings: dict = {}
    solution, seq_id = run_weave(cfg, timings=timings)
    print(
        f"ORDER: {cfg.order} | ID: {seq_id.name} | "
        f"{timings['weave_per_rep_s'] * 1e3:.3f} ms/rep | {solution}",
        flush=True,
    )


if __name__ == "__main__":
    main()
