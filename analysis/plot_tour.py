#!/usr/bin/env python3
"""
Draw a woven tour as a 3D polyline, coloured by position along the tour.

Writes:
  analysis/output/tour_<order>.png
"""

from __future__ import annotations

import pathlib
import sys

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

THIS_DIR = pathlib.Path(__file__).resolve().parent
REPO_DIR = THIS_DIR.parent
if str(REPO_DIR / "src") not in sys.path:
    sys.path.insert(0, str(REPO_DIR / "src"))

from hamloom.certify import classify
from hamloom.weave import weave
from hamloom.workflow import build_grid

# -----------------------------------------------------------------------------
# Defaults (edit here)
# -----------------------------------------------------------------------------

OUT_DIR = THIS_DIR / "output"
ORDER = 80


def plot_tour(verts: np.ndarray, solution: list[int], *, title: str, out_path: pathlib.Path) -> None:
    xyz = np.asarray(verts, dtype=np.float64)[np.asarray(solution + solution[:1], dtype=np.int64)]
    t = np.linspace(0.0, 1.0, xyz.shape[0] - 1)
    cmap = plt.get_cmap("viridis")

    fig = plt.figure(figsize=(7, 7))
    ax = fig.add_subplot(projection="3d")
    for i in range(xyz.shape[0] - 1):
        ax.plot(xyz[i : i + 2, 0], xyz[i : i + 2, 1], xyz[i : i + 2, 2], color=cmap(t[i]), lw=1.5)
    ax.scatter(xyz[:-1, 0], xyz[:-1, 1], xyz[:-1, 2], s=6, c="k")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_zlabel("z")
    ax.set_title(title)
    fig.tight_layout()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150)
    plt.close(fig)


def main() -> None:
    order = int(sys.argv[1]) if len(sys.argv) >= 2 else ORDER
    g = build_grid(order)
    solution = weave(g.verts, g.adj, g.vert_idx, g.edge_adj)
    seq_id = classify(solution, g.adj)
    out_path = OUT_DIR / f"tour_{order}.png"
    plot_tour(g.verts, solution, title=f"order={order}  {seq_id.name}", out_path=out_path)
    print(f"[write] {out_path}", flush=True)


if __name__ == "__main__":
    main()
