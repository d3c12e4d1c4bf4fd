"""
Pytest configuration for causalcompare tests.

Puts `src/` on the path so the package imports without installation, runs
Qt headless and provides helpers that write simulation directories.
"""
import os
import sys
from pathlib import Path

import numpy as np
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

GRAPH_TXT = """Graph Nodes:
X1;X2;X3

Graph Edges:
1. X1 --> X2
2. X2 --> X3
"""


def chain_data(n=300, seed=0):
    """X1 --> X2 --> X3, linear Gaussian."""
    rng = np.random.default_rng(seed)
    x1 = rng.normal(size=n)
    x2 = 0.8 * x1 + 0.5 * rng.normal(size=n)
    x3 = -0.7 * x2 + 0.5 * rng.normal(size=n)
    return np.column_stack([x1, x2, x3])


def write_data_file(path, matrix, header=("X1", "X2", "X3"), comment=None):
    lines = []
    if comment:
        lines.append(f"// {comment}")
    lines.append("\t".join(header))
    for row in matrix:
        lines.append("\t".join(f"{v:.6f}" for v in row))
    Path(path).write_text("\n".join(lines) + "\n", encoding="utf-8")


@pytest.fixture
def make_simulation_dir(tmp_path):
    """
    Factory writing a simulation directory.

    Args:
        n_data: Number of valid data files under data_noise/.
        n_graphs: Number of files under graph/ (None = no graph/ dir).
        malformed: Number of extra unparseable data files.
        graph_text: Contents written to each graph file.
    """
    def _make(name="sim", n_data=3, n_graphs=1, malformed=0, graph_text=GRAPH_TXT):
        root = tmp_path / name
        data_dir = root / "data_noise"
        data_dir.mkdir(parents=True)
        for i in range(n_data):
            write_data_file(data_dir / f"data.{i + 1}.txt", chain_data(seed=i), comment=f"run {i + 1}")
        for i in range(malformed):
            (data_dir / f"zz_broken.{i + 1}.txt").write_text("X1\tX2\n1.0\tnot-a-number\n", encoding="utf-8")
        if n_graphs is not None:
            graph_dir = root / "graph"
            graph_dir.mkdir()
            for i in range(n_graphs):
                (graph_dir / f"graph.{i + 1}.txt").write_text(graph_text, encoding="utf-8")
        return str(root)

    return _make
