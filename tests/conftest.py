import os

import numpy as np
import pandas as pd
import pytest


def write_line_csv(path, n, comment=None):
    """x = 0..n-1, y = z = 0, t = 0..n-1 (step 1)."""
    df = pd.DataFrame({
        "x": np.arange(n, dtype=np.float64),
        "y": np.zeros(n),
        "z": np.zeros(n),
        "t": np.arange(n, dtype=np.float64),
    })
    with open(path, "w", newline="", encoding="utf-8") as f:
        if comment:
            f.write(f"# {comment}\n")
        df.to_csv(f, index=False)
    return path


@pytest.fixture
def input_dir(tmp_path):
    d = tmp_path / "input"
    d.mkdir()
    return d


@pytest.fixture
def line_200(input_dir):
    return write_line_csv(os.path.join(input_dir, "line.csv"), 200, comment="straight walk along x")


@pytest.fixture
def make_line_csv(input_dir):
    def _make(key, n, comment=None):
        return write_line_csv(os.path.join(input_dir, f"{key}.csv"), n, comment=comment)
    return _make
