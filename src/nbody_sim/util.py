# MIT License (see LICENSE)
"""
Array conversion helpers.

The engine computes with immutable Vector3 values; numpy arrays appear at
the edges (diagnostics, serialization). These helpers keep that boundary
consistent at float64.
"""
from __future__ import annotations
from typing import Any

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Accepts tuples, lists, Vector3 values (they are iterable) and arrays.
    """
    return np.array(tuple(x), dtype=np.float64)


def to_list(arr: Any) -> list[float]:
    """Convert a numpy array, Vector3 or tuple to a plain list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return [float(v) for v in arr]
