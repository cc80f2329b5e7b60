"""Pytest configuration: make `src` importable and provide shared curves."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_src_on_sys_path() -> None:
    """Prepend the repository `src` directory to `sys.path` if missing."""
    repo_root: Path = Path(__file__).resolve().parents[1]
    src_path: Path = repo_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_ensure_src_on_sys_path()

from capstan import Curve  # noqa: E402


@pytest.fixture
def cubic_bezier() -> Curve:
    """Planar cubic Bezier curve with unit weights."""
    return Curve(
        3,
        [[-10.0, 10.0], [10.0, 10.0], [-10.0, -10.0], [10.0, -10.0]],
        [1.0, 1.0, 1.0, 1.0],
        [0.0, 0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0],
    )


@pytest.fixture
def reed_leaf() -> Curve:
    """Closed cubic outline with triple interior knots (piecewise Bezier)."""
    control_points = [
        [152.0, 18.0],
        [140.0, 24.0],
        [130.0, 29.0],
        [121.0, 41.0],
        [105.0, 65.0],
        [105.0, 96.0],
        [107.0, 282.0],
        [107.0, 282.0],
        [125.0, 277.0],
        [125.0, 277.0],
        [125.0, 267.0],
        [123.0, 235.0],
        [129.0, 230.0],
        [140.0, 221.0],
        [158.0, 209.0],
        [173.0, 201.0],
        [173.0, 201.0],
        [152.0, 18.0],
        [152.0, 18.0],
    ]
    knots = [0.0] * 4 + [1.0, 1.0, 1.0, 2.0, 2.0, 2.0, 3.0, 3.0, 3.0, 4.0, 4.0, 4.0, 5.0, 5.0, 5.0]
    knots += [6.0] * 4
    return Curve(3, control_points, [1.0] * len(control_points), knots)
