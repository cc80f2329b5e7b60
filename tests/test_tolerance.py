"""Tests for tolerance utilities."""

from __future__ import annotations

from typing import Any

import numpy as np
import pytest

from capstan.tolerance import ensure_float_dtype, get_default_tolerance, get_machine_epsilon


class TestTolerance:
    """Test suite for tolerance utilities."""

    @pytest.mark.parametrize(
        ("dtype", "expected"),
        [
            (np.float32, 1e-6),
            ("float32", 1e-6),
            (np.float64, 1e-12),
            ("float64", 1e-12),
            (np.dtype(np.float64), 1e-12),
        ],
    )
    def test_get_default_tolerance(self, dtype: Any, expected: float) -> None:
        """Test get_default_tolerance with the supported dtypes."""
        assert get_default_tolerance(dtype) == expected

    @pytest.mark.parametrize("dtype", [np.float32, "float64"])
    def test_get_machine_epsilon(self, dtype: Any) -> None:
        """Test get_machine_epsilon against np.finfo."""
        assert get_machine_epsilon(dtype) == np.finfo(dtype).eps

    @pytest.mark.parametrize("dtype", [np.float32, np.float64, "float32", float])
    def test_ensure_float_dtype(self, dtype: Any) -> None:
        """Normalize dtype-likes to a NumPy dtype."""
        result = ensure_float_dtype(dtype)
        assert isinstance(result, np.dtype)
        assert result == np.dtype(dtype)

    @pytest.mark.parametrize(
        "dtype", [np.int32, "int64", np.complex64, np.uint8, np.float16, np.longdouble]
    )
    def test_unsupported_dtype_raises_error(self, dtype: Any) -> None:
        """Anything but float32 and float64 raises a ValueError."""
        if np.dtype(dtype) == np.dtype(np.float64):
            pytest.skip("longdouble is an alias of float64 on this platform")
        with pytest.raises(ValueError, match="Unsupported dtype"):
            ensure_float_dtype(dtype)
        with pytest.raises(ValueError, match="Unsupported dtype"):
            get_default_tolerance(dtype)
        with pytest.raises(ValueError, match="Unsupported dtype"):
            get_machine_epsilon(dtype)

    def test_not_a_dtype(self) -> None:
        """Strings that are not dtypes raise a ValueError too."""
        with pytest.raises(ValueError, match="Unsupported dtype"):
            ensure_float_dtype("not-a-dtype")
