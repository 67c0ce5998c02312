"""Tests for the dense sample matrix."""

import numpy as np
import pytest

from ascii_dither.core.errors import ConfigurationError, OutOfRangeError
from ascii_dither.core.matrix import Matrix


class TestMatrix:
    def test_new_is_filled(self):
        m = Matrix(3, 2, 0.25)
        assert m.width == 3
        assert m.height == 2
        for row in range(2):
            for col in range(3):
                assert m.get(row, col) == 0.25

    def test_set_get(self):
        m = Matrix(4, 3)
        m.set(2, 3, 0.75)
        assert m.get(2, 3) == 0.75
        assert m[2, 3] == 0.75
        m[0, 1] = 0.5
        assert m.get(0, 1) == 0.5

    def test_row_major_layout(self):
        m = Matrix.from_values([0, 1, 2, 3, 4, 5], width=3, height=2)
        assert m.get(0, 2) == 2
        assert m.get(1, 0) == 3
        assert m.to_array().tolist() == [[0, 1, 2], [3, 4, 5]]

    @pytest.mark.parametrize("row,col", [(2, 0), (0, 3), (5, 5), (-1, 0), (0, -1)])
    def test_get_out_of_range(self, row, col):
        m = Matrix(3, 2)
        with pytest.raises(OutOfRangeError, match="out of range"):
            m.get(row, col)

    def test_set_out_of_range(self):
        m = Matrix(3, 2)
        with pytest.raises(OutOfRangeError):
            m.set(2, 0, 1.0)

    def test_out_of_range_is_index_error(self):
        with pytest.raises(IndexError):
            Matrix(1, 1).get(1, 1)

    def test_contains(self):
        m = Matrix(3, 2)
        assert m.contains(1, 2)
        assert not m.contains(2, 0)
        assert not m.contains(-1, 0)

    def test_from_values_size_mismatch(self):
        with pytest.raises(ConfigurationError, match="Expected 6 values"):
            Matrix.from_values([1, 2, 3], width=3, height=2)

    def test_from_array_shape(self):
        arr = np.arange(12, dtype=float).reshape(3, 4)
        m = Matrix.from_array(arr)
        assert m.width == 4
        assert m.height == 3
        assert m.get(2, 1) == 9.0

    def test_from_array_rejects_3d(self):
        with pytest.raises(ConfigurationError):
            Matrix.from_array(np.zeros((2, 2, 3)))

    def test_copy_is_independent(self):
        m = Matrix(2, 2, 0.5)
        clone = m.copy()
        clone.set(0, 0, 1.0)
        assert m.get(0, 0) == 0.5
        assert clone != m

    def test_equality(self):
        assert Matrix(2, 2, 0.5) == Matrix(2, 2, 0.5)
        assert Matrix(2, 2, 0.5) != Matrix(4, 1, 0.5)
