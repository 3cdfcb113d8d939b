import math

import pytest

from boundls.blas import (
    Order,
    Transpose,
    daxpy,
    dcopy,
    ddot,
    dgemv,
    dnrm2,
    dscal,
)


def test_daxpy_with_unit_alpha_onto_zeros_copies_x():
    x = [1.5, -2.0, 3.25]
    y = [0.0, 0.0, 0.0]
    assert daxpy(1.0, x, y) == x


def test_daxpy_zero_alpha_leaves_y_unchanged():
    y = [1.0, 2.0, float("nan")]
    result = daxpy(0.0, [4.0, 5.0, 6.0], y)
    assert result[:2] == [1.0, 2.0]
    assert math.isnan(result[2])


def test_daxpy_is_in_place():
    y = [1.0, 1.0]
    out = daxpy(2.0, [1.0, 1.0], y)
    assert out is y
    assert y == [3.0, 3.0]


def test_daxpy_rejects_short_y():
    with pytest.raises(ValueError):
        daxpy(1.0, [1.0, 2.0, 3.0], [0.0])


def test_daxpy_strided_y():
    x = [1.0, 2.0]
    y = [0.0, 9.0, 0.0]
    daxpy(1.0, x, y, 1, 2)
    assert y[::2] == x
    assert y[1] == 9.0


def test_dcopy_strided_target():
    x = [1.0, 2.0, 3.0]
    y = [0.0] * 6
    dcopy(x, y, 1, 2)
    assert y[::2] == x
    assert y[1::2] == [0.0, 0.0, 0.0]


def test_dcopy_negative_increment_reverses():
    x = [1.0, 2.0, 3.0, 4.0]
    y = [0.0] * 4
    dcopy(x, y, -1, 1)
    assert y == list(reversed(x))


def test_ddot_matches_squared_norm():
    x = [0.5, -1.25, 2.0, 3.0]
    assert ddot(x, x) == pytest.approx(dnrm2(x) ** 2)


def test_ddot_is_symmetric():
    x = [1.0, 2.0, -3.0]
    y = [4.0, -0.5, 0.25]
    assert ddot(x, y) == ddot(y, x)


def test_ddot_zero_increment_raises():
    with pytest.raises(ValueError):
        ddot([1.0], [1.0], 0, 1)


def test_dnrm2_pythagorean_triple():
    assert dnrm2([3.0, 4.0]) == pytest.approx(5.0)


def test_dnrm2_single_element_is_absolute_value():
    assert dnrm2([-7.5]) == 7.5


def test_dnrm2_empty_and_nonpositive_increment():
    assert dnrm2([]) == 0.0
    assert dnrm2([1.0, 2.0], 0) == 0.0
    assert dnrm2([1.0, 2.0], -1) == 0.0


def test_dnrm2_avoids_overflow():
    big = 1e200
    assert dnrm2([big, big]) == pytest.approx(math.hypot(big, big))


def test_dscal_round_trip():
    x = [1.0, -3.0, 0.75]
    original = list(x)
    dscal(0.5, x)
    dscal(2.0, x)
    assert x == original


def test_dscal_nonpositive_increment_is_noop():
    x = [1.0, 2.0]
    assert dscal(10.0, x, 0) == [1.0, 2.0]


def test_dgemv_identity():
    a = [1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0]
    x = [2.0, -1.0, 0.5]
    y = [0.0, 0.0, 0.0]
    dgemv(Order.COL_MAJOR, Transpose.NO_TRANS, 3, 3, 1.0, a, 3, x, 0.0, y)
    assert y == x


def test_dgemv_row_and_column_major_agree():
    a_row = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    a_col = [1.0, 4.0, 2.0, 5.0, 3.0, 6.0]
    x = [1.0, -1.0, 2.0]
    y_row = [0.0, 0.0]
    y_col = [0.0, 0.0]
    dgemv(Order.ROW_MAJOR, Transpose.NO_TRANS, 2, 3, 1.0, a_row, 3, x, 0.0, y_row)
    dgemv(Order.COL_MAJOR, Transpose.NO_TRANS, 2, 3, 1.0, a_col, 2, x, 0.0, y_col)
    assert y_row == y_col
    assert y_row[0] == ddot(a_row[0:3], x)
    assert y_row[1] == ddot(a_row[3:6], x)


def test_dgemv_transpose_uses_columns():
    a_col = [1.0, 4.0, 2.0, 5.0, 3.0, 6.0]
    v = [0.5, -2.0]
    y = [0.0, 0.0, 0.0]
    dgemv(Order.COL_MAJOR, Transpose.TRANS, 2, 3, 1.0, a_col, 2, v, 0.0, y)
    for j in range(3):
        assert y[j] == ddot(a_col[2 * j : 2 * j + 2], v)


def test_dgemv_zero_beta_clears_nan():
    a = [1.0, 0.0, 0.0, 1.0]
    y = [float("nan"), float("nan")]
    dgemv(Order.COL_MAJOR, Transpose.NO_TRANS, 2, 2, 1.0, a, 2, [1.0, 2.0], 0.0, y)
    assert y == [1.0, 2.0]


def test_dgemv_zero_alpha_unit_beta_is_noop():
    y = [5.0, 6.0]
    dgemv(Order.COL_MAJOR, Transpose.NO_TRANS, 2, 2, 0.0, [1.0] * 4, 2, [1.0, 1.0], 1.0, y)
    assert y == [5.0, 6.0]


def test_dgemv_small_lda_raises():
    with pytest.raises(ValueError):
        dgemv(Order.COL_MAJOR, Transpose.NO_TRANS, 3, 2, 1.0, [0.0] * 6, 2, [1.0, 1.0], 0.0, [0.0] * 3)


def test_dgemv_negative_dimension_raises():
    with pytest.raises(ValueError):
        dgemv(Order.COL_MAJOR, Transpose.NO_TRANS, -1, 2, 1.0, [0.0], 1, [1.0], 0.0, [0.0])