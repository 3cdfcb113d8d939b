import io

import pytest

from boundls.cgls import CglsStatus, cgls, newton_step_cgls

A = [[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]]
B = [1.0, 2.0, 4.0]


def matvec(v):
    return [sum(a * x for a, x in zip(row, v)) for row in A]


def rmatvec(y):
    return [sum(A[i][j] * y[i] for i in range(len(A))) for j in range(len(A[0]))]


def residual_of(x):
    return [b - ax for b, ax in zip(B, matvec(x))]


def test_solves_normal_equations():
    result = cgls(matvec, rmatvec, 3, 2, B, 50, 1e-12)
    assert result.status is CglsStatus.CONVERGED
    grad = rmatvec(residual_of(result.x))
    assert all(abs(g) < 1e-9 for g in grad)


def test_residual_matches_solution():
    result = cgls(matvec, rmatvec, 3, 2, B, 50, 1e-12)
    expected = residual_of(result.x)
    assert result.residual == pytest.approx(expected, abs=1e-12)


def test_input_residual_not_modified():
    r = list(B)
    cgls(matvec, rmatvec, 3, 2, r, 50, 1e-12)
    assert r == B


def test_damped_with_linear_term():
    damp = 0.5
    c = [0.3, -0.2]
    result = cgls(matvec, rmatvec, 3, 2, B, 50, 1e-12, damp, c)
    x = result.x
    lhs = [g + damp * 0.0 for g in rmatvec(matvec(x))]
    lhs = [value + damp * xj for value, xj in zip(lhs, x)]
    rhs = [g + cj for g, cj in zip(rmatvec(B), c)]
    assert lhs == pytest.approx(rhs, abs=1e-9)


def test_iteration_limit():
    result = cgls(matvec, rmatvec, 3, 2, B, 1, 1e-14)
    assert result.status is CglsStatus.ITERATION_LIMIT
    assert result.iterations == 1
    assert result.optimality > 1e-14


def test_zero_rhs_gives_zero_solution():
    result = cgls(matvec, rmatvec, 3, 2, [0.0, 0.0, 0.0], 10, 1e-8)
    assert result.x == [0.0, 0.0]
    assert result.iterations == 0
    assert result.status is CglsStatus.CONVERGED


def test_wrong_residual_length_raises():
    with pytest.raises(ValueError):
        cgls(matvec, rmatvec, 3, 2, [1.0, 2.0], 10, 1e-8)


def test_wrong_linear_term_length_raises():
    with pytest.raises(ValueError):
        cgls(matvec, rmatvec, 3, 2, B, 10, 1e-8, 0.0, [1.0])


def test_log_output():
    stream = io.StringIO()
    result = cgls(matvec, rmatvec, 3, 2, B, 50, 1e-12, log=stream)
    text = stream.getvalue()
    assert "CGLS:" in text
    assert "resNE" in text
    iteration_lines = [
        line for line in text.splitlines() if line.strip()[:1].isdigit()
    ]
    assert len(iteration_lines) == result.iterations + 1


def test_newton_step_free_subset():
    x = [0.5, 0.0]
    free = [1]
    damp = 0.1
    c = [0.3, -0.2]
    r = residual_of(x)
    result = newton_step_cgls(matvec, rmatvec, 3, free, x, r, damp, 50, 1e-12, c)
    assert result.status is CglsStatus.CONVERGED
    assert len(result.x) == 1
    dx = result.x[0]
    column = [row[1] for row in A]
    lhs = sum(a * a for a in column) * dx + damp * damp * dx
    rhs = sum(a * ri for a, ri in zip(column, r)) - c[1] - damp * damp * x[1]
    assert lhs == pytest.approx(rhs, abs=1e-9)


def test_newton_step_all_free_matches_cgls():
    x = [0.0, 0.0]
    step = newton_step_cgls(matvec, rmatvec, 3, [0, 1], x, B, 0.0, 50, 1e-12)
    direct = cgls(matvec, rmatvec, 3, 2, B, 50, 1e-12)
    assert step.x == pytest.approx(direct.x, abs=1e-12)


def test_newton_step_bad_index_raises():
    with pytest.raises(IndexError):
        newton_step_cgls(matvec, rmatvec, 3, [2], [0.0, 0.0], B)