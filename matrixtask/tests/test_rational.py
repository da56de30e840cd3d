from matrixtask import (
    determinant_task_for, inverter_task_for, solver_task_for,
    RATIONAL, RationalStore)
from sympy import Matrix, Rational, eye, zoo
import pytest

sizes = [1, 2, 3, 4, 5]


def hilbert(n):
    return Matrix(n, n, lambda i, j: Rational(1, i + j + 1))


def lehmer(n):
    # symmetric positive definite
    return Matrix(n, n, lambda i, j: Rational(min(i, j) + 1, max(i, j) + 1))


@pytest.mark.parametrize("n", sizes)
@pytest.mark.parametrize("symmetric", [False, True])
def test_exact(n, symmetric):
    mat = hilbert(n)
    task = determinant_task_for(mat, symmetric)
    assert task.domain is RATIONAL
    assert task.calculate_determinant(mat) == mat.det()
    out = inverter_task_for(mat, symmetric).invert(mat)
    assert isinstance(out, RationalStore)
    assert out.data == mat.inv()
    rhs = Matrix(n, 1, lambda i, j: i - 2)
    out = solver_task_for(mat, rhs, symmetric).solve(mat, rhs)
    assert out.data == mat.LUsolve(rhs)


@pytest.mark.parametrize("n", sizes)
def test_identity(n):
    task = determinant_task_for((n, n), domain=RATIONAL)
    assert task.calculate_determinant(eye(n)) == 1


def test_scenarios():
    mat = Matrix([[4, 3], [6, 3]])
    assert determinant_task_for(mat).calculate_determinant(mat) == -6
    mat = Matrix([[4, 7], [2, 6]])
    out = inverter_task_for(mat).invert(mat).data
    assert out == Matrix([[Rational(3, 5), Rational(-7, 10)],
                          [Rational(-1, 5), Rational(2, 5)]])


def test_floats_are_converted():
    task = inverter_task_for((2, 2), domain='rational')
    out = task.invert([[0.5, 0], [0, 4]])
    assert out.data == Matrix([[2, 0], [0, Rational(1, 4)]])


def test_singular():
    mat = Matrix([[1, 2], [2, 4]])
    out = inverter_task_for(mat).invert(mat).data
    assert all(value in (zoo, -zoo) or value.is_nan for value in out)


def test_zero_rhs():
    mat = hilbert(3)
    rhs = Matrix([0, 0, 0])
    out = solver_task_for(mat, rhs).solve(mat, rhs).data
    assert out == Matrix([0, 0, 0])


def test_least_squares():
    body = Matrix([[1, 0], [1, 1], [1, 2]])
    rhs = Matrix([0, 1, 3])
    task = solver_task_for(body, rhs)
    assert task.name == 'least_squares'
    assert task.solve(body, rhs).data == Matrix([Rational(-1, 6),
                                                 Rational(3, 2)])


@pytest.mark.parametrize("n", [6, 7])
def test_fallbacks(n):
    mat = lehmer(n)
    rhs = Matrix(n, 2, lambda i, j: i + j)
    ref_det, ref_inv = mat.det(), mat.inv()
    for symmetric, name in [(False, 'lu'), (True, 'cholesky')]:
        task = determinant_task_for(mat, symmetric, symmetric)
        assert task.name == name
        assert task.calculate_determinant(mat) == ref_det
        task = inverter_task_for(mat, symmetric, symmetric)
        assert task.invert(mat).data == ref_inv
        task = solver_task_for(mat, rhs, symmetric, symmetric)
        assert task.solve(mat, rhs).data == ref_inv * rhs


def test_exact_cholesky_failure():
    cholesky = RATIONAL.cholesky()
    indefinite = Matrix([[1, 2], [2, 1]])
    assert not cholesky.compute(indefinite)
    with pytest.raises(ValueError):
        cholesky.invert(indefinite)


def test_exact_lu_failure():
    lu = RATIONAL.lu()
    singular = Matrix([[1, 2], [2, 4]])
    assert not lu.compute(singular)
    assert lu.get_determinant() == 0
    with pytest.raises(ValueError):
        lu.get_inverse()


def test_exact_non_square():
    tall = Matrix([[1, 0], [0, 1], [1, 1]])
    rhs = Matrix([1, 2, 4])
    task = solver_task_for(tall, Matrix.hstack(rhs, rhs))
    assert task.name == 'qr'
    out = task.solve(tall, Matrix.hstack(rhs, rhs)).data
    assert out[:, 0] == (tall.T * tall).inv() * tall.T * rhs
    with pytest.raises(ValueError):
        task.calculate_determinant(tall)
    task = inverter_task_for(tall.T)
    assert task.name == 'svd'
    assert task.invert(tall.T).data == tall.T.pinv()
