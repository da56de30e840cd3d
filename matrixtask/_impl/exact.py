"""
Exact decompositions for the rational domain, on top of sympy.

Square roots leave the field of rationals, so the roles played by
Cholesky and QR in floating point are filled by their root-free
counterparts: an LDL^T decomposition and the normal equations. The
singular value role is filled by sympy's pseudo-inverse.

Failures are reported with `ValueError`.
"""
__all__ = ['ExactCholesky', 'ExactLU', 'ExactQR', 'ExactSVD']
import sympy
from .decomposition import Decomposition


def _check_square(matrix, name):
    if not matrix.is_square:
        raise ValueError('The {} decomposition of a non-square matrix has no '
                         'determinant.'.format(name))


def _lu_factor(data):
    lower, upper, swaps = data.LUdecomposition()
    return lower, upper, swaps


def _lu_solvable(factors):
    _, upper, _ = factors
    return all(not upper[i, i].is_zero for i in range(upper.rows))


def _lu_solve(factors, rhs):
    lower, upper, swaps = factors
    rhs = rhs.permute_rows(swaps)
    return upper.upper_triangular_solve(lower.lower_triangular_solve(rhs))


class ExactLU(Decomposition):
    """Fraction-free LU decomposition with row swaps `P A = L U`."""

    name = 'lu'
    error = ValueError

    def factorize(self, data):
        return _lu_factor(data)

    def solvable(self, factors):
        return _lu_solvable(factors)

    def determinant(self, factors):
        _, upper, swaps = factors
        _check_square(upper, self.name)
        sign = sympy.Integer(-1) ** len(swaps)
        return sign * sympy.prod(upper.diagonal())

    def inverse(self, factors):
        return _lu_solve(factors, sympy.eye(factors[1].rows))

    def solution(self, factors, rhs):
        return _lu_solve(factors, rhs)


class ExactCholesky(Decomposition):
    """LDL^T decomposition of a positive definite matrix.

    Only the lower triangle of the matrix is used. A non-positive pivot
    raises `ValueError`.
    """

    name = 'cholesky'
    error = ValueError

    def factorize(self, data):
        n = data.rows
        data = sympy.Matrix(n, n, lambda i, j: data[max(i, j), min(i, j)])
        lower, diagonal = data.LDLdecomposition(hermitian=False)
        if not all(diagonal[i, i].is_positive for i in range(n)):
            raise ValueError('Matrix is not positive definite.')
        return lower, diagonal

    def determinant(self, factors):
        _, diagonal = factors
        return sympy.prod(diagonal.diagonal())

    def inverse(self, factors):
        return self.solution(factors, sympy.eye(factors[0].rows))

    def solution(self, factors, rhs):
        lower, diagonal = factors
        y = lower.lower_triangular_solve(rhs)
        y = sympy.Matrix(y.rows, y.cols, lambda i, j: y[i, j] / diagonal[i, i])
        return lower.T.upper_triangular_solve(y)


class ExactQR(Decomposition):
    """Least squares through the normal equations `A^H A x = A^H b`.

    Takes the place of QR for square and tall rational matrices.
    """

    name = 'qr'
    error = ValueError

    def factorize(self, data):
        return data, _lu_factor(data.H * data)

    def solvable(self, factors):
        data, gram = factors
        return data.rows >= data.cols and _lu_solvable(gram)

    def determinant(self, factors):
        data, _ = factors
        _check_square(data, self.name)
        return data.det()

    def inverse(self, factors):
        data, gram = factors
        return _lu_solve(gram, data.H)

    def solution(self, factors, rhs):
        data, gram = factors
        return _lu_solve(gram, data.H * rhs)


class ExactSVD(Decomposition):
    """Moore-Penrose pseudo-inverse, in place of the singular value
    decomposition."""

    name = 'svd'
    error = ValueError

    def factorize(self, data):
        return data, data.pinv()

    def determinant(self, factors):
        data, _ = factors
        _check_square(data, self.name)
        return data.det()

    def inverse(self, factors):
        return factors[1]

    def solution(self, factors, rhs):
        return factors[1] * rhs
