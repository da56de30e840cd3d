"""
Kernels solving `A x = b` for 1x1 to 5x5 matrices with Cramer's rule,
and a least-squares kernel for tall matrices with up to five columns.

Before expanding, both `A` and `b` are divided by the Euclidean norm
of `b`. The scale cancels out of `x = adj(A) b / det(A)`, so there is
nothing to undo afterwards, but the intermediate products stay in a
range where they do not overflow or underflow. A zero right-hand side
is left unscaled and yields a zero solution.

Each kernel `fullNxN(body, rhs, solution)` reads the first column of
`rhs` and writes `x` into `solution`. All results are computed before
anything is written, so `solution` may alias `rhs`.
"""
__all__ = [
    'full1x1', 'full2x2', 'full3x3', 'full4x4', 'full5x5',
    'symmetric2x2', 'symmetric3x3', 'symmetric4x4', 'symmetric5x5',
    'least_squares', 'FULL', 'SYMMETRIC',
]
from .cofactor import (minors2, minors3, minors4, minors5,
                       sym_minors2, sym_minors3, sym_minors4, sym_minors5)
from .scalar import norm, dot, is_complex
from .store import read, write, lower_indices


def _full2x2(a, b):
    scale = norm(b)
    a = [value / scale for value in a]
    b0, b1 = [value / scale for value in b]
    m00, m10, m01, m11 = minors2(*a)
    det = a[0] * m00 - a[1] * m10
    return ((b0 * m00 - b1 * m10) / det,
            -(b0 * m01 - b1 * m11) / det)


def _full3x3(a, b):
    scale = norm(b)
    a = [value / scale for value in a]
    b0, b1, b2 = [value / scale for value in b]
    (m00, m10, m20,
     m01, m11, m21,
     m02, m12, m22) = minors3(*a)
    det = a[0] * m00 - a[1] * m10 + a[2] * m20
    return ((b0 * m00 - b1 * m10 + b2 * m20) / det,
            -(b0 * m01 - b1 * m11 + b2 * m21) / det,
            (b0 * m02 - b1 * m12 + b2 * m22) / det)


def _full4x4(a, b):
    scale = norm(b)
    a = [value / scale for value in a]
    b0, b1, b2, b3 = [value / scale for value in b]
    (m00, m10, m20, m30,
     m01, m11, m21, m31,
     m02, m12, m22, m32,
     m03, m13, m23, m33) = minors4(*a)
    det = a[0] * m00 - a[1] * m10 + a[2] * m20 - a[3] * m30
    return ((b0 * m00 - b1 * m10 + b2 * m20 - b3 * m30) / det,
            -(b0 * m01 - b1 * m11 + b2 * m21 - b3 * m31) / det,
            (b0 * m02 - b1 * m12 + b2 * m22 - b3 * m32) / det,
            -(b0 * m03 - b1 * m13 + b2 * m23 - b3 * m33) / det)


def _full5x5(a, b):
    scale = norm(b)
    a = [value / scale for value in a]
    b0, b1, b2, b3, b4 = [value / scale for value in b]
    (m00, m10, m20, m30, m40,
     m01, m11, m21, m31, m41,
     m02, m12, m22, m32, m42,
     m03, m13, m23, m33, m43,
     m04, m14, m24, m34, m44) = minors5(*a)
    det = a[0] * m00 - a[1] * m10 + a[2] * m20 - a[3] * m30 + a[4] * m40
    return ((b0 * m00 - b1 * m10 + b2 * m20 - b3 * m30 + b4 * m40) / det,
            -(b0 * m01 - b1 * m11 + b2 * m21 - b3 * m31 + b4 * m41) / det,
            (b0 * m02 - b1 * m12 + b2 * m22 - b3 * m32 + b4 * m42) / det,
            -(b0 * m03 - b1 * m13 + b2 * m23 - b3 * m33 + b4 * m43) / det,
            (b0 * m04 - b1 * m14 + b2 * m24 - b3 * m34 + b4 * m44) / det)


def _symmetric2x2(a, b):
    scale = norm(b)
    a = [value / scale for value in a]
    b0, b1 = [value / scale for value in b]
    m00, m10, m11 = sym_minors2(*a)
    det = a[0] * m00 - a[1] * m10
    return ((b0 * m00 - b1 * m10) / det,
            -(b0 * m10 - b1 * m11) / det)


def _symmetric3x3(a, b):
    scale = norm(b)
    a = [value / scale for value in a]
    b0, b1, b2 = [value / scale for value in b]
    (m00, m10, m20,
     m11, m21,
     m22) = sym_minors3(*a)
    det = a[0] * m00 - a[1] * m10 + a[2] * m20
    return ((b0 * m00 - b1 * m10 + b2 * m20) / det,
            -(b0 * m10 - b1 * m11 + b2 * m21) / det,
            (b0 * m20 - b1 * m21 + b2 * m22) / det)


def _symmetric4x4(a, b):
    scale = norm(b)
    a = [value / scale for value in a]
    b0, b1, b2, b3 = [value / scale for value in b]
    (m00, m10, m20, m30,
     m11, m21, m31,
     m22, m32,
     m33) = sym_minors4(*a)
    det = a[0] * m00 - a[1] * m10 + a[2] * m20 - a[3] * m30
    return ((b0 * m00 - b1 * m10 + b2 * m20 - b3 * m30) / det,
            -(b0 * m10 - b1 * m11 + b2 * m21 - b3 * m31) / det,
            (b0 * m20 - b1 * m21 + b2 * m22 - b3 * m32) / det,
            -(b0 * m30 - b1 * m31 + b2 * m32 - b3 * m33) / det)


def _symmetric5x5(a, b):
    scale = norm(b)
    a = [value / scale for value in a]
    b0, b1, b2, b3, b4 = [value / scale for value in b]
    (m00, m10, m20, m30, m40,
     m11, m21, m31, m41,
     m22, m32, m42,
     m33, m43,
     m44) = sym_minors5(*a)
    det = a[0] * m00 - a[1] * m10 + a[2] * m20 - a[3] * m30 + a[4] * m40
    return ((b0 * m00 - b1 * m10 + b2 * m20 - b3 * m30 + b4 * m40) / det,
            -(b0 * m10 - b1 * m11 + b2 * m21 - b3 * m31 + b4 * m41) / det,
            (b0 * m20 - b1 * m21 + b2 * m22 - b3 * m32 + b4 * m42) / det,
            -(b0 * m30 - b1 * m31 + b2 * m32 - b3 * m33 + b4 * m43) / det,
            (b0 * m40 - b1 * m41 + b2 * m42 - b3 * m43 + b4 * m44) / det)


def full1x1(body, rhs, solution):
    # every column of the right-hand side is solved
    a00 = body.value_at(0)
    write(solution, [value / a00 for value in read(rhs, range(rhs.count()))])


def full2x2(body, rhs, solution):
    write(solution, _full2x2(read(body, range(4)), read(rhs, range(2))))


def full3x3(body, rhs, solution):
    write(solution, _full3x3(read(body, range(9)), read(rhs, range(3))))


def full4x4(body, rhs, solution):
    write(solution, _full4x4(read(body, range(16)), read(rhs, range(4))))


def full5x5(body, rhs, solution):
    write(solution, _full5x5(read(body, range(25)), read(rhs, range(5))))


def symmetric2x2(body, rhs, solution):
    write(solution, _symmetric2x2(read(body, lower_indices(2)),
                                    read(rhs, range(2))))


def symmetric3x3(body, rhs, solution):
    write(solution, _symmetric3x3(read(body, lower_indices(3)),
                                    read(rhs, range(3))))


def symmetric4x4(body, rhs, solution):
    write(solution, _symmetric4x4(read(body, lower_indices(4)),
                                    read(rhs, range(4))))


def symmetric5x5(body, rhs, solution):
    write(solution, _symmetric5x5(read(body, lower_indices(5)),
                                    read(rhs, range(5))))


_FULL = {2: _full2x2, 3: _full3x3, 4: _full4x4, 5: _full5x5}
_SYMMETRIC = {2: _symmetric2x2, 3: _symmetric3x3,
              4: _symmetric4x4, 5: _symmetric5x5}


def least_squares(body, rhs, solution):
    """Least-squares solution of a tall system through its normal
    equations `A^H A x = A^H b`.

    Only the first column of `rhs` is used. The normal matrix is formed
    element by element and solved with the closed-form kernel of the
    matching size (the symmetric one for real data, the full one for
    complex data since the normal matrix is then only Hermitian).

    Parameters
    ----------
    body : `Store`
        Tall `(M, N)` matrix, with `1 <= N <= 5`.
    rhs : `Store`
        `(M, K)` right-hand side.
    solution : `Store`
        `(N, K)` output. Only its first column is written.

    """
    n = body.count_columns()
    if not 1 <= n <= 5:
        raise ValueError('Least squares kernel expects 1 to 5 columns, '
                         'got {}.'.format(n))
    columns = [body.column(j) for j in range(n)]
    target = rhs.column(0)
    b = [dot(column, target) for column in columns]
    if n == 1:
        write(solution, [b[0] / dot(columns[0], columns[0])])
    elif is_complex(b[0]):
        a = [dot(columns[i], columns[j])
             for j in range(n) for i in range(n)]
        write(solution, _FULL[n](a, b))
    else:
        a = [dot(columns[i], columns[j])
             for j in range(n) for i in range(j, n)]
        write(solution, _SYMMETRIC[n](a, b))


FULL = {1: full1x1, 2: full2x2, 3: full3x3, 4: full4x4, 5: full5x5}
SYMMETRIC = {2: symmetric2x2, 3: symmetric3x3,
             4: symmetric4x4, 5: symmetric5x5}
