"""
Closed-form determinants and minors of small matrices.

Entries are always passed in column-major order, i.e., `a10` (row 1,
column 0) comes right after `a00`. Higher orders are expanded along
their first column, and the sub-determinants of the trailing columns
are computed once and shared between cofactors instead of recursing
through the lower-order function.

These functions only use `+`, `-` and `*`, so they accept any scalar
type: python or sympy numbers, or tensors (in which case a whole batch
of matrices is processed elementwise).
"""
__all__ = [
    'det2', 'det3', 'det4', 'det5',
    'minors2', 'minors3', 'minors4', 'minors5',
    'sym_minors2', 'sym_minors3', 'sym_minors4', 'sym_minors5',
]


def det2(a00, a10,
         a01, a11):
    return a00 * a11 - a10 * a01


def det3(a00, a10, a20,
         a01, a11, a21,
         a02, a12, a22):
    return (a00 * det2(a11, a21, a12, a22)
            - a10 * det2(a01, a21, a02, a22)
            + a20 * det2(a01, a11, a02, a12))


def det4(a00, a10, a20, a30,
         a01, a11, a21, a31,
         a02, a12, a22, a32,
         a03, a13, a23, a33):
    # 2x2 determinants of columns (2, 3), indexed by their rows
    d01 = det2(a02, a12, a03, a13)
    d02 = det2(a02, a22, a03, a23)
    d03 = det2(a02, a32, a03, a33)
    d12 = det2(a12, a22, a13, a23)
    d13 = det2(a12, a32, a13, a33)
    d23 = det2(a22, a32, a23, a33)

    # 3x3 determinants of columns (1, 2, 3)
    d123 = a11 * d23 - a21 * d13 + a31 * d12
    d023 = a01 * d23 - a21 * d03 + a31 * d02
    d013 = a01 * d13 - a11 * d03 + a31 * d01
    d012 = a01 * d12 - a11 * d02 + a21 * d01

    return a00 * d123 - a10 * d023 + a20 * d013 - a30 * d012


def det5(a00, a10, a20, a30, a40,
         a01, a11, a21, a31, a41,
         a02, a12, a22, a32, a42,
         a03, a13, a23, a33, a43,
         a04, a14, a24, a34, a44):
    # 2x2 determinants of columns (3, 4), indexed by their rows
    d01 = det2(a03, a13, a04, a14)
    d02 = det2(a03, a23, a04, a24)
    d03 = det2(a03, a33, a04, a34)
    d04 = det2(a03, a43, a04, a44)
    d12 = det2(a13, a23, a14, a24)
    d13 = det2(a13, a33, a14, a34)
    d14 = det2(a13, a43, a14, a44)
    d23 = det2(a23, a33, a24, a34)
    d24 = det2(a23, a43, a24, a44)
    d34 = det2(a33, a43, a34, a44)

    # 3x3 determinants of columns (2, 3, 4)
    d012 = a02 * d12 - a12 * d02 + a22 * d01
    d013 = a02 * d13 - a12 * d03 + a32 * d01
    d014 = a02 * d14 - a12 * d04 + a42 * d01
    d023 = a02 * d23 - a22 * d03 + a32 * d02
    d024 = a02 * d24 - a22 * d04 + a42 * d02
    d034 = a02 * d34 - a32 * d04 + a42 * d03
    d123 = a12 * d23 - a22 * d13 + a32 * d12
    d124 = a12 * d24 - a22 * d14 + a42 * d12
    d134 = a12 * d34 - a32 * d14 + a42 * d13
    d234 = a22 * d34 - a32 * d24 + a42 * d23

    # 4x4 determinants of columns (1, 2, 3, 4)
    d1234 = a11 * d234 - a21 * d134 + a31 * d124 - a41 * d123
    d0234 = a01 * d234 - a21 * d034 + a31 * d024 - a41 * d023
    d0134 = a01 * d134 - a11 * d034 + a31 * d014 - a41 * d013
    d0124 = a01 * d124 - a11 * d024 + a21 * d014 - a41 * d012
    d0123 = a01 * d123 - a11 * d023 + a21 * d013 - a31 * d012

    return (a00 * d1234 - a10 * d0234 + a20 * d0134
            - a30 * d0124 + a40 * d0123)


# ----------------------------------------------------------------------
#   Minors
# ----------------------------------------------------------------------
# `mij` is the determinant of the matrix with row i and column j
# removed. Minors are returned in column-major order.


def minors2(a00, a10,
            a01, a11):
    return a11, a01, a10, a00


def minors3(a00, a10, a20,
            a01, a11, a21,
            a02, a12, a22):
    m00 = det2(a11, a21, a12, a22)
    m10 = det2(a01, a21, a02, a22)
    m20 = det2(a01, a11, a02, a12)
    m01 = det2(a10, a20, a12, a22)
    m11 = det2(a00, a20, a02, a22)
    m21 = det2(a00, a10, a02, a12)
    m02 = det2(a10, a20, a11, a21)
    m12 = det2(a00, a20, a01, a21)
    m22 = det2(a00, a10, a01, a11)
    return (m00, m10, m20, m01, m11, m21, m02, m12, m22)


def minors4(*entries):
    return _minors(4, _square(4, entries))


def minors5(*entries):
    return _minors(5, _square(5, entries))


# Symmetric variants: only the lower triangle is passed (column-major)
# and only the minors on and below the diagonal are returned, since
# mij == mji.


def sym_minors2(a00, a10,
                a11):
    return a11, a10, a00


def sym_minors3(a00, a10, a20,
                a11, a21,
                a22):
    m00 = det2(a11, a21, a21, a22)
    m10 = det2(a10, a21, a20, a22)
    m20 = det2(a10, a11, a20, a21)
    m11 = det2(a00, a20, a20, a22)
    m21 = det2(a00, a10, a20, a21)
    m22 = det2(a00, a10, a10, a11)
    return (m00, m10, m20, m11, m21, m22)


def sym_minors4(*entries):
    return _minors(4, _mirror(4, entries), lower=True)


def sym_minors5(*entries):
    return _minors(5, _mirror(5, entries), lower=True)


# ----------------------------------------------------------------------
#   Shared blocks
# ----------------------------------------------------------------------
# From order 4 on, the minors of one matrix have most of their own
# sub-determinants in common. Each block determinant is expanded along
# its first column and stored under its (rows, columns) key, so that
# every 2x2 and 3x3 block is formed once for all minors.


def _square(n, entries):
    return [[entries[c * n + r] for c in range(n)] for r in range(n)]


def _mirror(n, entries):
    a = [[None] * n for _ in range(n)]
    entries = iter(entries)
    for c in range(n):
        for r in range(c, n):
            a[r][c] = a[c][r] = next(entries)
    return a


def _minors(n, a, lower=False):
    blocks = {}
    indices = tuple(range(n))
    minors = []
    for j in indices:
        columns = indices[:j] + indices[j+1:]
        for i in indices[j if lower else 0:]:
            rows = indices[:i] + indices[i+1:]
            minors.append(_block(a, rows, columns, blocks))
    return tuple(minors)


def _block(a, rows, columns, blocks):
    key = (rows, columns)
    if key in blocks:
        return blocks[key]
    first, rest = columns[0], columns[1:]
    if len(rows) == 2:
        (r0, r1), c1 = rows, rest[0]
        det = det2(a[r0][first], a[r1][first], a[r0][c1], a[r1][c1])
    else:
        det = None
        for k, row in enumerate(rows):
            term = a[row][first] * _block(a, rows[:k] + rows[k+1:], rest,
                                          blocks)
            if det is None:
                det = term
            elif k % 2:
                det = det - term
            else:
                det = det + term
    blocks[key] = det
    return det
