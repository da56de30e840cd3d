"""
Determinant kernels of 1x1 to 5x5 matrices.

Full kernels read all elements of the input store. Symmetric kernels
only read its lower triangle and mirror it, so the upper triangle may
hold anything.
"""
__all__ = [
    'full1x1', 'full2x2', 'full3x3', 'full4x4', 'full5x5',
    'symmetric2x2', 'symmetric3x3', 'symmetric4x4', 'symmetric5x5',
    'FULL', 'SYMMETRIC',
]
from .cofactor import det2, det3, det4, det5
from .scalar import copy
from .store import read, lower_indices


def full1x1(matrix):
    return copy(matrix.value_at(0))


def full2x2(matrix):
    return det2(*read(matrix, range(4)))


def full3x3(matrix):
    return det3(*read(matrix, range(9)))


def full4x4(matrix):
    return det4(*read(matrix, range(16)))


def full5x5(matrix):
    return det5(*read(matrix, range(25)))


def symmetric2x2(matrix):
    a00, a10, a11 = read(matrix, lower_indices(2))
    return det2(a00, a10,
                a10, a11)


def symmetric3x3(matrix):
    (a00, a10, a20,
     a11, a21,
     a22) = read(matrix, lower_indices(3))
    return det3(a00, a10, a20,
                a10, a11, a21,
                a20, a21, a22)


def symmetric4x4(matrix):
    (a00, a10, a20, a30,
     a11, a21, a31,
     a22, a32,
     a33) = read(matrix, lower_indices(4))
    return det4(a00, a10, a20, a30,
                a10, a11, a21, a31,
                a20, a21, a22, a32,
                a30, a31, a32, a33)


def symmetric5x5(matrix):
    (a00, a10, a20, a30, a40,
     a11, a21, a31, a41,
     a22, a32, a42,
     a33, a43,
     a44) = read(matrix, lower_indices(5))
    return det5(a00, a10, a20, a30, a40,
                a10, a11, a21, a31, a41,
                a20, a21, a22, a32, a42,
                a30, a31, a32, a33, a43,
                a40, a41, a42, a43, a44)


FULL = {1: full1x1, 2: full2x2, 3: full3x3, 4: full4x4, 5: full5x5}
SYMMETRIC = {2: symmetric2x2, 3: symmetric3x3,
             4: symmetric4x4, 5: symmetric5x5}
