"""
Inverse kernels of 1x1 to 5x5 matrices, using the adjugate formula.

The matrix is first divided by its largest absolute element. With
`A = s * B`, the inverse of `A` is `adj(B) / (s * det(B))`, so the
minors of the well-ranged `B` are used directly and only the
determinant carries the scale.

Each kernel `fullNxN(source, destination)` reads the source store and
writes the inverse into the destination store. All results are
computed before anything is written, so both stores may be the same.
A singular matrix yields infinite or undefined elements.
"""
__all__ = [
    'full1x1', 'full2x2', 'full3x3', 'full4x4', 'full5x5',
    'symmetric2x2', 'symmetric3x3', 'symmetric4x4', 'symmetric5x5',
    'FULL', 'SYMMETRIC',
]
from .cofactor import (minors2, minors3, minors4, minors5,
                       sym_minors2, sym_minors3, sym_minors4, sym_minors5)
from .scalar import largest
from .store import read, write, lower_indices


def _full2x2(a):
    scale = largest(a)
    a = [value / scale for value in a]
    m00, m10, m01, m11 = minors2(*a)
    det = scale * (a[0] * m00 - a[1] * m10)
    return (m00 / det, -m01 / det,
            -m10 / det, m11 / det)


def _full3x3(a):
    scale = largest(a)
    a = [value / scale for value in a]
    (m00, m10, m20,
     m01, m11, m21,
     m02, m12, m22) = minors3(*a)
    det = scale * (a[0] * m00 - a[1] * m10 + a[2] * m20)
    return (m00 / det, -m01 / det, m02 / det,
            -m10 / det, m11 / det, -m12 / det,
            m20 / det, -m21 / det, m22 / det)


def _full4x4(a):
    scale = largest(a)
    a = [value / scale for value in a]
    (m00, m10, m20, m30,
     m01, m11, m21, m31,
     m02, m12, m22, m32,
     m03, m13, m23, m33) = minors4(*a)
    det = scale * (a[0] * m00 - a[1] * m10 + a[2] * m20 - a[3] * m30)
    return (m00 / det, -m01 / det, m02 / det, -m03 / det,
            -m10 / det, m11 / det, -m12 / det, m13 / det,
            m20 / det, -m21 / det, m22 / det, -m23 / det,
            -m30 / det, m31 / det, -m32 / det, m33 / det)


def _full5x5(a):
    scale = largest(a)
    a = [value / scale for value in a]
    (m00, m10, m20, m30, m40,
     m01, m11, m21, m31, m41,
     m02, m12, m22, m32, m42,
     m03, m13, m23, m33, m43,
     m04, m14, m24, m34, m44) = minors5(*a)
    det = scale * (a[0] * m00 - a[1] * m10 + a[2] * m20
                   - a[3] * m30 + a[4] * m40)
    return (m00 / det, -m01 / det, m02 / det, -m03 / det, m04 / det,
            -m10 / det, m11 / det, -m12 / det, m13 / det, -m14 / det,
            m20 / det, -m21 / det, m22 / det, -m23 / det, m24 / det,
            -m30 / det, m31 / det, -m32 / det, m33 / det, -m34 / det,
            m40 / det, -m41 / det, m42 / det, -m43 / det, m44 / det)


def _symmetric2x2(a):
    scale = largest(a)
    a = [value / scale for value in a]
    m00, m10, m11 = sym_minors2(*a)
    det = scale * (a[0] * m00 - a[1] * m10)
    return (m00 / det, -m10 / det,
            -m10 / det, m11 / det)


def _symmetric3x3(a):
    scale = largest(a)
    a = [value / scale for value in a]
    (m00, m10, m20,
     m11, m21,
     m22) = sym_minors3(*a)
    det = scale * (a[0] * m00 - a[1] * m10 + a[2] * m20)
    return (m00 / det, -m10 / det, m20 / det,
            -m10 / det, m11 / det, -m21 / det,
            m20 / det, -m21 / det, m22 / det)


def _symmetric4x4(a):
    scale = largest(a)
    a = [value / scale for value in a]
    (m00, m10, m20, m30,
     m11, m21, m31,
     m22, m32,
     m33) = sym_minors4(*a)
    det = scale * (a[0] * m00 - a[1] * m10 + a[2] * m20 - a[3] * m30)
    return (m00 / det, -m10 / det, m20 / det, -m30 / det,
            -m10 / det, m11 / det, -m21 / det, m31 / det,
            m20 / det, -m21 / det, m22 / det, -m32 / det,
            -m30 / det, m31 / det, -m32 / det, m33 / det)


def _symmetric5x5(a):
    scale = largest(a)
    a = [value / scale for value in a]
    (m00, m10, m20, m30, m40,
     m11, m21, m31, m41,
     m22, m32, m42,
     m33, m43,
     m44) = sym_minors5(*a)
    det = scale * (a[0] * m00 - a[1] * m10 + a[2] * m20
                   - a[3] * m30 + a[4] * m40)
    return (m00 / det, -m10 / det, m20 / det, -m30 / det, m40 / det,
            -m10 / det, m11 / det, -m21 / det, m31 / det, -m41 / det,
            m20 / det, -m21 / det, m22 / det, -m32 / det, m42 / det,
            -m30 / det, m31 / det, -m32 / det, m33 / det, -m43 / det,
            m40 / det, -m41 / det, m42 / det, -m43 / det, m44 / det)


def full1x1(source, destination):
    destination.set(0, 1 / source.value_at(0))


def full2x2(source, destination):
    write(destination, _full2x2(read(source, range(4))))


def full3x3(source, destination):
    write(destination, _full3x3(read(source, range(9))))


def full4x4(source, destination):
    write(destination, _full4x4(read(source, range(16))))


def full5x5(source, destination):
    write(destination, _full5x5(read(source, range(25))))


def symmetric2x2(source, destination):
    write(destination, _symmetric2x2(read(source, lower_indices(2))))


def symmetric3x3(source, destination):
    write(destination, _symmetric3x3(read(source, lower_indices(3))))


def symmetric4x4(source, destination):
    write(destination, _symmetric4x4(read(source, lower_indices(4))))


def symmetric5x5(source, destination):
    write(destination, _symmetric5x5(read(source, lower_indices(5))))


FULL = {1: full1x1, 2: full2x2, 3: full3x3, 4: full4x4, 5: full5x5}
SYMMETRIC = {2: symmetric2x2, 3: symmetric3x3,
             4: symmetric4x4, 5: symmetric5x5}
