"""
## Overview

Tensor-in, tensor-out linear algebra on top of the task factories.

These functions select a task from the shape of their inputs and the
structural hints they are given, run it, and return the underlying
tensor. Batched inputs (`(..., m, n)`) are processed in a single call.

!!! warning
    Structural hints are trusted. A matrix declared `symmetric` is read
    from its lower triangle only, and a singular matrix given to a
    closed-form kernel yields infinite or undefined values instead of
    an error.

---
"""
__all__ = ['det', 'inv', 'lmdiv', 'rmdiv', 'solvevec']
from typing import Optional, Sequence, Union
import torch
import sympy
from ._impl.store import Store
from .determinant import determinant_task_for
from .inverter import inverter_task_for
from .solver import solver_task_for
from .typing import MatrixLike, DomainLike


def det(
    a: MatrixLike,
    symmetric: bool = False,
    positive_definite: bool = False,
    domain: Optional[DomainLike] = None,
):
    r"""Determinant $\det \mathbf{A}$.

    Parameters
    ----------
    a : `(..., n, n) tensor`
        Input matrix.
    symmetric : `bool`, default=False
        Trust that `a` is symmetric.
    positive_definite : `bool`, default=False
        Trust that `a` is positive definite (only used if `symmetric`).
    domain : `Domain or str or torch.dtype`, optional
        Numeric domain. Default: inferred from `a`.

    Returns
    -------
    d : `(...) tensor`
        Determinant.

    """
    task = determinant_task_for(a, symmetric, positive_definite, domain)
    return task.calculate_determinant(a)


def inv(
    a: MatrixLike,
    symmetric: bool = False,
    positive_definite: bool = False,
    domain: Optional[DomainLike] = None,
    out: Optional[MatrixLike] = None,
):
    r"""Matrix inversion $\mathbf{A}^{-1}$.

    !!! note
        if ``m != n``, a pseudo-inverse is returned.

    Parameters
    ----------
    a : `(..., m, n) tensor`
        Input matrix.
    symmetric : `bool`, default=False
        Trust that `a` is symmetric.
    positive_definite : `bool`, default=False
        Trust that `a` is positive definite (only used if `symmetric`).
    domain : `Domain or str or torch.dtype`, optional
        Numeric domain. Default: inferred from `a`.
    out : `(..., n, m) tensor`, optional
        Output tensor.

    Returns
    -------
    x : `(..., n, m) tensor`
        Inverse matrix.

    """
    task = inverter_task_for(a, symmetric, positive_definite, domain)
    return task.invert(a, out).data


def lmdiv(
    a: MatrixLike,
    b: MatrixLike,
    symmetric: bool = False,
    positive_definite: bool = False,
    domain: Optional[DomainLike] = None,
    out: Optional[MatrixLike] = None,
):
    r"""Left matrix division $\mathbf{A}^{-1} \times \mathbf{B}$.

    !!! note
        if ``m != n``, the least-squares solution is returned.

    Parameters
    ----------
    a : `(..., m, n) tensor`
        Left input ("the system").
    b : `(..., m, k) tensor`
        Right input ("the point").
    symmetric : `bool`, default=False
        Trust that `a` is symmetric.
    positive_definite : `bool`, default=False
        Trust that `a` is positive definite (only used if `symmetric`).
    domain : `Domain or str or torch.dtype`, optional
        Numeric domain. Default: inferred from `a`.
    out : `(..., n, k) tensor`, optional
        Output tensor.

    Returns
    -------
    x : `(..., n, k) tensor`
        Solution of the linear system.

    """
    task = solver_task_for(a, b, symmetric, positive_definite, domain)
    return task.solve(a, b, out).data


def rmdiv(
    a: MatrixLike,
    b: MatrixLike,
    symmetric: bool = False,
    positive_definite: bool = False,
    domain: Optional[DomainLike] = None,
):
    r"""Right matrix division $\mathbf{A} \times \mathbf{B}^{-1}$.

    Parameters
    ----------
    a : `(..., k, m) tensor or matrix`
        Left input ("the point").
    b : `(..., n, m) tensor or matrix`
        Right input ("the system").
    symmetric : `bool`, default=False
        Trust that `b` is symmetric.
    positive_definite : `bool`, default=False
        Trust that `b` is positive definite (only used if `symmetric`).
    domain : `Domain or str or torch.dtype`, optional
        Numeric domain. Default: inferred from `b`.

    Returns
    -------
    x : `(..., k, n) tensor or sympy.Matrix`
        Solution of the linear system.

    """
    x = lmdiv(_transpose(b), _transpose(a),
              symmetric, positive_definite, domain)
    return _transpose(x)


def solvevec(
    a: MatrixLike,
    b: Union[torch.Tensor, sympy.MatrixBase, Sequence],
    symmetric: bool = False,
    positive_definite: bool = False,
    domain: Optional[DomainLike] = None,
):
    r"""Left matrix-vector division $\mathbf{A}^{-1} \times \mathbf{b}$.

    Parameters
    ----------
    a : `(..., m, n) tensor or matrix`
        Left input ("the system").
    b : `(..., m) tensor or sequence`, or `(m, 1) sympy.Matrix`
        Right input ("the point").
    symmetric : `bool`, default=False
        Trust that `a` is symmetric.
    positive_definite : `bool`, default=False
        Trust that `a` is positive definite (only used if `symmetric`).
    domain : `Domain or str or torch.dtype`, optional
        Numeric domain. Default: inferred from `a`.

    Returns
    -------
    x : `(..., n) tensor`, or `(n, 1) sympy.Matrix`
        Solution of the linear system. Rational solutions are returned
        as a column, since sympy has no one-dimensional matrices.

    """
    if isinstance(b, torch.Tensor):
        b = b.unsqueeze(-1)
    elif isinstance(b, sympy.MatrixBase):
        b = b.reshape(len(b), 1)
    else:
        b = [[value] for value in b]
    x = lmdiv(a, b, symmetric, positive_definite, domain)
    if isinstance(x, torch.Tensor):
        x = x.squeeze(-1)
    return x


def _transpose(x):
    if isinstance(x, Store):
        x = x.data
    if isinstance(x, torch.Tensor):
        return x.transpose(-1, -2)
    if isinstance(x, sympy.MatrixBase):
        return x.T
    return [list(column) for column in zip(*x)]
