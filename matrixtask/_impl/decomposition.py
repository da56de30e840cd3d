"""
Decomposition fallbacks for matrices without a closed-form kernel.

A decomposition can be used in two ways:

* as a task (`calculate_determinant`, `invert`, `solve`), in which
  case each call factorizes its own input and no state is kept;
* statefully: `compute(matrix)` factorizes once and reports whether the
  factors can be used to solve systems, after which `get_determinant`,
  `get_inverse` and `get_solution` reuse the factors.

Backend failures (e.g., a matrix that is not positive definite given
to Cholesky) are raised as the backend's own error type by the task
methods, and reported as `False` by `compute`.
"""
__all__ = ['Decomposition', 'Cholesky', 'LU', 'QR', 'SVD']
import torch
from torch import Tensor
from typing import Optional
from .store import Store
from .task import DeterminantTask, InverterTask, SolverTask, destination


class Decomposition(DeterminantTask, InverterTask, SolverTask):
    """Base class for all decompositions.

    Subclasses implement the backend hooks `factorize`, `determinant`,
    `inverse`, `solution` and, when a factorization can succeed without
    being usable, `solvable`.
    """

    name: str = None
    error = torch.linalg.LinAlgError

    def __init__(self, domain):
        self.domain = domain
        self._factors = None

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, self.domain.name)

    # ------------------------------------------------------------------
    #   Stateful interface
    # ------------------------------------------------------------------

    def compute(self, matrix) -> bool:
        """Factorize `matrix`.

        Returns
        -------
        success : `bool`
            Whether the factors can be used to invert and solve.

        """
        try:
            self._factors = self.factorize(self.domain.wrap(matrix).data)
        except self.error:
            self._factors = None
        return self.is_solvable()

    def is_solvable(self) -> bool:
        return self._factors is not None and self.solvable(self._factors)

    def get_determinant(self):
        return self.determinant(self._computed())

    def get_inverse(self) -> Store:
        factors = self._check_solvable(self._computed())
        return self.domain.wrap(self.inverse(factors))

    def get_solution(self, rhs) -> Store:
        factors = self._check_solvable(self._computed())
        rhs = self.domain.wrap(rhs)
        return self.domain.wrap(self.solution(factors, rhs.data))

    # ------------------------------------------------------------------
    #   Task interface
    # ------------------------------------------------------------------

    def calculate_determinant(self, matrix):
        return self.determinant(self.factorize(self.domain.wrap(matrix).data))

    def invert(self, original, preallocated=None):
        original = self.domain.wrap(original)
        factors = self._check_solvable(self.factorize(original.data))
        return self._deliver(self.inverse(factors), preallocated)

    def solve(self, body, rhs, preallocated=None):
        body = self.domain.wrap(body)
        rhs = self.domain.wrap(rhs)
        factors = self._check_solvable(self.factorize(body.data))
        return self._deliver(self.solution(factors, rhs.data), preallocated)

    def preallocate(self, template, rhs=None) -> Store:
        """Zero-filled output for `invert(template)`, or for
        `solve(template, rhs)` if `rhs` is provided."""
        if rhs is None:
            return InverterTask.preallocate(self, template)
        return SolverTask.preallocate(self, template, rhs)

    # ------------------------------------------------------------------
    #   Backend hooks
    # ------------------------------------------------------------------

    def factorize(self, data):
        raise NotImplementedError

    def solvable(self, factors) -> bool:
        return True

    def determinant(self, factors):
        raise NotImplementedError

    def inverse(self, factors):
        raise NotImplementedError

    def solution(self, factors, rhs):
        raise NotImplementedError

    # ------------------------------------------------------------------

    def _computed(self):
        if self._factors is None:
            raise self.error('No {} decomposition has been computed '
                             'successfully.'.format(self.name))
        return self._factors

    def _check_solvable(self, factors):
        if not self.solvable(factors):
            raise self.error('The {} decomposition is singular.'
                             .format(self.name))
        return factors

    def _deliver(self, result, preallocated: Optional = None) -> Store:
        if preallocated is None:
            return self.domain.wrap(result)
        preallocated = destination(self.domain, preallocated)
        preallocated.copy_from(result)
        return preallocated


def _broadcast(factor: Tensor, rhs: Tensor):
    batch = torch.broadcast_shapes(factor.shape[:-2], rhs.shape[:-2])
    return (factor.expand(batch + factor.shape[-2:]),
            rhs.expand(batch + rhs.shape[-2:]))


def _eye_like(matrix: Tensor) -> Tensor:
    eye = torch.eye(matrix.shape[-1], dtype=matrix.dtype, device=matrix.device)
    return eye.expand(matrix.shape)


def _check_square(matrix: Tensor, name: str):
    if matrix.shape[-1] != matrix.shape[-2]:
        raise ValueError('The {} decomposition of a non-square matrix has no '
                         'determinant.'.format(name))


class Cholesky(Decomposition):
    """Cholesky decomposition `A = L L^H` of a positive definite matrix.

    Only the lower triangle of the matrix is used.
    """

    name = 'cholesky'

    def factorize(self, data):
        return torch.linalg.cholesky(data)

    def determinant(self, chol):
        return chol.diagonal(0, -1, -2).prod(-1).square()

    def inverse(self, chol):
        return torch.cholesky_solve(_eye_like(chol), chol)

    def solution(self, chol, rhs):
        chol, rhs = _broadcast(chol, rhs)
        return torch.cholesky_solve(rhs, chol)


class LU(Decomposition):
    """LU decomposition with partial pivoting `A = P L U`."""

    name = 'lu'

    def factorize(self, data):
        lu, pivots, info = torch.linalg.lu_factor_ex(data)
        return lu, pivots, info

    def solvable(self, factors):
        return not bool(factors[2].any())

    def determinant(self, factors):
        lu, pivots, _ = factors
        identity = torch.arange(1, lu.shape[-1] + 1,
                                dtype=pivots.dtype, device=pivots.device)
        swaps = (pivots != identity).sum(-1)
        sign = 1 - 2 * (swaps % 2)
        return lu.diagonal(0, -1, -2).prod(-1) * sign

    def inverse(self, factors):
        lu, pivots, _ = factors
        return torch.linalg.lu_solve(lu, pivots, _eye_like(lu))

    def solution(self, factors, rhs):
        lu, pivots, _ = factors
        batch = torch.broadcast_shapes(lu.shape[:-2], rhs.shape[:-2])
        lu = lu.expand(batch + lu.shape[-2:])
        pivots = pivots.expand(batch + pivots.shape[-1:])
        rhs = rhs.expand(batch + rhs.shape[-2:])
        return torch.linalg.lu_solve(lu, pivots, rhs)


class QR(Decomposition):
    """Reduced QR decomposition `A = Q R` of a square or tall matrix.

    Inversion returns the left pseudo-inverse `R^{-1} Q^H` and solving
    returns the least-squares solution.
    """

    name = 'qr'

    def factorize(self, data):
        q, r = torch.linalg.qr(data)
        return q, r

    def solvable(self, factors):
        q, r = factors
        if r.shape[-2] < r.shape[-1]:
            return False
        return bool((r.diagonal(0, -1, -2) != 0).all())

    def determinant(self, factors):
        q, r = factors
        _check_square(q, self.name)
        _check_square(r, self.name)
        return torch.linalg.det(q) * r.diagonal(0, -1, -2).prod(-1)

    def inverse(self, factors):
        q, r = factors
        return torch.linalg.solve_triangular(r, q.mH, upper=True)

    def solution(self, factors, rhs):
        q, r = factors
        return torch.linalg.solve_triangular(r, q.mH @ rhs, upper=True)


class SVD(Decomposition):
    """Reduced singular value decomposition `A = U S V^H`.

    Inversion returns the Moore-Penrose pseudo-inverse and solving
    returns the minimum-norm least-squares solution. Singular values
    below `max(M, N) * eps * max(S)` are treated as zero.
    """

    name = 'svd'

    def factorize(self, data):
        u, s, vh = torch.linalg.svd(data, full_matrices=False)
        return u, s, vh

    def determinant(self, factors):
        u, s, vh = factors
        _check_square(u, self.name)
        _check_square(vh, self.name)
        return torch.linalg.det(u) * s.prod(-1) * torch.linalg.det(vh)

    def inverse(self, factors):
        u, s, vh = factors
        return vh.mH @ (self._reciprocal(u, s, vh)[..., None] * u.mH)

    def solution(self, factors, rhs):
        u, s, vh = factors
        return vh.mH @ (self._reciprocal(u, s, vh)[..., None] * (u.mH @ rhs))

    @staticmethod
    def _reciprocal(u, s, vh):
        size = max(u.shape[-2], vh.shape[-1])
        cutoff = size * torch.finfo(s.dtype).eps * s.amax(-1, keepdim=True)
        return torch.where(s > cutoff, s.reciprocal(), torch.zeros_like(s))
