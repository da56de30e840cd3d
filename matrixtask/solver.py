"""
Solutions of small linear systems with closed-form kernels.

Square systems up to 5x5 with a single right-hand side use Cramer's
rule (after dividing the system by the norm of its right-hand side),
and tall systems with up to five unknowns use the normal equations.
Everything else falls back on decompositions.
"""
__all__ = ['SolverFactory', 'FACTORIES', 'factory_for', 'solver_task_for']
from typing import Optional
from ._impl import solver as kernels
from ._impl.dispatch import Factory
from ._impl.domain import DOMAINS, get_domain, domain_of
from ._impl.store import Store
from ._impl.task import SolverKernel, SolverTask
from .structure import Structure2D, structure_of, is_symmetric
from .typing import TemplateLike, DomainLike


class SolverFactory(Factory):
    """Selects tasks solving `body @ x = rhs`.

    | Body                          | Right-hand side | Task            |
    | ----------------------------- | --------------- | --------------- |
    | 1x1                           | any             | `full_1x1`      |
    | square, symmetric, 2 to 5     | one column      | `symmetric_NxN` |
    | square, symmetric, otherwise  | any             | Cholesky if     |
    |                               |                 | positive        |
    |                               |                 | definite, or LU |
    | square, 2 to 5                | one column      | `full_NxN`      |
    | square, otherwise             | any             | LU              |
    | tall, 1 to 5 columns          | one column      | `least_squares` |
    | tall, otherwise               | any             | QR              |
    | wide                          | any             | SVD             |
    """

    task_type = SolverKernel
    full_kernels = kernels.FULL
    symmetric_kernels = kernels.SYMMETRIC

    def __init__(self, domain=None):
        super().__init__(domain)
        self.least_squares = SolverKernel('least_squares', None,
                                          kernels.least_squares, self.domain)

    def make(self, body, rhs, symmetric=False,
             positive_definite=False) -> SolverTask:
        """Select a task for systems shaped like `body` and `rhs`.

        Parameters
        ----------
        body : `Structure2D or (int, int) or matrix`
            Shape of the system matrices.
        rhs : `Structure2D or (int, int) or matrix`
            Shape of the right-hand sides.
        symmetric : `bool`, default=False
            Trust that the system matrices are symmetric.
        positive_definite : `bool`, default=False
            Trust that the system matrices are positive definite.
            Only used if `symmetric`.

        Returns
        -------
        task : `SolverTask`

        """
        self._check_hints(symmetric, positive_definite)
        body, rhs = structure_of(body), structure_of(rhs)
        single = rhs.count_columns() == 1
        if body.is_square():
            return self._square(body.count_rows(), symmetric,
                                positive_definite, unrolled=single)
        if body.is_tall():
            if single and 1 <= body.count_columns() <= 5:
                return self.least_squares
            return self.domain.qr()
        return self.domain.svd()

    def make_for(self, body, rhs) -> SolverTask:
        """Select a task for `body` and `rhs`, detecting the symmetry of
        `body`."""
        return self.make(structure_of(body), structure_of(rhs),
                         is_symmetric(body))

    def make_system(self, equations: int, variables: int, solutions: int = 1,
                    symmetric: bool = False,
                    positive_definite: bool = False) -> SolverTask:
        """Select a task for `equations` equations in `variables` unknowns,
        with `solutions` right-hand sides."""
        return self.make(Structure2D(equations, variables),
                         Structure2D(equations, solutions),
                         symmetric, positive_definite)

    def solve(self, body, rhs) -> Store:
        """Solution of `body @ x = rhs`."""
        task = self.make(structure_of(body), structure_of(rhs))
        return task.solve(body, rhs)


FACTORIES = {domain.name: SolverFactory(domain) for domain in DOMAINS}


def factory_for(domain=None) -> SolverFactory:
    """Solver factory of a domain (see `get_domain`)."""
    return FACTORIES[get_domain(domain).name]


def solver_task_for(
    body: TemplateLike,
    rhs: TemplateLike,
    symmetric: bool = False,
    positive_definite: bool = False,
    domain: Optional[DomainLike] = None,
) -> SolverTask:
    """Select a task solving `body @ x = rhs`.

    Parameters
    ----------
    body : `Structure2D or (int, int) or matrix`
        Shape of the system matrices.
    rhs : `Structure2D or (int, int) or matrix`
        Shape of the right-hand sides.
    symmetric : `bool`, default=False
        Trust that the system matrices are symmetric.
    positive_definite : `bool`, default=False
        Trust that the system matrices are positive definite.
    domain : `Domain or str or torch.dtype`, optional
        Numeric domain. Default: inferred from `body`. A shape
        carries no dtype, so `Structure2D` and `(int, int)` templates
        bind to the domain of `torch.get_default_dtype()` (usually
        float32), and data of another dtype is converted to it. Pass
        `domain` explicitly when the template is a shape.

    Returns
    -------
    task : `SolverTask`

    """
    domain = domain_of(body) if domain is None else domain
    return factory_for(domain).make(body, rhs, symmetric, positive_definite)
