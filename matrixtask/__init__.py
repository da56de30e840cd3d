"""Closed-form determinants, inverses and solvers for small matrices."""
from . import domain
from . import linalg
from .structure import Structure2D, structure_of, is_symmetric
from .store import Store, TensorStore, RationalStore, preallocate
from .domain import (
    FLOAT32, FLOAT64, COMPLEX64, COMPLEX128, RATIONAL,
    get_domain, domain_of)
from .determinant import DeterminantFactory, determinant_task_for
from .inverter import InverterFactory, inverter_task_for
from .solver import SolverFactory, solver_task_for
from .linalg import det, inv, lmdiv, rmdiv, solvevec

__version__ = '0.1.0'
