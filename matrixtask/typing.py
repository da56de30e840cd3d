from typing import Sequence, Tuple, Union
import torch
import sympy
from ._impl.domain import Domain
from ._impl.store import Store
from .structure import Structure2D

MatrixLike = Union[Store, torch.Tensor, sympy.MatrixBase, Sequence[Sequence]]
TemplateLike = Union[Structure2D, Tuple[int, int], MatrixLike]
DomainLike = Union[Domain, str, torch.dtype]
