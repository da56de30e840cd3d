"""
Numeric domains: the scalar types the kernels can work with.

* `FLOAT32`, `FLOAT64`, `COMPLEX64`, `COMPLEX128`: torch tensors,
  with `torch.linalg` decompositions as fallbacks;
* `RATIONAL`: exact rationals in sympy matrices, with sympy's exact
  routines as fallbacks.
"""
__all__ = ['Domain', 'FLOAT32', 'FLOAT64', 'COMPLEX64', 'COMPLEX128',
           'RATIONAL', 'DOMAINS', 'get_domain', 'domain_of']
from ._impl.domain import (
    Domain, FLOAT32, FLOAT64, COMPLEX64, COMPLEX128, RATIONAL, DOMAINS,
    get_domain, domain_of)
