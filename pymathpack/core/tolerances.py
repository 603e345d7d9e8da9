"""
Tolerance tiers for numerical validation.

Defines precision expectations for the different kinds of computation:
- Direct solvers (elimination): relative 1e-9 for well-conditioned inputs
- LAPACK factorizations: reconstruction to near machine precision
- Rotation conversions: closed-form, no iteration

Used by the test suite and by callers comparing results.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


DIRECT_SOLVE = ToleranceTier(
    rtol=1e-9,
    atol=1e-12,
    name='direct_solve',
    description='Gauss-Jordan / Gaussian elimination / tridiagonal, well-conditioned',
)

DIRECT_SOLVE_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='direct_solve_ill_conditioned',
    description='Direct solvers, ill-conditioned (cond > 1e4)',
)

FACTORIZATION = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='factorization',
    description='LAPACK factorizations, reconstruction error',
)

FACTORIZATION_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-6,
    atol=1e-8,
    name='factorization_ill_conditioned',
    description='LAPACK factorizations, ill-conditioned',
)

ROTATION = ToleranceTier(
    rtol=1e-12,
    atol=1e-12,
    name='rotation',
    description='Quaternion <-> rotation matrix round trips',
)


def select_tolerance(
    kind: str,
    is_ill_conditioned: bool = False,
) -> ToleranceTier:
    """Select appropriate tolerance tier for a kind of computation."""
    if kind == 'rotation':
        return ROTATION
    if kind == 'factorization':
        if is_ill_conditioned:
            return FACTORIZATION_ILL_CONDITIONED
        return FACTORIZATION
    if kind == 'direct_solve':
        if is_ill_conditioned:
            return DIRECT_SOLVE_ILL_CONDITIONED
        return DIRECT_SOLVE
    raise ValueError(f"Unknown tolerance kind: {kind!r}")
