"""
Numerical constants and display settings.

Shared read-only configuration for every module: angle conversions,
degeneracy thresholds, pivot diagnostics and the text format used by
str() of the value types.
"""

import numpy as np


PI: float = 3.1415926535897931160e0
PI2: float = 6.2831853071795862320e0
PI_2: float = 1.5707963267948965580e0

DEG_TO_RAD: float = PI / 180.0
RAD_TO_DEG: float = 180.0 / PI

# Norms below this are treated as zero by normalize()
EPSILON: float = 1.0e-6

# Squared-scale threshold (e.g. sin(half angle) when extracting an axis)
EPSILON2: float = 1.0e-12

# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# A non-zero pivot smaller than this fraction of the largest input
# coefficient triggers a near-singular RuntimeWarning
PIVOT_WARNING_RTOL: float = 1.0e-12

# Coefficients and discriminants below this are treated as zero when
# solving quadratic and cubic equations
EQUATION_EPSILON: float = 1.0e-9

# str() formatting of vector/matrix components
DISPLAY_WIDTH: int = 12
PRECISION: int = 6


def format_component(value: float) -> str:
    """Format one component with the package display width and precision."""
    return f"{value:{DISPLAY_WIDTH}.{PRECISION}f}"
