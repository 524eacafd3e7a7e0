"""
Helpers for code that consumes mappings, such as integrators and drivers.
"""

from .odeint_utils import as_ode_function
from .checks import check_nan

__all__ = [
    "as_ode_function",
    "check_nan",
]
