from typing import Callable, Optional

import torch

from ..dynamics.base import ArrayLike, Mapping, is_autonomous, is_exogenous


def as_ode_function(mapping: Mapping, u: Optional[ArrayLike] = None) -> Callable:
    """
    Wrap a mapping as a function f(t, x) returning a new tensor.

    This is the calling convention of ``torchdiffeq.odeint`` and similar
    integrators. Autonomous mappings ignore t. Exogenous mappings need a fixed
    input ``u`` held for the whole integration; endogenous ones must not get one.

    Parameters:
    -----------
    mapping : Mapping
        Any of the four mapping variants.
    u : torch.Tensor or numpy.ndarray, optional
        Static exogenous input of shape (..., M).

    Returns:
    --------
    callable
        Function of (t, x) computing the right-hand side.
    """
    if is_exogenous(mapping):
        if u is None:
            raise ValueError(f"{mapping.name} is exogenous and needs a static input u")
    elif u is not None:
        raise ValueError(f"{mapping.name} is endogenous and takes no input")

    autonomous = is_autonomous(mapping)

    def ode_func(t, x: torch.Tensor) -> torch.Tensor:
        args = (x,) if autonomous else (t, x)
        if u is not None:
            args += (u,)
        return mapping(*args)

    return ode_func
