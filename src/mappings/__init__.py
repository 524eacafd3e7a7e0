"""
Mappings

Abstract base classes for the right-hand sides of dynamical systems, either
ordinary differential equations or discrete maps.

This package provides:
- Four mapping contracts: autonomous or not, exogenous or endogenous
- Reference models (pendulums, the Henon map)
- Helpers for handing mappings to integrators

Example usage:
    import math
    import torch
    from mappings import Pendulum

    pendulum = Pendulum(length=1.0, gravity=1.0)
    x = torch.tensor([math.pi / 2.0, 0.0], dtype=torch.float64)
    dxdt = torch.empty_like(x)
    pendulum(x, out=dxdt)  # tensor([ 0., -1.])
"""

__version__ = "0.1.0"

# Contracts
from .dynamics.base import (
    Mapping,
    MappingNonAutonomousExogenous,
    MappingAutonomousExogenous,
    MappingAutonomousEndogenous,
    MappingNonAutonomousEndogenous,
    mapping_base,
    is_autonomous,
    is_exogenous,
)

# Reference models
from .dynamics import Pendulum, PendulumWithTorque, DrivenPendulum, DrivenPendulumWithTorque, Henon

# Utilities
from .utils import as_ode_function, check_nan
from .config import ModelConfig, build_model

__all__ = [
    # Contracts
    "Mapping",
    "MappingNonAutonomousExogenous",
    "MappingAutonomousExogenous",
    "MappingAutonomousEndogenous",
    "MappingNonAutonomousEndogenous",
    "mapping_base",
    "is_autonomous",
    "is_exogenous",

    # Models
    "Pendulum",
    "PendulumWithTorque",
    "DrivenPendulum",
    "DrivenPendulumWithTorque",
    "Henon",

    # Utils
    "as_ode_function",
    "check_nan",
    "ModelConfig",
    "build_model",
]
