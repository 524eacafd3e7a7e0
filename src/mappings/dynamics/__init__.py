"""
Mapping contracts for dynamical systems and reference models.

This module contains the four abstract mapping variants and a handful of
concrete models (pendulums and the Henon map) that implement them.
"""

from .base import (
    Mapping,
    MappingNonAutonomousExogenous,
    MappingAutonomousExogenous,
    MappingAutonomousEndogenous,
    MappingNonAutonomousEndogenous,
    mapping_base,
    is_autonomous,
    is_exogenous,
)
from .pendulum import Pendulum, PendulumWithTorque, DrivenPendulum, DrivenPendulumWithTorque
from .henon import Henon

__all__ = [
    "Mapping",
    "MappingNonAutonomousExogenous",
    "MappingAutonomousExogenous",
    "MappingAutonomousEndogenous",
    "MappingNonAutonomousEndogenous",
    "mapping_base",
    "is_autonomous",
    "is_exogenous",
    "Pendulum",
    "PendulumWithTorque",
    "DrivenPendulum",
    "DrivenPendulumWithTorque",
    "Henon",
]
