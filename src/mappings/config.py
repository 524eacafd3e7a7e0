"""
Configuration for the reference models.

ModelConfig collects the physical parameters of every reference model; only
the ones relevant to ``system_type`` are passed to its constructor.
"""

from dataclasses import dataclass
from typing import Any, Dict

import torch

from .dynamics import (
    DrivenPendulum,
    DrivenPendulumWithTorque,
    Henon,
    Mapping,
    Pendulum,
    PendulumWithTorque,
)


SYSTEMS = {
    "Pendulum": Pendulum,
    "PendulumWithTorque": PendulumWithTorque,
    "Henon": Henon,
    "DrivenPendulum": DrivenPendulum,
    "DrivenPendulumWithTorque": DrivenPendulumWithTorque,
}

DTYPES = {
    "float32": torch.float32,
    "float64": torch.float64,
}


@dataclass
class ModelConfig:
    """Configuration for a reference model."""

    system_type: str = "Pendulum"

    # Pendulum parameters
    length: float = 1.0
    gravity: float = 9.81
    mass: float = 1.0
    amplitude: float = 1.0
    frequency: float = 1.0

    # Henon parameters
    a: float = 1.4
    b: float = 0.3

    # Numeric type of states and right-hand sides
    dtype: str = "float64"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.system_type not in SYSTEMS:
            raise ValueError(
                f"Unknown system type: {self.system_type} (choose from {', '.join(SYSTEMS)})"
            )
        if self.dtype not in DTYPES:
            raise ValueError(f"Unknown dtype: {self.dtype} (choose from {', '.join(DTYPES)})")

    @property
    def torch_dtype(self) -> torch.dtype:
        return DTYPES[self.dtype]

    def get_model_kwargs(self) -> Dict[str, Any]:
        """Get model initialization kwargs based on system type."""
        if self.system_type == "Pendulum":
            return {"length": self.length, "gravity": self.gravity}
        elif self.system_type == "PendulumWithTorque":
            return {"length": self.length, "gravity": self.gravity, "mass": self.mass}
        elif self.system_type in ("DrivenPendulum", "DrivenPendulumWithTorque"):
            return {
                "length": self.length,
                "gravity": self.gravity,
                "mass": self.mass,
                "amplitude": self.amplitude,
                "frequency": self.frequency,
            }
        elif self.system_type == "Henon":
            return {"a": self.a, "b": self.b}
        else:
            raise ValueError(f"Unknown system type: {self.system_type}")


def build_model(config: ModelConfig) -> Mapping:
    """Instantiate the model described by ``config``."""
    return SYSTEMS[config.system_type](**config.get_model_kwargs())
