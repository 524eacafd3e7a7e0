"""
Pendulum systems.

A rigid pendulum of length l under gravity g, with state x = [angle, angular
velocity]. Variants add an applied torque input, a periodic drive, or both,
so that each of the four mapping contracts has a pendulum implementing it.
"""

import torch

from .base import (
    IndependentVariable,
    MappingAutonomousEndogenous,
    MappingAutonomousExogenous,
    MappingNonAutonomousEndogenous,
    MappingNonAutonomousExogenous,
)


class Pendulum(MappingAutonomousEndogenous):
    """
    Undamped pendulum (autonomous, endogenous):
    dx0/dt = x1
    dx1/dt = -(g/l) * sin(x0)
    """

    def __init__(self, length: float, gravity: float = 9.81):
        super().__init__(state_dim=2, name="Pendulum")
        self.length = length
        self.gravity = gravity

    def compute_rhs(self, x: torch.Tensor, rhs: torch.Tensor) -> None:
        rhs[..., 0] = x[..., 1]
        rhs[..., 1] = -self.gravity / self.length * torch.sin(x[..., 0])


class PendulumWithTorque(MappingAutonomousExogenous):
    """
    Pendulum driven by an applied torque u0 (autonomous, exogenous):
    dx0/dt = x1
    dx1/dt = -(g/l) * sin(x0) + u0 / (m * l^2)
    """

    def __init__(self, length: float, gravity: float = 9.81, mass: float = 1.0):
        super().__init__(state_dim=2, input_dim=1, name="PendulumWithTorque")
        self.length = length
        self.gravity = gravity
        self.mass = mass

    def compute_rhs(self, x: torch.Tensor, u: torch.Tensor, rhs: torch.Tensor) -> None:
        inertia = self.mass * self.length * self.length
        rhs[..., 0] = x[..., 1]
        rhs[..., 1] = -self.gravity / self.length * torch.sin(x[..., 0]) + u[..., 0] / inertia


class DrivenPendulum(MappingNonAutonomousEndogenous):
    """
    Pendulum under a periodic drive torque A*cos(w*t) (non-autonomous, endogenous):
    dx0/dt = x1
    dx1/dt = -(g/l) * sin(x0) + A * cos(w * t) / (m * l^2)
    """

    def __init__(
        self,
        length: float,
        gravity: float = 9.81,
        mass: float = 1.0,
        amplitude: float = 1.0,
        frequency: float = 1.0,
    ):
        super().__init__(state_dim=2, name="DrivenPendulum")
        self.length = length
        self.gravity = gravity
        self.mass = mass
        self.amplitude = amplitude
        self.frequency = frequency

    def drive(self, t: IndependentVariable, x: torch.Tensor) -> torch.Tensor:
        """Drive torque at time t, in the dtype and on the device of the state."""
        t = torch.as_tensor(t, dtype=x.dtype, device=x.device)
        return self.amplitude * torch.cos(self.frequency * t)

    def compute_rhs(self, t: IndependentVariable, x: torch.Tensor, rhs: torch.Tensor) -> None:
        inertia = self.mass * self.length * self.length
        rhs[..., 0] = x[..., 1]
        rhs[..., 1] = -self.gravity / self.length * torch.sin(x[..., 0]) + self.drive(t, x) / inertia


class DrivenPendulumWithTorque(MappingNonAutonomousExogenous):
    """
    Periodically driven pendulum with an additional applied torque u0
    (non-autonomous, exogenous):
    dx0/dt = x1
    dx1/dt = -(g/l) * sin(x0) + (A * cos(w * t) + u0) / (m * l^2)
    """

    def __init__(
        self,
        length: float,
        gravity: float = 9.81,
        mass: float = 1.0,
        amplitude: float = 1.0,
        frequency: float = 1.0,
    ):
        super().__init__(state_dim=2, input_dim=1, name="DrivenPendulumWithTorque")
        self.length = length
        self.gravity = gravity
        self.mass = mass
        self.amplitude = amplitude
        self.frequency = frequency

    def compute_rhs(self, t: IndependentVariable, x: torch.Tensor, u: torch.Tensor, rhs: torch.Tensor) -> None:
        inertia = self.mass * self.length * self.length
        t = torch.as_tensor(t, dtype=x.dtype, device=x.device)
        torque = self.amplitude * torch.cos(self.frequency * t) + u[..., 0]
        rhs[..., 0] = x[..., 1]
        rhs[..., 1] = -self.gravity / self.length * torch.sin(x[..., 0]) + torque / inertia


if __name__ == "__main__":
    import math

    pendulum = Pendulum(1.0, 1.0)
    x = torch.tensor([math.pi / 2.0, 0.0], dtype=torch.float64)
    dxdt = pendulum(x)
    assert torch.allclose(dxdt, torch.tensor([0.0, -1.0], dtype=torch.float64))

    torqued = PendulumWithTorque(1.0, 1.0, 1.0)
    dxdt = torqued(x, torch.tensor([2.0], dtype=torch.float64))
    assert torch.allclose(dxdt, torch.tensor([0.0, 1.0], dtype=torch.float64))

    print("Pendulum tests passed.")
