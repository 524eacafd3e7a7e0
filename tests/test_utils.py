import math

import pytest

torch = pytest.importorskip("torch")
from mappings.dynamics import DrivenPendulum, DrivenPendulumWithTorque, Henon, Pendulum, PendulumWithTorque
from mappings.utils import as_ode_function, check_nan


def test_autonomous_function_ignores_time():
    system = Pendulum(1.0, 1.0)
    f = as_ode_function(system)
    x = torch.tensor([math.pi / 2.0, 0.0], dtype=torch.float64)
    assert torch.equal(f(0.0, x), f(10.0, x))
    assert torch.allclose(f(0.0, x), torch.tensor([0.0, -1.0], dtype=torch.float64))


def test_nonautonomous_function_passes_time():
    system = DrivenPendulum(1.0, gravity=1.0, amplitude=1.0)
    f = as_ode_function(system)
    x = torch.zeros(2, dtype=torch.float64)
    assert torch.allclose(f(0.0, x), system(0.0, x))
    assert not torch.allclose(f(0.0, x), f(1.0, x))


def test_exogenous_function_holds_input():
    u = torch.tensor([2.0], dtype=torch.float64)
    f = as_ode_function(PendulumWithTorque(1.0, 1.0, 1.0), u=u)
    x = torch.tensor([math.pi / 2.0, 0.0], dtype=torch.float64)
    assert torch.allclose(f(0.0, x), torch.tensor([0.0, 1.0], dtype=torch.float64))

    g = as_ode_function(DrivenPendulumWithTorque(1.0, amplitude=0.0), u=u)
    assert g(0.5, torch.zeros(2, dtype=torch.float64)).shape == (2,)


def test_input_requirements():
    with pytest.raises(ValueError):
        as_ode_function(PendulumWithTorque(1.0))
    with pytest.raises(ValueError):
        as_ode_function(Henon(), u=torch.zeros(1))


def test_integrates_with_torchdiffeq():
    torchdiffeq = pytest.importorskip("torchdiffeq")
    f = as_ode_function(PendulumWithTorque(1.0, 1.0, 1.0), u=torch.tensor([0.0], dtype=torch.float64))
    x0 = torch.tensor([[0.1, 0.0], [0.2, 0.0]], dtype=torch.float64)
    t_span = torch.linspace(0.0, 1.0, steps=11, dtype=torch.float64)
    traj = torchdiffeq.odeint(f, x0, t_span)
    assert traj.shape == (t_span.numel(), x0.shape[0], 2)


def test_check_nan():
    check_nan(torch.tensor([0.0, 1.0]))
    with pytest.raises(ArithmeticError):
        check_nan(torch.tensor([0.0, float("nan")]))
