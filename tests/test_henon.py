import pytest

torch = pytest.importorskip("torch")
from mappings.dynamics.henon import Henon


def test_henon_at_origin():
    system = Henon(a=1.4, b=0.3)
    x = torch.tensor([0.0, 0.0], dtype=torch.float64)
    rhs = torch.full((2,), float("nan"), dtype=torch.float64)
    system(x, out=rhs)
    assert not torch.isnan(rhs).any()
    assert torch.equal(rhs, torch.tensor([1.0, 0.0], dtype=torch.float64))


def test_default_parameters():
    system = Henon()
    assert (system.a, system.b) == (1.4, 0.3)
    assert system.state_dim == 2
    assert system.name == "Henon"


def test_iterating_with_two_buffers():
    system = Henon()
    x = torch.zeros(2, dtype=torch.float64)
    nxt = torch.empty_like(x)
    for _ in range(100):
        system(x, out=nxt)
        x, nxt = nxt, x
    # Orbit from the origin stays on the bounded attractor
    assert torch.all(x.abs() < 2.0)


def test_batched_map():
    system = Henon(a=1.0, b=0.5)
    x = torch.tensor([[1.0, 2.0], [-1.0, 0.0]], dtype=torch.float64)
    expected = torch.tensor([[2.0, 0.5], [0.0, -0.5]], dtype=torch.float64)
    assert torch.allclose(system(x), expected)
