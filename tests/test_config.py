import pytest

torch = pytest.importorskip("torch")
from mappings.config import SYSTEMS, ModelConfig, build_model
from mappings.dynamics import DrivenPendulum, Henon, Pendulum, PendulumWithTorque


def test_default_config_builds_pendulum():
    config = ModelConfig()
    model = build_model(config)
    assert isinstance(model, Pendulum)
    assert model.length == 1.0
    assert model.gravity == 9.81
    assert config.torch_dtype == torch.float64


def test_kwargs_follow_system_type():
    assert ModelConfig(system_type="Henon", a=1.2).get_model_kwargs() == {"a": 1.2, "b": 0.3}
    assert ModelConfig(system_type="PendulumWithTorque", mass=2.0).get_model_kwargs() == {
        "length": 1.0,
        "gravity": 9.81,
        "mass": 2.0,
    }
    assert set(ModelConfig(system_type="DrivenPendulum").get_model_kwargs()) == {
        "length", "gravity", "mass", "amplitude", "frequency"
    }


@pytest.mark.parametrize("system_type", list(SYSTEMS))
def test_every_registered_system_builds(system_type):
    model = build_model(ModelConfig(system_type=system_type))
    assert isinstance(model, SYSTEMS[system_type])
    assert model.name == system_type


def test_built_models_carry_parameters():
    assert isinstance(build_model(ModelConfig(system_type="Henon", b=0.2)), Henon)
    torqued = build_model(ModelConfig(system_type="PendulumWithTorque", length=2.0))
    assert isinstance(torqued, PendulumWithTorque)
    assert torqued.length == 2.0
    driven = build_model(ModelConfig(system_type="DrivenPendulum", frequency=3.0))
    assert isinstance(driven, DrivenPendulum)
    assert driven.frequency == 3.0


def test_invalid_config_rejected():
    with pytest.raises(ValueError):
        ModelConfig(system_type="Lorenz")
    with pytest.raises(ValueError):
        ModelConfig(dtype="int8")


def test_float32_dtype():
    assert ModelConfig(dtype="float32").torch_dtype == torch.float32
