import pytest

from meetpoint.analysis.config import PRESETS, SolverConfig


def test_default_preset():
    cfg = SolverConfig.default()
    assert cfg == SolverConfig()
    assert (cfg.epsilon, cfg.max_iterations, cfg.step_km, cfg.radius_km) == (1e-6, 200, 1.0, 6.0)


def test_precise_preset_is_finer():
    default, precise = SolverConfig.default(), SolverConfig.precise()
    assert precise.step_km < default.step_km
    assert precise.epsilon < default.epsilon
    assert precise.max_iterations > default.max_iterations


@pytest.mark.parametrize("name", PRESETS)
def test_from_name(name):
    assert SolverConfig.from_name(name) == getattr(SolverConfig, name)()


def test_from_name_unknown():
    with pytest.raises(ValueError, match="unknown preset"):
        SolverConfig.from_name("turbo")


@pytest.mark.parametrize(
    "kwargs",
    [{"step_km": 0}, {"step_km": -1}, {"radius_km": -0.5}, {"epsilon": -1}, {"max_iterations": -1}],
)
def test_invalid_values_are_rejected(kwargs):
    with pytest.raises(ValueError):
        SolverConfig(**kwargs)
