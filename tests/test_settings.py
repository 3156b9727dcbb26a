"""
Tests for estimator settings.
"""

import pytest

from ortho_camera.core.exceptions import InvalidInputError
from ortho_camera.core.settings import EstimatorSettings


def test_defaults():
    settings = EstimatorSettings()
    assert settings.initial_frustum_scale == 110.0
    assert settings.numerical_diff_epsilon == 1e-4
    assert settings.diff_step == pytest.approx(0.01)
    settings.validate()


def test_yaml_round_trip(tmp_path):
    path = tmp_path / "settings.yaml"
    settings = EstimatorSettings(initial_frustum_scale=250.0, max_function_evaluations=500)
    settings.to_yaml(str(path))

    assert EstimatorSettings.from_yaml(str(path)) == settings


def test_yaml_partial_uses_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("initial_frustum_scale: 42.0\n")

    settings = EstimatorSettings.from_yaml(str(path))
    assert settings.initial_frustum_scale == 42.0
    assert settings.max_function_evaluations == 4200


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("")
    assert EstimatorSettings.from_yaml(str(path)) == EstimatorSettings()


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        EstimatorSettings.from_yaml("does/not/exist.yaml")


def test_unknown_key_rejected():
    with pytest.raises(InvalidInputError, match="frustum"):
        EstimatorSettings.from_dict({'frustum': 1.0})


@pytest.mark.parametrize("overrides", [
    {'initial_frustum_scale': 0.0},
    {'numerical_diff_epsilon': 0.0},
    {'max_function_evaluations': 0},
    {'ftol': 0.0},
    {'min_frustum_scale': -1.0},
    {'xtol': float('nan')},
    {'gtol': "1e-8"},
])
def test_invalid_values_rejected(overrides):
    with pytest.raises(InvalidInputError):
        EstimatorSettings.from_dict(overrides)
