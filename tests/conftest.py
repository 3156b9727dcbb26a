"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from ortho_camera.utils.math_utils import modelview_matrix, orthographic_matrix, project_points


def synthesize_image_points(model_points, parameters, width, height):
    """Project model points with known [pitch, yaw, roll, t_x, t_y, frustum_scale]."""
    pitch, yaw, roll, t_x, t_y, scale = parameters
    aspect = width / height
    modelview = modelview_matrix(pitch, yaw, roll, t_x, t_y)
    projection = orthographic_matrix(-aspect * scale, aspect * scale, -scale, scale)
    return project_points(np.asarray(model_points, dtype=float)[:, :3], modelview,
                          projection, width, height)


@pytest.fixture
def cube_points() -> np.ndarray:
    """Non-planar model points: cube corners plus two off-axis points."""
    corners = [(x, y, z) for x in (-40.0, 40.0) for y in (-40.0, 40.0) for z in (-40.0, 40.0)]
    return np.array(corners + [(0.0, 0.0, 55.0), (20.0, -30.0, 10.0)])


@pytest.fixture
def square_points() -> np.ndarray:
    """Six points of a planar square centred at the model origin."""
    return np.array([
        (-50.0, -50.0, 0.0),
        (50.0, -50.0, 0.0),
        (50.0, 50.0, 0.0),
        (-50.0, 50.0, 0.0),
        (0.0, -50.0, 0.0),
        (0.0, 50.0, 0.0),
    ])


@pytest.fixture
def known_parameters() -> np.ndarray:
    """A pose close enough to the default initial guess to converge."""
    return np.array([0.1, -0.15, 0.2, 4.0, -2.5, 95.0])


@pytest.fixture
def synthesize():
    """Forward model used to build exact image points for tests."""
    return synthesize_image_points
