"""
Tests for the matrix helpers of the forward model.

These tests verify:
    - Single-axis rotations follow the right-hand rule
    - The RPY composition applies yaw first, then pitch, then roll
    - Orthographic projection and viewport mapping to image coordinates
"""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from ortho_camera.utils.math_utils import (
    create_translation_matrix,
    modelview_matrix,
    orthographic_matrix,
    project_points,
    rotation_x,
    rotation_y,
    rotation_z,
    rpy_to_matrix,
)


def _apply(matrix, point):
    return (matrix @ np.append(point, 1.0))[:3]


class TestRotations:
    """Tests for single-axis rotations."""

    def test_rotation_x_maps_y_to_z(self):
        assert_allclose(_apply(rotation_x(math.pi / 2), [0, 1, 0]), [0, 0, 1], atol=1e-12)

    def test_rotation_y_maps_z_to_x(self):
        assert_allclose(_apply(rotation_y(math.pi / 2), [0, 0, 1]), [1, 0, 0], atol=1e-12)

    def test_rotation_z_maps_x_to_y(self):
        assert_allclose(_apply(rotation_z(math.pi / 2), [1, 0, 0]), [0, 1, 0], atol=1e-12)

    def test_rotations_are_orthonormal(self):
        rotation = rpy_to_matrix(0.3, -1.1, 2.0)[:3, :3]
        assert_allclose(rotation @ rotation.T, np.eye(3), atol=1e-12)
        assert np.linalg.det(rotation) == pytest.approx(1.0)


class TestComposition:
    """Tests for the R * P * Y composition order."""

    def test_yaw_applied_before_roll(self):
        """Yaw moves the x axis onto -z, where the following roll has no effect."""
        rotated = _apply(rpy_to_matrix(0.0, math.pi / 2, math.pi / 2), [1, 0, 0])
        assert_allclose(rotated, [0, 0, -1], atol=1e-12)

    def test_yaw_applied_before_pitch(self):
        """Yaw moves the x axis onto -z, pitch then carries it to +y."""
        rotated = _apply(rpy_to_matrix(math.pi / 2, math.pi / 2, 0.0), [1, 0, 0])
        assert_allclose(rotated, [0, 1, 0], atol=1e-12)

    def test_matches_explicit_product(self):
        expected = rotation_z(0.4) @ rotation_x(-0.2) @ rotation_y(0.7)
        assert_allclose(rpy_to_matrix(-0.2, 0.7, 0.4), expected)

    def test_translation_applied_after_rotation(self):
        modelview = modelview_matrix(0.0, 0.0, math.pi / 2, 5.0, -3.0)
        assert_allclose(_apply(modelview, [1, 0, 0]), [5, -2, 0], atol=1e-12)
        assert_allclose(modelview[:3, 3], [5, -3, 0])

    def test_translation_matrix(self):
        assert_allclose(_apply(create_translation_matrix((1, 2, 3)), [0, 0, 0]), [1, 2, 3])


class TestProjection:
    """Tests for orthographic projection to image coordinates."""

    def test_orthographic_matrix_symmetric(self):
        matrix = orthographic_matrix(-200.0, 200.0, -100.0, 100.0)
        assert matrix[0, 0] == pytest.approx(1.0 / 200.0)
        assert matrix[1, 1] == pytest.approx(1.0 / 100.0)
        assert matrix[2, 2] == pytest.approx(-1.0)
        assert_allclose(matrix[:3, 3], [0, 0, 0], atol=1e-15)

    def test_orthographic_matrix_rejects_empty_frustum(self):
        with pytest.raises(ValueError):
            orthographic_matrix(0.0, 0.0, -1.0, 1.0)

    def test_origin_projects_to_image_centre(self):
        projected = project_points(np.zeros((1, 3)), np.eye(4),
                                   orthographic_matrix(-4.0, 4.0, -3.0, 3.0), 640, 480)
        assert_allclose(projected, [[320.0, 240.0]])

    def test_image_y_axis_points_down(self):
        """Model +y ends up above the image centre, i.e. at a smaller row."""
        projection = orthographic_matrix(-100.0, 100.0, -100.0, 100.0)
        projected = project_points(np.array([[10.0, 20.0, 0.0]]), np.eye(4), projection, 200, 200)
        assert_allclose(projected, [[110.0, 80.0]])

    def test_depth_is_ignored(self):
        projection = orthographic_matrix(-100.0, 100.0, -100.0, 100.0)
        near = project_points(np.array([[10.0, 20.0, -0.5]]), np.eye(4), projection, 200, 200)
        far = project_points(np.array([[10.0, 20.0, 0.5]]), np.eye(4), projection, 200, 200)
        assert_allclose(near, far)
