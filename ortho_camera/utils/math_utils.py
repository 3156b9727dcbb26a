"""
Mathematical utility functions for orthographic camera estimation.

Matrices are 4x4 numpy arrays acting on column vectors, matching the
OpenGL conventions the estimated parameters are meant to be used with.
"""

import math
from typing import Tuple
import numpy as np


def rotation_x(angle: float) -> np.ndarray:
    """
    Create a 4x4 rotation matrix around the x axis.

    Args:
        angle: Rotation angle in radians

    Returns:
        4x4 rotation matrix
    """
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return np.array([
        [1.0, 0.0, 0.0, 0.0],
        [0.0, cos_a, -sin_a, 0.0],
        [0.0, sin_a, cos_a, 0.0],
        [0.0, 0.0, 0.0, 1.0]
    ])


def rotation_y(angle: float) -> np.ndarray:
    """
    Create a 4x4 rotation matrix around the y axis.

    Args:
        angle: Rotation angle in radians

    Returns:
        4x4 rotation matrix
    """
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return np.array([
        [cos_a, 0.0, sin_a, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [-sin_a, 0.0, cos_a, 0.0],
        [0.0, 0.0, 0.0, 1.0]
    ])


def rotation_z(angle: float) -> np.ndarray:
    """
    Create a 4x4 rotation matrix around the z axis.

    Args:
        angle: Rotation angle in radians

    Returns:
        4x4 rotation matrix
    """
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return np.array([
        [cos_a, -sin_a, 0.0, 0.0],
        [sin_a, cos_a, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0]
    ])


def rpy_to_matrix(pitch: float, yaw: float, roll: float) -> np.ndarray:
    """
    Convert pitch, yaw and roll angles to a 4x4 rotation matrix.

    Yaw is applied first to a vertex, then pitch, then roll, i.e. the
    result is R * P * Y.

    Args:
        pitch: Rotation around the x axis in radians
        yaw: Rotation around the y axis in radians
        roll: Rotation around the z axis in radians

    Returns:
        4x4 rotation matrix
    """
    return rotation_z(roll) @ rotation_x(pitch) @ rotation_y(yaw)


def create_translation_matrix(translation: Tuple[float, float, float]) -> np.ndarray:
    """
    Create a 4x4 translation matrix.

    Args:
        translation: Translation vector (x, y, z)

    Returns:
        4x4 translation matrix
    """
    matrix = np.eye(4)
    matrix[:3, 3] = translation
    return matrix


def modelview_matrix(pitch: float, yaw: float, roll: float,
                     t_x: float, t_y: float) -> np.ndarray:
    """
    Build the model-view matrix T * R * P * Y of an orthographic pose.

    Args:
        pitch: Rotation around the x axis in radians
        yaw: Rotation around the y axis in radians
        roll: Rotation around the z axis in radians
        t_x: Translation along x in model units
        t_y: Translation along y in model units

    Returns:
        4x4 model-view matrix
    """
    return create_translation_matrix((t_x, t_y, 0.0)) @ rpy_to_matrix(pitch, yaw, roll)


def orthographic_matrix(left: float, right: float, bottom: float, top: float,
                        near: float = -1.0, far: float = 1.0) -> np.ndarray:
    """
    Create an OpenGL-conformant orthographic projection matrix.

    Args:
        left: Left clipping plane
        right: Right clipping plane
        bottom: Bottom clipping plane
        top: Top clipping plane
        near: Near clipping plane
        far: Far clipping plane

    Returns:
        4x4 projection matrix

    Raises:
        ValueError: If a pair of opposite planes coincides
    """
    if right == left or top == bottom or far == near:
        raise ValueError("Orthographic frustum has zero extent")

    matrix = np.eye(4)
    matrix[0, 0] = 2.0 / (right - left)
    matrix[1, 1] = 2.0 / (top - bottom)
    matrix[2, 2] = -2.0 / (far - near)
    matrix[0, 3] = -(right + left) / (right - left)
    matrix[1, 3] = -(top + bottom) / (top - bottom)
    matrix[2, 3] = -(far + near) / (far - near)
    return matrix


def project_points(points_3d: np.ndarray, modelview: np.ndarray,
                   projection: np.ndarray, width: float, height: float) -> np.ndarray:
    """
    Project 3D points to image coordinates.

    The viewport is (0, height, width, -height), so the image origin is the
    top-left corner and y points down, as in common image libraries.

    Args:
        points_3d: Nx3 array of model-space points
        modelview: 4x4 model-view matrix
        projection: 4x4 projection matrix
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        Nx2 array of image coordinates
    """
    points = np.asarray(points_3d, dtype=float)
    homogeneous = np.hstack([points, np.ones((points.shape[0], 1))])
    clip = homogeneous @ (projection @ modelview).T
    ndc = clip[:, :3] / clip[:, 3:4]

    image = np.empty((points.shape[0], 2))
    image[:, 0] = (ndc[:, 0] * 0.5 + 0.5) * width
    image[:, 1] = height - (ndc[:, 1] * 0.5 + 0.5) * height
    return image


def distance_2d(point1: Tuple[float, float],
               point2: Tuple[float, float]) -> float:
    """
    Calculate 2D distance between two points.

    Args:
        point1: First point (x, y)
        point2: Second point (x, y)

    Returns:
        Euclidean distance
    """
    dx = point2[0] - point1[0]
    dy = point2[1] - point1[1]

    return math.sqrt(dx * dx + dy * dy)
