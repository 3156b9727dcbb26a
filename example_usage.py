"""
Example usage of the orthographic camera estimator.

This script builds a synthetic model, projects it with a known camera and
recovers the camera again from the resulting 2D-3D correspondences.
"""

import logging

import numpy as np

from ortho_camera import (
    ConvergenceError,
    EstimatorSettings,
    OrthographicCameraEstimator,
    estimate_orthographic_camera,
)
from ortho_camera.core.correspondence import CorrespondenceSet
from ortho_camera.core.projection import OrthographicParameterProjection


def example_camera_estimation():
    """
    Example of a single estimation with diagnostics.
    """

    image_width = 1920
    image_height = 1080

    model_points = create_test_model()
    true_parameters = [0.1, -0.25, 0.05, 3.0, -6.0, 120.0]
    image_points = synthesize_image_points(model_points, true_parameters,
                                           image_width, image_height)

    # Add some pixel noise to the observations
    rng = np.random.default_rng(0)
    image_points = image_points + rng.normal(0.0, 0.5, image_points.shape)

    estimator = OrthographicCameraEstimator()
    estimator.set_progress_callback(print_progress)

    print("Starting estimation...")
    result = estimator.estimate(image_points, model_points, image_width, image_height)

    if result.converged:
        print("Estimation successful!")
    else:
        print(f"Estimation did not converge: {result.message}")

    print(f"Final RMS error: {result.rms_error:.3f} pixels")
    print(f"Function evaluations: {result.function_evaluations}")
    display_camera_parameters(result)


def create_test_model():
    """Create a non-planar set of model points."""
    corners = [(x, y, z) for x in (-40, 40) for y in (-50, 50) for z in (-30, 30)]
    extra = [(0, 0, 60), (25, -10, 5), (-15, 35, -20)]
    return np.array(corners + extra, dtype=float)


def synthesize_image_points(model_points, parameters, width, height):
    """Project model points with known camera parameters."""
    correspondences = CorrespondenceSet.from_points(np.zeros((len(model_points), 2)), model_points)
    return OrthographicParameterProjection(correspondences, width, height).project(parameters)


def print_progress(evaluation, squared_error):
    if evaluation % 50 == 0:
        print(f"  evaluation {evaluation}: squared error {squared_error:.3f}")


def display_camera_parameters(result):
    """Display the estimated camera parameters."""

    params = result.parameters
    frustum = params.frustum

    print("\nEstimated Camera Parameters:")
    print(f"  Rotation (pitch, yaw, roll): ({params.pitch:.4f}, {params.yaw:.4f}, {params.roll:.4f}) rad")
    print(f"  Translation: ({params.t_x:.3f}, {params.t_y:.3f})")
    print(f"  Frustum: l={frustum.left:.3f} r={frustum.right:.3f} b={frustum.bottom:.3f} t={frustum.top:.3f}")

    print("\nPer-point errors:")
    for index, error in enumerate(result.per_point_errors):
        print(f"  Point {index}: {error:.3f} pixels")


def strict_camera_estimation(image_points, model_points, width, height, settings_path=None):
    """
    Example of an estimation that refuses unconverged fits.

    Args:
        image_points: 2D image points
        model_points: Corresponding 3D model points
        width: Image width in pixels
        height: Image height in pixels
        settings_path: Optional YAML file with tuned settings
    """
    settings = EstimatorSettings.from_yaml(settings_path) if settings_path else None

    try:
        return estimate_orthographic_camera(image_points, model_points, width, height,
                                            settings=settings)
    except ConvergenceError as e:
        print(f"Estimation failed: {e}")
        print(f"Best-effort RMS error: {e.result.rms_error:.3f} pixels")
        return None


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    example_camera_estimation()
