"""
Orthographic Camera Package

Estimates the pose of a 3D model and the viewing frustum of an orthographic
camera from 2D-3D point correspondences.
"""

__version__ = "1.0.0"

# Import main classes for easy access
from .core.estimator import (
    EstimationResult,
    OrthographicCameraEstimator,
    estimate_orthographic_camera,
)
from .core.camera_parameters import Frustum, OrthographicRenderingParameters
from .core.correspondence import Correspondence, CorrespondenceSet
from .core.settings import EstimatorSettings
from .core.exceptions import InvalidInputError, ConvergenceError

__all__ = [
    "EstimationResult",
    "OrthographicCameraEstimator",
    "estimate_orthographic_camera",
    "Frustum",
    "OrthographicRenderingParameters",
    "Correspondence",
    "CorrespondenceSet",
    "EstimatorSettings",
    "InvalidInputError",
    "ConvergenceError",
]
