"""
Core module for orthographic camera estimation.
"""

from .exceptions import InvalidInputError, ConvergenceError
from .settings import EstimatorSettings
from .correspondence import Correspondence, CorrespondenceSet, MIN_CORRESPONDENCES
from .camera_parameters import Frustum, OrthographicRenderingParameters, PARAMETER_NAMES
from .projection import OrthographicParameterProjection
from .optimization import LevenbergMarquardtSolver, SolveResult
from .estimator import EstimationResult, OrthographicCameraEstimator, estimate_orthographic_camera

__all__ = [
    "InvalidInputError",
    "ConvergenceError",
    "EstimatorSettings",
    "Correspondence",
    "CorrespondenceSet",
    "MIN_CORRESPONDENCES",
    "Frustum",
    "OrthographicRenderingParameters",
    "PARAMETER_NAMES",
    "OrthographicParameterProjection",
    "LevenbergMarquardtSolver",
    "SolveResult",
    "EstimationResult",
    "OrthographicCameraEstimator",
    "estimate_orthographic_camera",
]
