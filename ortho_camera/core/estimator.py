"""
Estimation of orthographic camera parameters from 2D-3D correspondences.
"""

from dataclasses import dataclass
from numbers import Integral
from typing import Any, Callable, Dict, List, Optional, Sequence
import logging

import numpy as np

from .camera_parameters import NUM_PARAMETERS, OrthographicRenderingParameters
from .correspondence import CorrespondenceSet
from .exceptions import ConvergenceError, InvalidInputError
from .optimization import LevenbergMarquardtSolver
from .projection import OrthographicParameterProjection
from .settings import EstimatorSettings

logger = logging.getLogger(__name__)


@dataclass
class EstimationResult:
    """
    Fitted camera parameters together with the quality of the fit.

    Attributes:
        parameters: Estimated rendering parameters
        converged: True if the solver converged to a non-degenerate solution
        status: Solver termination status
        message: Termination reason
        function_evaluations: Number of residual evaluations
        final_cost: Half the sum of squared residuals
        rms_error: Root mean square reprojection error in pixels
        per_point_errors: Reprojection error of each correspondence in pixels
        raw_parameters: Final [pitch, yaw, roll, t_x, t_y, frustum_scale] vector
    """
    parameters: OrthographicRenderingParameters
    converged: bool
    status: int
    message: str
    function_evaluations: int
    final_cost: float
    rms_error: float
    per_point_errors: List[float]
    raw_parameters: np.ndarray

    def to_dict(self) -> Dict[str, Any]:
        return {
            'parameters': self.parameters.to_dict(),
            'converged': self.converged,
            'status': self.status,
            'message': self.message,
            'function_evaluations': self.function_evaluations,
            'final_cost': self.final_cost,
            'rms_error': self.rms_error,
            'per_point_errors': list(self.per_point_errors),
        }


class OrthographicCameraEstimator:
    """
    Estimates model pose and orthographic camera frustum from correspondences.

    Six parameters [r_x, r_y, r_z, t_x, t_y, frustum_scale] are fitted: the
    first five transform the model, the last one sets the viewing frustum of
    the camera. The fit minimizes the reprojection error with
    Levenberg-Marquardt and a forward-difference Jacobian, starting from zero
    rotation and translation and a fixed frustum scale.

    Analytic derivatives of the residuals would be cheaper than the numerical
    ones, and a better initial guess would make the fit more robust on
    unusually scaled inputs.
    """

    def __init__(self, settings: Optional[EstimatorSettings] = None):
        """
        Initialize the estimator.

        Args:
            settings: Tuned constants of the fit, defaults if omitted
        """
        self.settings = settings or EstimatorSettings()
        self.settings.validate()
        self.progress_callback: Optional[Callable[[int, float], None]] = None

    def set_progress_callback(self, callback: Optional[Callable[[int, float], None]]) -> None:
        """
        Set a callback function to track optimization progress.

        Args:
            callback: Function that takes evaluation count and current squared error
        """
        self.progress_callback = callback

    def initial_parameters(self) -> np.ndarray:
        """Get the starting parameter vector of the solve."""
        parameters = np.zeros(NUM_PARAMETERS)
        parameters[5] = self.settings.initial_frustum_scale
        return parameters

    def estimate(self, image_points: Sequence[Sequence[float]],
                 model_points: Sequence[Sequence[float]],
                 width: int, height: int) -> EstimationResult:
        """
        Fit the camera to a set of 2D-3D correspondences.

        Args:
            image_points: 2D image points, origin at the top-left corner
            model_points: Corresponding 3D (or homogeneous 4D) model points
            width: Width of the image (or viewport) in pixels
            height: Height of the image (or viewport) in pixels

        Returns:
            The fit; check ``converged`` before trusting the parameters

        Raises:
            InvalidInputError: If the correspondences or the image size are invalid
            RuntimeError: If the solver fails
        """
        _validate_image_size(width, height)
        correspondences = CorrespondenceSet.from_points(image_points, model_points)

        cost_function = OrthographicParameterProjection(correspondences, width, height)
        solver = LevenbergMarquardtSolver(self.settings)
        solver.set_progress_callback(self.progress_callback)

        x0 = self.initial_parameters()
        initial_rms = _rms(cost_function(x0), len(correspondences))
        logger.info(
            f"Starting orthographic camera estimation: {len(correspondences)} correspondences, "
            f"image {width}x{height}, initial RMS error = {initial_rms:.3f}px"
        )

        solve = solver.minimize(cost_function, x0)

        converged = solve.converged
        message = solve.message
        if abs(solve.parameters[5]) < self.settings.min_frustum_scale:
            converged = False
            message = f"Degenerate solution: frustum scale {solve.parameters[5]:g} is close to zero"

        rendering_parameters = OrthographicRenderingParameters.from_parameter_vector(
            solve.parameters, width, height)

        per_point = np.linalg.norm(solve.residuals.reshape(-1, 2), axis=1)
        rms_error = _rms(solve.residuals, len(correspondences))

        logger.info(
            f"Orthographic camera estimation complete: final RMS error = {rms_error:.3f}px "
            f"({solve.function_evaluations} evaluations)"
        )
        if not converged:
            logger.warning(f"Optimization did not converge: {message}")

        return EstimationResult(
            parameters=rendering_parameters,
            converged=converged,
            status=solve.status,
            message=message,
            function_evaluations=solve.function_evaluations,
            final_cost=solve.cost,
            rms_error=rms_error,
            per_point_errors=per_point.tolist(),
            raw_parameters=solve.parameters
        )


def estimate_orthographic_camera(image_points: Sequence[Sequence[float]],
                                 model_points: Sequence[Sequence[float]],
                                 width: int, height: int,
                                 settings: Optional[EstimatorSettings] = None,
                                 require_convergence: bool = True) -> OrthographicRenderingParameters:
    """
    Estimate the rotation, translation and viewing frustum of an orthographic camera.

    At least 6 correspondences are required.

    Args:
        image_points: A list of 2D image points
        model_points: Corresponding points of a 3D model
        width: Width of the image (or viewport)
        height: Height of the image (or viewport)
        settings: Tuned constants of the fit, defaults if omitted
        require_convergence: Raise instead of returning an unconverged fit

    Returns:
        The estimated model and camera parameters

    Raises:
        InvalidInputError: If the correspondences or the image size are invalid
        ConvergenceError: If the fit did not converge and require_convergence is set
    """
    result = OrthographicCameraEstimator(settings).estimate(image_points, model_points, width, height)

    if require_convergence and not result.converged:
        raise ConvergenceError(f"Camera estimation did not converge: {result.message}", result)

    return result.parameters


def _validate_image_size(width: int, height: int) -> None:
    for name, value in (('width', width), ('height', height)):
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise InvalidInputError(f"Image {name} must be an integer, got {value!r}")
        if value <= 0:
            raise InvalidInputError(f"Image {name} must be positive, got {value}")


def _rms(residuals: np.ndarray, count: int) -> float:
    """RMS of the per-point reprojection distances."""
    return float(np.sqrt(np.sum(np.asarray(residuals) ** 2) / count))
