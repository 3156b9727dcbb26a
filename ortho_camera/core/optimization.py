"""
Nonlinear least-squares solve using scipy's Levenberg-Marquardt implementation.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence
import logging

import numpy as np
from scipy.optimize import least_squares

from .exceptions import InvalidInputError
from .settings import EstimatorSettings

logger = logging.getLogger(__name__)

ResidualFunction = Callable[[np.ndarray], np.ndarray]


@dataclass
class SolveResult:
    """
    Outcome of a least-squares solve.

    Attributes:
        parameters: Final parameter vector
        converged: True if one of the solver's convergence criteria was met
        status: Solver termination status (see scipy.optimize.least_squares)
        message: Human readable termination reason
        function_evaluations: Number of residual evaluations
        cost: Half the sum of squared residuals at the final parameters
        residuals: Residual vector at the final parameters
    """
    parameters: np.ndarray
    converged: bool
    status: int
    message: str
    function_evaluations: int
    cost: float
    residuals: np.ndarray


class LevenbergMarquardtSolver:
    """
    Minimizes a residual function with Levenberg-Marquardt and a numerical Jacobian.

    Any residual function of a parameter vector can be solved; the solver
    holds no state between calls to :meth:`minimize`.
    """

    def __init__(self, settings: Optional[EstimatorSettings] = None):
        """
        Initialize the solver.

        Args:
            settings: Tolerances, evaluation cap and differentiation step
        """
        self.settings = settings or EstimatorSettings()

        # Progress callback
        self.progress_callback: Optional[Callable[[int, float], None]] = None

    def set_progress_callback(self, callback: Optional[Callable[[int, float], None]]) -> None:
        """
        Set a callback function to track optimization progress.

        Args:
            callback: Function that takes evaluation count and current squared error
        """
        self.progress_callback = callback

    def minimize(self, residual_function: ResidualFunction,
                 initial_parameters: Sequence[float]) -> SolveResult:
        """
        Minimize the sum of squared residuals.

        Args:
            residual_function: Maps a parameter vector to a residual vector
            initial_parameters: Starting parameter vector

        Returns:
            The solve result; ``converged`` is False when the evaluation cap was hit

        Raises:
            InvalidInputError: If there are fewer residuals than parameters
            RuntimeError: If the solver itself fails
        """
        x0 = np.array(initial_parameters, dtype=float)
        initial_residuals = np.asarray(residual_function(x0), dtype=float)

        if initial_residuals.size < x0.size:
            raise InvalidInputError(
                f"Levenberg-Marquardt needs at least as many residuals ({initial_residuals.size}) "
                f"as parameters ({x0.size})")

        evaluation_count = 0

        def objective(params: np.ndarray) -> np.ndarray:
            nonlocal evaluation_count
            residuals = residual_function(params)

            evaluation_count += 1
            if self.progress_callback:
                self.progress_callback(evaluation_count, float(np.sum(residuals ** 2)))

            return residuals

        logger.debug(
            f"Levenberg-Marquardt: {x0.size} parameters, {initial_residuals.size} residuals, "
            f"diff_step={self.settings.diff_step:g}, max_nfev={self.settings.max_function_evaluations}"
        )

        try:
            result = least_squares(
                objective,
                x0,
                method='lm',
                jac='2-point',
                diff_step=self.settings.diff_step,
                max_nfev=int(self.settings.max_function_evaluations),
                ftol=self.settings.ftol,
                xtol=self.settings.xtol,
                gtol=self.settings.gtol
            )
        except Exception as e:
            logger.error(f"Levenberg-Marquardt optimization failed: {e}")
            raise RuntimeError(f"Optimization failed: {str(e)}") from e

        return SolveResult(
            parameters=result.x,
            converged=bool(result.success),
            status=int(result.status),
            message=str(result.message),
            function_evaluations=int(result.nfev),
            cost=float(result.cost),
            residuals=result.fun
        )
