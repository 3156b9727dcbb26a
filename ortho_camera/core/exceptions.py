"""
Exceptions raised by the orthographic camera estimator.
"""

from typing import Any


class InvalidInputError(ValueError):
    """Raised when correspondences, image size or settings violate a precondition."""


class ConvergenceError(RuntimeError):
    """
    Raised when the solver did not reach a usable solution.

    The best-effort fit is kept on ``result`` so callers can still inspect
    or use it.
    """

    def __init__(self, message: str, result: Any = None):
        super().__init__(message)
        self.result = result
