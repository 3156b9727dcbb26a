"""
Estimator settings.

Holds the empirically tuned constants of the solve and handles loading and
saving them from YAML files for per-deployment adjustment.
"""

import math
import sys
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict
import logging

import yaml

from .exceptions import InvalidInputError

logger = logging.getLogger(__name__)

# Rough hand-chosen starting value for the frustum scale. Works for typical
# image and model scales, not adaptive.
DEFAULT_INITIAL_FRUSTUM_SCALE = 110.0

# MINPACK epsfcn for the forward-difference Jacobian. Smaller values give
# steps too small to produce a usable gradient on this cost surface.
DEFAULT_NUMERICAL_DIFF_EPSILON = 1e-4

# scipy's own cap for 'lm' with a numerical Jacobian of 6 parameters
DEFAULT_MAX_FUNCTION_EVALUATIONS = 100 * 6 * 7
DEFAULT_TOLERANCE = 1e-8
DEFAULT_MIN_FRUSTUM_SCALE = 1e-6


@dataclass
class EstimatorSettings:
    """
    Tunable constants of the orthographic camera estimation.

    Attributes:
        initial_frustum_scale: Starting value of the frustum scale parameter
        numerical_diff_epsilon: Relative squared step of the finite-difference Jacobian
        max_function_evaluations: Residual evaluation cap of the solver
        ftol: Relative cost reduction tolerance
        xtol: Relative parameter change tolerance
        gtol: Gradient orthogonality tolerance
        min_frustum_scale: Solutions with a smaller absolute scale are degenerate
    """
    initial_frustum_scale: float = DEFAULT_INITIAL_FRUSTUM_SCALE
    numerical_diff_epsilon: float = DEFAULT_NUMERICAL_DIFF_EPSILON
    max_function_evaluations: int = DEFAULT_MAX_FUNCTION_EVALUATIONS
    ftol: float = DEFAULT_TOLERANCE
    xtol: float = DEFAULT_TOLERANCE
    gtol: float = DEFAULT_TOLERANCE
    min_frustum_scale: float = DEFAULT_MIN_FRUSTUM_SCALE

    @property
    def diff_step(self) -> float:
        """Relative finite-difference step, sqrt(epsfcn) as MINPACK uses it."""
        return math.sqrt(self.numerical_diff_epsilon)

    def validate(self) -> None:
        """
        Check that every setting is usable.

        Raises:
            InvalidInputError: If a setting is non-finite or out of range
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidInputError(f"Setting '{f.name}' must be a number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidInputError(f"Setting '{f.name}' must be finite, got {value}")

        if self.initial_frustum_scale == 0.0:
            raise InvalidInputError("initial_frustum_scale must be non-zero")
        if self.numerical_diff_epsilon <= 0.0:
            raise InvalidInputError(
                f"numerical_diff_epsilon must be positive, got {self.numerical_diff_epsilon}")
        if self.max_function_evaluations < 1:
            raise InvalidInputError(
                f"max_function_evaluations must be at least 1, got {self.max_function_evaluations}")
        # MINPACK rejects tolerances below machine epsilon
        for name in ('ftol', 'xtol', 'gtol'):
            if getattr(self, name) < sys.float_info.epsilon:
                raise InvalidInputError(
                    f"{name} must be at least machine epsilon, got {getattr(self, name)}")
        if self.min_frustum_scale < 0.0:
            raise InvalidInputError(
                f"min_frustum_scale must not be negative, got {self.min_frustum_scale}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EstimatorSettings":
        """
        Build settings from a dictionary, using defaults for missing keys.

        Raises:
            InvalidInputError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidInputError(f"Unknown estimator settings: {', '.join(unknown)}")

        settings = cls(**data)
        settings.validate()
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_yaml(cls, config_path: str) -> "EstimatorSettings":
        """
        Load settings from a YAML file.

        Args:
            config_path: Path to the YAML file

        Returns:
            EstimatorSettings with loaded values

        Example YAML structure:
            initial_frustum_scale: 110.0
            numerical_diff_epsilon: 0.0001
            max_function_evaluations: 4200
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {config_path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise InvalidInputError(f"Settings file must contain a mapping: {config_path}")

        logger.info(f"Loading estimator settings from {config_path}")
        return cls.from_dict(data)

    def to_yaml(self, config_path: str) -> None:
        """Save settings to a YAML file."""
        with open(config_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

        logger.info(f"Estimator settings saved to {config_path}")
