"""
Residual model of the orthographic camera fit.
"""

from typing import Sequence
import numpy as np

from .camera_parameters import NUM_PARAMETERS, aspect_ratio
from .correspondence import CorrespondenceSet
from ..utils.math_utils import modelview_matrix, orthographic_matrix, project_points


class OrthographicParameterProjection:
    """
    Reprojection residuals of a correspondence set under an orthographic camera.

    Evaluating the model with a parameter vector
    [pitch, yaw, roll, t_x, t_y, frustum_scale] projects every model point
    and returns its offset from the observed image point. Residuals are laid
    out as [dx_0, dy_0, dx_1, dy_1, ...]; the layout never changes between
    calls.
    """

    def __init__(self, correspondences: CorrespondenceSet, width: int, height: int):
        """
        Initialize the residual model.

        Args:
            correspondences: Validated 2D-3D correspondences
            width: Image width in pixels
            height: Image height in pixels
        """
        self.correspondences = correspondences
        self.width = width
        self.height = height
        self.aspect = aspect_ratio(width, height)

    @property
    def inputs(self) -> int:
        """Number of parameters."""
        return NUM_PARAMETERS

    @property
    def values(self) -> int:
        """Number of residuals."""
        return 2 * len(self.correspondences)

    def project(self, parameters: Sequence[float]) -> np.ndarray:
        """
        Project all model points with the given parameters.

        Args:
            parameters: [pitch, yaw, roll, t_x, t_y, frustum_scale]

        Returns:
            Nx2 array of image coordinates
        """
        pitch, yaw, roll, t_x, t_y, scale = parameters
        modelview = modelview_matrix(pitch, yaw, roll, t_x, t_y)
        projection = orthographic_matrix(-self.aspect * scale, self.aspect * scale, -scale, scale)
        return project_points(self.correspondences.model_points, modelview, projection,
                              self.width, self.height)

    def __call__(self, parameters: Sequence[float]) -> np.ndarray:
        """
        Compute the residual vector.

        Args:
            parameters: [pitch, yaw, roll, t_x, t_y, frustum_scale]

        Returns:
            Array of 2N residuals, projected minus observed
        """
        projected = self.project(parameters)
        return (projected - self.correspondences.image_points).ravel()
