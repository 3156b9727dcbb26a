"""
Orthographic camera parameters and the viewing frustum derived from them.
"""

from dataclasses import dataclass
from typing import Any, Dict, Sequence
import numpy as np

from .exceptions import InvalidInputError
from ..utils.math_utils import modelview_matrix, orthographic_matrix

# Order of the values in the parameter vector the solver works on.
PARAMETER_NAMES = ('pitch', 'yaw', 'roll', 't_x', 't_y', 'frustum_scale')
NUM_PARAMETERS = len(PARAMETER_NAMES)


def aspect_ratio(width: int, height: int) -> float:
    """Width over height of an image or viewport."""
    return float(width) / float(height)


@dataclass(frozen=True)
class Frustum:
    """
    Viewing plane bounds of an orthographic camera.
    """
    left: float
    right: float
    bottom: float
    top: float

    @classmethod
    def from_scale(cls, scale: float, width: int, height: int) -> "Frustum":
        """
        Build the frustum {-aspect*scale, aspect*scale, -scale, scale}.

        Args:
            scale: Frustum scale, half the height of the viewing plane
            width: Image width in pixels
            height: Image height in pixels

        Returns:
            The frustum
        """
        aspect = aspect_ratio(width, height)
        return cls(-aspect * scale, aspect * scale, -scale, scale)

    @property
    def scale(self) -> float:
        """Half the height of the viewing plane."""
        return (self.top - self.bottom) * 0.5

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom

    def to_dict(self) -> Dict[str, float]:
        return {'left': self.left, 'right': self.right,
                'bottom': self.bottom, 'top': self.top}


@dataclass(frozen=True)
class OrthographicRenderingParameters:
    """
    Estimated model pose and orthographic camera frustum.

    The rotation and translation transform the model from model space to
    camera space and can be used to build an OpenGL model-view matrix; the
    frustum gives the matching orthographic projection matrix. Together they
    fully describe the imaging of a model under an orthographic projection.

    Rotations are in radians, RPY convention: yaw is applied first to the
    model, then pitch, then roll (R * P * Y * vertex).

    Attributes:
        r_x: Pitch
        r_y: Yaw. Positive means the subject is looking left
        r_z: Roll. Positive means the subject tilts their head to the right
        t_x: Translation along x in model units
        t_y: Translation along y in model units
        frustum: Viewing frustum of the camera
    """
    r_x: float
    r_y: float
    r_z: float
    t_x: float
    t_y: float
    frustum: Frustum

    @property
    def pitch(self) -> float:
        return self.r_x

    @property
    def yaw(self) -> float:
        return self.r_y

    @property
    def roll(self) -> float:
        return self.r_z

    @classmethod
    def from_parameter_vector(cls, values: Sequence[float], width: int,
                              height: int) -> "OrthographicRenderingParameters":
        """
        Build rendering parameters from a solver parameter vector.

        Args:
            values: [pitch, yaw, roll, t_x, t_y, frustum_scale]
            width: Image width in pixels
            height: Image height in pixels

        Returns:
            Rendering parameters with the frustum derived from the scale
        """
        if len(values) != NUM_PARAMETERS:
            raise InvalidInputError(f"Expected {NUM_PARAMETERS} values, got {len(values)}")

        pitch, yaw, roll, t_x, t_y, scale = (float(v) for v in values)
        return cls(pitch, yaw, roll, t_x, t_y, Frustum.from_scale(scale, width, height))

    def to_parameter_vector(self) -> np.ndarray:
        """Get the parameters as [pitch, yaw, roll, t_x, t_y, frustum_scale]."""
        return np.array([self.r_x, self.r_y, self.r_z, self.t_x, self.t_y, self.frustum.scale])

    def modelview_matrix(self) -> np.ndarray:
        """4x4 model-view matrix T * R * P * Y."""
        return modelview_matrix(self.r_x, self.r_y, self.r_z, self.t_x, self.t_y)

    def projection_matrix(self) -> np.ndarray:
        """4x4 OpenGL-conformant orthographic projection matrix."""
        f = self.frustum
        return orthographic_matrix(f.left, f.right, f.bottom, f.top)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'r_x': self.r_x,
            'r_y': self.r_y,
            'r_z': self.r_z,
            't_x': self.t_x,
            't_y': self.t_y,
            'frustum': self.frustum.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrthographicRenderingParameters":
        try:
            frustum = Frustum(**{k: float(v) for k, v in data['frustum'].items()})
            return cls(float(data['r_x']), float(data['r_y']), float(data['r_z']),
                       float(data['t_x']), float(data['t_y']), frustum)
        except (KeyError, TypeError) as e:
            raise InvalidInputError(f"Malformed rendering parameters: {e}") from e

    def __str__(self) -> str:
        return (f"OrthographicRenderingParameters(pitch={self.r_x:.4f}, yaw={self.r_y:.4f}, "
                f"roll={self.r_z:.4f}, t=({self.t_x:.3f}, {self.t_y:.3f}), "
                f"frustum_scale={self.frustum.scale:.3f})")
