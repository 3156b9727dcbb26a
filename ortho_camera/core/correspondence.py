"""
Correspondence classes for representing 2D-3D point pairs.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple
import numpy as np

from .exceptions import InvalidInputError
from ..utils.math_utils import distance_2d

# Smallest correspondence set accepted for the 6-parameter fit.
MIN_CORRESPONDENCES = 6


@dataclass(frozen=True)
class Correspondence:
    """
    A single pair of observed 2D image point and 3D model point.

    Attributes:
        image_point: Observed pixel coordinates (x, y), origin top-left
        model_point: Model-space coordinates (x, y, z)
        index: Position of the pair in its correspondence set
    """
    image_point: Tuple[float, float]
    model_point: Tuple[float, float, float]
    index: Optional[int] = None

    def get_reprojection_error(self, projected_point: Tuple[float, float]) -> float:
        """
        Calculate the distance between the observed and a projected image point.

        Args:
            projected_point: Projected pixel coordinates (x, y)

        Returns:
            Reprojection error in pixels (Euclidean distance)
        """
        return distance_2d(self.image_point, projected_point)

    def __str__(self) -> str:
        return f"Correspondence(id={self.index}, image={self.image_point}, model={self.model_point})"


class CorrespondenceSet:
    """
    An ordered, validated set of 2D-3D correspondences.

    The set is read-only once built; the point arrays are copies flagged
    non-writeable so a solve can borrow them safely.
    """

    def __init__(self, image_points: np.ndarray, model_points: np.ndarray):
        """
        Initialize a correspondence set from already validated arrays.

        Use :meth:`from_points` to build one from user input.

        Args:
            image_points: Nx2 array of observed image points
            model_points: Nx3 array of model points
        """
        self._image_points = np.array(image_points, dtype=float)
        self._model_points = np.array(model_points, dtype=float)
        self._image_points.setflags(write=False)
        self._model_points.setflags(write=False)

    @classmethod
    def from_points(cls, image_points: Sequence[Sequence[float]],
                    model_points: Sequence[Sequence[float]],
                    min_count: int = MIN_CORRESPONDENCES) -> "CorrespondenceSet":
        """
        Validate and build a correspondence set.

        Model points may be 3D or homogeneous 4D; only x, y and z are used.

        Args:
            image_points: Sequence of 2D image points
            model_points: Sequence of 3D or 4D model points
            min_count: Smallest accepted number of correspondences

        Returns:
            The correspondence set

        Raises:
            InvalidInputError: If the counts differ, are too small, or a point is malformed
        """
        if len(image_points) != len(model_points):
            raise InvalidInputError(
                f"Number of image points ({len(image_points)}) does not match "
                f"number of model points ({len(model_points)})")

        if len(image_points) < min_count:
            raise InvalidInputError(
                f"At least {min_count} correspondences are required, got {len(image_points)}")

        image = _as_point_array(image_points, "image points", (2,))
        model = _as_point_array(model_points, "model points", (3, 4))

        return cls(image, model[:, :3])

    @property
    def image_points(self) -> np.ndarray:
        """Nx2 array of observed image points."""
        return self._image_points

    @property
    def model_points(self) -> np.ndarray:
        """Nx3 array of model points."""
        return self._model_points

    def __len__(self) -> int:
        return self._image_points.shape[0]

    def __iter__(self) -> Iterator[Correspondence]:
        for i in range(len(self)):
            yield self[i]

    def __getitem__(self, index: int) -> Correspondence:
        image = self._image_points[index]
        model = self._model_points[index]
        return Correspondence(
            (float(image[0]), float(image[1])),
            (float(model[0]), float(model[1]), float(model[2])),
            index if index >= 0 else len(self) + index
        )

    def to_dict(self) -> Dict[str, List[List[float]]]:
        return {
            'image_points': self._image_points.tolist(),
            'model_points': self._model_points.tolist(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CorrespondenceSet":
        try:
            return cls.from_points(data['image_points'], data['model_points'])
        except KeyError as e:
            raise InvalidInputError(f"Missing correspondence field: {e}") from e

    def __str__(self) -> str:
        return f"CorrespondenceSet(count={len(self)})"

    def __repr__(self) -> str:
        return str(self)


def _as_point_array(points: Sequence[Sequence[float]], name: str,
                    dimensions: Tuple[int, ...]) -> np.ndarray:
    try:
        array = np.asarray(points, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Could not read {name}: {e}") from e

    if array.ndim != 2 or array.shape[1] not in dimensions:
        expected = " or ".join(str(d) for d in dimensions)
        raise InvalidInputError(
            f"Each of the {name} must have {expected} components, got array of shape {array.shape}")

    if not np.all(np.isfinite(array)):
        raise InvalidInputError(f"{name.capitalize()} contain non-finite values")

    return array
