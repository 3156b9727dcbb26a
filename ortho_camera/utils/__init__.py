"""
Utility functions for the orthographic camera estimator.
"""

from .math_utils import *

__all__ = [
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "rpy_to_matrix",
    "create_translation_matrix",
    "modelview_matrix",
    "orthographic_matrix",
    "project_points",
    "distance_2d",
]
