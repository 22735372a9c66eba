"""Camera module for view and ray generation.

Components:
    pinhole: Simple pinhole (perspective) camera model

Camera responsibilities:
    - Transform (x, y) image coordinates to world-space rays
    - Support look-at positioning with up vector
    - Compute the viewport from the vertical field of view

Ray generation uses normalized image coordinates:
    x in [0, 1): left to right across image
    y in [0, 1): bottom to top across image
"""

from .pinhole import PinholeCamera

__all__ = [
    "PinholeCamera",
]
