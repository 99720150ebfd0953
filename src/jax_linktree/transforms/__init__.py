"""
Rigid-body transform helpers used by the link tree.

- so3: rotation matrices (axis-angle, RPY, quaternion constructors)
- se3: 4x4 homogeneous transforms
"""

from . import so3
from . import se3

__all__ = [
    "so3",
    "se3",
]
