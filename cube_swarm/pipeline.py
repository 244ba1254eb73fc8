"""
Model -> world -> view transforms for whole cubes.
"""

from dataclasses import dataclass, field

import numpy as np

from . import linalg
from .cube import Point


@dataclass
class Camera:
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angle: np.ndarray = field(default_factory=lambda: np.zeros(3))

    @classmethod
    def from_distance(cls, distance):
        # Sits on +Z looking back at the origin
        return cls(position=np.array([0.0, 0.0, distance]))

    def matrix(self):
        return linalg.view_matrix(self.position, self.angle)


def model_view(cube, view):
    return view @ linalg.world_matrix(cube.position, cube.orientation)


def transform(cube, view):
    """Return the cube's points in view space."""
    pts = linalg.apply(model_view(cube, view), cube.local)
    return [
        Point(x, y, z, glyph, color, w)
        for (x, y, z, w), glyph, color in zip(pts.tolist(), cube.glyphs, cube.colors)
    ]


def view_points(cubes, camera):
    view = camera.matrix()
    points = []
    for cube in cubes:
        points.extend(transform(cube, view))
    return points
