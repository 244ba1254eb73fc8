"""
Cube entities and their point clouds.
"""

import enum
import logging
import math
import random
from dataclasses import dataclass, field

import numpy as np

logger = logging.getLogger(__name__)


class Color(enum.Enum):
    NONE = "none"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"


PALETTE = tuple(c for c in Color if c is not Color.NONE)

# Face order: front (+Z), back (-Z), right (+X), left (-X), top (+Y), bottom (-Y)
FACE_GLYPHS = (".", "$", "^", "~", "#", "!")


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    z: float
    glyph: str
    color: Color = Color.NONE
    w: float = 1.0


def face_points(side, glyphs=FACE_GLYPHS, colors=None):
    """
    Sample the six faces of a cube centred on the origin.

    Each face is a side x side grid of integer coordinates with the face plane
    at +/- side / 2. Returns (positions (N, 3), glyph list, color list).
    """
    if colors is None:
        colors = [Color.NONE] * 6
    half = side / 2.0
    ticks = np.arange(side, dtype=float) - side // 2
    I, J = np.meshgrid(ticks, ticks, indexing="ij")
    i, j = I.ravel(), J.ravel()
    plane = np.full_like(i, half)

    faces = [
        np.stack([i, j, plane], axis=1),  # Front
        np.stack([i, j, -plane], axis=1),  # Back
        np.stack([plane, j, i], axis=1),  # Right
        np.stack([-plane, j, i], axis=1),  # Left
        np.stack([j, plane, i], axis=1),  # Top
        np.stack([j, -plane, i], axis=1),  # Bottom
    ]

    n = side * side
    out_glyphs = [g for g in glyphs for _ in range(n)]
    out_colors = [c for c in colors for _ in range(n)]
    return np.vstack(faces), out_glyphs, out_colors


@dataclass(eq=False)
class Cube:
    side: int
    position: np.ndarray
    velocity: np.ndarray
    orientation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    face_colors: tuple = (Color.NONE,) * 6
    last_update: float = 0.0

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=float)
        self.velocity = np.asarray(self.velocity, dtype=float)
        self.orientation = np.asarray(self.orientation, dtype=float)
        self.angular_velocity = np.asarray(self.angular_velocity, dtype=float)

        local, glyphs, colors = face_points(self.side, FACE_GLYPHS, self.face_colors)
        # Homogeneous local-space coordinates, built once per cube
        self.local = np.hstack([local, np.ones((len(local), 1))])
        self.local.setflags(write=False)
        self.glyphs = tuple(glyphs)
        self.colors = tuple(colors)

    @property
    def points(self):
        return [
            Point(x, y, z, g, c)
            for (x, y, z, _), g, c in zip(self.local, self.glyphs, self.colors)
        ]

    @property
    def radius(self):
        # Half the face diagonal
        return self.side * math.sqrt(2) / 2

    def predicted_position(self, elapsed_ms):
        return self.position + self.velocity * elapsed_ms


def random_cube(rng, config, now_ms=0.0):
    """Create a cube with random size, placement, spin and colors."""
    side = rng.randint(config.min_side, config.max_side)
    half = side / 2.0
    position = [rng.uniform(-max(b - half, 0.0), max(b - half, 0.0)) for b in config.world_bounds]
    velocity = [rng.uniform(-config.max_linear_speed, config.max_linear_speed) for _ in range(3)]
    spin = [rng.uniform(-config.max_angular_speed, config.max_angular_speed) for _ in range(3)]
    orientation = [rng.uniform(0.0, 2 * math.pi) for _ in range(3)]
    colors = tuple(rng.choice(config.palette) for _ in range(6))

    cube = Cube(
        side=side,
        position=position,
        velocity=velocity,
        orientation=orientation,
        angular_velocity=spin,
        face_colors=colors,
        last_update=now_ms,
    )
    logger.debug("Spawned cube side=%d at %s v=%s", side, cube.position, cube.velocity)
    return cube


def _overlaps(cube, others):
    return any(
        np.linalg.norm(cube.position - o.position) < cube.radius + o.radius
        for o in others
    )


def spawn_cubes(config, now_ms=0.0, rng=None, attempts=50):
    """
    Create config.cube_count cubes, re-rolling placements that overlap an
    already placed cube. Overlapping cubes would predict a collision every
    frame and never move, so after `attempts` tries the last roll is kept.
    """
    if rng is None:
        rng = random.Random(config.seed)
    cubes = []
    for _ in range(config.cube_count):
        for _ in range(attempts):
            cube = random_cube(rng, config, now_ms)
            if not _overlaps(cube, cubes):
                break
        else:
            logger.warning("Could not place cube %d without overlap", len(cubes))
        cubes.append(cube)
    return cubes
