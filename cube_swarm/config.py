"""
Run configuration: defaults, validation and projection bounds.
"""

import logging
import math
import shutil
from dataclasses import dataclass, field

from . import linalg
from .cube import PALETTE

logger = logging.getLogger(__name__)

# --- Defaults ---
SCREEN_WIDTH = 80
SCREEN_HEIGHT = 24
WORLD_BOUNDS = (45.0, 20.0, 20.0)
CUBE_COUNT = 3
MIN_SIDE = 6
MAX_SIDE = 10
MAX_LINEAR_SPEED = 0.02  # units / ms
MAX_ANGULAR_SPEED = 0.003  # rad / ms
CAMERA_DIST = 90.0
FOV = 60.0  # degrees, vertical
FRAME_DELAY_MS = 20

# Terminal cells are roughly twice as tall as they are wide
CHAR_ASPECT = 2.0
NEAR = 1.0

PROJECTIONS = ("orthographic", "perspective")


class ConfigError(ValueError):
    pass


def terminal_size():
    cols, rows = shutil.get_terminal_size((SCREEN_WIDTH, SCREEN_HEIGHT + 1))
    # Leave the last row free so the frame does not scroll
    return cols, max(rows - 1, 1)


@dataclass
class Config:
    screen_width: int = SCREEN_WIDTH
    screen_height: int = SCREEN_HEIGHT
    projection: str = "perspective"
    world_bounds: tuple = WORLD_BOUNDS
    cube_count: int = CUBE_COUNT
    min_side: int = MIN_SIDE
    max_side: int = MAX_SIDE
    max_linear_speed: float = MAX_LINEAR_SPEED
    max_angular_speed: float = MAX_ANGULAR_SPEED
    camera_distance: float = CAMERA_DIST
    color_enabled: bool = True
    collisions: bool = True
    palette: tuple = field(default=PALETTE)
    fov: float = FOV
    frame_delay_ms: int = FRAME_DELAY_MS
    seed: int | None = None
    frames: int | None = None

    def __post_init__(self):
        self.world_bounds = tuple(float(b) for b in self.world_bounds)
        self.palette = tuple(self.palette)

    @property
    def aspect(self):
        return self.screen_width / (self.screen_height * CHAR_ASPECT)

    def projection_bounds(self):
        """
        (left, right, bottom, top, near, far) of the view volume.

        The volume is sized so the whole world box, plus the largest cube,
        fits vertically; the horizontal extent follows the grid's aspect.
        """
        reach = max(self.world_bounds) + self.max_side
        far = self.camera_distance + reach * 2

        if self.projection == "orthographic":
            top = max(self.world_bounds[1], self.world_bounds[0] / self.aspect) + self.max_side
            right = top * self.aspect
            return -right, right, -top, top, NEAR, far

        top = NEAR * math.tan(math.radians(self.fov) / 2)
        right = top * self.aspect
        return -right, right, -top, top, NEAR, far

    def projection_matrix(self):
        bounds = self.projection_bounds()
        if self.projection == "orthographic":
            return linalg.orthographic(*bounds)
        return linalg.perspective(*bounds)

    def validate(self):
        """Raise ConfigError if the configuration cannot be rendered."""
        if self.screen_width < 1 or self.screen_height < 1:
            raise ConfigError(
                f"Screen must be at least 1x1, got {self.screen_width}x{self.screen_height}"
            )
        if self.projection not in PROJECTIONS:
            raise ConfigError(
                f"Unknown projection {self.projection!r}, expected one of {PROJECTIONS}"
            )
        if len(self.world_bounds) != 3 or any(b <= 0 for b in self.world_bounds):
            raise ConfigError(f"World bounds must be three positive numbers, got {self.world_bounds}")
        if self.cube_count < 0:
            raise ConfigError(f"Cube count cannot be negative, got {self.cube_count}")
        if self.min_side < 1 or self.min_side > self.max_side:
            raise ConfigError(
                f"Need 1 <= min_side <= max_side, got {self.min_side}..{self.max_side}"
            )
        if self.max_linear_speed < 0 or self.max_angular_speed < 0:
            raise ConfigError("Speeds cannot be negative")
        if not self.palette:
            raise ConfigError("Palette cannot be empty")
        if not 0 < self.fov < 180:
            raise ConfigError(f"Field of view must be in (0, 180), got {self.fov}")
        if self.projection == "perspective" and self.camera_distance <= 0:
            raise ConfigError(
                f"Camera distance must be positive for perspective, got {self.camera_distance}"
            )
        if self.frame_delay_ms < 0:
            raise ConfigError(f"Frame delay cannot be negative, got {self.frame_delay_ms}")
        if self.frames is not None and self.frames < 0:
            raise ConfigError(f"Frame limit cannot be negative, got {self.frames}")

        try:
            self.projection_matrix()
        except ValueError as e:
            raise ConfigError(str(e)) from e

        logger.info(
            "Config: %dx%d %s, %d cubes, collisions=%s",
            self.screen_width,
            self.screen_height,
            self.projection,
            self.cube_count,
            self.collisions,
        )
        return self
