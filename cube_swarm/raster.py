"""
Point rasterizer with a per-cell depth buffer.

Depth is the view-space z of a point. The camera looks down -Z, so a larger
z is nearer and wins the cell.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .cube import Color

logger = logging.getLogger(__name__)

BLANK = " "
W_EPSILON = 1e-9


@dataclass
class Cell:
    glyph: str = BLANK
    color: Color = Color.NONE
    depth: float = 0.0

    @property
    def empty(self):
        return self.glyph == BLANK


@dataclass(frozen=True)
class Fragment:
    row: int
    col: int
    depth: float
    glyph: str
    color: Color


class FrameBuffer:
    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.cells = [[Cell() for _ in range(width)] for _ in range(height)]

    def __getitem__(self, rc):
        row, col = rc
        return self.cells[row][col]

    def __eq__(self, other):
        if not isinstance(other, FrameBuffer):
            return NotImplemented
        return self.cells == other.cells

    def rows(self):
        """Rows of (glyph, color) pairs, top to bottom."""
        for row in self.cells:
            yield [(cell.glyph, cell.color) for cell in row]

    def glyphs(self):
        for row in self.cells:
            yield "".join(cell.glyph for cell in row)

    def __str__(self):
        return "\n".join(self.glyphs())


def rasterize(points, projection, width, height):
    """
    Project view-space points and bucket them into grid cells.

    Points behind the camera (w <= 0), non-finite results, and anything
    outside [-1, 1] in x or y are dropped.
    """
    if not points:
        return []

    view = np.array([[p.x, p.y, p.z, p.w] for p in points], dtype=float)
    clip = view @ projection.T

    w = clip[:, 3]
    keep = w > W_EPSILON
    ndc = np.zeros_like(clip[:, :3])
    ndc[keep] = clip[keep, :3] / w[keep, None]

    keep &= np.isfinite(ndc).all(axis=1) & np.isfinite(view[:, 2])
    keep &= (np.abs(ndc[:, 0]) <= 1.0) & (np.abs(ndc[:, 1]) <= 1.0)

    cols = np.floor((ndc[:, 0] + 1.0) * width / 2.0)
    # Screen rows grow downwards
    rows = np.floor((1.0 - ndc[:, 1]) * height / 2.0)
    keep &= (cols >= 0) & (cols < width) & (rows >= 0) & (rows < height)

    dropped = len(points) - int(keep.sum())
    if dropped:
        logger.debug("Dropped %d of %d points", dropped, len(points))

    return [
        Fragment(int(rows[i]), int(cols[i]), float(view[i, 2]), points[i].glyph, points[i].color)
        for i in np.flatnonzero(keep)
    ]


def composite(fragments, width, height):
    """
    Resolve fragments into a FrameBuffer, nearest depth winning each cell.

    Fragments are ordered by depth, then row, column, glyph and color, so the
    result does not depend on the input order.
    """
    frame = FrameBuffer(width, height)
    ordered = sorted(fragments, key=lambda f: (f.depth, f.row, f.col, f.glyph, f.color.value))
    for f in ordered:
        cell = frame.cells[f.row][f.col]
        if cell.empty or f.depth > cell.depth:
            cell.glyph = f.glyph
            cell.color = f.color
            cell.depth = f.depth
    return frame


def render(points, config):
    fragments = rasterize(
        points, config.projection_matrix(), config.screen_width, config.screen_height
    )
    if not config.color_enabled:
        fragments = [
            Fragment(f.row, f.col, f.depth, f.glyph, Color.NONE) for f in fragments
        ]
    return composite(fragments, config.screen_width, config.screen_height)
