"""
4x4 homogeneous transforms.

All matrices are (4, 4) float arrays and act on column vectors, so a chain
``A @ B @ C`` applies C first. Angles are radians, rotations right-handed.
"""

import numpy as np


def identity():
    return np.eye(4, dtype=float)


def rotate_x(angle):
    c, s = np.cos(angle), np.sin(angle)
    return np.array(
        [
            [1, 0, 0, 0],
            [0, c, -s, 0],
            [0, s, c, 0],
            [0, 0, 0, 1],
        ],
        dtype=float,
    )


def rotate_y(angle):
    c, s = np.cos(angle), np.sin(angle)
    return np.array(
        [
            [c, 0, s, 0],
            [0, 1, 0, 0],
            [-s, 0, c, 0],
            [0, 0, 0, 1],
        ],
        dtype=float,
    )


def rotate_z(angle):
    c, s = np.cos(angle), np.sin(angle)
    return np.array(
        [
            [c, -s, 0, 0],
            [s, c, 0, 0],
            [0, 0, 1, 0],
            [0, 0, 0, 1],
        ],
        dtype=float,
    )


def translate(offset):
    dx, dy, dz = offset
    m = identity()
    m[:3, 3] = (dx, dy, dz)
    return m


def multiply(m1, m2):
    return m1 @ m2


def apply(m, v):
    """
    Apply ``m`` to a homogeneous vector, or to every row of an (N, 4) array.
    """
    v = np.asarray(v, dtype=float)
    if v.ndim == 1:
        return m @ v
    return v @ m.T


def to_homogeneous(points):
    """(N, 3) -> (N, 4) with w = 1."""
    points = np.asarray(points, dtype=float)
    return np.hstack([points, np.ones((len(points), 1))])


def _check_bounds(left, right, bottom, top, near, far):
    if left == right or bottom == top or near == far:
        raise ValueError(
            f"Degenerate projection bounds: l={left} r={right} b={bottom} "
            f"t={top} n={near} f={far}"
        )


def orthographic(left, right, bottom, top, near, far):
    """Scale + bias mapping the view box onto [-1, 1]^3."""
    _check_bounds(left, right, bottom, top, near, far)
    m = identity()
    m[0, 0] = 2.0 / (right - left)
    m[1, 1] = 2.0 / (top - bottom)
    m[2, 2] = -2.0 / (far - near)
    m[0, 3] = -(right + left) / (right - left)
    m[1, 3] = -(top + bottom) / (top - bottom)
    m[2, 3] = -(far + near) / (far - near)
    return m


def perspective(left, right, bottom, top, near, far):
    """
    Frustum projection. The resulting w is the distance in front of the
    camera (-z in view space); dividing by it gives the foreshortening.
    """
    _check_bounds(left, right, bottom, top, near, far)
    if near <= 0:
        raise ValueError(f"Perspective near plane must be positive, got {near}")
    m = np.zeros((4, 4), dtype=float)
    m[0, 0] = 2.0 * near / (right - left)
    m[1, 1] = 2.0 * near / (top - bottom)
    m[0, 2] = (right + left) / (right - left)
    m[1, 2] = (top + bottom) / (top - bottom)
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -2.0 * far * near / (far - near)
    m[3, 2] = -1.0
    return m


def world_matrix(position, angle):
    # Rotate about the local origin, then place in the world
    ax, ay, az = angle
    return translate(position) @ rotate_z(az) @ rotate_y(ay) @ rotate_x(ax)


def view_matrix(position, angle):
    # Inverse of world_matrix(position, angle)
    ax, ay, az = angle
    px, py, pz = position
    return rotate_x(-ax) @ rotate_y(-ay) @ rotate_z(-az) @ translate((-px, -py, -pz))
