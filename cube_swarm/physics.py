"""
Bouncing motion and broad-phase collision prediction.

Velocities are in world units per millisecond, angular velocities in
radians per millisecond.
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)


def will_collide(cube, others, elapsed_ms):
    """
    True if ``cube`` is predicted to touch any cube in ``others``.

    Both cubes are advanced by ``elapsed_ms`` and treated as spheres of
    radius half their face diagonal.
    """
    here = cube.predicted_position(elapsed_ms)
    for other in others:
        if other is cube:
            continue
        there = other.predicted_position(elapsed_ms)
        if np.linalg.norm(here - there) < cube.radius + other.radius:
            return True
    return False


def tick(cube, elapsed_ms, bounds, colliding=False):
    """
    Advance ``cube`` by ``elapsed_ms``.

    Each axis bounces independently: a component whose next position would
    leave [-bound, bound] (or every component, when a collision is pending)
    flips sign and the position on that axis stays put for this tick.
    """
    cube.orientation = cube.orientation + cube.angular_velocity * elapsed_ms

    position = cube.position.copy()
    velocity = cube.velocity.copy()
    for axis in range(3):
        nxt = position[axis] + velocity[axis] * elapsed_ms
        if colliding or abs(nxt) > bounds[axis]:
            velocity[axis] = -velocity[axis]
        else:
            position[axis] = nxt
    cube.position = position
    cube.velocity = velocity


def step(cubes, now_ms, bounds, collisions=True):
    """
    Advance every cube to ``now_ms``.

    All collision predictions are made against the poses as they were at the
    start of the step, before any cube moves.
    """
    elapsed = [now_ms - cube.last_update for cube in cubes]

    if collisions:
        pending = [will_collide(c, cubes, dt) for c, dt in zip(cubes, elapsed)]
    else:
        pending = [False] * len(cubes)

    for cube, dt, hit in zip(cubes, elapsed, pending):
        if hit:
            logger.debug("Collision predicted for cube at %s", cube.position)
        tick(cube, dt, bounds, hit)
        cube.last_update = now_ms
