import math

import numpy as np

from cube_swarm import linalg
from cube_swarm.cube import Cube
from cube_swarm.pipeline import Camera, model_view, transform, view_points


def make_cube(position=(0, 0, 0), side=4, **kw):
    return Cube(side=side, position=position, velocity=(0, 0, 0), **kw)


def test_camera_on_positive_z():
    camera = Camera.from_distance(50)
    np.testing.assert_allclose(camera.position, [0, 0, 50])
    np.testing.assert_allclose(linalg.apply(camera.matrix(), [0, 0, 0, 1]), [0, 0, -50, 1])


def test_cube_at_camera_is_view_origin():
    cube = make_cube(position=(0, 0, 50))
    m = model_view(cube, Camera.from_distance(50).matrix())
    np.testing.assert_allclose(linalg.apply(m, [0, 0, 0, 1]), [0, 0, 0, 1], atol=1e-12)


def test_transform_keeps_glyphs_and_makes_new_points():
    cube = make_cube()
    pts = transform(cube, Camera.from_distance(50).matrix())
    assert len(pts) == len(cube.local)
    assert [p.glyph for p in pts] == list(cube.glyphs)
    assert [p.color for p in pts] == list(cube.colors)
    front = [p for p in pts if p.glyph == "."]
    assert all(math.isclose(p.z, 2 - 50) for p in front)
    # Local cloud untouched
    assert np.abs(cube.local[:, :3]).max() == 2.0


def test_transform_applies_orientation():
    cube = make_cube(orientation=(0, math.pi / 2, 0))
    pts = transform(cube, linalg.identity())
    # Front face (+Z) turns to face +X
    front = [p for p in pts if p.glyph == "."]
    assert all(math.isclose(p.x, 2, abs_tol=1e-9) for p in front)


def test_view_points_flattens_all_cubes():
    cubes = [make_cube(side=2), make_cube(position=(10, 0, 0), side=3)]
    pts = view_points(cubes, Camera.from_distance(40))
    assert len(pts) == 6 * 4 + 6 * 9
