import math
from collections import Counter

import numpy as np
import pytest

from cube_swarm.config import Config
from cube_swarm.cube import FACE_GLYPHS, Color, Cube, Point, spawn_cubes


def make_cube(side, **kw):
    return Cube(side=side, position=kw.pop("position", (0, 0, 0)), velocity=(0, 0, 0), **kw)


@pytest.mark.parametrize("side", [1, 4, 5, 10])
def test_point_cloud_size(side):
    cube = make_cube(side)
    assert cube.local.shape == (6 * side * side, 4)
    assert len(cube.glyphs) == len(cube.colors) == 6 * side * side
    assert (cube.local[:, 3] == 1.0).all()


def test_one_glyph_per_face():
    cube = make_cube(4)
    assert Counter(cube.glyphs) == {g: 16 for g in FACE_GLYPHS}


def test_faces_sit_on_their_planes():
    side = 5
    cube = make_cube(side)
    half = side / 2
    on_plane = np.isclose(np.abs(cube.local[:, :3]), half)
    # Odd sides never put a grid coordinate on a face plane
    assert (on_plane.sum(axis=1) == 1).all()

    glyphs = np.array(cube.glyphs)
    np.testing.assert_allclose(cube.local[glyphs == ".", 2], half)
    np.testing.assert_allclose(cube.local[glyphs == "$", 2], -half)
    np.testing.assert_allclose(cube.local[glyphs == "^", 0], half)
    np.testing.assert_allclose(cube.local[glyphs == "~", 0], -half)
    np.testing.assert_allclose(cube.local[glyphs == "#", 1], half)
    np.testing.assert_allclose(cube.local[glyphs == "!", 1], -half)


def test_point_cloud_is_local_and_fixed():
    cube = make_cube(4, position=(10, 20, 30))
    assert np.abs(cube.local[:, :3]).max() == 2.0
    with pytest.raises(ValueError):
        cube.local[0, 0] = 99.0


def test_face_colors_follow_faces():
    colors = (Color.RED, Color.GREEN, Color.BLUE, Color.CYAN, Color.YELLOW, Color.WHITE)
    cube = make_cube(2, face_colors=colors)
    by_glyph = dict(zip(cube.glyphs, cube.colors))
    assert by_glyph == dict(zip(FACE_GLYPHS, colors))


def test_points_are_immutable_values():
    cube = make_cube(2)
    p = cube.points[0]
    assert isinstance(p, Point)
    assert p.w == 1.0
    with pytest.raises(AttributeError):
        p.x = 5.0


def test_radius_is_half_face_diagonal():
    assert make_cube(6).radius == pytest.approx(6 * math.sqrt(2) / 2)


def test_predicted_position():
    cube = Cube(side=2, position=(1, 2, 3), velocity=(0.5, 0, -1))
    np.testing.assert_allclose(cube.predicted_position(4), [3, 2, -1])


def test_spawn_is_seeded_and_in_range():
    config = Config(seed=7, cube_count=4)
    a = spawn_cubes(config)
    b = spawn_cubes(config)
    assert len(a) == 4
    for c1, c2 in zip(a, b):
        np.testing.assert_array_equal(c1.position, c2.position)
        np.testing.assert_array_equal(c1.velocity, c2.velocity)
        assert config.min_side <= c1.side <= config.max_side
        assert (np.abs(c1.position) <= np.array(config.world_bounds)).all()
        assert (np.abs(c1.velocity) <= config.max_linear_speed).all()
        assert (np.abs(c1.angular_velocity) <= config.max_angular_speed).all()
        assert set(c1.face_colors) <= set(config.palette)


def test_spawn_avoids_overlap_when_there_is_room():
    config = Config(seed=3, cube_count=3, world_bounds=(100.0, 100.0, 100.0))
    cubes = spawn_cubes(config)
    for i, a in enumerate(cubes):
        for b in cubes[i + 1:]:
            assert np.linalg.norm(a.position - b.position) >= a.radius + b.radius
