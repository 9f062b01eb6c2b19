import math

import numpy as np
import pytest

from eventdisplay.model.cell_grid import CellGrid
from eventdisplay.model.dimensions import derive_dimensions
from eventdisplay.model.generators import (
    generate_blocks, generate_muons, generate_planes, generate_segments,
    sample_block_count, sample_muon_endpoint, track_from_element, tracks_from_elements,
)
from eventdisplay.model.geometry_primitives import Point


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def dims():
    return derive_dimensions(800, 600)


@pytest.mark.parametrize("n", [0, 1, 7, 20, 64])
def test_segments_probability_zero_is_empty(rng, n):
    assert generate_segments(rng, 50.0, 10.0, n, 0.0, -5.0) == []


@pytest.mark.parametrize("n", [1, 7, 20])
def test_segments_probability_one_fills_every_slice(rng, n):
    segments = generate_segments(rng, 50.0, 10.0, n, 1.0, 30.0)
    assert len(segments) == n
    for quad in segments:
        assert len(quad.vertices) == 4
        assert quad.v1.radial_distance() == pytest.approx(50.0)
        assert quad.v2.radial_distance() == pytest.approx(50.0)
        assert quad.v3.radial_distance() == pytest.approx(10.0)
        assert quad.v4.radial_distance() == pytest.approx(10.0)
        assert all(v.z == 30.0 for v in quad.vertices)


def test_segments_winding_spans_one_slice(rng):
    segments = generate_segments(rng, 50.0, 10.0, 4, 1.0, 0.0)
    first = segments[0]
    assert (first.v1.x, first.v1.y) == pytest.approx((50.0, 0.0))
    assert (first.v2.x, first.v2.y) == pytest.approx((0.0, 50.0), abs=1e-9)
    assert (first.v3.x, first.v3.y) == pytest.approx((0.0, 10.0), abs=1e-9)
    assert (first.v4.x, first.v4.y) == pytest.approx((10.0, 0.0))


def test_segments_roughly_follow_probability():
    rng = np.random.default_rng(0)
    kept = sum(len(generate_segments(rng, 50.0, 10.0, 20, 0.4, 0.0)) for _ in range(500))
    assert kept / (500 * 20) == pytest.approx(0.4, abs=0.03)


def test_segments_reject_bad_arguments(rng):
    with pytest.raises(ValueError):
        generate_segments(rng, 50.0, 10.0, -1, 0.5, 0.0)
    with pytest.raises(ValueError):
        generate_segments(rng, 50.0, 10.0, 5, 1.5, 0.0)


@pytest.mark.parametrize("n", [0, 1, 4, 9])
def test_planes_always_exact_count(rng, dims, n):
    assert len(generate_planes(rng, dims, 80.0, dims.tube_length, n)) == n


def test_plane_placement_ranges(rng, dims):
    planes = generate_planes(rng, dims, 80.0, dims.tube_length, 200)
    for plane in planes:
        assert plane.position.radial_distance() == pytest.approx(80.0)
        assert math.atan2(plane.position.y, plane.position.x) % (2 * math.pi) == pytest.approx(plane.angle)
        assert 0.0 <= plane.angle < 2 * math.pi
        assert abs(plane.position.z) <= 0.8 * dims.tube_length
        assert 0.04 * dims.box_width <= plane.width <= 0.06 * dims.box_width
        assert 0.04 * dims.box_width <= plane.height <= 0.1 * dims.box_width


def test_block_count_within_bounds(rng):
    counts = {sample_block_count(rng, 2, 5) for _ in range(200)}
    assert counts == {2, 3, 4, 5}


def test_block_count_rejects_inverted_range(rng):
    with pytest.raises(ValueError):
        sample_block_count(rng, 5, 2)


def test_blocks_alternate_bands_and_stay_inside(rng, dims):
    blocks = generate_blocks(rng, dims, 40)
    y_band = dims.box_height * 0.5 - dims.block_height * 0.75
    x_max = dims.box_width * 0.5 - dims.block_width * 0.75
    z_max = dims.box_depth * 0.5 - dims.block_depth * 0.75
    for i, block in enumerate(blocks):
        expected_y = y_band if i % 2 == 0 else -y_band
        assert block.position.y == pytest.approx(expected_y)
        assert abs(block.position.x) <= x_max
        assert abs(block.position.z) <= z_max


def test_zero_blocks_is_empty(rng, dims):
    assert generate_blocks(rng, dims, 0) == []


def test_track_from_element(rng):
    position = Point(40.0, -12.0, 90.0)
    for _ in range(50):
        track = track_from_element(rng, position, 10.0)
        assert track.start == Point(0.0, 0.0, 0.0)
        assert track.end == position
        assert track.end is not position
        assert abs(track.control.x - 20.0) == pytest.approx(10.0)
        assert abs(track.control.y + 6.0) == pytest.approx(10.0)
        assert abs(track.control.z - 45.0) == pytest.approx(10.0)


def test_track_signs_are_independent_per_axis():
    rng = np.random.default_rng(5)
    patterns = set()
    for _ in range(200):
        control = track_from_element(rng, Point(0.0, 0.0, 0.0), 1.0).control
        patterns.add((control.x > 0, control.y > 0, control.z > 0))
    assert len(patterns) == 8


def test_tracks_from_elements_one_per_position(rng):
    positions = [Point(float(i), 1.0, 2.0) for i in range(6)]
    tracks = tracks_from_elements(rng, positions, 10.0)
    assert [t.end for t in tracks] == positions


def test_muon_endpoint_on_front_or_back_face(rng, dims):
    for _ in range(200):
        p = sample_muon_endpoint(rng, dims)
        assert p.z in (-dims.box_depth * 0.5, dims.box_depth * 0.5)
        assert abs(p.x) <= 0.45 * dims.box_width
        assert abs(p.y) <= 0.45 * dims.box_height


def test_generate_muons_maps_every_endpoint_to_a_cell(rng, dims):
    grid = CellGrid(dims)
    tracks, cells = generate_muons(rng, dims, grid, 15, 10.0)
    assert len(tracks) == 15
    # endpoints lie inside +-0.45 box, the lattice spans +-0.5 box_width
    assert len(cells) == 15
    for track, cell in zip(tracks, cells):
        assert cell.contains_xy(track.end.x, track.end.y)
        assert all(v.z == track.end.z for v in cell.vertices)
