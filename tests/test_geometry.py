import math

import pytest

from bohr.geometry import (
    ORIGIN,
    Layout,
    build_orbits,
    canvas_size,
    electron_placeholders,
    nucleus,
    orbit_path,
    orbit_radius,
)


def test_orbit_radius_is_index_times_spacing():
    radii = [orbit_radius(n, spacing=30.0) for n in range(1, 10)]
    assert radii == [30.0 * n for n in range(1, 10)]
    assert all(a < b for a, b in zip(radii, radii[1:]))
    with pytest.raises(ValueError):
        orbit_radius(0)


def test_layout_defaults_and_validation():
    layout = Layout()
    # 7 orbits * 30 + electron overhang 4 + margin 20, doubled
    assert layout.size == 2 * (7 * 30 + 4 + 20)
    assert layout.center == (layout.size / 2, layout.size / 2)
    assert canvas_size(layout, 1) == 2 * (30 + 4 + 20)
    with pytest.raises(ValueError):
        Layout(orbit_spacing=0)
    with pytest.raises(ValueError):
        Layout(electron_radius=-1)
    with pytest.raises(ValueError):
        Layout(orbits=0)


def test_nucleus_is_fixed_at_center():
    layout = Layout()
    core = nucleus(layout)
    assert (core.cx, core.cy) == layout.center
    assert core.r == layout.nucleus_radius
    assert core.role == "nucleus"


def test_orbit_path_is_two_half_arcs():
    layout = Layout(orbit_spacing=10, margin=0, electron_radius=1, orbits=2)
    # size = 2 * (2*10 + 1) = 42, center (21, 21)
    path = orbit_path(2, layout)
    assert path.radius == 20
    assert path.start == (21, 1)
    assert path.midpoint == (21, 41)
    assert path.to_path_data() == "M 21,1 A 20,20 0 1,1 21,41 A 20,20 0 1,1 21,1"
    assert path.length == pytest.approx(2 * math.pi * 20)


def test_point_at_traverses_clockwise_from_top():
    layout = Layout(orbit_spacing=10, margin=0, electron_radius=1, orbits=1)
    path = orbit_path(1, layout)
    cx, cy = path.center
    assert path.point_at(0.0) == pytest.approx((cx, cy - 10))
    assert path.point_at(0.25) == pytest.approx((cx + 10, cy))
    assert path.point_at(0.5) == pytest.approx((cx, cy + 10))
    assert path.point_at(0.75) == pytest.approx((cx - 10, cy))
    assert path.point_at(1.0) == pytest.approx(path.point_at(0.0))
    assert path.point_at(1.25) == pytest.approx(path.point_at(0.25))


def test_electron_placeholders_start_at_origin():
    layout = Layout()
    electrons = electron_placeholders(3, layout)
    assert len(electrons) == 3
    for electron in electrons:
        assert (electron.cx, electron.cy) == ORIGIN
        assert electron.r == layout.electron_radius
    assert electron_placeholders(0, layout) == []


def test_build_orbits_for_calcium():
    layout = Layout()
    orbits = build_orbits((2, 8, 8, 2), layout)
    assert [o.index for o in orbits] == [1, 2, 3, 4]
    assert [len(o.electrons) for o in orbits] == [2, 8, 8, 2]
    assert [o.path.radius for o in orbits] == [30, 60, 90, 120]


def test_build_orbits_skips_empty_shells_but_keeps_radii():
    layout = Layout()
    orbits = build_orbits((2, 0, 1), layout)
    assert [o.index for o in orbits] == [1, 3]
    assert orbits[1].path.radius == 3 * layout.orbit_spacing
    assert build_orbits((0,), layout) == []


def test_radii_do_not_depend_on_element():
    layout = Layout()
    small = build_orbits((2, 1), layout)
    large = build_orbits((2, 8, 18, 32, 32, 18, 8), layout)
    assert small[0].path == large[0].path
    assert small[1].path == large[1].path
