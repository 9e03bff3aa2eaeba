"""
Tests for the Waterman lattice generator.
"""

import logging
import math

import pytest

from waterman import lattice
from waterman.geom import Pt
from waterman.lattice import generate, lattice_size

from conftest import brute_force_lattice


@pytest.mark.parametrize("radius", [0.0, -1.0, -0.5, float("nan"), float("inf"), float("-inf")])
def test_non_positive_or_non_finite_radius_is_empty(radius):
    assert generate(radius) == []
    assert lattice_size(radius) == 0


def test_radius_one_is_only_the_origin():
    # the axis points (±1,0,0) have an odd coordinate sum
    assert generate(1.0) == [Pt(0.0, 0.0, 0.0)]


def test_radius_two_has_nineteen_points():
    pts = generate(2.0)
    assert len(pts) == 19
    assert Pt(2.0, 0.0, 0.0) in pts
    assert Pt(0.0, 0.0, -2.0) in pts
    assert Pt(1.0, -1.0, 0.0) in pts


def test_radius_just_below_sqrt2_is_the_origin():
    assert generate(1.41) == [Pt(0.0, 0.0, 0.0)]


@pytest.mark.parametrize("radius", [0.5, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0, 5.0, 6.25])
def test_matches_brute_force_enumeration(radius):
    pts = [p.as_tuple() for p in generate(radius)]
    assert pts == brute_force_lattice(radius)


@pytest.mark.parametrize("radius", [1.5, 2.75, 4.0, 7.3])
def test_points_inside_sphere_with_even_parity(radius):
    for p in generate(radius):
        assert p.x * p.x + p.y * p.y + p.z * p.z <= radius * radius
        assert int(p.x + p.y + p.z) % 2 == 0
        assert all(float(c).is_integer() for c in p)


def test_no_duplicates():
    pts = generate(5.5)
    assert len(set(pts)) == len(pts)


def test_generate_is_deterministic():
    assert generate(4.2) == generate(4.2)


@pytest.mark.parametrize("radius", [0.3, 1.0, 2.0, math.sqrt(2), 4.9, 8.0])
def test_lattice_size_matches_generate(radius):
    assert lattice_size(radius) == len(generate(radius))


def test_large_radius_warns(monkeypatch, caplog):
    monkeypatch.setattr(lattice, "RECOMMENDED_MAX_RADIUS", 1.0)
    with caplog.at_level(logging.WARNING, logger="waterman.lattice"):
        pts = generate(2.0)
    assert len(pts) == 19
    assert "exceeds recommended maximum" in caplog.text
