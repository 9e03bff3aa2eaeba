"""
Shared point clouds for the hull and pipeline tests.
"""

import itertools

import numpy as np
import pytest

from waterman.geom import Pt


def brute_force_lattice(radius):
    """Every integer point with x^2+y^2+z^2 <= r^2 and even coordinate sum, sorted (x, y, z)."""
    if not np.isfinite(radius) or radius <= 0:
        return []
    n = int(np.floor(radius))
    r2 = radius * radius
    out = []
    for x, y, z in itertools.product(range(-n, n + 1), repeat=3):
        if x * x + y * y + z * z <= r2 and (x + y + z) % 2 == 0:
            out.append((float(x), float(y), float(z)))
    return sorted(out)


# ============== Fixtures ==============

@pytest.fixture
def tetra_points():
    """Four corners of a right tetrahedron."""
    return [Pt(0.0, 0.0, 0.0), Pt(1.0, 0.0, 0.0), Pt(0.0, 1.0, 0.0), Pt(0.0, 0.0, 1.0)]


@pytest.fixture
def grid_cube():
    """All 27 points of {0,1,2}^3: corners, edge midpoints, face centres and the centre."""
    return [Pt(float(x), float(y), float(z))
            for x, y, z in itertools.product(range(3), repeat=3)]


@pytest.fixture
def cube_corners():
    return {(float(x), float(y), float(z))
            for x, y, z in itertools.product((0, 2), repeat=3)}


@pytest.fixture
def random_ball():
    """200 random points in the unit ball (general position)."""
    rng = np.random.default_rng(7)
    pts = rng.normal(size=(400, 3))
    pts /= np.linalg.norm(pts, axis=1)[:, None]
    pts *= rng.uniform(0.0, 1.0, size=(400, 1)) ** (1.0 / 3.0)
    return [Pt(float(x), float(y), float(z)) for x, y, z in pts[:200]]


@pytest.fixture
def coplanar_square():
    """Five points in the plane z = 1."""
    return [Pt(0.0, 0.0, 1.0), Pt(1.0, 0.0, 1.0), Pt(1.0, 1.0, 1.0),
            Pt(0.0, 1.0, 1.0), Pt(0.5, 0.5, 1.0)]
