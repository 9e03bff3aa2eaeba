"""
Tests for the buffer export boundary.
"""

import numpy as np
import pytest

from waterman.export import (
    HullBuffers,
    copy_coords,
    export_hull,
    face_polygons,
    flatten_faces,
    normalize_coords,
)
from waterman.geom import Pt
from waterman.hull import Hull, build
from waterman.pipeline import waterman_buffers


def unflatten(flat):
    faces, k = [], 0
    while k < len(flat):
        n = int(flat[k])
        faces.append(tuple(int(i) for i in flat[k + 1:k + 1 + n]))
        k += n + 1
    return faces


# ============== Helpers ==============

def test_copy_coords_layout():
    coords = copy_coords([Pt(1.0, 2.0, 3.0), Pt(-4.0, 5.0, 6.5)])
    assert coords.dtype == np.float64
    np.testing.assert_array_equal(coords, [1.0, 2.0, 3.0, -4.0, 5.0, 6.5])


def test_normalize_divides_by_global_range():
    out = normalize_coords(np.array([-2.0, 0.0, 2.0, 1.0, 0.0, 0.0]))
    np.testing.assert_allclose(out, [-0.5, 0.0, 0.5, 0.25, 0.0, 0.0])


def test_normalize_constant_is_noop():
    src = np.array([3.0, 3.0, 3.0])
    out = normalize_coords(src)
    np.testing.assert_array_equal(out, src)
    assert out is not src


def test_normalize_empty():
    assert normalize_coords(np.zeros(0)).size == 0


def test_flatten_faces():
    flat = flatten_faces([(0, 1, 2), (0, 2, 3, 4)])
    assert flat.dtype == np.int64
    assert flat.tolist() == [3, 0, 1, 2, 4, 0, 2, 3, 4]


# ============== Buffers ==============

def test_radius_two_buffers():
    buf = waterman_buffers(2.0)
    assert buf.valid
    assert buf.num_vertices == 6
    assert buf.num_faces == 8
    assert buf.coords.shape == (18,)
    assert buf.faces.size == 8 + 3 * 8
    assert set(np.round(buf.coords, 12).tolist()) == {-0.5, 0.0, 0.5}
    faces = unflatten(buf.faces)
    assert len(faces) == 8
    assert all(0 <= i < 6 for f in faces for i in f)
    buf.release()


def test_unnormalized_buffers_match_hull(grid_cube):
    hull, ok = build(grid_cube)
    buf = export_hull(hull, ok, normalize=False)
    xyz = buf.coords.reshape(-1, 3)
    assert [tuple(row) for row in xyz] == [p.as_tuple() for p in hull.vertices]
    assert unflatten(buf.faces) == list(hull.faces)
    assert buf.faces.size == len(hull.faces) + sum(len(f) for f in hull.faces)


def test_invalid_hull_exports_empty_buffers():
    buf = export_hull(Hull(), False)
    assert not buf.valid
    assert buf.num_vertices == 0 and buf.num_faces == 0
    assert buf.coords.size == 0 and buf.faces.size == 0


def test_degenerate_radius_buffers():
    with waterman_buffers(1.0) as buf:
        assert not buf.valid
    assert buf.released


def test_release_exactly_once():
    buf = waterman_buffers(2.0)
    buf.release()
    assert buf.coords is None and buf.faces is None
    with pytest.raises(RuntimeError, match="already released"):
        buf.release()


def test_context_manager_releases():
    with waterman_buffers(2.0) as buf:
        assert isinstance(buf, HullBuffers)
        assert buf.coords is not None
    assert buf.released and buf.coords is None


def test_context_manager_after_manual_release():
    with waterman_buffers(2.0) as buf:
        buf.release()
    assert buf.released


# ============== Face polygons ==============

def test_face_polygons_raw_coordinates():
    hull, ok = build([Pt(0.0, 0.0, 0.0), Pt(4.0, 0.0, 0.0), Pt(0.0, 4.0, 0.0), Pt(0.0, 0.0, 4.0)])
    assert ok
    polys = face_polygons(hull, normalize=False)
    assert len(polys) == 4
    verts = {p.as_tuple() for p in hull.vertices}
    assert all(len(poly) == 3 and set(poly) <= verts for poly in polys)


def test_face_polygons_normalized():
    hull, _ = build([Pt(0.0, 0.0, 0.0), Pt(4.0, 0.0, 0.0), Pt(0.0, 4.0, 0.0), Pt(0.0, 0.0, 4.0)])
    polys = face_polygons(hull)
    values = {c for poly in polys for xyz in poly for c in xyz}
    assert values == {0.0, 1.0}
