# waterman/predicates.py
from __future__ import annotations
from typing import Sequence, Tuple
from .geom import Pt, sub, cross, dot, norm, centroid, EPS

Plane = Tuple[Pt, float]  # (одинична нормаль n, зсув d): площина dot(n, p) = d

def orient3d(a: Pt, b: Pt, c: Pt, d: Pt) -> float:
    ab = sub(b, a)
    ac = sub(c, a)
    ad = sub(d, a)
    return dot(cross(ab, ac), ad)

def signed_distance_to_plane(a: Pt, b: Pt, c: Pt, p: Pt) -> float:
    n = cross(sub(b, a), sub(c, a))
    area2 = norm(n)
    if area2 == 0.0:
        return 0.0
    return orient3d(a, b, c, p) / area2

def visible_from_point(a: Pt, b: Pt, c: Pt, p: Pt, eps: float = EPS) -> bool:
    """Точка p строго «над» гранню (a,b,c): відстань до площини > eps."""
    return signed_distance_to_plane(a, b, c, p) > eps

def distance_to_line(a: Pt, b: Pt, p: Pt) -> float:
    """Відстань від p до прямої через a і b (для a == b - відстань до a)."""
    ab = sub(b, a)
    length = norm(ab)
    if length == 0.0:
        return norm(sub(p, a))
    return norm(cross(ab, sub(p, a))) / length

def newell_plane(points: Sequence[Pt]) -> Plane:
    """
    Площина многокутника методом Ньюела (стійкий до майже колінеарних вершин).
    Нормаль дивиться туди, звідки обхід points видно проти годинникової стрілки.
    """
    nx = ny = nz = 0.0
    n = len(points)
    for i in range(n):
        p, q = points[i], points[(i + 1) % n]
        nx += (p.y - q.y) * (p.z + q.z)
        ny += (p.z - q.z) * (p.x + q.x)
        nz += (p.x - q.x) * (p.y + q.y)
    length = (nx*nx + ny*ny + nz*nz) ** 0.5
    if length == 0.0:
        raise ValueError("degenerate polygon: zero area")
    unit = Pt(nx/length, ny/length, nz/length)
    return unit, dot(unit, centroid(points))

def plane_distance(plane: Plane, p: Pt) -> float:
    n, d = plane
    return dot(n, p) - d
