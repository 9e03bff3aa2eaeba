from __future__ import annotations
from dataclasses import dataclass
from math import sqrt
from typing import Iterable, List, Sequence, Tuple

EPS = 1e-10  # обережний епс для перевірок
DOUBLE_PREC = 2.220446049250313e-16  # машинний епсилон float64

@dataclass(frozen=True)
class Pt:
    x: float
    y: float
    z: float
    def __iter__(self):
        yield self.x; yield self.y; yield self.z

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

def sub(a: Pt, b: Pt) -> Pt:
    return Pt(a.x - b.x, a.y - b.y, a.z - b.z)

def dot(a: Pt, b: Pt) -> float:
    return a.x*b.x + a.y*b.y + a.z*b.z

def cross(a: Pt, b: Pt) -> Pt:
    return Pt(a.y*b.z - a.z*b.y,
              a.z*b.x - a.x*b.z,
              a.x*b.y - a.y*b.x)

def norm(a: Pt) -> float:
    return sqrt(dot(a, a))

def centroid(points: Iterable[Pt]) -> Pt:
    xs = ys = zs = 0.0
    n = 0
    for p in points:
        xs += p.x; ys += p.y; zs += p.z; n += 1
    if n == 0:
        raise ValueError("empty set")
    inv = 1.0 / n
    return Pt(xs*inv, ys*inv, zs*inv)

def bounds(points: Sequence[Pt]) -> Tuple[Pt, Pt]:
    """Осьовий bounding box: (min, max) по кожній координаті."""
    if not points:
        raise ValueError("empty set")
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    zs = [p.z for p in points]
    return Pt(min(xs), min(ys), min(zs)), Pt(max(xs), max(ys), max(zs))

def auto_tolerance(points: Sequence[Pt]) -> float:
    """
    Відстанева толерантність, масштабована під розмір хмари:
      tol = 3 * DOUBLE_PREC * (max|x| + max|y| + max|z|).
    Для хмари з нулів повертає 0.0.
    """
    lo, hi = bounds(points)
    return 3.0 * DOUBLE_PREC * (max(abs(lo.x), abs(hi.x)) +
                                max(abs(lo.y), abs(hi.y)) +
                                max(abs(lo.z), abs(hi.z)))

def unique_point_indices(points: Sequence[Tuple[float, float, float]], tol: float = 0.0) -> List[int]:
    """
    Індекси перших появ різних точок (порядок зберігається).
    tol > 0: точки квантуються кроком tol, тож дублікатами вважаються точки з однієї клітинки;
    tol <= 0: прибираються лише точні збіги.
    """
    seen: set = set()
    keep: List[int] = []
    for i, (x, y, z) in enumerate(points):
        if tol > 0:
            key = (round(x / tol), round(y / tol), round(z / tol))
        else:
            key = (float(x), float(y), float(z))
        if key not in seen:
            seen.add(key)
            keep.append(i)
    return keep

def unique_points(points: Iterable[Tuple[float, float, float]], tol: float = 0.0) -> List[Pt]:
    """Дедуплікація (див. unique_point_indices), результат - Pt з float-координатами."""
    pts = [Pt(float(x), float(y), float(z)) for x, y, z in points]
    return [pts[i] for i in unique_point_indices(pts, tol)]
