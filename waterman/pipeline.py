from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Tuple

from .export import HullBuffers, export_hull
from .geom import Pt, cross, dot, sub
from .hull import INVALID_HULL, Hull, build, dedup_cloud, hull_from_triangles
from .lattice import generate

logger = logging.getLogger(__name__)


def build_scipy(cloud: Iterable[Pt], tol: Optional[float] = None) -> Tuple[Hull, bool]:
    """
    Те саме, що hull.build, але трикутники дає SciPy ConvexHull (Qhull);
    злиття граней і самоперевірка - наші.
    """
    try:
        import numpy as np
        from scipy.spatial import ConvexHull, QhullError
    except ImportError as e:
        raise RuntimeError(
            "backend='scipy', але SciPy не встановлено. "
            "Встанови scipy або використай backend='internal'."
        ) from e

    pts, keep, tol = dedup_cloud(cloud, tol)
    if len(pts) < 4:
        logger.info("degenerate cloud: %d distinct points", len(pts))
        return INVALID_HULL, False

    arr = np.array([p.as_tuple() for p in pts], dtype=float)
    try:
        qh = ConvexHull(arr)
    except QhullError as e:
        logger.info("degenerate cloud: qhull refused (%s)", str(e).splitlines()[0])
        return INVALID_HULL, False

    # Qhull не гарантує обхід симплексів: орієнтуємо за зовнішньою нормаллю facet-а
    triangles: List[Tuple[int, int, int]] = []
    for simplex, eq in zip(qh.simplices, qh.equations):
        a, b, c = (int(i) for i in simplex)
        n = cross(sub(pts[b], pts[a]), sub(pts[c], pts[a]))
        if dot(n, Pt(float(eq[0]), float(eq[1]), float(eq[2]))) < 0:
            b, c = c, b
        triangles.append((a, b, c))

    return hull_from_triangles(pts, triangles, tol, source=keep)


def waterman_hull(
    radius: float,
    backend: str = "internal",
    tol: Optional[float] = None,
) -> Tuple[Hull, bool]:
    """
    Повний пайплайн: радіус -> точки Ваттермана -> опукла оболонка.
    backend: "internal" (наш Quickhull) або "scipy" (Qhull).
    Повертає (Hull, valid).
    """
    cloud = generate(radius)
    kind = backend.lower()
    if kind == "internal":
        hull, ok = build(cloud, tol=tol)
    elif kind == "scipy":
        hull, ok = build_scipy(cloud, tol=tol)
    else:
        raise ValueError(f"Невідомий backend: {backend}")
    logger.info("radius %.3f: %d points -> %s hull, V=%d F=%d",
                radius, len(cloud), "valid" if ok else "invalid",
                hull.num_vertices(), len(hull.faces))
    return hull, ok


def waterman_buffers(
    radius: float,
    normalize: bool = True,
    backend: str = "internal",
) -> HullBuffers:
    """
    Радіус -> буфери для хоста (прапорець, кількості, coords, faces).
    Отримувач відповідає за єдиний виклик release().
    """
    hull, ok = waterman_hull(radius, backend=backend)
    return export_hull(hull, ok, normalize=normalize)
