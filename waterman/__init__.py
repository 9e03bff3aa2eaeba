"""
waterman - многогранники Ваттермана (Py 3.10+).
Точки ГЦК-ґратки всередині сфери -> Quickhull з conflict graph -> злиття копланарних граней.
"""

__version__ = "0.2.0"

from waterman.geom import Pt, EPS, centroid, unique_point_indices, unique_points
from waterman.predicates import orient3d, signed_distance_to_plane, visible_from_point
from waterman.lattice import generate, lattice_size, RECOMMENDED_MAX_RADIUS
from waterman.hull import ConvexHull3D, DegenerateHullError, Hull, build
from waterman.export import HullBuffers, export_hull, face_polygons
from waterman.pipeline import waterman_hull, waterman_buffers

__all__ = [
    "Pt", "EPS", "centroid", "unique_point_indices", "unique_points",
    "orient3d", "signed_distance_to_plane", "visible_from_point",
    "generate", "lattice_size", "RECOMMENDED_MAX_RADIUS",
    "ConvexHull3D", "DegenerateHullError", "Hull", "build",
    "HullBuffers", "export_hull", "face_polygons",
    "waterman_hull", "waterman_buffers", "__version__",
]
