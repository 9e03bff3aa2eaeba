# waterman/export.py
"""
Експорт оболонки в пласкі буфери для хост-процесу:
  coords - V*3 float64 (x, y, z кожної вершини підряд);
  faces  - int64 [n0, i.., n1, j.., ...], довжина = F + сума розмірів граней.
Буфери належать тому, хто їх отримав, і звільняються рівно раз через release().
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .geom import Pt
from .hull import Hull

logger = logging.getLogger(__name__)


def copy_coords(vertices: Sequence[Pt]) -> np.ndarray:
    """Вершини -> плаский масив [x0, y0, z0, x1, ...]."""
    out = np.zeros(len(vertices) * 3, dtype=np.float64)
    for j, p in enumerate(vertices):
        out[3*j:3*j + 3] = (p.x, p.y, p.z)
    return out


def normalize_coords(coords: np.ndarray) -> np.ndarray:
    """
    Ділить усі значення на |max - min| по всіх координатах разом.
    Якщо max == min (або буфер порожній) - повертає копію без змін.
    """
    out = np.array(coords, dtype=np.float64)
    if out.size == 0:
        return out
    diff = abs(float(out.max()) - float(out.min()))
    if diff != 0.0:
        out /= diff
    return out


def flatten_faces(faces: Sequence[Sequence[int]]) -> np.ndarray:
    """Грані -> [len(f0), *f0, len(f1), *f1, ...]."""
    flat: List[int] = []
    for face in faces:
        flat.append(len(face))
        flat.extend(face)
    return np.array(flat, dtype=np.int64)


@dataclass
class HullBuffers:
    """
    Результат експорту: прапорець валідності, кількості й буфери.
    release() віддає буфери рівно один раз; повторний виклик - помилка.
    Можна використовувати як контекстний менеджер.
    """
    valid: bool
    num_vertices: int
    num_faces: int
    coords: Optional[np.ndarray]
    faces: Optional[np.ndarray]
    released: bool = False

    def release(self) -> None:
        if self.released:
            raise RuntimeError("buffers already released")
        self.coords = None
        self.faces = None
        self.released = True

    def __enter__(self) -> "HullBuffers":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.released:
            self.release()


def export_hull(hull: Hull, valid: bool, normalize: bool = True) -> HullBuffers:
    """Оболонка -> HullBuffers. Невалідна оболонка дає порожні буфери з valid=False."""
    if not valid:
        return HullBuffers(False, 0, 0,
                           np.zeros(0, dtype=np.float64), np.zeros(0, dtype=np.int64))
    coords = copy_coords(hull.vertices)
    if normalize:
        coords = normalize_coords(coords)
    faces = flatten_faces(hull.faces)
    logger.debug("exported %d vertices, %d faces (%d face ints)",
                 hull.num_vertices(), len(hull.faces), faces.size)
    return HullBuffers(True, hull.num_vertices(), len(hull.faces), coords, faces)


def face_polygons(hull: Hull, normalize: bool = True) -> List[List[Tuple[float, float, float]]]:
    """Кожна грань як список координат (x, y, z) своїх вершин, у порядку обходу."""
    coords = copy_coords(hull.vertices)
    if normalize:
        coords = normalize_coords(coords)
    xyz = coords.reshape(-1, 3)
    return [[tuple(float(c) for c in xyz[i]) for i in face] for face in hull.faces]
