# waterman/lattice.py
"""
Генератор точок Ваттермана: цілі точки всередині сфери радіуса r (центр у нулі)
з умовою парності (x + y + z) mod 2 == 0, тобто вузли ГЦК-ґратки.
"""
from __future__ import annotations
import logging
from math import ceil, floor, isfinite, sqrt
from typing import Iterator, List, Tuple

from .geom import Pt

logger = logging.getLogger(__name__)

# Вище цього радіуса хмара має десятки тисяч точок, а оболонка рахується секунди.
RECOMMENDED_MAX_RADIUS = 30.0


def _z_range(x: int, y: int, R: float) -> Tuple[int, int] | None:
    """
    Діапазон z (початок з правильною парністю, кінець) для стовпчика (x, y),
    або None, якщо стовпчик порожній.
    """
    Ry = R - y * y
    if Ry < 0:
        return None
    if Ry == 0:
        # z-центр (0) цілий: єдиний кандидат - сам центр
        if (x + y) % 2 != 0:
            return None
        return 0, 0
    s = sqrt(Ry)
    zra = ceil(-s)
    zrb = floor(s)
    # парність z має збігатися з парністю x + y
    if (zra - (x + y)) % 2 != 0:
        zra = zra + 1 if zra <= 0 else zra - 1
    return zra, zrb


def _columns(radius: float) -> Iterator[Tuple[int, int, int, int]]:
    """Прохід x/y-діапазонами: (x, y, zra, zrb) для кожного непорожнього стовпчика."""
    if not isfinite(radius) or radius <= 0:
        return
    radius2 = radius * radius
    for x in range(ceil(-radius), floor(radius) + 1):
        R = radius2 - x * x
        if R < 0:
            continue
        s = sqrt(R)
        for y in range(ceil(-s), floor(s) + 1):
            zr = _z_range(x, y, R)
            if zr is None:
                continue
            yield x, y, zr[0], zr[1]


def generate(radius: float) -> List[Pt]:
    """
    Точки Ваттермана для радіуса `radius` у порядку обходу x -> y -> z.
    Для radius <= 0 або нескінченного/NaN - порожній список (без винятку).
    """
    if not isfinite(radius) or radius <= 0:
        logger.debug("radius %r gives an empty lattice", radius)
        return []
    if radius > RECOMMENDED_MAX_RADIUS:
        logger.warning("radius %.3f exceeds recommended maximum %.1f; hull build may be slow",
                       radius, RECOMMENDED_MAX_RADIUS)

    coords: List[Pt] = []
    for x, y, zra, zrb in _columns(radius):
        for z in range(zra, zrb + 1, 2):
            coords.append(Pt(float(x), float(y), float(z)))
    logger.debug("radius %.3f -> %d lattice points", radius, len(coords))
    return coords


def lattice_size(radius: float) -> int:
    """Кількість точок, яку поверне generate(radius), без створення Pt."""
    total = 0
    for _, _, zra, zrb in _columns(radius):
        if zrb >= zra:
            total += (zrb - zra) // 2 + 1
    return total
