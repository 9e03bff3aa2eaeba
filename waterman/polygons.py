# waterman/polygons.py
"""
Від триангуляції оболонки до многогранника:
копланарні сусідні трикутники зливаються в многокутники,
вершини посеред ребер викидаються, індекси ущільнюються.
"""
from __future__ import annotations
from typing import Dict, List, Sequence, Tuple

from .geom import Pt, sub, cross, dot, norm
from .predicates import distance_to_line

Edge = Tuple[int, int]
Triangle = Tuple[int, int, int]


def _tri_edges(tri: Sequence[int]) -> Tuple[Edge, Edge, Edge]:
    a, b, c = tri
    return (a, b), (b, c), (c, a)


def _boundary_loop(triangles: Sequence[Triangle], members: List[int]) -> List[int]:
    """Межа групи трикутників як один замкнений обхід (орієнтація успадковується від трикутників)."""
    edges = {e for t in members for e in _tri_edges(triangles[t])}
    nxt: Dict[int, int] = {}
    for u, v in edges:
        if (v, u) in edges:
            continue  # внутрішнє ребро групи
        if u in nxt:
            raise ValueError(f"face boundary touches itself at vertex {u}")
        nxt[u] = v
    if not nxt:
        raise ValueError("face group has no boundary")

    start = min(nxt)
    loop = [start]
    cur = nxt[start]
    while cur != start:
        loop.append(cur)
        if cur not in nxt or len(loop) > len(nxt):
            raise ValueError(f"open face boundary at vertex {cur}")
        cur = nxt[cur]
    if len(loop) != len(nxt):
        raise ValueError("face with a hole")
    return loop


def merge_coplanar(points: Sequence[Pt], triangles: Sequence[Triangle], tol: float) -> List[List[int]]:
    """
    Зливає сусідні копланарні трикутники в многокутники.

    Групи ростуть жадібно від найбільших трикутників: сусід приєднується,
    якщо всі його вершини лежать ближче за tol до площини трикутника-зерна
    і нормалі дивляться в один бік. Площина зерна не «дрейфує» по ланцюжку.

    Кидає ValueError, якщо триангуляція не замкнена або межа групи не проста.
    """
    owner: Dict[Edge, int] = {}
    for t, tri in enumerate(triangles):
        for e in _tri_edges(tri):
            if e in owner:
                raise ValueError(f"edge {e} used twice in the same direction")
            owner[e] = t

    normals: List[Pt] = []
    areas: List[float] = []
    for a, b, c in triangles:
        n = cross(sub(points[b], points[a]), sub(points[c], points[a]))
        normals.append(n)
        areas.append(norm(n))

    order = sorted(range(len(triangles)), key=lambda t: (-areas[t], t))
    group = [-1] * len(triangles)
    groups: List[List[int]] = []
    for seed in order:
        if group[seed] != -1:
            continue
        if areas[seed] == 0.0:
            raise ValueError(f"zero-area triangle {triangles[seed]} outside any face")
        n = normals[seed]
        unit = Pt(n.x / areas[seed], n.y / areas[seed], n.z / areas[seed])
        d = dot(unit, points[triangles[seed][0]])

        gid = len(groups)
        members = [seed]
        group[seed] = gid
        stack = [seed]
        while stack:
            t = stack.pop()
            for u, v in _tri_edges(triangles[t]):
                nb = owner.get((v, u))
                if nb is None:
                    raise ValueError(f"open edge {(u, v)}")
                if group[nb] != -1:
                    continue
                if dot(normals[nb], unit) < 0:
                    continue
                if all(abs(dot(unit, points[i]) - d) <= tol for i in triangles[nb]):
                    group[nb] = gid
                    members.append(nb)
                    stack.append(nb)
        groups.append(members)

    return [_boundary_loop(triangles, members) for members in groups]


def drop_collinear(points: Sequence[Pt], polygons: Sequence[Sequence[int]], tol: float) -> List[List[int]]:
    """
    Прибирає з обходів вершини, що лежать на прямій між сусідами (точки посеред ребра многогранника).
    Така точка колінеарна в обох гранях, що ділять ребро, тож зникає з обох.
    """
    out: List[List[int]] = []
    for polygon in polygons:
        loop = list(polygon)
        changed = True
        while changed and len(loop) > 3:
            changed = False
            for k in range(len(loop)):
                prev, cur, nxt = loop[k - 1], loop[k], loop[(k + 1) % len(loop)]
                if distance_to_line(points[prev], points[nxt], points[cur]) <= tol:
                    del loop[k]
                    changed = True
                    break
        out.append(loop)
    return out


def compact(
    points: Sequence[Pt], polygons: Sequence[Sequence[int]]
) -> Tuple[List[Pt], List[Tuple[int, ...]], List[int]]:
    """
    Лишає тільки використані точки (у порядку вхідних індексів) і переписує грані під нові індекси.
    Третім повертає вхідні індекси лишених точок.
    """
    used = sorted({i for polygon in polygons for i in polygon})
    remap = {old: new for new, old in enumerate(used)}
    vertices = [points[i] for i in used]
    faces = [tuple(remap[i] for i in polygon) for polygon in polygons]
    return vertices, faces, used
