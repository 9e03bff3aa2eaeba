from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

import numpy as np

from .geom import DOUBLE_PREC, Pt, centroid, auto_tolerance, unique_point_indices, sub, cross, norm
from .predicates import newell_plane, orient3d, plane_distance, signed_distance_to_plane, visible_from_point
from .polygons import compact, drop_collinear, merge_coplanar

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]          # орієнтоване ребро (u, v)
UEdge = Tuple[int, int]         # неорієнтоване ребро (min(u,v), max(u,v))


class DegenerateHullError(ValueError):
    """Хмара не має об'єму: < 4 точок, збіг, колінеарність або копланарність."""


@dataclass
class Face:
    """
    Трикутна грань опуклої оболонки.
    v: індекси вершин із узгодженою орієнтацією (нормаль назовні).
    nbr[i]: сусідня грань через локальне ребро i (0:(a,b), 1:(b,c), 2:(c,a)), або None.
    alive: чи грань активна (у hull).
    conflict: множина індексів точок, що «бачать» цю грань (Quickhull conflict set).
    """
    v: Tuple[int, int, int]
    nbr: List[Optional[int]] = field(default_factory=lambda: [None, None, None])
    alive: bool = True
    conflict: Set[int] = field(default_factory=set)

    def edge(self, i: int) -> Edge:
        a, b, c = self.v
        if i == 0:
            return (a, b)
        if i == 1:
            return (b, c)
        return (c, a)


class ConvexHull3D:
    """
    Інкрементальний 3D convex hull (Quickhull) із conflict graph.

    Вхід: список Pt (мінімум 4, не всі копланарні), без дублікатів.
    tol: відстанева толерантність; None - автоматична, масштабована під хмару.
    Вихід: faces() - активні трикутники з нормаллю назовні.
    Вироджена хмара -> DegenerateHullError.
    """

    def __init__(self, points: List[Pt], tol: Optional[float] = None):
        if len(points) < 4:
            raise DegenerateHullError("Need at least 4 points")
        self.P: List[Pt] = points[:]  # індексована копія
        self.tol = auto_tolerance(self.P) if tol is None else tol

        # Динамічні структури
        self.faces_list: List[Face] = []                             # усі створені грані (деякі з них можуть бути dead)
        self.edge2face: Dict[UEdge, List[Tuple[int, int]]] = {}      # (min(u,v),max(u,v)) -> [(face_id, local_edge), ...]
        self.point2faces: Dict[int, Set[int]] = {}                   # p -> видимі грані (conflict adjacency)
        self._cursor = 0                                             # перша грань, яка ще може мати конфлікти
        self.interior: Optional[Pt] = None                           # центроїд стартового тетра

        # 1) стартовий тетраедр
        base_faces = self._build_initial_tetra()
        self._init_conflicts(base_faces)

        # 2) основний цикл: поки існують конфлікти (зовнішні точки)
        self._expand_until_done()
        logger.debug("quickhull: %d points -> %d triangles (tol=%.3g)",
                     len(self.P), len(self.faces()), self.tol)

    # ---------------- Публічний API ----------------
    def faces(self) -> List[Tuple[int, int, int]]:
        """Активні грані (трикутники) як індекси вершин."""
        return [f.v for f in self.faces_list if f.alive]

    def vertex_indices(self) -> List[int]:
        """Індекси точок, що стали вершинами триангуляції, за зростанням."""
        return sorted({i for f in self.faces_list if f.alive for i in f.v})

    # ---------------- Внутрішні методи ----------------
    def _add_face(self, v0: int, v1: int, v2: int) -> int:
        """Створити грань і зареєструвати її ребра в edge2face."""
        fid = len(self.faces_list)
        face = Face((v0, v1, v2))
        self.faces_list.append(face)
        for ei in range(3):
            u, v = face.edge(ei)
            key = (min(u, v), max(u, v))
            self.edge2face.setdefault(key, []).append((fid, ei))
        return fid

    def _set_neighbor(self, fid_a: int, edge_a: int, fid_b: Optional[int]) -> None:
        """Прописати сусіда через локальне ребро edge_a у грані fid_a."""
        self.faces_list[fid_a].nbr[edge_a] = fid_b

    def _rebuild_all_adjacencies(self) -> None:
        """Переприв'язати nbr для всіх граней за edge2face."""
        for face in self.faces_list:
            face.nbr = [None, None, None]
        for key, lst in self.edge2face.items():
            if len(lst) == 2:
                (fa, ea), (fb, eb) = lst[0], lst[1]
                self._set_neighbor(fa, ea, fb)
                self._set_neighbor(fb, eb, fa)

    def _extremes(self) -> Tuple[List[int], List[int]]:
        """Індекси точок з мінімальною / максимальною координатою по кожній осі (перша при рівності)."""
        coords = [p.as_tuple() for p in self.P]
        mins = [0, 0, 0]
        maxs = [0, 0, 0]
        for i, c in enumerate(coords):
            for axis in range(3):
                if c[axis] < coords[mins[axis]][axis]:
                    mins[axis] = i
                if c[axis] > coords[maxs[axis]][axis]:
                    maxs[axis] = i
        return mins, maxs

    def _build_initial_tetra(self) -> List[int]:
        """
        Стартовий симплекс з екстремальних точок:
          - p0,p1: пара з найбільшим розкидом по одній осі;
          - p2: найвіддаленіша від прямої (p0,p1);
          - p3: найвіддаленіша від площини (p0,p1,p2).
        Створити 4 грані тетра з правильною (зовнішньою) орієнтацією.
        """
        mins, maxs = self._extremes()
        spreads = [self.P[maxs[k]].as_tuple()[k] - self.P[mins[k]].as_tuple()[k] for k in range(3)]
        # при рівних розкидах береться перша вісь
        axis = max(range(3), key=lambda k: spreads[k])
        if spreads[axis] <= self.tol:
            raise DegenerateHullError("All points coincident")
        p0, p1 = maxs[axis], mins[axis]

        # 1) третя точка - найдалі від прямої p0p1
        a, b = self.P[p0], self.P[p1]
        u01 = sub(b, a)
        u01_len = norm(u01)
        p2, best = None, 0.0
        for i, p in enumerate(self.P):
            if i in (p0, p1):
                continue
            d = norm(cross(u01, sub(p, a))) / u01_len
            if d > best:
                p2, best = i, d
        if p2 is None or best <= 100 * self.tol:
            raise DegenerateHullError("All points collinear: cannot form a base triangle")

        # 2) четверта точка - найдалі від площини (p0,p1,p2)
        c = self.P[p2]
        p3, best = None, 0.0
        for i, p in enumerate(self.P):
            if i in (p0, p1, p2):
                continue
            d = abs(signed_distance_to_plane(a, b, c, p))
            if d > best:
                p3, best = i, d
        if p3 is None or best <= 100 * self.tol:
            raise DegenerateHullError("All points coplanar: 3D hull is impossible")

        # 3) зорієнтувати назовні (всередині - центроїд тетра), тоді зареєструвати
        self.interior = centroid([self.P[p0], self.P[p1], self.P[p2], self.P[p3]])
        F = []
        for tri in ((p0, p1, p2), (p0, p2, p3), (p0, p3, p1), (p1, p3, p2)):
            i, j, k = tri
            # хочемо orient3d(a,b,c,O) < 0 (O всередині, нормаль назовні)
            if orient3d(self.P[i], self.P[j], self.P[k], self.interior) > 0:
                j, k = k, j
            F.append(self._add_face(i, j, k))

        # 4) склеїти сусідів
        self._rebuild_all_adjacencies()
        return F

    def _init_conflicts(self, base_faces: List[int]) -> None:
        """Початковий conflict graph: хто що бачить із решти точок."""
        base_vs = set()
        for fid in base_faces:
            base_vs.update(self.faces_list[fid].v)

        for pi, p in enumerate(self.P):
            if pi in base_vs:
                continue
            for fid in base_faces:
                a, b, c = self.faces_list[fid].v
                if visible_from_point(self.P[a], self.P[b], self.P[c], p, self.tol):
                    self.faces_list[fid].conflict.add(pi)
                    self.point2faces.setdefault(pi, set()).add(fid)

    def _pick_face_with_conflict(self) -> Optional[int]:
        # конфлікти отримують лише нові грані, тож усе до курсора вже порожнє
        for fid in range(self._cursor, len(self.faces_list)):
            f = self.faces_list[fid]
            if f.alive and f.conflict:
                self._cursor = fid
                return fid
        self._cursor = len(self.faces_list)
        return None

    def _pick_farthest_point(self, fid: int) -> int:
        """Найвіддаленіша від грані точка з її conflict-сету (при рівності - менший індекс)."""
        a, b, c = (self.P[i] for i in self.faces_list[fid].v)
        best_p = None
        best_dist = -1.0
        for pi in sorted(self.faces_list[fid].conflict):
            d = signed_distance_to_plane(a, b, c, self.P[pi])
            if d > best_dist:
                best_dist = d
                best_p = pi
        assert best_p is not None
        return best_p

    def _collect_visible_region(
        self, seed_fid: int, p_idx: int
    ) -> Tuple[Set[int], List[Tuple[Edge, int, int]]]:
        """
        BFS по видимих граннях від seed_fid (щодо точки p_idx).
        Повертає:
          visible - множину id видимих граней,
          horizon - список кортежів ((u,v), opp_fid, opp_edge_local_index),
                    де opp_fid - сусід по цьому ребру, який НЕ видимий (або -1, якщо None).
        """
        visible: Set[int] = set()
        stack = [seed_fid]
        while stack:
            fid = stack.pop()
            if fid in visible:
                continue
            f = self.faces_list[fid]
            if not f.alive:
                continue
            a, b, c = (self.P[i] for i in f.v)
            if not visible_from_point(a, b, c, self.P[p_idx], self.tol):
                continue
            visible.add(fid)
            # штовхаємо всіх сусідів - видимість перевіримо, коли дістанемо
            for ei in range(3):
                nb = f.nbr[ei]
                if nb is not None and nb not in visible:
                    stack.append(nb)

        # Зібрати горизонт: ребра, де з іншого боку немає видимої грані
        horizon: List[Tuple[Edge, int, int]] = []
        for fid in sorted(visible):
            f = self.faces_list[fid]
            for ei in range(3):
                nb = f.nbr[ei]
                u, v = f.edge(ei)  # орієнтація від видимої грані
                if (nb is None) or (nb not in visible):
                    opp_fid = nb if nb is not None else -1
                    opp_edge_idx = -1
                    if nb is not None:
                        nb_f = self.faces_list[nb]
                        for ej in range(3):
                            uu, vv = nb_f.edge(ej)
                            if (uu, vv) == (v, u):
                                opp_edge_idx = ej
                                break
                    horizon.append(((u, v), opp_fid, opp_edge_idx))
        return visible, horizon

    def _add_point_and_update(self, p_idx: int, seed_fid: int) -> None:
        """
        Додати точку p_idx до оболонки:
          1) знайти видимий «ковпак» і горизонт,
          2) знести видимі грані,
          3) пришити нові грані (u, v, p) вздовж горизонту - орієнтація успадковується від знесених,
          4) перекинути конфлікти.
        """
        visible, horizon = self._collect_visible_region(seed_fid, p_idx)

        # 1) зібрати всі конфліктні точки з видимих граней
        conflict_points: Set[int] = set()
        for fid in visible:
            conflict_points.update(self.faces_list[fid].conflict)

        # 2) позначити видимі грані мертвими й прибрати їх з edge2face та point2faces
        for fid in visible:
            f = self.faces_list[fid]
            f.alive = False
            for ei in range(3):
                u, v = f.edge(ei)
                key = (min(u, v), max(u, v))
                lst = self.edge2face.get(key, [])
                if lst:
                    self.edge2face[key] = [(fa, ea) for (fa, ea) in lst if fa != fid]
            for pi in list(f.conflict):
                s = self.point2faces.get(pi)
                if s is not None and fid in s:
                    s.remove(fid)
            f.conflict.clear()

        # 3) створити нові грані вздовж горизонту
        new_fids: List[int] = []
        edgeP_map: Dict[UEdge, Tuple[int, int]] = {}  # (min,max) -> (fid, local_edge)

        for (u, v), opp_fid, opp_ei in horizon:
            nf = self._add_face(u, v, p_idx)
            new_fids.append(nf)

            # з'єднати з «невидимим» сусідом через ребро (u,v), якщо він існує
            if opp_fid != -1 and opp_ei != -1:
                self._set_neighbor(nf, 0, opp_fid)      # локальне ребро 0 = (u,v)
                self._set_neighbor(opp_fid, opp_ei, nf)

            # зв'язати нові грані між собою по ребрах, що містять p_idx
            for (x, y), e_local in [((v, p_idx), 1), ((p_idx, u), 2)]:
                key = (min(x, y), max(x, y))
                if key in edgeP_map:
                    ofid, oei = edgeP_map.pop(key)
                    self._set_neighbor(nf, e_local, ofid)
                    self._set_neighbor(ofid, oei, nf)
                else:
                    edgeP_map[key] = (nf, e_local)

        # 4) p_idx тепер вершина: прибрати її з конфліктів граней поза ковпаком
        conflict_points.discard(p_idx)
        for fid in self.point2faces.pop(p_idx, ()):
            self.faces_list[fid].conflict.discard(p_idx)

        # 5) пере-розкидати конфліктні точки; у point2faces лишились тільки живі грані поза ковпаком
        for pi in conflict_points:
            faces_for_pi = self.point2faces.get(pi, set())
            for nf in new_fids:
                a, b, c = self.faces_list[nf].v
                if visible_from_point(self.P[a], self.P[b], self.P[c], self.P[pi], self.tol):
                    self.faces_list[nf].conflict.add(pi)
                    faces_for_pi.add(nf)
            if faces_for_pi:
                self.point2faces[pi] = faces_for_pi
            elif pi in self.point2faces:
                del self.point2faces[pi]

    def _expand_until_done(self) -> None:
        """Головний цикл: поки існує грань із зовнішніми точками, розширюємо hull."""
        while True:
            fid = self._pick_face_with_conflict()
            if fid is None:
                break
            p_idx = self._pick_farthest_point(fid)
            self._add_point_and_update(p_idx, fid)

    # ---------------- Діагностика ----------------
    def validate(self) -> dict:
        """
        Перевірка коректності триангуляції:
          - кожне неорієнтоване ребро зустрічається рівно у 2 активних гранях;
          - сусідства симетричні (зворотні посилання);
          - орієнтації активних граней «назовні» щодо внутрішньої точки.
        Повертає словник із діагностикою (порожні списки = все ок).
        """
        faces = [f for f in self.faces_list if f.alive]

        # 1) ребра мають кратність 2
        edge_count: Dict[UEdge, int] = {}
        for f in faces:
            a, b, c = f.v
            for u, v in ((a, b), (b, c), (c, a)):
                key = (min(u, v), max(u, v))
                edge_count[key] = edge_count.get(key, 0) + 1
        bad_edges = [(e, k) for e, k in edge_count.items() if k != 2]

        # 2) симетрія сусідств (ігноруємо мертвих)
        bad_nbr: List[Tuple[int, int, str]] = []
        for fid, f in enumerate(self.faces_list):
            if not f.alive:
                continue
            for ei in range(3):
                nb = f.nbr[ei]
                if nb is None or not (0 <= nb < len(self.faces_list)) or not self.faces_list[nb].alive:
                    bad_nbr.append((fid, ei, "missing_or_dead_neighbor"))
                    continue
                u, v = f.edge(ei)
                nb_f = self.faces_list[nb]
                found_back = False
                for ej in range(3):
                    uu, vv = nb_f.edge(ej)
                    if {u, v} == {uu, vv} and nb_f.nbr[ej] == fid:
                        found_back = True
                        break
                if not found_back:
                    bad_nbr.append((fid, ei, f"no_backlink_to_{nb}"))

        # 3) орієнтації: хочемо orient3d(a,b,c,O) < 0
        bad_orient: List[int] = []
        for fid, f in enumerate(self.faces_list):
            if not f.alive:
                continue
            a, b, c = f.v
            if orient3d(self.P[a], self.P[b], self.P[c], self.interior) >= 0:
                bad_orient.append(fid)

        return {
            "faces": len(faces),
            "unique_vertices": len({i for f in faces for i in f.v}),
            "bad_edges": bad_edges,
            "bad_neighbors": bad_nbr,
            "bad_orient_faces": bad_orient,
        }


# ---------------- Полігональна оболонка ----------------
def diagnose(
    vertices: Sequence[Pt],
    faces: Sequence[Sequence[int]],
    tol: float,
    cloud: Optional[Sequence[Pt]] = None,
) -> dict:
    """
    Глобальна перевірка полігональної оболонки:
      - кожна грань має >= 3 різних індекси в межах [0, V);
      - кожна вершина використана;
      - кожне орієнтоване ребро зустрічається рівно раз, і його зворотне теж (замкнений 2-многовид);
      - ейлерова характеристика V - E + F == 2;
      - грані пласкі, а всі точки (cloud або самі вершини) не над жодною гранню;
      - внутрішня точка (центроїд вершин) строго під кожною гранню.
    Повертає словник із діагностикою (порожні списки = все ок).
    """
    n = len(vertices)
    bad_faces: List[Tuple[int, str]] = []
    directed: Dict[Edge, int] = {}
    used: Set[int] = set()
    for fid, face in enumerate(faces):
        if len(face) < 3 or len(set(face)) != len(face):
            bad_faces.append((fid, "too_few_or_repeated_indices"))
            continue
        if any(not (0 <= i < n) for i in face):
            bad_faces.append((fid, "index_out_of_range"))
            continue
        used.update(face)
        for k in range(len(face)):
            e = (face[k], face[(k + 1) % len(face)])
            directed[e] = directed.get(e, 0) + 1

    bad_edges = [e for e, k in directed.items() if k != 1 or directed.get((e[1], e[0])) != 1]
    n_edges = len({(min(u, v), max(u, v)) for u, v in directed})
    unused = [i for i in range(n) if i not in used]
    euler = n - n_edges + len(faces)

    # площини граней (Ньюел) і перевірки відстаней
    planes = []
    slacks: List[float] = []
    skip = {fid for fid, _ in bad_faces}
    for fid, face in enumerate(faces):
        if fid in skip:
            continue
        pts = [vertices[i] for i in face]
        try:
            plane = newell_plane(pts)
        except ValueError:
            bad_faces.append((fid, "zero_area"))
            continue
        # трикутник плаский завжди; для многокутника допуск росте з його розміром,
        # бо нормаль Ньюела для витягнутих граней рахується з округленням
        deviation = max(abs(plane_distance(plane, p)) for p in pts)
        if len(pts) > 3:
            extent = max(norm(sub(p, pts[0])) for p in pts)
            if deviation > tol + 16 * DOUBLE_PREC * extent:
                bad_faces.append((fid, "not_planar"))
        planes.append((fid, plane))
        # площина відома з точністю до відхилення власних вершин
        slacks.append(tol + deviation)

    outside = 0
    bad_orient: List[int] = []
    if planes and vertices:
        normals = np.array([plane[0].as_tuple() for _, plane in planes], dtype=float)
        offsets = np.array([plane[1] for _, plane in planes], dtype=float)
        probe = cloud if cloud is not None else vertices
        arr = np.array([p.as_tuple() for p in probe], dtype=float).reshape(-1, 3)
        dist = arr @ normals.T - offsets - np.array(slacks)
        outside = int(np.count_nonzero(dist.max(axis=1) > 0.0))
        inner = np.array(centroid(vertices).as_tuple(), dtype=float)
        inner_dist = normals @ inner - offsets
        bad_orient = [planes[k][0] for k in np.flatnonzero(inner_dist >= -tol)]

    return {
        "vertices": n,
        "edges": n_edges,
        "faces": len(faces),
        "euler": euler,
        "bad_faces": bad_faces,
        "bad_edges": bad_edges,
        "unused_vertices": unused,
        "outside_points": outside,
        "bad_orient_faces": bad_orient,
    }


def report_ok(report: dict) -> bool:
    return (report["euler"] == 2 and report["outside_points"] == 0
            and not report["bad_faces"] and not report["bad_edges"]
            and not report["unused_vertices"] and not report["bad_orient_faces"])


@dataclass(frozen=True)
class Hull:
    """
    Опукла оболонка як многогранник:
      vertices - вершини оболонки (підмножина вхідних точок);
      faces - пласкі многокутники, індекси у vertices, обхід проти годинникової стрілки ззовні;
      valid - результат самоперевірки; якщо False, vertices/faces порожні;
      tol - толерантність, з якою будувалась оболонка;
      point_indices - для кожної вершини її індекс у вхідній хмарі.
    """
    vertices: Tuple[Pt, ...] = ()
    faces: Tuple[Tuple[int, ...], ...] = ()
    valid: bool = False
    tol: float = 0.0
    point_indices: Tuple[int, ...] = ()

    def num_vertices(self) -> int:
        return len(self.vertices)

    def get_vertices(self) -> List[Pt]:
        return list(self.vertices)

    def get_vertex_point_indices(self) -> List[int]:
        return list(self.point_indices)

    def get_faces(self, clockwise: bool = False, one_based: bool = False) -> List[List[int]]:
        """
        Копія граней. clockwise=True - обхід за годинниковою стрілкою ззовні
        (перша вершина лишається першою); one_based=True - індекси з 1.
        """
        out = []
        for f in self.faces:
            face = [f[0], *reversed(f[1:])] if clockwise else list(f)
            if one_based:
                face = [i + 1 for i in face]
            out.append(face)
        return out

    def edges(self) -> List[UEdge]:
        out: Set[UEdge] = set()
        for face in self.faces:
            for k in range(len(face)):
                u, v = face[k], face[(k + 1) % len(face)]
                out.add((min(u, v), max(u, v)))
        return sorted(out)

    def num_edges(self) -> int:
        return len(self.edges())

    def check(self) -> bool:
        """Повторна перевірка топології й опуклості на власних вершинах."""
        if not self.valid:
            return False
        return report_ok(diagnose(self.vertices, self.faces, 10 * self.tol))

    def to_off(self) -> str:
        """
        Експорт оболонки у формат OFF (многокутні грані).
        """
        lines = ["OFF", f"{len(self.vertices)} {len(self.faces)} {self.num_edges()}"]
        for p in self.vertices:
            lines.append(f"{p.x} {p.y} {p.z}")
        for face in self.faces:
            lines.append(" ".join(str(i) for i in (len(face), *face)))
        return "\n".join(lines)


INVALID_HULL = Hull()


def hull_from_triangles(
    points: Sequence[Pt],
    triangles: Iterable[Tuple[int, int, int]],
    tol: float,
    source: Optional[Sequence[int]] = None,
) -> Tuple[Hull, bool]:
    """
    Триангульована оболонка -> многогранник:
    злиття копланарних трикутників, викидання точок на ребрах, ущільнення індексів, самоперевірка.
    source[i] - індекс points[i] у вхідній хмарі (None - points і є вхідна хмара).
    """
    try:
        polygons = merge_coplanar(points, list(triangles), tol)
    except ValueError as e:
        logger.warning("face merge failed: %s", e)
        return INVALID_HULL, False
    polygons = drop_collinear(points, polygons, tol)
    vertices, faces, used = compact(points, polygons)

    # перевірка з запасом 10*tol: площини граней рахуються з округленням
    report = diagnose(vertices, faces, 10 * tol, cloud=points)
    if not report_ok(report):
        logger.warning("hull self-check failed: %s", report)
        return INVALID_HULL, False
    logger.debug("hull: V=%d E=%d F=%d", report["vertices"], report["edges"], report["faces"])
    indices = tuple(used) if source is None else tuple(source[i] for i in used)
    return Hull(tuple(vertices), tuple(faces), True, tol, indices), True


def dedup_cloud(cloud: Iterable[Pt], tol: Optional[float] = None) -> Tuple[List[Pt], List[int], float]:
    """
    Хмара -> (різні точки, їх індекси у хмарі, tol).
    Дублікати шукаються з кроком tol (автоматичним, якщо не заданий), тож дрібний масштаб хмари не шкодить.
    """
    raw = [Pt(float(x), float(y), float(z)) for x, y, z in cloud]
    if tol is None:
        tol = auto_tolerance(raw) if raw else 0.0
    keep = unique_point_indices(raw, tol)
    return [raw[i] for i in keep], keep, tol


def build(cloud: Iterable[Pt], tol: Optional[float] = None) -> Tuple[Hull, bool]:
    """
    Опукла оболонка хмари точок.
    Повертає (Hull, valid). Для виродженої хмари чи проваленої самоперевірки:
    (INVALID_HULL, False); винятків через геометрію не кидає.
    """
    pts, keep, tol = dedup_cloud(cloud, tol)
    try:
        qh = ConvexHull3D(pts, tol=tol)
    except DegenerateHullError as e:
        logger.info("degenerate cloud (%d distinct points): %s", len(pts), e)
        return INVALID_HULL, False
    return hull_from_triangles(pts, qh.faces(), qh.tol, source=keep)
