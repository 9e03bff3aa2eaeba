# examples/demo_waterman.py
from __future__ import annotations

import argparse
import logging

from waterman.lattice import generate
from waterman.pipeline import waterman_buffers, waterman_hull


def main():
    parser = argparse.ArgumentParser(description="Многогранник Ваттермана для заданого радіуса")
    parser.add_argument("radius", type=float, nargs="?", default=5.0)
    parser.add_argument("--backend", default="internal", choices=["internal", "scipy"])
    parser.add_argument("--off", default="waterman.off", help="куди записати OFF")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    # --- 1) Точки ґратки ---
    cloud = generate(args.radius)
    print(f"Точок ґратки:     {len(cloud)}")

    # --- 2) Оболонка ---
    hull, ok = waterman_hull(args.radius, backend=args.backend)
    if not ok:
        print("Оболонка невалідна (вироджена хмара або провал самоперевірки).")
        return

    sizes: dict[int, int] = {}
    for face in hull.faces:
        sizes[len(face)] = sizes.get(len(face), 0) + 1
    print(f"Вершини:          {hull.num_vertices()}")
    print(f"Ребра:            {hull.num_edges()}")
    print(f"Грані:            {len(hull.faces)}  {dict(sorted(sizes.items()))}")
    print(f"Самоперевірка:    {hull.check()}")

    # --- 3) OFF ---
    with open(args.off, "w", encoding="utf-8") as f:
        f.write(hull.to_off())
    print(f"{args.off} записано - можна глянути в MeshLab/ParaView.")

    # --- 4) Буфери для хоста ---
    with waterman_buffers(args.radius, backend=args.backend) as buf:
        print(f"coords: {buf.coords.size} float64, faces: {buf.faces.size} int64")


if __name__ == "__main__":
    main()
