# examples/gui.py
from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox

from waterman.export import face_polygons
from waterman.lattice import lattice_size, RECOMMENDED_MAX_RADIUS
from waterman.pipeline import waterman_hull

import matplotlib
matplotlib.use("TkAgg")
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401  # потрібен для 'projection="3d"'
from mpl_toolkits.mplot3d.art3d import Poly3DCollection


def parse_radius(text: str) -> float:
    """Радіус з поля вводу: додатне число, не більше RECOMMENDED_MAX_RADIUS."""
    try:
        r = float(text.replace(",", "."))
    except ValueError:
        raise ValueError(f"Не вдалось прочитати радіус '{text}'")
    if not r > 0:
        raise ValueError("Радіус має бути додатним.")
    if r > RECOMMENDED_MAX_RADIUS:
        raise ValueError(f"Радіус більший за {RECOMMENDED_MAX_RADIUS:g} - побудова буде надто довгою.")
    return r


class WatermanApp(tk.Tk):
    def __init__(self):
        super().__init__()
        self.title("Waterman polyhedra")
        self.geometry("800x700")

        # сюди покладемо Figure/Canvas
        self.fig = None
        self.ax = None
        self.canvas = None

        self._build_widgets()

    def _build_widgets(self):
        main = ttk.Frame(self, padding=10)
        main.pack(fill="both", expand=True)

        # --- Параметри ---
        input_frame = ttk.LabelFrame(main, text="Параметри")
        input_frame.pack(fill="x", pady=5)

        ttk.Label(input_frame, text="Радіус:").grid(row=0, column=0, sticky="w", padx=5, pady=5)
        self.radius_entry = ttk.Entry(input_frame, width=10)
        self.radius_entry.insert(0, "5")
        self.radius_entry.grid(row=0, column=1, sticky="w", padx=5, pady=5)

        self.backend = tk.StringVar(value="internal")
        ttk.Radiobutton(input_frame, text="Власний Quickhull", variable=self.backend,
                        value="internal").grid(row=0, column=2, sticky="w", padx=5)
        ttk.Radiobutton(input_frame, text="SciPy (Qhull)", variable=self.backend,
                        value="scipy").grid(row=0, column=3, sticky="w", padx=5)

        # --- Кнопка запуску ---
        run_btn = ttk.Button(main, text="Побудувати многогранник", command=self.run_pipeline)
        run_btn.pack(fill="x", pady=10)

        # --- Результати ---
        result_frame = ttk.LabelFrame(main, text="Результати")
        result_frame.pack(fill="x", pady=5)

        self.points_var = tk.StringVar(value="—")
        self.vertices_var = tk.StringVar(value="—")
        self.faces_var = tk.StringVar(value="—")
        self.valid_var = tk.StringVar(value="—")

        rows = [("Точок ґратки:", self.points_var), ("Вершини:", self.vertices_var),
                ("Граней:", self.faces_var), ("Валідація:", self.valid_var)]
        for row, (label, var) in enumerate(rows):
            ttk.Label(result_frame, text=label).grid(row=row, column=0, sticky="w", padx=5, pady=2)
            ttk.Label(result_frame, textvariable=var).grid(row=row, column=1, sticky="w", padx=5, pady=2)

        info_label = ttk.Label(
            main,
            text="Файл waterman.off буде записано в поточну директорію.",
            foreground="gray",
            justify="center",
        )
        info_label.pack(fill="x", pady=5)

        # --- Фрейм для 3D-графіка ---
        plot_frame = ttk.LabelFrame(main, text="3D візуалізація")
        plot_frame.pack(fill="both", expand=True, pady=5)

        self.fig = Figure(figsize=(4, 3))
        self.ax = self.fig.add_subplot(111, projection="3d")
        self.canvas = FigureCanvasTkAgg(self.fig, master=plot_frame)
        self.canvas.draw()
        self.canvas.get_tk_widget().pack(fill="both", expand=True)

    def update_plot(self, polygons):
        """
        Перемалювати многогранник: кожна грань - окремий многокутник.
        Координати вже нормовані, тож межі осей фіксовані.
        """
        self.ax.clear()

        if not polygons:
            self.ax.set_title("Немає граней")
            self.canvas.draw()
            return

        coll = Poly3DCollection(polygons, facecolor=(0.5, 0.5, 0.0, 0.8),
                                edgecolor="k", linewidths=0.4)
        self.ax.add_collection3d(coll)
        for set_lim in (self.ax.set_xlim, self.ax.set_ylim, self.ax.set_zlim):
            set_lim(-0.5, 0.5)

        self.ax.set_xlabel("X")
        self.ax.set_ylabel("Y")
        self.ax.set_zlabel("Z")
        self.ax.set_title(f"{len(polygons)} faces")

        self.canvas.draw()

    def run_pipeline(self):
        try:
            radius = parse_radius(self.radius_entry.get())
        except ValueError as e:
            messagebox.showerror("Помилка", str(e))
            return

        hull, ok = waterman_hull(radius, backend=self.backend.get())

        self.points_var.set(str(lattice_size(radius)))
        if not ok:
            self.vertices_var.set("—")
            self.faces_var.set("—")
            self.valid_var.set("Вироджена оболонка")
            self.update_plot([])
            return

        with open("waterman.off", "w", encoding="utf-8") as f:
            f.write(hull.to_off())

        self.vertices_var.set(str(hull.num_vertices()))
        self.faces_var.set(str(len(hull.faces)))
        self.valid_var.set("OK" if hull.check() else "Є проблеми (див. лог)")
        self.update_plot(face_polygons(hull))


if __name__ == "__main__":
    app = WatermanApp()
    app.mainloop()
