from __future__ import annotations

import os
from typing import TYPE_CHECKING

import matplotlib as mpl
import numpy as np

_BACKEND = os.environ.get("SDFMARCH_MPL_BACKEND", "").strip()
if _BACKEND:
    mpl.use(_BACKEND, force=True)
else:
    for candidate in ("TkAgg", "QtAgg", "Agg"):
        # noinspection PyBroadException
        try:
            mpl.use(candidate, force=True)
            break
        except Exception:  # pragma: no cover  # noqa: BLE001, S112
            continue

import matplotlib.pyplot as plt  # noqa: E402

from sdfmarch.vector import Vector3  # noqa: E402

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sdfmarch.protocols import SDF
    from sdfmarch.raymarch.config import RayMarchResult


class RayPathPlotter:
    """Top-down (XZ) debug view: scene slice outline plus marched ray paths."""

    def __init__(self) -> None:
        """Initialize the plotter."""
        self.fig, ax = plt.subplots(figsize=(8, 8))
        self.ax = ax
        ax.set_aspect("equal", "box")
        ax.set_xlabel("x")
        ax.set_ylabel("z")
        ax.set_title("sdfmarch - ray paths (XZ)")

    def draw_slice(
            self,
            scene: SDF,
            xlim: tuple[float, float],
            zlim: tuple[float, float],
            y: float = 0.0,
            resolution: int = 200,
    ) -> None:
        """Outline the surface where the plane y=const cuts the scene."""
        xs = np.linspace(xlim[0], xlim[1], resolution)
        zs = np.linspace(zlim[0], zlim[1], resolution)
        dist = np.array([[scene.sdf(Vector3(float(x), y, float(z))) for x in xs] for z in zs])
        self.ax.contour(xs, zs, dist, levels=[0.0], linewidths=2)

    def draw_ray(self, result: RayMarchResult) -> None:
        if result.points is None:
            msg = "Ray has no recorded path; march with record_path=True"
            raise ValueError(msg)

        pts = np.asarray(result.points)
        if pts.shape[0] == 0:
            return

        self.ax.plot(pts[:, 0], pts[:, 2], linewidth=1)
        end = pts[-1]

        # Endpoint markers based on termination reason
        if result.termination == "hit":
            self.ax.scatter([end[0]], [end[2]], marker="x", s=70)
            return

        if result.termination == "missed":
            self.ax.scatter([end[0]], [end[2]], marker=".", s=25)
            return

        self.ax.scatter([end[0]], [end[2]], marker="s", s=25)

    def draw_rays(self, results: Sequence[RayMarchResult]) -> None:
        for result in results:
            self.draw_ray(result)

    def show(self, xlim: tuple[float, float], zlim: tuple[float, float]) -> None:
        self.ax.set_xlim(*xlim)
        self.ax.set_ylim(*zlim)
        self.fig.tight_layout()
        plt.show()

    def save(self, path: str, xlim: tuple[float, float], zlim: tuple[float, float], dpi: int = 150) -> None:
        """Save figure to disk (useful if running headless with Agg)."""
        self.ax.set_xlim(*xlim)
        self.ax.set_ylim(*zlim)
        self.fig.tight_layout()
        self.fig.savefig(path, dpi=dpi)

    def close(self) -> None:
        plt.close(self.fig)
