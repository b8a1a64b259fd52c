from __future__ import annotations

import os
from typing import TYPE_CHECKING

import matplotlib as mpl

# Backend must be chosen before pyplot is imported.
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

from sdfmarch.shading import unpack_buffer  # noqa: E402

if TYPE_CHECKING:
    import numpy as np


class FramePlotter:
    """Show or save a packed (H, W) frame buffer."""

    def __init__(self, title: str = "sdfmarch") -> None:
        """Initialize the figure."""
        self.fig, self.ax = plt.subplots(1, 1, figsize=(6, 6))
        self.ax.axis("off")
        self.ax.set_title(title)
        self.im = None

    def draw(self, buffer: np.ndarray) -> None:
        if buffer.ndim != 2:
            msg = f"Expected an (H, W) packed buffer, got shape {buffer.shape}"
            raise ValueError(msg)

        img = unpack_buffer(buffer)
        if self.im is None:
            self.im = self.ax.imshow(img, interpolation="nearest")
        else:
            self.im.set_data(img)

    def show(self, buffer: np.ndarray) -> None:
        self.draw(buffer)
        self.fig.tight_layout()
        plt.show()

    def save(self, buffer: np.ndarray, path: str, dpi: int = 150) -> None:
        """Save figure to disk (useful if running headless with Agg)."""
        self.draw(buffer)
        self.fig.tight_layout()
        self.fig.savefig(path, dpi=dpi)

    def close(self) -> None:
        plt.close(self.fig)
