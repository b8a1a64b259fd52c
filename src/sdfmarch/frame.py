from __future__ import annotations

import logging
import os
import time
from concurrent.futures import Executor, ProcessPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from sdfmarch.raymarch.config import RayMarchConfig
from sdfmarch.raymarch.marcher import trace_ray
from sdfmarch.shading import ShadingConfig

if TYPE_CHECKING:
    from sdfmarch.camera.camera3d import Camera3D
    from sdfmarch.protocols import SDF

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FrameConfig:
    """Work split for one frame.

    max_workers:
        Pool size when the renderer owns the pool. ``1`` renders in-process;
        ``None`` uses the CPU count.
    rows_per_chunk:
        Scanlines per task. ``None`` aims for about four tasks per worker.
    """

    max_workers: int | None = None
    rows_per_chunk: int | None = None


@dataclass(frozen=True, slots=True)
class _RowJob:
    scene: SDF
    camera: Camera3D
    march: RayMarchConfig
    shading: ShadingConfig
    y_start: int
    y_end: int


def _render_rows(job: _RowJob) -> tuple[int, np.ndarray]:
    """Trace scanlines [y_start, y_end). Pure: depends only on the job."""
    cam = job.camera
    rows = np.zeros((job.y_end - job.y_start, cam.width), dtype=np.uint32)
    for i, y in enumerate(range(job.y_start, job.y_end)):
        for x in range(cam.width):
            rows[i, x] = trace_ray(job.scene, cam.position, cam.ray_direction(x, y), job.march, job.shading)
    return job.y_start, rows


class FrameRenderer:
    """Trace every pixel of a camera frame over a shared, read-only scene.

    Scanline chunks are independent; the result only depends on the scene,
    camera and configs, never on worker count or completion order.
    """

    def __init__(
            self,
            scene: SDF,
            camera: Camera3D,
            march: RayMarchConfig | None = None,
            shading: ShadingConfig | None = None,
            config: FrameConfig | None = None,
    ) -> None:
        """Initialise the renderer."""
        self.scene = scene
        self.camera = camera
        self.march = march or RayMarchConfig()
        self.shading = shading or ShadingConfig()
        self.config = config or FrameConfig()

    def _workers(self) -> int:
        return self.config.max_workers or os.cpu_count() or 1

    def jobs(self, workers: int) -> list[_RowJob]:
        height = self.camera.height
        rows_per_chunk = self.config.rows_per_chunk or max(1, height // (workers * 4))
        return [
            _RowJob(
                scene=self.scene,
                camera=self.camera,
                march=self.march,
                shading=self.shading,
                y_start=y_start,
                y_end=min(y_start + rows_per_chunk, height),
            )
            for y_start in range(0, height, rows_per_chunk)
        ]

    def render(self, executor: Executor | None = None) -> np.ndarray:
        """Render the frame into a row-major (H, W) buffer of 0x00RRGGBB pixels.

        Args:
            executor: Pool to run scanline chunks on. When omitted the renderer
                creates a ProcessPoolExecutor, or runs serially for
                ``max_workers == 1``.
        """
        workers = self._workers()
        jobs = self.jobs(workers)
        frame = np.zeros((self.camera.height, self.camera.width), dtype=np.uint32)

        logger.debug(
            "Rendering %dx%d frame in %d chunks", self.camera.width, self.camera.height, len(jobs),
        )
        start = time.perf_counter()

        if executor is not None:
            results = executor.map(_render_rows, jobs)
        elif workers == 1:
            results = map(_render_rows, jobs)
        else:
            with ProcessPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(_render_rows, jobs))

        for y_start, rows in results:
            frame[y_start:y_start + rows.shape[0]] = rows

        logger.info(
            "Rendered %dx%d frame in %.2fs", self.camera.width, self.camera.height, time.perf_counter() - start,
        )
        return frame


def render_frame(
        scene: SDF,
        camera: Camera3D,
        march: RayMarchConfig | None = None,
        shading: ShadingConfig | None = None,
        config: FrameConfig | None = None,
        executor: Executor | None = None,
) -> np.ndarray:
    return FrameRenderer(scene, camera, march, shading, config).render(executor)
