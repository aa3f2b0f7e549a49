# renderer/raytracer.py
import logging
import os
import random
import threading
import time
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from typing import List, Optional, Tuple
import numpy as np
from camera.camera import Camera
from geometry.hittable import Hittable

logger = logging.getLogger(__name__)

BACKENDS = ("thread", "process")

def default_worker_count() -> int:
    """Hardware concurrency, or a single worker when it cannot be detected."""
    return os.cpu_count() or 1

def partition_rows(height: int, workers: int) -> List[Tuple[int, int]]:
    """
    Split scanlines [0, height) into one contiguous [start, end) range per
    worker. Every range holds height // workers rows and the last one also
    takes the remainder.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")
    lines_per_worker = height // workers
    ranges = []
    for t in range(workers):
        start = t * lines_per_worker
        end = height if t == workers - 1 else (t + 1) * lines_per_worker
        ranges.append((start, end))
    return ranges

class RowSeeder:
    """
    Hands out one random generator per scanline.

    With a seed the stream for row j depends only on (seed, j), so the
    image does not change with the worker count or backend. Without one
    every row is seeded from OS entropy.
    """
    def __init__(self, seed: Optional[int] = None):
        self.seed = seed

    def __call__(self, row: int) -> random.Random:
        if self.seed is None:
            return random.Random()
        hi, lo = np.random.SeedSequence([self.seed, row]).generate_state(2)
        return random.Random((int(hi) << 32) | int(lo))

class ProgressCounter:
    """
    Shared count of scanlines still to render.

    Reporting is best-effort: lines written by different workers may
    interleave, which never affects the image.
    """
    def __init__(self, total: int, stream=None, every: int = 10):
        self.remaining = total
        self.stream = stream
        self.every = every
        self._lock = threading.Lock()

    def decrement(self, rows: int = 1) -> int:
        with self._lock:
            self.remaining -= rows
            remaining = self.remaining
        # Report whenever a multiple of `every` was passed
        crossed = (remaining - 1) // self.every != (remaining + rows - 1) // self.every
        if self.stream is not None and (crossed or remaining == 0):
            self.stream.write(f"\rScanlines remaining: {remaining} ")
            self.stream.flush()
        return remaining

    def scanline_done(self, row: int):
        self.decrement()

def _render_slab(camera: Camera, world: Hittable, start: int, end: int,
                 seeder: RowSeeder) -> np.ndarray:
    # Runs in a child process; the slab is copied back by the parent.
    return camera.render_rows(world, start, end, seeder)

class Renderer:
    """
    Renders a world through a camera on a pool of workers.

    The image is split into contiguous row ranges, one per worker. Each
    worker writes only its own slice of the pixel buffer, so the buffer
    needs no locking; joining the pool is the only synchronization point.
    """
    def __init__(self, camera: Camera, workers: Optional[int] = None,
                 backend: str = "thread", seed: Optional[int] = None,
                 progress_stream=None):
        if backend not in BACKENDS:
            raise ValueError(f"backend must be one of {BACKENDS}, got {backend!r}")
        self.camera = camera
        self.workers = workers if workers is not None else default_worker_count()
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        self.backend = backend
        self.seed = seed
        self.progress_stream = progress_stream
        self.elapsed = None

    @property
    def width(self) -> int:
        return self.camera.image_width

    @property
    def height(self) -> int:
        return self.camera.image_height

    def render(self, world: Hittable) -> np.ndarray:
        """
        Render the world and return the linear (height, width, 3) float buffer.
        Row 0 is the top of the image. Values are not clamped.
        """
        # No point in spawning workers that would get zero rows
        workers = min(self.workers, self.height)
        ranges = partition_rows(self.height, workers)
        buffer = np.zeros((self.height, self.width, 3), dtype=np.float64)
        progress = ProgressCounter(self.height, self.progress_stream)
        seeder = RowSeeder(self.seed)

        logger.info("Rendering %dx%d, %d samples/pixel, max depth %d, %d %s worker(s)",
                    self.width, self.height, self.camera.samples_per_pixel,
                    self.camera.max_depth, workers, self.backend)

        start_time = time.perf_counter()
        if self.backend == "thread":
            self._render_threads(world, ranges, buffer, progress, seeder)
        else:
            self._render_processes(world, ranges, buffer, progress, seeder)
        self.elapsed = time.perf_counter() - start_time

        if self.progress_stream is not None:
            self.progress_stream.write("\n")
            self.progress_stream.flush()
        logger.info("Done. Render time: %.2fs", self.elapsed)
        return buffer

    def _render_threads(self, world, ranges, buffer, progress, seeder):
        with ThreadPoolExecutor(max_workers=len(ranges), thread_name_prefix="render") as pool:
            futures = [
                pool.submit(self.camera.render_rows, world, start, end, seeder,
                            progress.scanline_done, buffer[start:end])
                for start, end in ranges
            ]
            for future in futures:
                future.result()

    def _render_processes(self, world, ranges, buffer, progress, seeder):
        with ProcessPoolExecutor(max_workers=len(ranges)) as pool:
            futures = {
                pool.submit(_render_slab, self.camera, world, start, end, seeder): (start, end)
                for start, end in ranges
            }
            for future in as_completed(futures):
                start, end = futures[future]
                buffer[start:end] = future.result()
                progress.decrement(end - start)
