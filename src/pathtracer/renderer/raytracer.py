# renderer/raytracer.py
import numbers
import os
import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from pathtracer.camera.camera import Camera
from pathtracer.geometry.hittable import Hittable
from pathtracer.renderer.integrator import ray_color
from pathtracer.renderer.tone_mapping import gamma_quantize


class RenderConfigError(ValueError):
    """Raised for invalid render settings, before any work is started."""


class RenderError(RuntimeError):
    """Raised when a render worker fails to deliver its rows."""


def default_thread_count() -> int:
    return os.cpu_count() or 1


def image_height_for(image_width: int, aspect_ratio: float) -> int:
    """
    Image height matching `aspect_ratio` for the given width (truncated).
    """
    if aspect_ratio <= 0:
        raise RenderConfigError(f"aspect_ratio must be positive, got {aspect_ratio}")
    height = int(image_width / aspect_ratio)
    if height < 1:
        raise RenderConfigError(
            f"image_width {image_width} with aspect_ratio {aspect_ratio} "
            f"gives an empty image")
    return height


def partition_rows(height: int, chunks: int) -> List[Tuple[int, int]]:
    """
    Split rows [0, height) into contiguous, non-overlapping [start, stop)
    ranges, one per chunk. Sizes differ by at most one row; no range is
    empty, so fewer ranges than `chunks` come back for very short images.
    """
    chunks = max(1, min(chunks, height))
    base, extra = divmod(height, chunks)
    ranges = []
    start = 0
    for k in range(chunks):
        stop = start + base + (1 if k < extra else 0)
        ranges.append((start, stop))
        start = stop
    return ranges


class RowProgress:
    """
    Completed-row counter shared by all render workers.

    Updates take a private lock; the tqdm bar is only touched while it is held.
    """
    def __init__(self, total: int, enabled: bool = True):
        self.total = total
        self.completed = 0
        self._lock = threading.Lock()
        self._bar = tqdm(total=total, desc="Scanlines", unit="row",
                         disable=not enabled, leave=False)

    def advance(self, rows: int = 1):
        with self._lock:
            self.completed += rows
            self._bar.update(rows)

    def close(self):
        self._bar.close()


class Renderer:
    """
    Multi-threaded CPU path tracer.

    The image is split into one contiguous band of rows per worker thread.
    Each worker renders its band into a private batch with its own random
    generator; the calling thread copies finished batches into the
    accumulation buffer, so no two threads ever write the same memory.

    Parameters:
        width, height: output size in pixels.
        samples_per_pixel: jittered primary rays averaged per pixel.
        max_depth: bounce budget per path.
        threads: worker count, defaults to the number of CPUs.
        seed: seeds the per-worker generators; None draws from OS entropy.
        show_progress: show a per-row tqdm progress bar.
        debug_mode: print render settings and timings.
    """
    def __init__(self, width: int, height: int, samples_per_pixel: int = 100,
                 max_depth: int = 50, threads: Optional[int] = None,
                 seed: Optional[int] = None, show_progress: bool = True,
                 debug_mode: bool = False):
        if threads is None:
            threads = default_thread_count()
        for name, value in (("width", width), ("height", height),
                            ("samples_per_pixel", samples_per_pixel),
                            ("max_depth", max_depth), ("threads", threads)):
            if not isinstance(value, numbers.Integral) or isinstance(value, bool) or value <= 0:
                raise RenderConfigError(f"{name} must be a positive integer, got {value!r}")

        self.width = width
        self.height = height
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.threads = threads
        self.seed = seed
        self.show_progress = show_progress
        self.debug_mode = debug_mode
        self.accumulation_buffer = np.zeros((height, width, 3), dtype=np.float64)

    def reset_accumulation(self):
        self.accumulation_buffer.fill(0.0)

    def render(self, world: Hittable, camera: Camera) -> np.ndarray:
        """
        Render `world` through `camera` and return a (height, width, 3)
        uint8 image, top row first.

        Blocks until every worker has finished. Raises RenderError if any
        worker fails; no partial image is returned in that case.
        """
        chunks = partition_rows(self.height, self.threads)
        seeder = random.Random(self.seed)
        rngs = [random.Random(seeder.getrandbits(64)) for _ in chunks]

        if self.debug_mode:
            print("\n=== Rendering ===")
            print(f"Resolution: {self.width}x{self.height}")
            print(f"Samples per pixel: {self.samples_per_pixel}")
            print(f"Max bounces: {self.max_depth}")
            print(f"Worker threads: {len(chunks)} (rows per worker: "
                  f"{', '.join(str(stop - start) for start, stop in chunks)})")
            if hasattr(world, "objects"):
                print(f"World contains {len(world.objects)} objects")

        self.reset_accumulation()
        progress = RowProgress(self.height, enabled=self.show_progress)
        start_time = time.perf_counter()
        merged_rows = 0
        try:
            with ThreadPoolExecutor(max_workers=len(chunks),
                                    thread_name_prefix="render") as executor:
                futures = {
                    executor.submit(self.render_rows, world, camera,
                                    start, stop, rng, progress): (start, stop)
                    for (start, stop), rng in zip(chunks, rngs)
                }
                # Every band starts at once, so a failure cannot cancel the others;
                # leaving the pool waits for them before RenderError propagates.
                for future in as_completed(futures):
                    start, stop = futures[future]
                    try:
                        batch = future.result()
                    except Exception as exc:
                        raise RenderError(
                            f"render worker for rows {start}-{stop - 1} failed") from exc
                    if batch.shape != (stop - start, self.width, 3):
                        raise RenderError(
                            f"render worker for rows {start}-{stop - 1} returned "
                            f"a batch of shape {batch.shape}")
                    self.accumulation_buffer[start:stop] = batch
                    merged_rows += stop - start
        finally:
            progress.close()

        if merged_rows != self.height:
            raise RenderError(f"only {merged_rows} of {self.height} rows were rendered")

        if self.debug_mode:
            print(f"Render complete in {time.perf_counter() - start_time:.2f}s")

        return gamma_quantize(self.accumulation_buffer, self.samples_per_pixel)

    def render_rows(self, world: Hittable, camera: Camera, start: int, stop: int,
                    rng, progress: Optional[RowProgress] = None) -> np.ndarray:
        """
        Render output rows [start, stop) into a new float batch holding the
        sum of all samples per pixel.

        Output row 0 is the top of the image; scanline coordinates count up
        from the bottom, hence v uses height - 1 - row.
        """
        batch = np.zeros((stop - start, self.width, 3), dtype=np.float64)
        # Single-column and single-row images sample their only pixel band
        # across [0, 1) instead of dividing by zero.
        u_scale = max(self.width - 1, 1)
        v_scale = max(self.height - 1, 1)
        spp = self.samples_per_pixel
        for row in range(start, stop):
            j = self.height - 1 - row
            for i in range(self.width):
                r = g = b = 0.0
                for _ in range(spp):
                    u = (i + rng.random()) / u_scale
                    v = (j + rng.random()) / v_scale
                    color = ray_color(camera.get_ray(u, v, rng), world,
                                      self.max_depth, rng)
                    r += color.x
                    g += color.y
                    b += color.z
                batch[row - start, i, 0] = r
                batch[row - start, i, 1] = g
                batch[row - start, i, 2] = b
            if progress is not None:
                progress.advance()
        return batch


def render(world: Hittable, camera: Camera, image_width: int, image_height: int,
           samples_per_pixel: int, max_depth: int, thread_count: Optional[int] = None,
           **options) -> np.ndarray:
    """
    Render a scene in one call. See Renderer for the keyword options.
    """
    renderer = Renderer(image_width, image_height, samples_per_pixel, max_depth,
                        threads=thread_count, **options)
    return renderer.render(world, camera)
