"""
Renderer module - the heart of the path tracer.

Implements:
- Monte Carlo path tracing with a hard bounce cap
- Jittered per-pixel supersampling
- Tile-based rendering, optionally multi-threaded
- Gamma-corrected 8-bit output (PPM or any format Pillow writes)

Every tile draws from its own random stream spawned from the render seed,
so a seeded render produces the same image with any thread count.
"""

from __future__ import annotations
import logging
import math
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional, Tuple, Union
import numpy as np

from .vec3 import Color
from .ray import Ray
from .camera import Camera
from .shapes import Hittable

logger = logging.getLogger(__name__)

# Lower bound on hit distance; keeps scattered rays off their own surface
T_MIN = 0.001

WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 400
    height: int = 200
    samples_per_pixel: int = 100
    max_depth: int = 50
    tile_size: int = 32
    num_threads: int = 0  # 0 = auto-detect
    seed: Optional[int] = None
    gamma: float = 2.0

    def __post_init__(self):
        for name in ('width', 'height', 'samples_per_pixel', 'tile_size'):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.num_threads < 0:
            raise ValueError(f"num_threads must be non-negative, got {self.num_threads}")
        if self.gamma <= 0:
            raise ValueError(f"gamma must be positive, got {self.gamma}")
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


class Renderer:
    """Path tracing renderer with multi-threading support."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Hittable, camera: Camera) -> np.ndarray:
        """Render the scene and return the image as a numpy array.

        Args:
            scene: The scene to render (any Hittable)
            camera: The camera to render from

        Returns:
            Linear radiance image of shape (height, width, 3); row 0 is
            the top scanline
        """
        width = self.settings.width
        height = self.settings.height
        samples = self.settings.samples_per_pixel

        image = np.zeros((height, width, 3), dtype=np.float64)

        tiles = self._generate_tiles(width, height)
        streams = np.random.SeedSequence(self.settings.seed).spawn(len(tiles))
        total_tiles = len(tiles)
        completed_tiles = 0
        lock = threading.Lock()

        logger.info(
            "Rendering %dx%d, %d spp, %d tiles on %d thread(s)",
            width, height, samples, total_tiles, self.settings.num_threads
        )
        start = time.perf_counter()

        def render_tile(tile: Tuple[int, int, int, int], stream: np.random.SeedSequence) -> Tuple[Tuple, np.ndarray]:
            """Render a single tile with its own random stream."""
            nonlocal completed_tiles
            x0, y0, x1, y1 = tile
            rng = np.random.default_rng(stream)
            tile_image = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.float64)

            for row in range(y0, y1):
                j = height - 1 - row
                for i in range(x0, x1):
                    pixel_color = Color(0, 0, 0)

                    for _ in range(samples):
                        u = (i + rng.random()) / width
                        v = (j + rng.random()) / height
                        ray = camera.get_ray(u, v, rng)
                        pixel_color = pixel_color + self.ray_color(ray, scene, rng)

                    tile_image[row - y0, i - x0] = pixel_color.to_array() / samples

            with lock:
                completed_tiles += 1
                if self._progress_callback:
                    self._progress_callback(completed_tiles / total_tiles)

            return tile, tile_image

        if self.settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=self.settings.num_threads) as executor:
                results = list(executor.map(render_tile, tiles, streams))
        else:
            results = [render_tile(tile, stream) for tile, stream in zip(tiles, streams)]

        for tile, tile_image in results:
            x0, y0, x1, y1 = tile
            image[y0:y1, x0:x1] = tile_image

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return image

    def ray_color(self, ray: Ray, scene: Hittable, rng: np.random.Generator, depth: int = 0) -> Color:
        """Estimate the radiance arriving along a ray.

        Follows the path bounce by bounce, multiplying in each material's
        attenuation. The path ends when it escapes to the sky, when a
        material absorbs it, or when it hits anything at depth max_depth.

        Args:
            ray: The ray to trace
            scene: The scene to trace against
            rng: Random stream for scattering
            depth: Number of bounces already taken

        Returns:
            The radiance carried back along the ray
        """
        attenuation = Color(1.0, 1.0, 1.0)

        while True:
            hit_record = scene.hit(ray, T_MIN, math.inf)

            if hit_record is None:
                return attenuation * self.sky_color(ray)

            if depth >= self.settings.max_depth:
                return Color(0, 0, 0)

            scatter_result = hit_record.material.scatter(ray, hit_record, rng)
            if scatter_result is None:
                return Color(0, 0, 0)

            attenuation = attenuation * scatter_result.attenuation
            ray = scatter_result.scattered_ray
            depth += 1

    @staticmethod
    def sky_color(ray: Ray) -> Color:
        """Vertical white-to-blue gradient seen by rays that escape."""
        unit_direction = ray.direction.normalize()
        t = 0.5 * (unit_direction.y + 1.0)
        return WHITE * (1.0 - t) + SKY_BLUE * t

    def _generate_tiles(self, width: int, height: int) -> list[Tuple[int, int, int, int]]:
        """Generate tiles for parallel rendering.

        Args:
            width: Image width
            height: Image height

        Returns:
            List of tiles as (x0, y0, x1, y1) tuples
        """
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles

    def to_ldr(self, hdr_image: np.ndarray) -> np.ndarray:
        """Convert a linear image to 8-bit with gamma correction.

        Args:
            hdr_image: Linear image array (float64)

        Returns:
            LDR image as uint8 array
        """
        corrected = np.power(np.clip(hdr_image, 0, None), 1.0 / self.settings.gamma)
        return np.clip(255.99 * corrected, 0, 255).astype(np.uint8)

    def pixels(self, image: np.ndarray) -> Iterator[Tuple[int, int, int]]:
        """Yield 8-bit (r, g, b) triplets, top scanline first, left to right."""
        ldr = self._as_ldr(image)
        for row in ldr:
            for r, g, b in row:
                yield int(r), int(g), int(b)

    def save_image(self, image: np.ndarray, filename: Union[str, Path]) -> None:
        """Save image to file.

        Args:
            image: Image array (linear float or uint8)
            filename: Output filename; ``.ppm`` writes plain-text P3,
                other extensions go through Pillow
        """
        path = Path(filename)
        if path.suffix.lower() == '.ppm':
            self._save_ppm(image, path)
        else:
            from PIL import Image as PILImage

            PILImage.fromarray(self._as_ldr(image), 'RGB').save(path)
        logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], path)

    def _save_ppm(self, image: np.ndarray, path: Path) -> None:
        """Write the plain-text P3 variant of the PPM format."""
        height, width = image.shape[:2]
        with open(path, 'w') as f:
            f.write(f"P3\n{width} {height}\n255\n")
            for r, g, b in self.pixels(image):
                f.write(f"{r} {g} {b}\n")

    def _as_ldr(self, image: np.ndarray) -> np.ndarray:
        if image.dtype == np.uint8:
            return image
        return self.to_ldr(image)
