"""Scene builders: the classic cover scene and a ground-only scene."""

from __future__ import annotations
import logging
import numpy as np

from .vec3 import Vec3, Color, Point3
from .camera import Camera
from .shapes import Sphere, HittableList
from .materials import Lambertian, Metal, Dielectric

logger = logging.getLogger(__name__)


def _ground() -> Sphere:
    return Sphere(Point3(0, -1000, 0), 1000, Lambertian(Color(0.5, 0.5, 0.5)))


def ground_scene() -> HittableList:
    """A single large diffuse sphere acting as the ground."""
    return HittableList([_ground()])


def random_scene(rng: np.random.Generator) -> HittableList:
    """Create the cover scene: a field of small random spheres around three
    large ones (glass, diffuse and polished metal) on a grey ground.
    """
    world = HittableList()
    glass = Dielectric(1.5)

    for a in reversed(range(-11, 11)):
        for b in reversed(range(-11, 11)):
            choose_mat = rng.random()
            center = Point3(a + 0.9 + rng.random(), 0.2, b + 0.9 + rng.random())

            # Keep clear of the large metal sphere
            if (center - Point3(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = Vec3.random(rng) * Vec3.random(rng)
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                albedo = Vec3.random(rng, 0.5, 1.0)
                material = Metal(albedo, 0.5 * rng.random())
            else:
                material = glass
            world.add(Sphere(center, 0.2, material))

    world.add(_ground())
    world.add(Sphere(Point3(0, 1, 0), 1.0, glass))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    logger.debug("Built cover scene with %d spheres", len(world))
    return world


def cover_camera(aspect_ratio: float) -> Camera:
    """Camera framing the cover scene with a slight depth-of-field blur."""
    return Camera(
        look_from=Point3(13, 2, 3),
        look_at=Point3(0, 0, 0),
        vup=Vec3(0, 1, 0),
        vfov=20,
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=10.0
    )


def ground_camera(aspect_ratio: float) -> Camera:
    """Pinhole camera one unit above the ground looking at the horizon."""
    return Camera(
        look_from=Point3(0, 1, 0),
        look_at=Point3(0, 1, -1),
        vup=Vec3(0, 1, 0),
        vfov=90,
        aspect_ratio=aspect_ratio,
        aperture=0.0,
        focus_dist=1.0
    )
