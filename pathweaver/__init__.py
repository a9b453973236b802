"""
Pathweaver - A Python Monte Carlo Path Tracer

Renders scenes of spheres with:
- Lambertian, metal and dielectric materials
- Thin-lens depth of field
- Jittered supersampling with seeded, per-tile random streams
- Tile-based multi-threaded rendering
- PPM and Pillow image output
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .shapes import Sphere, HittableList, HitRecord, Hittable
from .materials import Material, ScatterResult, Lambertian, Metal, Dielectric
from .camera import Camera
from .renderer import Renderer, RenderSettings
from .scenes import random_scene, ground_scene, cover_camera, ground_camera
