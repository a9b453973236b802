"""
Materials system.

Implements:
- Lambertian diffuse
- Metal (specular reflection with fuzz)
- Dielectric (glass, water - with refraction)

A material turns an incoming ray and a hit into an attenuation color and
a scattered ray, or absorbs the ray. Materials hold no mutable state and
may be shared between any number of shapes.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

import numpy as np

from .vec3 import Vec3, Color
from .ray import Ray

if TYPE_CHECKING:
    from .shapes import HitRecord


@dataclass
class ScatterResult:
    """Result of a material scatter operation."""
    scattered_ray: Ray
    attenuation: Color


class Material(ABC):
    """Abstract base class for materials."""

    @abstractmethod
    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray
            hit: Intersection that produced this call
            rng: Random stream for stochastic choices

        Returns:
            ScatterResult if ray scatters, None if absorbed
        """
        pass


class Lambertian(Material):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Color):
        """Create a Lambertian material.

        Args:
            albedo: The base color (RGB, each component 0-1)
        """
        self.albedo = albedo

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        direction = hit.normal + Vec3.random_in_unit_sphere(rng)
        return ScatterResult(
            scattered_ray=Ray(hit.point, direction),
            attenuation=self.albedo,
        )

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"


class Metal(Material):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: Color, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            fuzz: Surface roughness (0 = mirror), clamped to at most 1

        Raises:
            ValueError: If fuzz is negative
        """
        if fuzz < 0:
            raise ValueError(f"Metal fuzz must be non-negative, got {fuzz}")
        self.albedo = albedo
        self.fuzz = min(float(fuzz), 1.0)

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        reflected = ray_in.direction.normalize().reflect(hit.normal)

        # Fuzz perturbs the mirror direction
        if self.fuzz > 0:
            reflected = reflected + Vec3.random_in_unit_sphere(rng) * self.fuzz

        # A fuzzed ray that dips below the surface is absorbed
        if reflected.dot(hit.normal) <= 0:
            return None
        return ScatterResult(
            scattered_ray=Ray(hit.point, reflected),
            attenuation=self.albedo,
        )

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"


class Dielectric(Material):
    """Dielectric (glass-like) material with refraction.

    The hit normal always points out of the sphere, so the sign of
    dot(direction, normal) tells whether the ray is entering or leaving
    the medium. Every scatter succeeds; the choice between reflection and
    refraction is made stochastically with Schlick's reflectance.
    """

    def __init__(self, index: float = 1.5):
        """Create a dielectric material.

        Args:
            index: Index of refraction (1.0 = air, 1.5 = glass, 2.4 = diamond)

        Raises:
            ValueError: If the index is not positive
        """
        if index <= 0:
            raise ValueError(f"Refractive index must be positive, got {index}")
        self.index = float(index)

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        direction = ray_in.direction
        reflected = direction.reflect(hit.normal)
        cosine = direction.dot(hit.normal) / direction.length()

        if cosine > 0:
            # Leaving the medium
            outward_normal = -hit.normal
            ni_nt = self.index
        else:
            outward_normal = hit.normal
            ni_nt = 1.0 / self.index
            cosine = -cosine

        refracted = direction.refract(outward_normal, ni_nt)
        if refracted is None:
            # Total internal reflection
            reflect_prob = 1.0
        else:
            reflect_prob = self.reflectance(cosine, self.index)

        if rng.random() < reflect_prob:
            scattered = Ray(hit.point, reflected)
        else:
            scattered = Ray(hit.point, refracted)

        return ScatterResult(
            scattered_ray=scattered,
            attenuation=Color(1.0, 1.0, 1.0),
        )

    @staticmethod
    def reflectance(cosine: float, index: float) -> float:
        """Schlick's approximation for reflectance."""
        r0 = (1 - index) / (1 + index)
        r0 = r0 * r0
        return r0 + (1 - r0) * pow(1 - cosine, 5)

    def __repr__(self) -> str:
        return f"Dielectric(index={self.index})"
