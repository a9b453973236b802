"""Tests for Vec3 class."""

import pytest
import math
import numpy as np

from pathweaver.vec3 import Vec3, Point3, Color


class TestVec3Creation:
    """Test Vec3 construction."""

    def test_default_constructor(self):
        v = Vec3()
        assert v.x == 0.0
        assert v.y == 0.0
        assert v.z == 0.0

    def test_value_constructor(self):
        v = Vec3(1.0, 2.0, 3.0)
        assert v.x == 1.0
        assert v.y == 2.0
        assert v.z == 3.0

    def test_from_array(self):
        v = Vec3.from_array(np.array([1.0, 2.0, 3.0]))
        assert (v.x, v.y, v.z) == (1.0, 2.0, 3.0)

    def test_color_aliases(self):
        c = Color(0.5, 0.6, 0.7)
        assert c.r == 0.5
        assert c.g == 0.6
        assert c.b == 0.7

    def test_is_immutable(self):
        v = Vec3(1, 2, 3)
        with pytest.raises(AttributeError):
            v.x = 5

    def test_from_array_copies_its_input(self):
        arr = np.array([1.0, 2.0, 3.0])
        v = Vec3.from_array(arr)
        arr[0] = 99.0
        assert v.x == 1.0
        assert v == Vec3(1, 2, 3)

    def test_arithmetic_results_are_independent(self):
        a = Vec3(1, 2, 3)
        b = -a
        arr = b.to_array()
        arr[:] = 0
        assert b == Vec3(-1, -2, -3)
        assert a == Vec3(1, 2, 3)

    def test_iteration(self):
        assert list(Vec3(1, 2, 3)) == [1.0, 2.0, 3.0]


class TestVec3Arithmetic:
    """Test Vec3 arithmetic operations."""

    def test_negation(self):
        assert -Vec3(1, 2, 3) == Vec3(-1, -2, -3)

    def test_addition(self):
        assert Vec3(1, 2, 3) + Vec3(4, 5, 6) == Vec3(5, 7, 9)

    def test_subtraction(self):
        assert Vec3(4, 5, 6) - Vec3(1, 2, 3) == Vec3(3, 3, 3)

    def test_scalar_multiplication_both_sides(self):
        v = Vec3(1, 2, 3)
        assert v * 2 == Vec3(2, 4, 6)
        assert 2 * v == Vec3(2, 4, 6)

    def test_componentwise_multiplication(self):
        assert Vec3(1, 2, 3) * Vec3(2, 3, 4) == Vec3(2, 6, 12)

    def test_scalar_division(self):
        assert Vec3(2, 4, 6) / 2 == Vec3(1, 2, 3)

    def test_componentwise_division(self):
        assert Vec3(4, 1, 1) / Vec3(2, 1, 1) == Vec3(2, 1, 1)

    def test_operations_return_new_values(self):
        v = Vec3(1, 1, 1)
        w = v + Vec3(1, 0, 0)
        assert v == Vec3(1, 1, 1)
        assert w is not v


class TestVec3Algebra:
    """Algebraic identities over a spread of random vectors."""

    @pytest.fixture
    def pairs(self, rng):
        return [(Vec3.random(rng, -10, 10), Vec3.random(rng, -10, 10)) for _ in range(50)]

    def test_addition_commutes(self, pairs):
        for a, b in pairs:
            assert a + b == b + a

    def test_subtraction_inverts_addition(self, pairs):
        for a, b in pairs:
            assert (a - b) + b == a

    def test_scalar_distributes(self, pairs):
        for k, (a, b) in zip(np.linspace(-3, 3, len(pairs)), pairs):
            k = float(k)
            assert k * (a + b) == k * a + k * b

    def test_unit_vector_has_unit_length(self, pairs):
        for a, _ in pairs:
            assert abs(a.normalize().length() - 1.0) < 1e-12

    def test_self_dot_is_squared_length(self, pairs):
        for a, _ in pairs:
            assert math.isclose(a.dot(a), a.length_squared())


class TestVec3VectorOps:
    """Test Vec3 vector operations."""

    def test_length(self):
        assert Vec3(3, 4, 0).length() == 5.0

    def test_length_squared(self):
        assert Vec3(3, 4, 0).length_squared() == 25.0

    def test_normalize(self):
        assert Vec3(3, 4, 0).normalize() == Vec3(0.6, 0.8, 0)

    def test_normalize_zero_vector(self):
        n = Vec3(0, 0, 0).normalize()
        assert n.length() == 0.0
        assert not any(math.isnan(c) for c in n)

    def test_dot_product(self):
        assert Vec3(1, 0, 0).dot(Vec3(0, 1, 0)) == 0.0
        assert Vec3(1, 2, 3).dot(Vec3(4, 5, 6)) == 32.0

    def test_cross_product(self):
        assert Vec3(1, 0, 0).cross(Vec3(0, 1, 0)) == Vec3(0, 0, 1)
        assert Vec3(0, 1, 0).cross(Vec3(1, 0, 0)) == Vec3(0, 0, -1)

    def test_reflect(self):
        incoming = Vec3(1, -1, 0).normalize()
        reflected = incoming.reflect(Vec3(0, 1, 0))
        assert reflected == Vec3(1, 1, 0).normalize()

    def test_double_reflection_is_identity(self, rng):
        for _ in range(50):
            d = Vec3.random(rng, -1, 1)
            n = Vec3.random_in_unit_sphere(rng).normalize()
            assert d.reflect(n).reflect(n) == d


class TestVec3Refract:
    """Test Vec3 refraction."""

    def test_straight_through(self):
        refracted = Vec3(0, -1, 0).refract(Vec3(0, 1, 0), 1.0 / 1.5)
        assert refracted == Vec3(0, -1, 0)

    def test_air_to_glass_bends_toward_normal(self):
        incoming = Vec3(1, -1, 0).normalize()
        refracted = incoming.refract(Vec3(0, 1, 0), 1.0 / 1.5)
        assert refracted is not None
        assert refracted.y < 0
        # sin(theta_t) = sin(theta_i) / 1.5
        sin_t = refracted.normalize().x
        assert math.isclose(sin_t, math.sin(math.pi / 4) / 1.5, rel_tol=1e-9)

    def test_unnormalized_input(self):
        a = Vec3(2, -2, 0).refract(Vec3(0, 1, 0), 1.0 / 1.5)
        b = Vec3(1, -1, 0).refract(Vec3(0, 1, 0), 1.0 / 1.5)
        assert a == b

    def test_total_internal_reflection(self):
        incoming = Vec3(0.9, -0.1, 0).normalize()
        assert incoming.refract(Vec3(0, 1, 0), 1.5) is None


class TestVec3Utility:
    """Test Vec3 utility methods."""

    def test_near_zero(self):
        assert Vec3(1e-10, 1e-10, 1e-10).near_zero()
        assert not Vec3(1, 0, 0).near_zero()

    def test_to_array_is_a_copy(self):
        v = Vec3(1, 2, 3)
        arr = v.to_array()
        arr[0] = 99
        assert v.x == 1


class TestVec3Random:
    """Test Vec3 random generation."""

    def test_random_range(self, rng):
        for _ in range(100):
            v = Vec3.random(rng, -2, 3)
            assert all(-2 <= c < 3 for c in v)

    def test_random_in_unit_sphere(self, rng):
        for _ in range(200):
            assert Vec3.random_in_unit_sphere(rng).length_squared() < 1

    def test_random_in_unit_sphere_fills_volume(self, rng):
        points = [Vec3.random_in_unit_sphere(rng) for _ in range(500)]
        assert any(p.z < -0.5 for p in points)
        assert any(p.z > 0.5 for p in points)

    def test_random_in_unit_disk(self, rng):
        for _ in range(200):
            v = Vec3.random_in_unit_disk(rng)
            assert v.z == 0
            assert v.length_squared() < 1

    def test_seeded_streams_repeat(self):
        a = Vec3.random_in_unit_sphere(np.random.default_rng(3))
        b = Vec3.random_in_unit_sphere(np.random.default_rng(3))
        assert a == b


class TestVec3Comparison:
    """Test Vec3 comparison operations."""

    def test_equality(self):
        assert Vec3(1, 2, 3) == Vec3(1, 2, 3)

    def test_inequality(self):
        assert Vec3(1, 2, 3) != Vec3(1, 2, 4)

    def test_approximate_equality(self):
        assert Vec3(1, 2, 3) == Vec3(1 + 1e-12, 2, 3)

    def test_unhashable(self):
        # Equality is approximate, so vectors cannot be set members or dict keys
        with pytest.raises(TypeError):
            hash(Vec3(0, 0, 0))
        with pytest.raises(TypeError):
            {Vec3(0, 0, 0), Vec3(1e-12, 0, 0)}

    def test_aliases_are_vec3(self):
        assert Point3 is Vec3
        assert Color is Vec3
