from unittest import TestCase

import numpy as np

from flightgeom import vectors as vec


class TestTupleConversions(TestCase):

    def test_to_tuple(self):

        t = vec.to_tuple(np.array([1.5, -2.25, 3.0]))

        self.assertEqual(t, (1.5, -2.25, 3.0))
        self.assertIsInstance(t, tuple)
        self.assertTrue(all(type(component) is float for component in t))

        t = vec.to_tuple([0.0, 0.0, 0.0, 1.0])

        self.assertEqual(t, (0.0, 0.0, 0.0, 1.0))

        with self.assertRaises(ValueError):
            vec.to_tuple([1, 2])

        with self.assertRaises(ValueError):
            vec.to_tuple(np.eye(3))

    def test_to_vector(self):

        v = vec.to_vector((1, 2, 3))

        self.assertEqual(v.dtype, np.float64)
        np.testing.assert_array_equal(v, [1, 2, 3])

        with self.assertRaises(ValueError):
            vec.to_vector((1, 2, 3, 4))

    def test_to_quaternion(self):

        q = vec.to_quaternion((0.1, 0.2, 0.3, 0.4))

        self.assertEqual(q.dtype, np.float64)
        np.testing.assert_array_equal(q, [0.1, 0.2, 0.3, 0.4])

        with self.assertRaises(ValueError):
            vec.to_quaternion((1, 2, 3))

    def test_round_trip_is_exact(self):

        rng = np.random.default_rng(42)

        for _ in range(100):

            v = rng.normal(size=3) * 10.0 ** rng.integers(-300, 300)
            q = rng.normal(size=4)

            np.testing.assert_array_equal(vec.to_vector(vec.to_tuple(v)), v)
            np.testing.assert_array_equal(vec.to_quaternion(vec.to_tuple(q)), q)

    def test_to_vector_copies(self):

        original = np.array([1.0, 2.0, 3.0])

        v = vec.to_vector(original)
        v[0] = 10

        self.assertEqual(original[0], 1.0)


class TestSign(TestCase):

    def test_sign(self):

        np.testing.assert_array_equal(vec.sign([-3.5, 0, 2]), [-1, 0, 1])
        np.testing.assert_array_equal(vec.sign([[-1, 1], [0, 5], [7, -0.1]]), [[-1, 1], [0, 1], [1, -1]])


class TestPower(TestCase):

    def test_power(self):

        np.testing.assert_array_equal(vec.power([1, 2, 3], 2), [1, 4, 9])
        np.testing.assert_array_almost_equal(vec.power([4, 9, 16], 0.5), [2, 3, 4])
        np.testing.assert_array_equal(vec.power([-2, 3, 0], 3), [-8, 27, 0])

    def test_power_negative_base_fractional_exponent(self):

        result = vec.power([-4, 4, 1], 0.5)

        self.assertTrue(np.isnan(result[0]))
        np.testing.assert_array_equal(result[1:], [2, 1])


class TestVectorInverse(TestCase):

    def test_vector_inverse(self):

        np.testing.assert_array_equal(vec.vector_inverse([2, -4, 0.5]), [0.5, -0.25, 2])

    def test_vector_inverse_zero(self):

        result = vec.vector_inverse([0.0, -0.0, 1.0])

        self.assertEqual(result[0], np.inf)
        self.assertEqual(result[1], -np.inf)
        self.assertEqual(result[2], 1)


class TestReduceAngles(TestCase):

    def test_reduce_angles(self):

        np.testing.assert_array_equal(vec.reduce_angles([190, -190, 720]), [-170, 170, 0])
        np.testing.assert_array_equal(vec.reduce_angles([180, -180, 45]), [180, 180, 45])

        self.assertEqual(vec.reduce_angles([1, 2, 3]).shape, (3,))


class TestRoundVector(TestCase):

    def test_round_vector(self):

        v = np.array([1.23456, -2.34567, 3.45678], dtype=np.float32)

        result = vec.round_vector(v, 2)

        self.assertEqual(result.dtype, np.float32)
        np.testing.assert_array_equal(result, np.array([1.23, -2.35, 3.46], dtype=np.float32))

    def test_round_vector_half_to_even(self):

        v = np.array([0.5, 1.5, 2.5], dtype=np.float32)

        np.testing.assert_array_equal(vec.round_vector(v, 0), [0, 2, 2])

        v = np.array([0.125, 0.375, -0.625], dtype=np.float32)

        np.testing.assert_array_equal(vec.round_vector(v, 2), np.array([0.12, 0.38, -0.62], dtype=np.float32))


class TestLinearAlgebra(TestCase):

    def test_dot(self):

        self.assertEqual(vec.dot([1, 2, 3], [4, 5, 6]), 32)
        np.testing.assert_array_equal(vec.dot([[1, 0], [2, 1], [3, 0]], [[4, 0], [5, 7], [6, 0]]), [32, 7])

    def test_cross(self):

        np.testing.assert_array_equal(vec.cross([1, 2, 3], [4, 5, 6]), [-3, 6, -3])
        np.testing.assert_array_equal(vec.cross([0, 1, 0], [0, 0, 1]), [1, 0, 0])
        np.testing.assert_array_equal(vec.cross([[1, 0], [0, 1], [0, 0]], [[0, 0], [1, 0], [0, 1]]),
                                      [[0, 1], [0, 0], [1, 0]])

    def test_vector_norm(self):

        self.assertAlmostEqual(vec.vector_norm([1, 2, 2]), 3)
        np.testing.assert_array_almost_equal(vec.vector_norm([[1, 3], [2, 0], [2, 4]]), [3, 5])

    def test_unit(self):

        np.testing.assert_array_almost_equal(vec.unit([0, 3, 4]), [0, 0.6, 0.8])
        np.testing.assert_array_almost_equal(vec.unit([[0, 2], [3, 0], [4, 0]]), [[0, 1], [0.6, 0], [0.8, 0]])

        self.assertTrue(np.isnan(vec.unit([0, 0, 0])).all())


class TestOrthoNormalize(TestCase):

    def check_orthonormal(self, normal, tangent):

        self.assertAlmostEqual(np.linalg.norm(normal), 1, places=12)
        self.assertAlmostEqual(np.linalg.norm(tangent), 1, places=12)
        self.assertAlmostEqual(normal @ tangent, 0, places=12)

    def test_ortho_normalize(self):

        normal, tangent = vec.ortho_normalize([0, 0, 5], [0, 2, 2])

        np.testing.assert_array_almost_equal(normal, [0, 0, 1])
        np.testing.assert_array_almost_equal(tangent, [0, 1, 0])

        normal, tangent = vec.ortho_normalize([1, 1, 0], [1, 0, 0])

        np.testing.assert_array_almost_equal(normal, [np.sqrt(2) / 2, np.sqrt(2) / 2, 0])
        np.testing.assert_array_almost_equal(tangent, [np.sqrt(2) / 2, -np.sqrt(2) / 2, 0])

    def test_ortho_normalize_random(self):

        rng = np.random.default_rng(11)

        for _ in range(200):

            normal_in = rng.normal(size=3) * rng.uniform(1e-3, 1e3)
            tangent_in = rng.normal(size=3) * rng.uniform(1e-3, 1e3)

            normal, tangent = vec.ortho_normalize(normal_in, tangent_in)

            self.check_orthonormal(normal, tangent)

            # the normal keeps its direction and the tangent stays in the plane of the inputs
            np.testing.assert_array_almost_equal(normal, normal_in / np.linalg.norm(normal_in))
            self.assertGreater(tangent @ tangent_in, 0)
            self.assertAlmostEqual(np.cross(normal_in, tangent_in) @ tangent, 0, places=6)

    def test_ortho_normalize_extreme_magnitudes(self):

        normal, tangent = vec.ortho_normalize([1e-150, 0, 0], [1e150, 1e150, 0])

        self.check_orthonormal(normal, tangent)
        np.testing.assert_array_almost_equal(tangent, [0, 1, 0])

    def test_ortho_normalize_does_not_modify_inputs(self):

        normal_in = np.array([0.0, 0.0, 5.0])
        tangent_in = np.array([0.0, 2.0, 2.0])

        vec.ortho_normalize(normal_in, tangent_in)

        np.testing.assert_array_equal(normal_in, [0, 0, 5])
        np.testing.assert_array_equal(tangent_in, [0, 2, 2])

    def test_ortho_normalize_vectorized(self):

        normal, tangent = vec.ortho_normalize([[0, 1], [0, 1], [5, 0]], [[0, 1], [2, 0], [2, 0]])

        np.testing.assert_array_almost_equal(normal, [[0, np.sqrt(2) / 2], [0, np.sqrt(2) / 2], [1, 0]])
        np.testing.assert_array_almost_equal(tangent, [[0, np.sqrt(2) / 2], [1, -np.sqrt(2) / 2], [0, 0]])

    def test_ortho_normalize_parallel(self):

        with self.assertLogs('flightgeom.vectors', level='DEBUG'):
            normal, tangent = vec.ortho_normalize([0, 0, 1], [0, 0, 3])

        np.testing.assert_array_equal(normal, [0, 0, 1])
        self.assertFalse(np.isfinite(tangent).all())
