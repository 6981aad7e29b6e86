from unittest import TestCase

from datetime import datetime

import numpy as np

from flightgeom import angles


class TestNormalizeAngle(TestCase):

    def test_normalize_angle(self):

        self.assertEqual(angles.normalize_angle(0), 0)
        self.assertEqual(angles.normalize_angle(180), 180)
        self.assertEqual(angles.normalize_angle(-180), 180)
        self.assertEqual(angles.normalize_angle(181), -179)
        self.assertEqual(angles.normalize_angle(-181), 179)
        self.assertEqual(angles.normalize_angle(360), 0)
        self.assertEqual(angles.normalize_angle(-360), 0)
        self.assertEqual(angles.normalize_angle(720), 0)
        self.assertEqual(angles.normalize_angle(540), 180)
        self.assertEqual(angles.normalize_angle(-540), 180)
        self.assertEqual(angles.normalize_angle(-90.5), -90.5)

        self.assertIsInstance(angles.normalize_angle(45), float)

    def test_normalize_angle_range(self):

        rng = np.random.default_rng(2024)

        values = rng.uniform(-10000, 10000, 1000)

        result = angles.normalize_angle(values)

        self.assertEqual(result.shape, values.shape)
        self.assertTrue(((result > -180) & (result <= 180)).all())

        # the wrapped angle is the same direction as the input
        np.testing.assert_allclose(np.cos(np.radians(result)), np.cos(np.radians(values)), atol=1e-9)
        np.testing.assert_allclose(np.sin(np.radians(result)), np.sin(np.radians(values)), atol=1e-9)

    def test_normalize_angle_periodic(self):

        for value in [-725.25, -180, -45.5, 0, 12.75, 179.5, 180, 359.25]:

            with self.subTest(value=value):

                self.assertEqual(angles.normalize_angle(value + 360), angles.normalize_angle(value))
                self.assertEqual(angles.normalize_angle(value - 720), angles.normalize_angle(value))


class TestClampAngleDegrees(TestCase):

    def test_clamp_angle_degrees(self):

        self.assertEqual(angles.clamp_angle_degrees(-1), 359)
        self.assertEqual(angles.clamp_angle_degrees(360), 0)
        self.assertEqual(angles.clamp_angle_degrees(0), 0)
        self.assertEqual(angles.clamp_angle_degrees(359.5), 359.5)
        self.assertEqual(angles.clamp_angle_degrees(725), 5)
        self.assertEqual(angles.clamp_angle_degrees(-725), 355)
        self.assertEqual(angles.clamp_angle_degrees(-360), 0)

        self.assertIsInstance(angles.clamp_angle_degrees(45), float)

    def test_clamp_angle_degrees_tiny_negative(self):

        # -1e-15 + 360 rounds to exactly 360
        self.assertEqual(angles.clamp_angle_degrees(-1e-15), 0)

    def test_clamp_angle_degrees_range(self):

        rng = np.random.default_rng(7)

        values = np.concatenate([rng.uniform(-10000, 10000, 1000), [-1e-300, -1e-14, 360 * 5, -360 * 5]])

        result = angles.clamp_angle_degrees(values)

        self.assertTrue(((result >= 0) & (result < 360)).all())

    def test_differs_from_normalize(self):

        self.assertEqual(angles.clamp_angle_degrees(270), 270)
        self.assertEqual(angles.normalize_angle(270), -90)


class TestClamp(TestCase):

    def test_clamp(self):

        self.assertEqual(angles.clamp(-1, 0, 10), 0)
        self.assertEqual(angles.clamp(11, 0, 10), 10)
        self.assertEqual(angles.clamp(5, 0, 10), 5)
        self.assertEqual(angles.clamp(0, 0, 10), 0)
        self.assertEqual(angles.clamp(10, 0, 10), 10)
        self.assertEqual(angles.clamp(0.5, 0.25, 0.75), 0.5)

    def test_clamp_ordered_types(self):

        self.assertEqual(angles.clamp('z', 'a', 'm'), 'm')
        self.assertEqual(angles.clamp('b', 'a', 'm'), 'b')

        start = datetime(2020, 1, 1)
        end = datetime(2021, 1, 1)

        self.assertEqual(angles.clamp(datetime(2019, 6, 1), start, end), start)
        self.assertEqual(angles.clamp(datetime(2022, 6, 1), start, end), end)

    def test_clamp_returns_input_object(self):

        value = 3.5

        self.assertIs(angles.clamp(value, 0.0, 10.0), value)

    def test_clamp_inverted_range(self):

        self.assertEqual(angles.clamp(5, 10, 0), 10)
        self.assertEqual(angles.clamp(-1, 10, 0), 10)
        self.assertEqual(angles.clamp(20, 10, 0), 0)
