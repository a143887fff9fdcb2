import unittest

import numpy as np

from dotplate.luminance import classify, relative_luminance, srgb_to_linear


class TestLuminance(unittest.TestCase):

    # --- Test Luminance Formula ---

    def test_black_and_white(self):
        """Black has zero luminance, white has full luminance."""
        self.assertAlmostEqual(float(relative_luminance((0, 0, 0))), 0.0)
        self.assertAlmostEqual(float(relative_luminance((255, 255, 255))), 1.0)

    def test_mid_gray_is_linearized(self):
        """sRGB 128 is much darker than 0.5 once linearized."""
        self.assertAlmostEqual(float(relative_luminance((128, 128, 128))), 0.2159, places=3)

    def test_linear_segment(self):
        """Small values use the linear part of the transfer curve."""
        self.assertAlmostEqual(float(srgb_to_linear(0.04)), 0.04 / 12.92)

    def test_channel_weights(self):
        """Green dominates, blue contributes least."""
        red = float(relative_luminance((255, 0, 0)))
        green = float(relative_luminance((0, 255, 0)))
        blue = float(relative_luminance((0, 0, 255)))
        self.assertAlmostEqual(red, 0.2126)
        self.assertAlmostEqual(green, 0.7152)
        self.assertAlmostEqual(blue, 0.0722)

    # --- Test Mask Classification ---

    def test_dark_pixels_are_foreground(self):
        pixels = np.array([[[0, 0, 0], [255, 255, 255]]], dtype=np.uint8)
        mask = classify(pixels, 0.5)
        self.assertEqual(mask.shape, (1, 2))
        self.assertTrue(mask[0, 0])
        self.assertFalse(mask[0, 1])

    def test_alpha_channel_ignored(self):
        pixels = np.array([[[0, 0, 0, 0], [255, 255, 255, 0]]], dtype=np.uint8)
        np.testing.assert_array_equal(classify(pixels), [[True, False]])

    def test_threshold_is_monotonic(self):
        """Raising the threshold can only add foreground pixels."""
        rng = np.random.default_rng(3)
        pixels = rng.integers(0, 256, size=(40, 30, 3), dtype=np.uint8)
        previous = classify(pixels, 0.0)
        self.assertFalse(previous.any())
        for threshold in (0.1, 0.25, 0.5, 0.75, 1.0):
            current = classify(pixels, threshold)
            self.assertTrue(np.all(current[previous]))
            previous = current

    def test_rejects_flat_buffer(self):
        with self.assertRaises(ValueError):
            classify(np.zeros((10, 10), dtype=np.uint8))


if __name__ == '__main__':
    unittest.main()
