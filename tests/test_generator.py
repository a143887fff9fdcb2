import itertools
import math
import os
import tempfile
import unittest

import numpy as np
from PIL import Image

from dotplate.config import PlateConfig
from dotplate.generator import PlateGenerator
from dotplate.text import TextMetrics


class FakeRasterizer:
    """Draws a black square of side `font_size` in the middle of the canvas."""

    def measure(self, word, font_size, font_family):
        return TextMetrics(0.6 * font_size * len(word), 0.7 * font_size, 0.2 * font_size)

    def render(self, text, font_size, font_family, width, height,
               text_color="#000000", background_color="#FFFFFF"):
        pixels = np.full((height, width, 3), 255, dtype=np.uint8)
        half = int(font_size / 2)
        cx, cy = width // 2, height // 2
        pixels[max(cy - half, 0):cy + half, max(cx - half, 0):cx + half] = 0
        return pixels


def small_config(**options):
    defaults = dict(width=300, height=300, margin=10, font_size=100, max_attempts=2000, seed=3)
    defaults.update(options)
    return PlateConfig(**defaults)


class TestPlateGenerator(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def path(self, *parts):
        return os.path.join(self.tmp.name, *parts)

    # --- Test Pipeline ---

    def test_create_plate(self):
        plate = PlateGenerator(small_config(), FakeRasterizer()).create_plate("8")
        self.assertEqual(plate.mask.shape, (300, 300))
        self.assertTrue(plate.mask[150, 150])
        self.assertFalse(plate.mask[20, 20])
        self.assertGreater(len(plate.circles), 0)
        self.assertEqual(plate.context.font_size, 100)

    def test_text_circles_get_on_color(self):
        config = small_config(on_color="#111111", off_color="#EEEEEE", max_attempts=4000)
        plate = PlateGenerator(config, FakeRasterizer()).create_plate("8")
        self.assertEqual({c.color for c in plate.circles}, {"#111111", "#EEEEEE"})
        for c in plate.circles:
            if math.hypot(c.x - 150, c.y - 150) + c.radius < 50:
                self.assertEqual(c.color, "#111111")

    def test_font_shrinks_to_region(self):
        """A 600px request on a 300px canvas is reduced to fit 224px."""
        plate = PlateGenerator(small_config(font_size=600), FakeRasterizer()).create_plate("8")
        self.assertLess(plate.context.font_size, 600)
        self.assertTrue(plate.context.font_adjusted)
        self.assertLessEqual(0.9 * plate.context.font_size, 224)

    def test_multi_word_context(self):
        plate = PlateGenerator(small_config(), FakeRasterizer()).create_plate("A B")
        self.assertTrue(plate.context.multi_line)
        self.assertEqual(plate.context.words, ("A", "B"))

    def test_seed_is_reproducible(self):
        first = PlateGenerator(small_config(seed=11), FakeRasterizer()).create_plate("8")
        second = PlateGenerator(small_config(seed=11), FakeRasterizer()).create_plate("8")
        self.assertEqual(first.circles, second.circles)

    def test_explicit_rng(self):
        generator = PlateGenerator(small_config(), FakeRasterizer())
        first = generator.create_plate("8", np.random.default_rng(5))
        second = generator.create_plate("8", np.random.default_rng(5))
        self.assertEqual(first.circles, second.circles)

    # --- Test Palettes ---

    def test_palette_overrides_colors(self):
        generator = PlateGenerator(small_config(palette="Protanopia"), FakeRasterizer())
        self.assertEqual(generator.config.on_color, "#8B0000")
        self.assertEqual(generator.config.off_color, "#90EE90")

    def test_unknown_palette_warns(self):
        with self.assertLogs("dotplate.generator", level="WARNING") as logs:
            generator = PlateGenerator(small_config(palette="nope", on_color="#123456"), FakeRasterizer())
        self.assertIn("nope", logs.output[0])
        self.assertEqual(generator.config.on_color, "#123456")

    # --- Test Output ---

    def test_generate_png(self):
        output = self.path("plate.png")
        result = PlateGenerator(small_config(), FakeRasterizer()).generate("8", output)
        self.assertGreater(result.circle_count, 0)
        self.assertEqual(result.text, "8")
        self.assertEqual(result.output_path, output)
        self.assertEqual(result.font_size_used, 100)
        with Image.open(output) as image:
            self.assertEqual(image.size, (300, 300))
            self.assertEqual(image.format, "PNG")

    def test_generate_svg(self):
        output = self.path("plate.svg")
        result = PlateGenerator(small_config(format="svg"), FakeRasterizer()).generate("8", output)
        with open(output, encoding="utf-8") as f:
            svg = f.read()
        self.assertTrue(svg.startswith("<?xml"))
        self.assertEqual(svg.count("<circle "), result.circle_count)

    def test_auto_format_uses_extension(self):
        output = self.path("plate.svg")
        PlateGenerator(small_config(format="auto"), FakeRasterizer()).generate("8", output)
        with open(output, encoding="utf-8") as f:
            self.assertIn("<svg", f.read())

    def test_creates_parent_directories(self):
        output = self.path("nested", "deeper", "plate.png")
        PlateGenerator(small_config(max_attempts=200), FakeRasterizer()).generate("8", output)
        self.assertTrue(os.path.exists(output))

    def test_write_failure_propagates(self):
        blocker = self.path("blocker")
        with open(blocker, "w") as f:
            f.write("not a directory")
        with self.assertRaises(OSError):
            PlateGenerator(small_config(max_attempts=200), FakeRasterizer()).generate(
                "8", os.path.join(blocker, "plate.png"))


class TestPlateScenarios(unittest.TestCase):
    """End-to-end runs with the Pillow rasterizer."""

    def test_digit_on_small_canvas(self):
        config = PlateConfig(width=400, height=400, margin=20, min_radius=5, max_radius=10, seed=0)
        plate = PlateGenerator(config).create_plate("8")
        circles = plate.circles
        self.assertGreater(len(circles), 0)
        self.assertTrue(plate.mask.any())
        for c in circles:
            self.assertTrue(20 <= c.x - c.radius and c.x + c.radius <= 380)
            self.assertTrue(20 <= c.y - c.radius and c.y + c.radius <= 380)
        for a, b in itertools.combinations(circles, 2):
            self.assertGreaterEqual(math.hypot(a.x - b.x, a.y - b.y), a.radius + b.radius)

    def test_circular_plate(self):
        config = PlateConfig(circular=True, max_attempts=3000, seed=1)
        plate = PlateGenerator(config).create_plate("A B")
        self.assertEqual(plate.context.constraints.inscribed_radius, 350)
        for c in plate.circles:
            self.assertLessEqual(math.hypot(c.x - 400, c.y - 400) + c.radius, 350 + 1e-9)


if __name__ == '__main__':
    unittest.main()
