import unittest

from dotplate.palettes import (
    COLOR_PALETTES,
    get_palette,
    is_valid_palette,
    palette_help_text,
    palette_names,
    palettes_by_deficiency,
)


class TestPalettes(unittest.TestCase):

    def test_lookup_ignores_case(self):
        palette = get_palette("Ishihara-Classic")
        self.assertIsNotNone(palette)
        self.assertEqual(palette.on_color, "#8B4513")
        self.assertEqual(palette.off_color, "#9ACD32")

    def test_unknown_palette(self):
        self.assertIsNone(get_palette("sepia"))
        self.assertFalse(is_valid_palette("sepia"))
        self.assertTrue(is_valid_palette("MONOCHROME"))

    def test_default_matches_default_colors(self):
        palette = COLOR_PALETTES["default"]
        self.assertEqual((palette.on_color, palette.off_color), ("#FF6B35", "#4ECDC4"))

    def test_names(self):
        names = palette_names()
        self.assertEqual(len(names), 11)
        self.assertIn("tritanopia", names)

    def test_by_deficiency(self):
        self.assertEqual(list(palettes_by_deficiency("protanopia")), ["protanopia"])
        self.assertEqual(palettes_by_deficiency("none"), {})

    def test_help_text_lists_every_palette(self):
        text = palette_help_text()
        self.assertTrue(text.startswith("Available color palettes:"))
        for name in palette_names():
            self.assertIn(name, text)


if __name__ == '__main__':
    unittest.main()
