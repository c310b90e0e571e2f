import re
import unittest

from apollo_cms.services.slugs import generate_slug, is_valid_page_slug

SLUG_CHARS = re.compile(r"^[a-z0-9-]*$")


class GenerateSlugTests(unittest.TestCase):
    def test_title_becomes_hyphenated_lowercase(self):
        self.assertEqual(generate_slug("Our Programs"), "our-programs")
        self.assertEqual(generate_slug("  About   Us  "), "about-us")

    def test_punctuation_and_underscores(self):
        self.assertEqual(generate_slug("B.Sc. Nursing (2025)!"), "bsc-nursing-2025")
        self.assertEqual(generate_slug("snake_case_title"), "snake-case-title")
        self.assertEqual(generate_slug("--Hello -- World--"), "hello-world")

    def test_non_ascii_is_dropped(self):
        self.assertEqual(generate_slug("Café Résumé"), "caf-rsum")
        self.assertEqual(generate_slug("Программы"), "")

    def test_total_and_idempotent(self):
        samples = ["", "   ", "---", "Our Programs", "a__b", "Ünïcödé & more", "x" * 300, "Tab\tand\nnewline", None]
        for sample in samples:
            slug = generate_slug(sample)
            self.assertRegex(slug, SLUG_CHARS)
            self.assertFalse(slug.startswith("-") or slug.endswith("-"), slug)
            self.assertNotIn("--", slug)
            self.assertEqual(generate_slug(slug), slug)

    def test_generated_slugs_pass_page_slug_rule(self):
        for title in ["Our Programs", "Centre of Excellence 2", "FAQ"]:
            self.assertTrue(is_valid_page_slug(generate_slug(title)))

    def test_page_slug_rule(self):
        self.assertTrue(is_valid_page_slug("our-programs"))
        self.assertFalse(is_valid_page_slug(""))
        self.assertFalse(is_valid_page_slug("Our-Programs"))
        self.assertFalse(is_valid_page_slug("our--programs"))
        self.assertFalse(is_valid_page_slug("-our"))
