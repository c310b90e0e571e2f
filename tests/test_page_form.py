import unittest

from apollo_cms.services.page_content import ContentValidationError, default_content
from apollo_cms.services.page_form import PageFormState


def _stored_about_page() -> dict:
    content = default_content("about-us")
    content["banner"]["heading"] = "About Apollo"
    return {
        "title": "About Us",
        "slug": "about-us",
        "status": "Published",
        "author": "Editor",
        "pageType": "about-us",
        "content": content,
    }


class PageFormStateTests(unittest.TestCase):
    def test_new_page_title_generates_slug(self):
        form = PageFormState()
        form.set_title("Our Programs")
        self.assertEqual(form.slug, "our-programs")
        form.set_title("Our Programs 2025")
        self.assertEqual(form.slug, "our-programs-2025")

    def test_stored_slug_is_not_regenerated(self):
        form = PageFormState(_stored_about_page())
        form.set_title("About Apollo University")
        self.assertEqual(form.slug, "about-us")

    def test_select_home_resets_to_defaults(self):
        form = PageFormState()
        form.select_page_type("home")
        self.assertEqual(form.items("heroSection.slides"), [])
        self.assertEqual(form.items("counters.counters"), [])

        form.append_item("heroSection.slides")
        slides = form.items("heroSection.slides")
        self.assertEqual(len(slides), 1)
        self.assertEqual(len(slides[0]["buttons"]), 1)

    def test_switch_discards_unsaved_content(self):
        form = PageFormState()
        form.select_page_type("home")
        form.append_item("heroSection.slides")
        form.select_page_type("generic")
        form.select_page_type("home")
        self.assertEqual(form.content, default_content("home"))

    def test_switch_back_restores_only_stored_content(self):
        stored = _stored_about_page()
        form = PageFormState(stored)
        form.content["banner"]["heading"] = "Edited in session"

        form.select_page_type("contact")
        self.assertEqual(form.content, default_content("contact"))

        form.select_page_type("about-us")
        self.assertEqual(form.content, stored["content"])

    def test_hero_buttons_stay_within_bounds(self):
        form = PageFormState()
        form.select_page_type("home")
        form.append_item("heroSection.slides")
        path = "heroSection.slides.0.buttons"
        self.assertFalse(form.can_remove(path))
        form.append_item(path)
        form.append_item(path)
        self.assertFalse(form.can_append(path))
        self.assertTrue(form.can_remove(path))
        self.assertEqual(len(form.items(path)), 3)

    def test_submit_collects_base_and_content_errors(self):
        form = PageFormState()
        form.select_page_type("home")
        form.append_item("heroSection.slides")
        form.items("heroSection.slides")[0]["imgSrc"] = "nope"
        form.set_slug("Bad Slug")
        form.author = "x" * 51

        with self.assertRaises(ContentValidationError) as ctx:
            form.submit()
        errors = ctx.exception.errors
        self.assertEqual(errors["title"], "Title is required")
        self.assertEqual(errors["slug"], "Slug must be lowercase alphanumeric with hyphens")
        self.assertEqual(errors["author"], "Author name must be 50 characters or less")
        self.assertEqual(errors["content.heroSection.slides.0.imgSrc"], "Invalid URL format")
        self.assertEqual(form.validate(), errors)

    def test_submit_returns_payload(self):
        form = PageFormState()
        form.set_title("Our Programs")
        form.author = "Editor"
        form.select_page_type("programs")
        form.append_item("programTabs.tabs")
        payload = form.submit()

        self.assertEqual(payload.slug, "our-programs")
        self.assertEqual(payload.status, "Draft")
        self.assertEqual(payload.page_type, "programs")
        self.assertEqual(len(payload.content["programTabs"]["tabs"]), 1)
        self.assertEqual(payload.as_document()["pageType"], "programs")

    def test_title_length_limit(self):
        form = PageFormState()
        form.set_title("x" * 101)
        self.assertEqual(form.validate()["title"], "Title must be 100 characters or less")
