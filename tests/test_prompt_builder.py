import unittest

from reverse_ai.data.constants import Mode
from reverse_ai.services.prompting import build_prompt


class TestBuildPrompt(unittest.TestCase):
    def test_reverse_is_fixed_and_ignores_parameter(self):
        prompt = build_prompt(Mode.REVERSE)
        self.assertIn("opposite gender", prompt)
        self.assertIn("Photorealistic", prompt)
        self.assertEqual(prompt, build_prompt(Mode.REVERSE, "anything"))

    def test_age_embeds_target_age(self):
        prompt = build_prompt(Mode.AGE, 60)
        self.assertIn("at age 60", prompt)
        self.assertIn("Maintain their identity", prompt)

    def test_age_outside_slider_range_passes_through(self):
        self.assertIn("at age 150", build_prompt(Mode.AGE, 150))
        self.assertIn("at age 1.", build_prompt(Mode.AGE, 1))

    def test_style_embeds_description_verbatim(self):
        desc = "Give them a {weird} hat with 100% more feathers"
        prompt = build_prompt(Mode.STYLE, desc)
        self.assertIn(f"description: {desc}.", prompt)
        self.assertTrue(prompt.endswith("Photorealistic."))

    def test_style_empty_description_is_not_rejected(self):
        prompt = build_prompt(Mode.STYLE, "")
        self.assertIn("following description: .", prompt)

    def test_country_mentions_country_and_identity(self):
        prompt = build_prompt(Mode.COUNTRY, "Japan")
        self.assertIn("born and raised in Japan", prompt)
        self.assertIn("reflect Japan culture", prompt)
        self.assertIn("facial features and identity", prompt)

    def test_unknown_mode_raises(self):
        with self.assertRaises(ValueError):
            build_prompt("PAINT", None)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
