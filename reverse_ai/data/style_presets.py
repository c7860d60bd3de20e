# reverse_ai/data/style_presets.py
from pydantic import BaseModel


class StylePreset(BaseModel):
    """A ready-made description the user can drop into the style editor."""
    title: str
    prompt: str


STYLE_PRESETS: dict[str, StylePreset] = {
    "cyberpunk": StylePreset(
        title="Cyberpunk",
        prompt="Make them wear a futuristic cyberpunk jacket with glowing neon accents, technological eyewear, and blue and purple lighting.",
    ),
    "fantasy": StylePreset(
        title="Ethereal Elf",
        prompt="Transform into a high fantasy elf with silver hair, pointed ears, glowing skin, and intricate silver armor in a magical forest.",
    ),
    "professional": StylePreset(
        title="Executive",
        prompt="Change clothing to a high-end navy business suit with a crisp white shirt. Professional studio lighting, confident expression.",
    ),
    "anime": StylePreset(
        title="Anime Style",
        prompt="Transform the image into a high-quality studio ghibli anime style illustration. Vibrant colors, cel shading.",
    ),
    "zombie": StylePreset(
        title="Zombie",
        prompt="Turn the person into a scary zombie with pale decaying skin, dark circles under eyes, and tattered clothes. Horror movie style.",
    ),
}
