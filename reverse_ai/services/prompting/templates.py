# reverse_ai/services/prompting/templates.py
PROMPT_REVERSE = (
    "Transform the person in this image to look like the opposite gender. "
    "Keep the same pose, background, and facial expression identity. Photorealistic."
)

PROMPT_AGE = (
    "Generate a photorealistic version of this person at age {{TARGET_AGE}}. "
    "Maintain their identity, pose, and background."
)

PROMPT_STYLE = (
    "Edit this image based on the following description: {{STYLE_DESCRIPTION}}. "
    "Maintain the original pose and composition. Photorealistic."
)

PROMPT_COUNTRY = (
    "Generate a photorealistic portrait of this person as if they were born and raised in "
    "{{COUNTRY}}. Adapt their clothing, styling, and background to reflect {{COUNTRY}} "
    "culture and heritage while maintaining their facial features and identity."
)
