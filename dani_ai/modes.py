"""Edit modes for the Dani.ai photo editor.

This module defines the preset edit operations and the instruction text that
is sent to the image model for each of them.
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

# Set up logging
logger = logging.getLogger(__name__)


class EditMode(str, Enum):
    """Edit operations the user can pick."""
    RESTORE = 'RESTORE'
    ENHANCE = 'ENHANCE'
    COLORIZE = 'COLORIZE'
    AGE_CHANGE = 'AGE_CHANGE'
    HEADSHOT = 'HEADSHOT'
    CLOTH_CHANGE = 'CLOTH_CHANGE'
    BG_REMOVE = 'BG_REMOVE'
    BG_CHANGE = 'BG_CHANGE'
    OBJECT_REMOVE = 'OBJECT_REMOVE'
    SKETCH = 'SKETCH'
    CARTOONIFY = 'CARTOONIFY'


class AgeDirection(str, Enum):
    """Target age bucket for the age-change mode."""
    YOUNGER = 'YOUNGER'
    OLDER = 'OLDER'
    CHILD = 'CHILD'
    ELDERLY = 'ELDERLY'


DEFAULT_MODE = EditMode.RESTORE
DEFAULT_AGE_DIRECTION = AgeDirection.YOUNGER

FALLBACK_PROMPT = "Improve this image quality and aesthetics."

AGE_DESCRIPTIONS = {
    AgeDirection.YOUNGER: "much younger, like a teenager or young adult (approx 18-24 years old)",
    AgeDirection.CHILD: "like a young child (approx 5-8 years old)",
    AgeDirection.ELDERLY: "elderly (approx 75+ years old) with natural aging features",
    AgeDirection.OLDER: "older and more mature (approx 50-60 years old)",
}

# Options shown for the age-change mode, in display order
AGE_OPTIONS = [
    ("Child", AgeDirection.CHILD),
    ("Younger", AgeDirection.YOUNGER),
    ("Older", AgeDirection.OLDER),
    ("Elderly", AgeDirection.ELDERLY),
]


class ModePreset:
    """Defines one edit mode: its label and how its instruction is written."""

    def __init__(self,
                 mode: EditMode,
                 label: str,
                 template: str,
                 default_text: Optional[str] = None,
                 placeholder: Optional[str] = None):
        """Initialize a mode preset.

        Args:
            mode: The edit mode this preset describes
            label: Short label shown on the tool button
            template: Instruction text; ``{text}`` marks where custom text
                goes and ``{age}`` where the age description goes
            default_text: Phrase used when the user gives no custom text
            placeholder: Hint shown in the custom text field
        """
        self.mode = mode
        self.label = label
        self.template = template
        self.default_text = default_text
        self.placeholder = placeholder

    @property
    def needs_prompt(self) -> bool:
        """Whether the mode takes free-text instructions."""
        return self.default_text is not None

    @property
    def needs_age(self) -> bool:
        """Whether the mode takes a target age."""
        return '{age}' in self.template

    def build(self,
              age_direction: Optional[AgeDirection] = None,
              custom_prompt: Optional[str] = None) -> str:
        """Write the instruction for this mode.

        Custom text is inserted verbatim; empty text falls back to the
        mode's default phrase. An unset age direction means "older".
        """
        values = {}
        if self.needs_prompt:
            values['text'] = custom_prompt or self.default_text
        if self.needs_age:
            values['age'] = AGE_DESCRIPTIONS.get(age_direction, AGE_DESCRIPTIONS[AgeDirection.OLDER])
        return self.template.format(**values)

    def ready_message(self) -> str:
        """Message shown when the mode has no options to fill in."""
        return f"Ready to apply {self.mode.value.lower().replace('_', ' ', 1)} filter"

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Convert the mode preset to a dictionary."""
        return {
            "mode": self.mode.value,
            "label": self.label,
            "default_text": self.default_text,
            "placeholder": self.placeholder,
        }


# Presets in the order the tools are shown
MODE_PRESETS = {
    EditMode.RESTORE: ModePreset(
        mode=EditMode.RESTORE,
        label="Restore",
        template=(
            "Restore this old photo to look like it was taken with a modern high-end camera. "
            "Fix any scratches, tears, dust, or noise. Sharpen details and improve clarity. "
            "Output a photorealistic result. If the image is B&W, keep it B&W unless "
            "colorization is requested."
        ),
    ),
    EditMode.ENHANCE: ModePreset(
        mode=EditMode.ENHANCE,
        label="Enhance",
        template=(
            "Enhance this image to professional studio quality. Upscale resolution, sharpen "
            "fine details, denoise, and improve lighting and contrast. Make the image crisp, "
            "vibrant, and clear while preserving the original subject matter. High definition "
            "4k output."
        ),
    ),
    EditMode.COLORIZE: ModePreset(
        mode=EditMode.COLORIZE,
        label="Colorize",
        template=(
            "Colorize this black and white photo. Use natural, realistic colors for skin tones, "
            "clothing, and background. The lighting should look consistent and photorealistic."
        ),
    ),
    EditMode.AGE_CHANGE: ModePreset(
        mode=EditMode.AGE_CHANGE,
        label="Age Swap",
        template=(
            "Edit this photo to make the person look {age}. Preserve the original identity, "
            "facial structure, ethnicity, and background context exactly. Only change the "
            "age-related characteristics (skin texture, hair). Return a highly realistic, "
            "seamless photo."
        ),
    ),
    EditMode.HEADSHOT: ModePreset(
        mode=EditMode.HEADSHOT,
        label="Headshot",
        template=(
            "Transform this photo into a professional corporate headshot. The person should be "
            "wearing professional business attire (suit/blazer). Ensure neutral professional "
            "lighting and a soft blurred office or studio background. Maintain the person's "
            "identity perfectly."
        ),
    ),
    EditMode.CLOTH_CHANGE: ModePreset(
        mode=EditMode.CLOTH_CHANGE,
        label="Outfit",
        template=(
            "Change the person's clothing in this photo to: {text}. Maintain the exact body "
            "pose, facial expression, and background. The clothing should fit naturally and "
            "look photorealistic."
        ),
        default_text="stylish modern casual wear",
        placeholder="E.g. Blue business suit, red evening dress...",
    ),
    EditMode.OBJECT_REMOVE: ModePreset(
        mode=EditMode.OBJECT_REMOVE,
        label="Eraser",
        template=(
            "Remove the {text} from this image. Fill in the empty space seamlessly to match the "
            "surrounding background pattern and texture. The result should look natural as if "
            "the object was never there."
        ),
        default_text="object",
        placeholder="Describe what to remove...",
    ),
    EditMode.BG_REMOVE: ModePreset(
        mode=EditMode.BG_REMOVE,
        label="No BG",
        template=(
            "Remove the background of this image and replace it with a solid clean white "
            "background. Isolate the main subject perfectly. Do not alter the subject's "
            "appearance."
        ),
    ),
    EditMode.BG_CHANGE: ModePreset(
        mode=EditMode.BG_CHANGE,
        label="New BG",
        template=(
            "Change the background of this image to: {text}. Ensure the lighting on the "
            "subject matches the new background for a realistic composite. Keep the subject "
            "exactly the same."
        ),
        default_text="a beautiful outdoor scenery",
        placeholder="E.g. Sunset beach, futuristic city, cozy office...",
    ),
    EditMode.SKETCH: ModePreset(
        mode=EditMode.SKETCH,
        label="Sketch",
        template=(
            "Convert this image into a high-quality pencil sketch. Detailed shading, artistic "
            "strokes, black and white graphite style."
        ),
    ),
    EditMode.CARTOONIFY: ModePreset(
        mode=EditMode.CARTOONIFY,
        label="3D Toon",
        template=(
            "Transform this image into a high-quality 3D Disney/Pixar style cartoon character. "
            "Keep the resemblance to the original person but stylized. Vibrant colors, smooth "
            "shading."
        ),
    ),
}


def parse_mode(value: Union[str, EditMode]) -> EditMode:
    """Resolve a mode from its id, label or enum member.

    Matching ignores case and treats spaces and dashes as underscores, so
    ``"cloth-change"``, ``"Outfit"`` and ``"CLOTH_CHANGE"`` all resolve.

    Raises:
        ValueError: If no mode matches
    """
    if isinstance(value, EditMode):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Edit mode '{value}' not found")

    normalized = value.strip().upper().replace(' ', '_').replace('-', '_')
    if normalized in EditMode.__members__:
        return EditMode[normalized]

    for preset in MODE_PRESETS.values():
        if preset.label.upper().replace(' ', '_') == normalized:
            return preset.mode

    raise ValueError(f"Edit mode '{value}' not found")


def parse_age_direction(value: Union[str, AgeDirection]) -> AgeDirection:
    """Resolve an age direction from its name (case-insensitive).

    Raises:
        ValueError: If the name is unknown
    """
    if isinstance(value, AgeDirection):
        return value
    try:
        return AgeDirection[value.strip().upper()]
    except KeyError:
        raise ValueError(f"Age direction '{value}' not found")


def get_mode_preset(mode: Union[str, EditMode]) -> ModePreset:
    """Get the preset for a mode.

    Raises:
        ValueError: If the mode is not found
    """
    return MODE_PRESETS[parse_mode(mode)]


def get_available_modes() -> List[EditMode]:
    """Get the modes in display order."""
    return list(MODE_PRESETS.keys())


def build_prompt(mode: Union[str, EditMode],
                 age_direction: Optional[AgeDirection] = None,
                 custom_prompt: Optional[str] = None) -> str:
    """Write the instruction sent to the image model for an edit.

    Args:
        mode: The selected edit mode
        age_direction: Target age, only used by the age-change mode
        custom_prompt: Free text, only used by modes that take it

    Returns:
        The instruction text; unknown modes get a generic improvement request
    """
    try:
        preset = get_mode_preset(mode)
    except ValueError:
        logger.warning(f"Unknown edit mode {mode!r}, using generic instruction")
        return FALLBACK_PROMPT
    return preset.build(age_direction, custom_prompt)
