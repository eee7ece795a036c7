"""Dani.ai photo editor.

Upload or capture a photo, pick an edit mode (restore, colorize, age swap,
background change, ...) and let a hosted image model produce the edited
photo.
"""

__version__ = "0.1.0"

from .assets import ImageAsset, asset_from_path
from .client import ImageEditClient
from .errors import GenerationError, InvalidInputError, PhotoEditError
from .modes import AgeDirection, EditMode, build_prompt, get_available_modes, get_mode_preset
from .session import EditorSession, GenerationStatus

# Import web app if Streamlit is installed
try:
    from .web import run_web_app
except ImportError:
    def run_web_app():
        """Placeholder function when Streamlit is not installed."""
        raise ImportError("Streamlit is required to run the web app. Please install it with 'pip install dani-ai[web]'")


def edit_image(image_source, mode, age_direction=None, custom_prompt=None, config=None) -> str:
    """Edit an image file with the hosted model.

    Args:
        image_source: Path to the image or an ``ImageAsset``
        mode: Edit mode (enum member, id or label)
        age_direction: Target age for the age-change mode
        custom_prompt: Free text for modes that take it
        config: Optional client configuration dictionary

    Returns:
        The edited image as a data URI
    """
    asset = image_source if isinstance(image_source, ImageAsset) else asset_from_path(image_source)
    client = ImageEditClient(config)
    return client.generate_edited_image(asset.encoded, mode, age_direction, custom_prompt)
