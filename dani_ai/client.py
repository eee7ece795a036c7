"""Image edit requests for the Dani.ai photo editor.

Processing flow:
    1. Write the instruction for the selected mode (``dani_ai.modes``).
    2. Split the input data URI into its MIME type and base64 body.
    3. Send one request with the instruction and the inline image.
    4. Return the first inline image of the response as a data URI.

Error handling:
    Every failure (missing key, transport or API error, a response without
    an image) raises ``GenerationError`` with a message fit for the user.
    Nothing is retried.
"""

import base64
import binascii
import logging
from typing import Any, Dict, Optional, Union

from google import genai
from google.genai import types

from .config import get_settings
from .errors import ConfigurationError, GenerationError
from .modes import AgeDirection, EditMode, build_prompt, parse_mode
from .utils import DEFAULT_OUTPUT_MIME, extract_base64_data, get_mime_type, to_data_uri

logger = logging.getLogger(__name__)

NO_IMAGE_MESSAGE = "The AI did not return an image. Please try again with a different photo or mode."
FAILURE_MESSAGE = "Failed to generate image. Please check your connection and try again."
MISSING_KEY_MESSAGE = "No API key configured. Set GEMINI_API_KEY in the environment or a .env file."


def _mode_name(mode: Union[str, EditMode]) -> str:
    """Mode id for log messages; unknown modes are logged as given."""
    try:
        return parse_mode(mode).value
    except ValueError:
        return str(mode)


def extract_first_image(response: Any) -> Optional[str]:
    """Return the first inline image of a ``generate_content`` response.

    Only the first candidate is searched. Later image parts are ignored.

    Args:
        response: Response object from the SDK

    Returns:
        The image as a data URI, or None if the response has no image part
    """
    candidates = getattr(response, 'candidates', None)
    if not candidates:
        return None
    content = getattr(candidates[0], 'content', None)
    parts = getattr(content, 'parts', None) or []

    for part in parts:
        inline_data = getattr(part, 'inline_data', None)
        if inline_data is not None and inline_data.data:
            return to_data_uri(inline_data.data, inline_data.mime_type or DEFAULT_OUTPUT_MIME)
    return None


class ImageEditClient:
    """Sends edit requests to the hosted image model."""

    def __init__(self, config: Optional[Dict[str, Any]] = None, client: Optional[Any] = None):
        """Initialize the edit client.

        Args:
            config: Configuration dictionary (``api_key``, ``model``)
            client: Pre-built SDK client; created from the API key on first
                use when omitted
        """
        self.config = config or {}
        self._validate_config()
        self._client = client

    def _validate_config(self) -> None:
        """Validate and set default configuration parameters."""
        settings = get_settings()
        defaults = {
            'api_key': settings['api_key'],
            'model': settings['model'],
        }

        for key, value in defaults.items():
            if key not in self.config:
                self.config[key] = value

    @property
    def client(self) -> Any:
        """The SDK client.

        Raises:
            ConfigurationError: If no API key is configured
        """
        if self._client is None:
            if not self.config['api_key']:
                raise ConfigurationError(MISSING_KEY_MESSAGE)
            self._client = genai.Client(api_key=self.config['api_key'])
        return self._client

    def build_request(self,
                      encoded: str,
                      mode: Union[str, EditMode],
                      age_direction: Optional[AgeDirection] = None,
                      custom_prompt: Optional[str] = None) -> Dict[str, str]:
        """Assemble the request payload for an edit.

        Args:
            encoded: Input image as a data URI or bare base64 string
            mode: Selected edit mode
            age_direction: Target age for the age-change mode
            custom_prompt: Free text for modes that take it

        Returns:
            Dictionary with ``model``, ``prompt``, ``mime_type`` and ``data``
            (the base64 body without its data URI prefix)
        """
        return {
            'model': self.config['model'],
            'prompt': build_prompt(mode, age_direction, custom_prompt),
            'mime_type': get_mime_type(encoded),
            'data': extract_base64_data(encoded),
        }

    def generate_edited_image(self,
                              encoded: str,
                              mode: Union[str, EditMode],
                              age_direction: Optional[AgeDirection] = None,
                              custom_prompt: Optional[str] = None) -> str:
        """Edit an image with the hosted model.

        Args:
            encoded: Input image as a data URI or bare base64 string
            mode: Selected edit mode
            age_direction: Target age for the age-change mode
            custom_prompt: Free text for modes that take it

        Returns:
            The edited image as a data URI

        Raises:
            ConfigurationError: If no API key is configured
            GenerationError: If the request fails or no image is returned
        """
        request = self.build_request(encoded, mode, age_direction, custom_prompt)

        try:
            image_bytes = base64.b64decode(request['data'], validate=True)
        except (binascii.Error, ValueError) as e:
            raise GenerationError(f"Invalid image data: {e}")

        client = self.client
        mode_name = _mode_name(mode)
        logger.info(f"Sending {mode_name} edit to {request['model']} ({request['mime_type']}, {len(image_bytes)} bytes)")

        try:
            response = client.models.generate_content(
                model=request['model'],
                contents=[
                    types.Part.from_text(text=request['prompt']),
                    types.Part.from_bytes(data=image_bytes, mime_type=request['mime_type']),
                ],
                config=types.GenerateContentConfig(
                    response_modalities=["TEXT", "IMAGE"]
                ),
            )
        except Exception as e:
            logger.error(f"Image API error: {e}")
            raise GenerationError(str(e) or FAILURE_MESSAGE) from e

        result = extract_first_image(response)
        if result is None:
            logger.error("Image API returned no image part")
            raise GenerationError(NO_IMAGE_MESSAGE)

        logger.info(f"Received edited image for {mode_name}")
        return result
