"""Interactive editor state for the Dani.ai photo editor.

One ``EditorSession`` holds everything a single user works with: the loaded
photo, the selected mode and its options, the camera modal and the state of
the current generation. Front-ends (the Streamlit app, the CLI) call its
methods and render what it exposes.
"""

import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, Optional

from .assets import (
    ImageAsset,
    asset_from_drop,
    asset_from_frame,
    asset_from_upload,
    CAPTURE_FILE_NAME,
)
from .camera import WARMUP_FRAMES, CameraSession
from .config import get_settings
from .errors import (
    GenerationInProgressError,
    NoImageError,
    PhotoEditError,
)
from .modes import (
    DEFAULT_AGE_DIRECTION,
    DEFAULT_MODE,
    AgeDirection,
    EditMode,
    ModePreset,
    get_mode_preset,
    parse_age_direction,
    parse_mode,
)

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


class GenerationStatus(Enum):
    """Phases of one generation cycle."""
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class GenerationResult:
    """Outcome of a generation: an image or an error message, never both."""

    def __init__(self, image: Optional[str] = None, error: Optional[str] = None):
        if (image is None) == (error is None):
            raise ValueError("A generation result needs exactly one of image or error")
        self._image = image
        self._error = error

    @classmethod
    def success(cls, image: str) -> 'GenerationResult':
        return cls(image=image)

    @classmethod
    def failure(cls, error: str) -> 'GenerationResult':
        return cls(error=error)

    @property
    def image(self) -> Optional[str]:
        return self._image

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def ok(self) -> bool:
        return self._image is not None

    def __repr__(self) -> str:
        if self.ok:
            return f"GenerationResult(image=<{len(self._image)} chars>)"
        return f"GenerationResult(error={self._error!r})"


class EditorSession:
    """State of one editing session."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize an empty session.

        Args:
            config: Configuration dictionary (``download_prefix``)
        """
        self.config = config or {}
        self._validate_config()

        self.asset: Optional[ImageAsset] = None
        self.mode: EditMode = DEFAULT_MODE
        self.age_direction: AgeDirection = DEFAULT_AGE_DIRECTION
        self.custom_prompt: str = ""

        self.status = GenerationStatus.IDLE
        self._result: Optional[GenerationResult] = None
        # Errors raised outside a generation (bad drop, camera denied)
        self._input_error: Optional[str] = None

        self.camera: Optional[CameraSession] = None

    def _validate_config(self) -> None:
        """Validate and set default configuration parameters."""
        defaults = {
            'download_prefix': get_settings()['download_prefix'],
        }

        for key, value in defaults.items():
            if key not in self.config:
                self.config[key] = value

    # ------------------------------------------------------------------
    # State exposed to front-ends

    @property
    def is_loading(self) -> bool:
        return self.status is GenerationStatus.SUBMITTING

    @property
    def result_image(self) -> Optional[str]:
        """Data URI of the last successful generation."""
        if self._result is not None:
            return self._result.image
        return None

    @property
    def error(self) -> Optional[str]:
        """Message for the error banner, if any."""
        if self._input_error is not None:
            return self._input_error
        if self._result is not None:
            return self._result.error
        return None

    @property
    def can_generate(self) -> bool:
        """Whether the generate trigger is enabled."""
        return self.asset is not None and not self.is_loading

    @property
    def camera_open(self) -> bool:
        return self.camera is not None

    @property
    def preset(self) -> ModePreset:
        return get_mode_preset(self.mode)

    def _clear_outcome(self) -> None:
        self._result = None
        self._input_error = None

    def _set_asset(self, asset: ImageAsset) -> None:
        """Replace the current photo and clear any previous result or error."""
        if self.asset is not None and self.asset is not asset:
            self.asset.release()
        self.asset = asset
        self._clear_outcome()
        self.status = GenerationStatus.IDLE

    # ------------------------------------------------------------------
    # Input

    def load_upload(self, name: str, data: bytes, mime_type: Optional[str] = None) -> ImageAsset:
        """Load a photo chosen with the file picker."""
        asset = asset_from_upload(name, data, mime_type)
        self._set_asset(asset)
        return asset

    def load_drop(self, name: str, data: bytes, mime_type: Optional[str]) -> Optional[ImageAsset]:
        """Load a dropped file.

        Non-image files set the error banner and leave the current photo
        and result untouched.

        Returns:
            The new asset, or None if the file was rejected
        """
        try:
            asset = asset_from_drop(name, data, mime_type)
        except PhotoEditError as e:
            self._input_error = str(e)
            return None
        self._set_asset(asset)
        return asset

    def accept_capture(self, data: bytes, mime_type: str = 'image/jpeg') -> ImageAsset:
        """Load a photo taken with the browser camera and close the modal."""
        asset = asset_from_upload(CAPTURE_FILE_NAME, data, mime_type)
        self._set_asset(asset)
        self.close_camera()
        return asset

    # ------------------------------------------------------------------
    # Camera

    def open_camera(self, camera_factory: Callable[[], CameraSession] = CameraSession) -> bool:
        """Open the capture modal.

        If the camera cannot be opened the error banner is set and the modal
        stays closed.

        Returns:
            True if the camera is open
        """
        if self.camera is not None:
            return True

        self._input_error = None
        camera = camera_factory()
        try:
            camera.open()
        except PhotoEditError as e:
            camera.release()
            logger.warning(f"Camera unavailable: {e}")
            self._input_error = str(e)
            return False

        self.camera = camera
        return True

    def capture_photo(self) -> Optional[ImageAsset]:
        """Take the current camera frame as the photo.

        The first few frames are dropped so the sensor can settle.
        The camera is released whether or not the capture succeeds.

        Returns:
            The new asset, or None if no frame could be taken
        """
        if self.camera is None:
            return None
        try:
            frame = self.camera.read_frame(discard=WARMUP_FRAMES)
            asset = asset_from_frame(frame)
        except PhotoEditError as e:
            self._input_error = str(e)
            return None
        finally:
            self.close_camera()

        self._set_asset(asset)
        return asset

    def close_camera(self) -> None:
        """Close the capture modal and release the camera."""
        camera, self.camera = self.camera, None
        if camera is not None:
            camera.release()

    # ------------------------------------------------------------------
    # Mode and options

    def select_mode(self, mode) -> None:
        """Switch edit mode; any custom text is cleared."""
        self.mode = parse_mode(mode)
        self.custom_prompt = ""

    def set_age_direction(self, age_direction) -> None:
        self.age_direction = parse_age_direction(age_direction)

    def set_custom_prompt(self, text: str) -> None:
        self.custom_prompt = text or ""

    # ------------------------------------------------------------------
    # Generation

    def generate(self, client) -> GenerationResult:
        """Run one generation cycle with the current photo and options.

        Args:
            client: Object with a ``generate_edited_image`` method, usually
                an ``ImageEditClient``

        Returns:
            The result of the cycle (also available through ``result_image``
            and ``error``)

        Raises:
            NoImageError: If no photo is loaded
            GenerationInProgressError: If a generation is already running
        """
        if self.is_loading:
            raise GenerationInProgressError("A generation is already in progress.")
        if self.asset is None:
            raise NoImageError("Upload or capture a photo first.")

        self._clear_outcome()
        self.status = GenerationStatus.SUBMITTING
        try:
            image = client.generate_edited_image(
                self.asset.encoded,
                self.mode,
                self.age_direction,
                self.custom_prompt,
            )
            result = GenerationResult.success(image)
        except PhotoEditError as e:
            result = GenerationResult.failure(str(e) or UNEXPECTED_ERROR_MESSAGE)
        except Exception as e:
            logger.exception("Unexpected error during generation")
            result = GenerationResult.failure(str(e) or UNEXPECTED_ERROR_MESSAGE)

        self._result = result
        self.status = GenerationStatus.SUCCEEDED if result.ok else GenerationStatus.FAILED
        return result

    def download_name(self, now: Optional[float] = None) -> str:
        """File name for saving the result: prefix, mode and a millisecond timestamp."""
        timestamp = int((time.time() if now is None else now) * 1000)
        return f"{self.config['download_prefix']}-{self.mode.value.lower()}-{timestamp}.png"

    # ------------------------------------------------------------------
    # Teardown

    def reset(self) -> None:
        """Drop the photo, result, error and custom text."""
        self.close_camera()
        if self.asset is not None:
            self.asset.release()
        self.asset = None
        self.custom_prompt = ""
        self._clear_outcome()
        self.status = GenerationStatus.IDLE

    def close(self) -> None:
        """Release everything the session holds."""
        self.reset()

    def __enter__(self) -> 'EditorSession':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of the session for display or debugging."""
        return {
            "asset": self.asset.to_dict() if self.asset is not None else None,
            "mode": self.mode.value,
            "age_direction": self.age_direction.value,
            "custom_prompt": self.custom_prompt,
            "status": self.status.value,
            "camera_open": self.camera_open,
            "has_result": self.result_image is not None,
            "error": self.error,
        }
