"""Input handling for the Dani.ai photo editor.

Every way of getting a photo into the editor (file picker, drag-and-drop,
camera shutter, a path on the command line) ends up as an ``ImageAsset``.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
from PIL import Image

from .errors import InvalidInputError
from .utils import MIME_TYPES, guess_mime_type, image_to_bytes, is_image_mime, open_image, to_data_uri

logger = logging.getLogger(__name__)

INVALID_FILE_MESSAGE = "Please upload an image file."
CAPTURE_FILE_NAME = "capture.jpg"


class ImageAsset:
    """A loaded photo: its raw bytes, a preview handle and its data URI."""

    def __init__(self, data: bytes, mime_type: str, name: str = "image"):
        """Initialize an image asset.

        Args:
            data: Raw encoded image bytes
            mime_type: Declared MIME type of ``data``
            name: Original file name
        """
        self.data = data
        self.mime_type = mime_type
        self.name = name
        self._encoded: Optional[str] = None
        self._preview: Optional[Image.Image] = None

    @property
    def encoded(self) -> str:
        """The image as a ``data:<mime>;base64,...`` URI."""
        if self._encoded is None:
            self._encoded = to_data_uri(self.data, self.mime_type)
        return self._encoded

    @property
    def preview(self) -> Image.Image:
        """Pillow handle used to display the image, opened on first use.

        Raises:
            ValueError: If the bytes are not a decodable image
        """
        if self._preview is None:
            self._preview = open_image(self.data)
        return self._preview

    @property
    def released(self) -> bool:
        return self.data is None

    def release(self) -> None:
        """Close the preview handle and drop the image bytes."""
        if self._preview is not None:
            self._preview.close()
            self._preview = None
        self.data = None
        self._encoded = None

    def to_dict(self) -> Dict[str, Any]:
        """Summary of the asset, without the image bytes."""
        return {
            "name": self.name,
            "mime_type": self.mime_type,
            "size": len(self.data) if self.data is not None else 0,
        }

    def __repr__(self) -> str:
        return f"ImageAsset(name={self.name!r}, mime_type={self.mime_type!r})"


def asset_from_upload(name: str, data: bytes, mime_type: Optional[str] = None) -> ImageAsset:
    """Create an asset from a file chosen in the file picker.

    The picker only offers image types, so no MIME check is made here. A
    missing MIME type is guessed from the file name.
    """
    mime_type = mime_type or guess_mime_type(name)
    logger.info(f"Loaded upload {name} ({mime_type}, {len(data)} bytes)")
    return ImageAsset(data, mime_type, name)


def asset_from_drop(name: str, data: bytes, mime_type: Optional[str]) -> ImageAsset:
    """Create an asset from a dropped file.

    Raises:
        InvalidInputError: If the declared MIME type is not an image type
    """
    if not is_image_mime(mime_type):
        logger.warning(f"Rejected dropped file {name} with type {mime_type!r}")
        raise InvalidInputError(INVALID_FILE_MESSAGE)
    return asset_from_upload(name, data, mime_type)


def asset_from_frame(frame: np.ndarray, quality: int = 95) -> ImageAsset:
    """Create an asset from a captured RGB camera frame, encoded as JPEG."""
    data = image_to_bytes(frame, '.jpg', quality=quality)
    logger.info(f"Captured frame {frame.shape[1]}x{frame.shape[0]} ({len(data)} bytes)")
    return ImageAsset(data, 'image/jpeg', CAPTURE_FILE_NAME)


def asset_from_path(path: Union[str, Path]) -> ImageAsset:
    """Create an asset from an image file on disk.

    Raises:
        InvalidInputError: If the file is missing or not an image type
    """
    path = Path(path)
    if not path.is_file():
        raise InvalidInputError(f"Input file does not exist: {path}")
    if path.suffix.lower() not in MIME_TYPES:
        raise InvalidInputError(INVALID_FILE_MESSAGE)
    return asset_from_upload(path.name, path.read_bytes(), guess_mime_type(path.name))
