"""Utility functions for the Dani.ai photo editor.

Helpers for data URIs, MIME types and converting between raw image bytes,
numpy frames and Pillow images.
"""

import base64
import binascii
import io
import os
import re
import logging
from typing import List, Optional, Union

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

DEFAULT_INPUT_MIME = 'image/jpeg'
DEFAULT_OUTPUT_MIME = 'image/png'

# Define supported image formats
SUPPORTED_FORMATS = {
    '.jpg': 'JPEG',
    '.jpeg': 'JPEG',
    '.png': 'PNG',
    '.webp': 'WEBP',
    '.gif': 'GIF',
    '.bmp': 'BMP',
    '.tiff': 'TIFF',
    '.tif': 'TIFF',
}

MIME_TYPES = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.webp': 'image/webp',
    '.gif': 'image/gif',
    '.bmp': 'image/bmp',
    '.tiff': 'image/tiff',
    '.tif': 'image/tiff',
    '.heic': 'image/heic',
    '.heif': 'image/heif',
}

_DATA_URI_MIME = re.compile(r'data:([a-zA-Z0-9]+/[a-zA-Z0-9\-.+]+).*,.*')


def extract_base64_data(encoded: str) -> str:
    """Strip a ``data:<mime>;base64,`` prefix if present.

    Args:
        encoded: Data URI or bare base64 string

    Returns:
        The base64 body
    """
    if ',' in encoded:
        return encoded.split(',')[1]
    return encoded


def get_mime_type(encoded: str) -> str:
    """Return the MIME type declared by a data URI, or ``image/jpeg``."""
    if encoded.startswith('data:'):
        match = _DATA_URI_MIME.match(encoded)
        if match:
            return match.group(1)
    return DEFAULT_INPUT_MIME


def to_data_uri(data: Union[bytes, str], mime_type: Optional[str] = None) -> str:
    """Build a data URI from raw bytes or an already base64-encoded body.

    Args:
        data: Raw bytes (encoded here) or a base64 string (used verbatim)
        mime_type: Declared MIME type, defaults to ``image/png``

    Returns:
        ``data:<mime>;base64,<body>``
    """
    if isinstance(data, (bytes, bytearray)):
        data = base64.b64encode(data).decode('ascii')
    return f"data:{mime_type or DEFAULT_OUTPUT_MIME};base64,{data}"


def decode_data_uri(encoded: str) -> bytes:
    """Decode the body of a data URI (or bare base64 string) into bytes.

    Raises:
        ValueError: If the body is not valid base64
    """
    try:
        return base64.b64decode(extract_base64_data(encoded), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image data: {e}")


def guess_mime_type(file_name: str) -> str:
    """Guess an image MIME type from a file name's extension.

    Unknown extensions fall back to ``image/jpeg``.
    """
    ext = os.path.splitext(file_name)[1].lower()
    return MIME_TYPES.get(ext, DEFAULT_INPUT_MIME)


def is_image_mime(mime_type: Optional[str]) -> bool:
    """Check whether a declared MIME type is an image type."""
    return bool(mime_type) and mime_type.lower().startswith('image/')


def open_image(data: bytes) -> Image.Image:
    """Open raw image bytes as a Pillow image.

    Raises:
        ValueError: If the bytes could not be decoded as an image
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
        return image
    except Exception as e:
        raise ValueError(f"Could not decode image: {e}")


def image_to_bytes(image: np.ndarray, format: str = '.jpg', quality: int = 95) -> bytes:
    """Convert an RGB frame to encoded image bytes.

    Args:
        image: Image as numpy array in RGB format
        format: Image format extension (e.g., '.jpg', '.png')
        quality: Quality for lossy formats (0-100)

    Returns:
        Image encoded as bytes

    Raises:
        RuntimeError: If image conversion fails
    """
    try:
        pil_image = Image.fromarray(image.astype('uint8'))

        format_name = SUPPORTED_FORMATS.get(format.lower(), 'JPEG')

        save_args = {}
        if format_name == 'JPEG':
            save_args['quality'] = quality
            save_args['optimize'] = True
        elif format_name == 'PNG':
            save_args['optimize'] = True

        buffer = io.BytesIO()
        pil_image.save(buffer, format=format_name, **save_args)
        return buffer.getvalue()
    except Exception as e:
        raise RuntimeError(f"Error converting image to bytes: {str(e)}")


def save_bytes(data: bytes, output_path: str) -> None:
    """Write encoded image bytes to a file, creating parent directories.

    Raises:
        RuntimeError: If the file could not be written
    """
    try:
        output_dir = os.path.dirname(output_path)
        if output_dir and not os.path.exists(output_dir):
            os.makedirs(output_dir, exist_ok=True)
        with open(output_path, 'wb') as f:
            f.write(data)
    except OSError as e:
        raise RuntimeError(f"Error saving image to {output_path}: {str(e)}")


def get_supported_formats() -> List[str]:
    """Get list of file extensions accepted by the file picker (without dots)."""
    return [ext.lstrip('.') for ext in MIME_TYPES]
