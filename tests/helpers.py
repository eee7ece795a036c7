"""Shared fixtures for the test suite."""

import io
from types import SimpleNamespace

import numpy as np
from PIL import Image

from dani_ai.camera import WARMUP_FRAMES

PNG_RESULT = "data:image/png;base64,iVBORw0KGgo="


def make_image_bytes(format: str = "JPEG", size=(32, 24), color=(120, 60, 30)) -> bytes:
    """Encode a small solid-color image."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=format)
    return buffer.getvalue()


def make_frame(height: int = 24, width: int = 32) -> np.ndarray:
    """A BGR frame as OpenCV would return it (blue channel set)."""
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[:, :, 0] = 255
    return frame


def make_blank_frame(height: int = 24, width: int = 32) -> np.ndarray:
    """An all-black frame, as webcams often return right after opening."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def make_stream(frame=None):
    """Blank warm-up frames followed by one real frame."""
    return [make_blank_frame() for _ in range(WARMUP_FRAMES)] + [make_frame() if frame is None else frame]


def make_response(*parts):
    """Build an object shaped like a ``generate_content`` response."""
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


def image_part(data: bytes, mime_type="image/png"):
    return SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type))


def text_part(text: str):
    return SimpleNamespace(text=text, inline_data=None)


class FakeCapture:
    """Stand-in for ``cv2.VideoCapture``."""

    def __init__(self, opened=True, frames=None):
        self.opened = opened
        self.frames = list(frames) if frames is not None else []
        self.released = False

    def isOpened(self):
        return self.opened and not self.released

    def read(self):
        if not self.frames:
            return False, None
        return True, self.frames.pop(0)

    def release(self):
        self.released = True


class FakeCaptureFactory:
    """Hands out prepared ``FakeCapture`` objects by device index."""

    def __init__(self, captures):
        self.captures = captures
        self.requested = []

    def __call__(self, index):
        self.requested.append(index)
        return self.captures[index]


class FakeEditClient:
    """Records calls and returns a fixed outcome."""

    def __init__(self, session=None, result=PNG_RESULT, error=None):
        self.session = session
        self.result = result
        self.error = error
        self.calls = []
        self.loading_during_call = None

    def generate_edited_image(self, encoded, mode, age_direction=None, custom_prompt=None):
        self.calls.append((encoded, mode, age_direction, custom_prompt))
        if self.session is not None:
            self.loading_during_call = self.session.is_loading
            self.result_during_call = (self.session.result_image, self.session.error)
        if self.error is not None:
            raise self.error
        return self.result
