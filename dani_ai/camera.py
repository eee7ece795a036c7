"""Local camera capture for the Dani.ai photo editor.

``CameraSession`` owns one OpenCV capture device for as long as the capture
modal is open. Use it as a context manager so the device is released on
every exit path.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

import cv2
import numpy as np

from .config import get_settings
from .errors import CameraUnavailableError

logger = logging.getLogger(__name__)

CAMERA_UNAVAILABLE_MESSAGE = "Unable to access camera. Please allow camera permissions."
CAMERA_READ_MESSAGE = "Unable to read a frame from the camera."

# Frames dropped before a capture while exposure and white balance settle
WARMUP_FRAMES = 5


class CameraSession:
    """An open camera stream.

    Devices are tried in order of preference (the rear-facing camera first
    when configured so) and the first one that opens is used.
    """

    def __init__(self,
                 devices: Optional[Sequence[int]] = None,
                 capture_factory: Callable[[int], Any] = cv2.VideoCapture):
        """Initialize a camera session; the device is opened by ``open()``.

        Args:
            devices: Device indices, preferred first. Defaults to the
                ``DANI_CAMERA_DEVICES`` setting.
            capture_factory: Callable returning a capture object for an index
        """
        self.devices: List[int] = list(devices) if devices is not None else get_settings()['camera_devices']
        self._capture_factory = capture_factory
        self._capture = None
        self.device: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self._capture is not None

    def open(self) -> 'CameraSession':
        """Open the first available device.

        Raises:
            CameraUnavailableError: If no device could be opened
        """
        if self.is_open:
            return self

        for index in self.devices:
            capture = None
            try:
                capture = self._capture_factory(index)
                if capture.isOpened():
                    self._capture = capture
                    self.device = index
                    logger.info(f"Opened camera device {index}")
                    return self
            except cv2.error as e:
                logger.debug(f"Camera device {index} failed: {e}")
            if capture is not None:
                capture.release()
            logger.debug(f"Camera device {index} unavailable, trying next")

        raise CameraUnavailableError(CAMERA_UNAVAILABLE_MESSAGE)

    def read_frame(self, discard: int = 0) -> np.ndarray:
        """Grab the current frame as an RGB array.

        Args:
            discard: Number of frames to read and drop first

        Raises:
            CameraUnavailableError: If the camera is closed or the read fails
        """
        if not self.is_open:
            raise CameraUnavailableError(CAMERA_UNAVAILABLE_MESSAGE)
        for _ in range(discard + 1):
            ok, frame = self._capture.read()
            if not ok or frame is None:
                raise CameraUnavailableError(CAMERA_READ_MESSAGE)
        return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

    def release(self) -> None:
        """Stop the stream. Safe to call more than once."""
        if self._capture is not None:
            self._capture.release()
            logger.info(f"Released camera device {self.device}")
        self._capture = None
        self.device = None

    def status(self) -> Dict[str, Any]:
        return {"open": self.is_open, "device": self.device, "devices": list(self.devices)}

    def __enter__(self) -> 'CameraSession':
        return self.open()

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()

