"""Tests for the camera module."""

import unittest

import numpy as np

from dani_ai.camera import CAMERA_UNAVAILABLE_MESSAGE, CameraSession
from dani_ai.errors import CameraUnavailableError

from tests.helpers import FakeCapture, FakeCaptureFactory, make_blank_frame, make_frame

class TestCameraSession(unittest.TestCase):
    """Test cases for the CameraSession class."""

    def test_prefers_first_device(self):
        """Test that the preferred device is used when it opens."""
        factory = FakeCaptureFactory({1: FakeCapture(), 0: FakeCapture()})
        with CameraSession([1, 0], factory) as camera:
            self.assertEqual(camera.device, 1)
        self.assertEqual(factory.requested, [1])

    def test_falls_back_silently(self):
        """Test that an unavailable preferred device falls back to the next."""
        rear = FakeCapture(opened=False)
        front = FakeCapture()
        factory = FakeCaptureFactory({1: rear, 0: front})

        camera = CameraSession([1, 0], factory).open()
        self.assertEqual(camera.device, 0)
        self.assertTrue(rear.released)
        camera.release()
        self.assertTrue(front.released)

    def test_no_device_raises(self):
        """Test that no usable device raises CameraUnavailableError."""
        factory = FakeCaptureFactory({0: FakeCapture(opened=False)})
        camera = CameraSession([0], factory)
        with self.assertRaises(CameraUnavailableError) as ctx:
            camera.open()
        self.assertEqual(str(ctx.exception), CAMERA_UNAVAILABLE_MESSAGE)
        self.assertFalse(camera.is_open)

    def test_read_frame_converts_to_rgb(self):
        """Test that frames come back in RGB order."""
        factory = FakeCaptureFactory({0: FakeCapture(frames=[make_frame()])})
        with CameraSession([0], factory) as camera:
            frame = camera.read_frame()
        self.assertTrue(np.all(frame[:, :, 2] == 255))
        self.assertTrue(np.all(frame[:, :, 0] == 0))

    def test_failed_read_raises(self):
        factory = FakeCaptureFactory({0: FakeCapture(frames=[])})
        with CameraSession([0], factory) as camera:
            with self.assertRaises(CameraUnavailableError):
                camera.read_frame()

    def test_released_on_exception(self):
        """Test that leaving the context on an error still releases the device."""
        capture = FakeCapture()
        factory = FakeCaptureFactory({0: capture})
        with self.assertRaises(RuntimeError):
            with CameraSession([0], factory):
                raise RuntimeError("boom")
        self.assertTrue(capture.released)

    def test_release_is_idempotent(self):
        camera = CameraSession([0], FakeCaptureFactory({0: FakeCapture()})).open()
        camera.release()
        camera.release()
        self.assertFalse(camera.is_open)

    def test_read_frame_discards_leading_frames(self):
        """Test that discarded frames are read and dropped before the returned one."""
        capture = FakeCapture(frames=[make_blank_frame(), make_blank_frame(), make_frame()])
        with CameraSession([0], FakeCaptureFactory({0: capture})) as camera:
            frame = camera.read_frame(discard=2)
        self.assertEqual(capture.frames, [])
        self.assertTrue(np.all(frame[:, :, 2] == 255))

    def test_short_stream_during_discard_raises(self):
        capture = FakeCapture(frames=[make_blank_frame()])
        with CameraSession([0], FakeCaptureFactory({0: capture})) as camera:
            with self.assertRaises(CameraUnavailableError):
                camera.read_frame(discard=3)

if __name__ == "__main__":
    unittest.main()
