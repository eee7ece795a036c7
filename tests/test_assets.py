"""Tests for the assets module."""

import os
import tempfile
import unittest

from dani_ai.assets import (
    INVALID_FILE_MESSAGE,
    ImageAsset,
    asset_from_drop,
    asset_from_frame,
    asset_from_path,
    asset_from_upload,
)
from dani_ai.errors import InvalidInputError
from dani_ai.utils import decode_data_uri

from tests.helpers import make_frame, make_image_bytes

class TestImageAsset(unittest.TestCase):
    """Test cases for the ImageAsset class."""

    def setUp(self):
        """Set up test fixtures."""
        self.jpeg = make_image_bytes("JPEG")

    def test_upload_produces_data_uri(self):
        """Test that an uploaded file is encoded as a data URI."""
        asset = asset_from_upload("photo.jpg", self.jpeg, "image/jpeg")
        self.assertTrue(asset.encoded.startswith("data:image/jpeg;base64,"))
        self.assertEqual(decode_data_uri(asset.encoded), self.jpeg)

    def test_upload_guesses_missing_mime(self):
        """Test that the MIME type comes from the file name when absent."""
        asset = asset_from_upload("photo.png", make_image_bytes("PNG"))
        self.assertEqual(asset.mime_type, "image/png")
        self.assertTrue(asset.encoded.startswith("data:image/png;base64,"))

    def test_preview_and_release(self):
        """Test that the preview opens lazily and is released."""
        asset = asset_from_upload("photo.jpg", self.jpeg, "image/jpeg")
        self.assertEqual(asset.preview.size, (32, 24))

        asset.release()
        self.assertTrue(asset.released)
        self.assertEqual(asset.to_dict()["size"], 0)

    def test_drop_rejects_non_images(self):
        """Test that dropped non-image files are refused."""
        with self.assertRaises(InvalidInputError) as ctx:
            asset_from_drop("notes.pdf", b"%PDF-1.4", "application/pdf")
        self.assertEqual(str(ctx.exception), INVALID_FILE_MESSAGE)

        with self.assertRaises(InvalidInputError):
            asset_from_drop("unknown", b"...", None)

    def test_drop_accepts_images(self):
        asset = asset_from_drop("photo.jpg", self.jpeg, "image/jpeg")
        self.assertIsInstance(asset, ImageAsset)

    def test_frame_becomes_jpeg_capture(self):
        """Test that a camera frame is treated like an uploaded JPEG."""
        asset = asset_from_frame(make_frame())
        self.assertEqual(asset.name, "capture.jpg")
        self.assertEqual(asset.mime_type, "image/jpeg")
        self.assertTrue(asset.data.startswith(b"\xff\xd8"))
        self.assertTrue(asset.encoded.startswith("data:image/jpeg;base64,"))

class TestAssetFromPath(unittest.TestCase):
    """Test cases for loading assets from disk."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_loads_image_file(self):
        path = os.path.join(self.temp_dir.name, "old.png")
        with open(path, "wb") as f:
            f.write(make_image_bytes("PNG"))

        asset = asset_from_path(path)
        self.assertEqual(asset.name, "old.png")
        self.assertEqual(asset.mime_type, "image/png")

    def test_rejects_missing_and_non_image_files(self):
        with self.assertRaises(InvalidInputError):
            asset_from_path(os.path.join(self.temp_dir.name, "missing.jpg"))

        path = os.path.join(self.temp_dir.name, "notes.txt")
        with open(path, "w") as f:
            f.write("hello")
        with self.assertRaises(InvalidInputError):
            asset_from_path(path)

if __name__ == "__main__":
    unittest.main()
