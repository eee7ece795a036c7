"""Tests for the utils module."""

import base64
import unittest

import numpy as np

from dani_ai.utils import (
    decode_data_uri,
    extract_base64_data,
    get_mime_type,
    guess_mime_type,
    image_to_bytes,
    is_image_mime,
    open_image,
    to_data_uri,
)

class TestDataUris(unittest.TestCase):
    """Test cases for data URI helpers."""

    def test_extract_base64_data(self):
        """Test that the data URI prefix is stripped."""
        self.assertEqual(extract_base64_data("data:image/png;base64,QUJD"), "QUJD")
        self.assertEqual(extract_base64_data("QUJD"), "QUJD")

    def test_get_mime_type(self):
        """Test MIME detection with the JPEG default."""
        self.assertEqual(get_mime_type("data:image/png;base64,QUJD"), "image/png")
        self.assertEqual(get_mime_type("data:image/svg+xml;base64,QUJD"), "image/svg+xml")
        self.assertEqual(get_mime_type("QUJD"), "image/jpeg")
        self.assertEqual(get_mime_type("data:;base64,QUJD"), "image/jpeg")

    def test_to_data_uri(self):
        """Test building data URIs from bytes and from base64 text."""
        self.assertEqual(to_data_uri(b"ABC", "image/webp"), "data:image/webp;base64,QUJD")
        self.assertEqual(to_data_uri("QUJD"), "data:image/png;base64,QUJD")

    def test_decode_data_uri(self):
        """Test decoding and rejecting bad bodies."""
        self.assertEqual(decode_data_uri("data:image/png;base64,QUJD"), b"ABC")
        with self.assertRaises(ValueError):
            decode_data_uri("data:image/png;base64,not base64!")

class TestMimeTypes(unittest.TestCase):
    """Test cases for MIME helpers."""

    def test_is_image_mime(self):
        self.assertTrue(is_image_mime("image/png"))
        self.assertTrue(is_image_mime("IMAGE/JPEG"))
        self.assertFalse(is_image_mime("application/pdf"))
        self.assertFalse(is_image_mime(""))
        self.assertFalse(is_image_mime(None))

    def test_guess_mime_type(self):
        self.assertEqual(guess_mime_type("photo.PNG"), "image/png")
        self.assertEqual(guess_mime_type("photo.jpeg"), "image/jpeg")
        self.assertEqual(guess_mime_type("photo"), "image/jpeg")

class TestImageConversion(unittest.TestCase):
    """Test cases for frame encoding."""

    def test_image_to_bytes_jpeg(self):
        """Test that a frame encodes to a decodable JPEG."""
        frame = np.zeros((40, 60, 3), dtype=np.uint8)
        frame[:, :, 0] = 200
        data = image_to_bytes(frame, '.jpg')
        self.assertTrue(data.startswith(b"\xff\xd8"))

        image = open_image(data)
        self.assertEqual(image.format, "JPEG")
        self.assertEqual(image.size, (60, 40))

    def test_open_image_rejects_garbage(self):
        with self.assertRaises(ValueError):
            open_image(b"not an image")

if __name__ == "__main__":
    unittest.main()
