"""Tests for the config module."""

import os
import unittest
from unittest import mock

from dani_ai.config import DEFAULT_MODEL, get_api_key, get_settings, parse_camera_devices

class TestConfig(unittest.TestCase):
    """Test cases for settings loading."""

    def test_api_key_lookup_order(self):
        with mock.patch.dict(os.environ, {"GEMINI_API_KEY": "", "API_KEY": "legacy", "GOOGLE_API_KEY": "google"}):
            self.assertEqual(get_api_key(), "legacy")
        with mock.patch.dict(os.environ, {"GEMINI_API_KEY": "gemini", "API_KEY": "legacy"}):
            self.assertEqual(get_api_key(), "gemini")

    def test_missing_api_key(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(get_api_key())

    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = get_settings()
        self.assertEqual(settings['model'], DEFAULT_MODEL)
        self.assertEqual(settings['camera_devices'], [0])
        self.assertEqual(settings['download_prefix'], "dani-ai")
        self.assertEqual(settings['log_level'], "INFO")

    def test_parse_camera_devices(self):
        self.assertEqual(parse_camera_devices("1, 0"), [1, 0])
        self.assertEqual(parse_camera_devices("rear,2"), [2])
        self.assertEqual(parse_camera_devices(""), [0])

if __name__ == "__main__":
    unittest.main()
