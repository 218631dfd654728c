"""Tests for the app factory."""

import os
import unittest
from unittest.mock import patch

# Pre-emptive imports to ensure patch targets exist.
from tourneyhub import create_app


class AppFirebaseTestCase(unittest.TestCase):
    """Test case for the app factory."""

    @patch("firebase_admin.initialize_app")
    @patch("firebase_admin.firestore.client")
    def test_404_error_handler(self, mock_firestore_client, mock_init_app):
        """Unknown routes answer with a JSON error."""
        app = create_app({"TESTING": True, "WTF_CSRF_ENABLED": False})

        with app.test_client() as client:
            response = client.get("/non_existent_page")
            self.assertEqual(response.status_code, 404)
            self.assertIn("error", response.json)

    def test_health_check(self):
        app = create_app({"TESTING": True})
        with app.test_client() as client:
            response = client.get("/health")
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json, {"status": "ok"})

    def test_mail_config_sanitization(self):
        """Test that MAIL_USERNAME and MAIL_PASSWORD are sanitized correctly."""
        env_vars = {
            "MAIL_USERNAME": '"user@example.com"',
            "MAIL_PASSWORD": '"xxxx xxxx xxxx"',
            "SECRET_KEY": "dev",
        }

        with patch.dict(os.environ, env_vars):
            app = create_app({"TESTING": True})

            # Username should have quotes stripped
            self.assertEqual(app.config["MAIL_USERNAME"], "user@example.com")

            # Password should have quotes stripped AND spaces removed
            self.assertEqual(app.config["MAIL_PASSWORD"], "xxxxxxxxxxxx")

    def test_mail_config_sanitization_single_quotes(self):
        """Test that single-quoted mail credentials are sanitized too."""
        env_vars = {
            "MAIL_USERNAME": "'user@example.com'",
            "MAIL_PASSWORD": "'xxxx xxxx xxxx'",
        }

        with patch.dict(os.environ, env_vars):
            app = create_app({"TESTING": True})

            self.assertEqual(app.config["MAIL_USERNAME"], "user@example.com")
            self.assertEqual(app.config["MAIL_PASSWORD"], "xxxxxxxxxxxx")

    def test_empty_env_vars_fall_back_to_defaults(self):
        """Test that empty environment variables fall back to default values."""
        env_vars = {
            "MAIL_SERVER": "",
            "MAIL_PORT": "",
            "MIN_WITHDRAWAL": "",
            "STARTING_COINS": "",
        }

        with patch.dict(os.environ, env_vars):
            app = create_app({"TESTING": True})

            self.assertEqual(app.config["MAIL_SERVER"], "smtp.gmail.com")
            self.assertEqual(app.config["MAIL_PORT"], 587)
            self.assertEqual(app.config["MIN_WITHDRAWAL"], 500)
            self.assertEqual(app.config["STARTING_COINS"], 0)

    def test_cloudinary_falls_back_to_expo_variables(self):
        env_vars = {
            "EXPO_PUBLIC_CLOUDINARY_CLOUD_NAME": "demo",
            "EXPO_PUBLIC_CLOUDINARY_UPLOAD_PRESET": "unsigned",
        }

        with patch.dict(os.environ, env_vars):
            os.environ.pop("CLOUDINARY_CLOUD_NAME", None)
            os.environ.pop("CLOUDINARY_UPLOAD_PRESET", None)
            app = create_app({"TESTING": True})

            self.assertEqual(app.config["CLOUDINARY_CLOUD_NAME"], "demo")
            self.assertEqual(app.config["CLOUDINARY_UPLOAD_PRESET"], "unsigned")

    @patch("tourneyhub._init_firebase")
    def test_firebase_is_initialized_outside_testing(self, mock_init_firebase):
        create_app({"TESTING": False})
        mock_init_firebase.assert_called_once()

    @patch("tourneyhub._init_firebase")
    def test_firebase_is_skipped_when_testing(self, mock_init_firebase):
        create_app({"TESTING": True})
        mock_init_firebase.assert_not_called()


if __name__ == "__main__":
    unittest.main()
