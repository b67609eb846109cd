"""Tests for Flask application startup with configuration."""

import logging
import os
from unittest.mock import patch

import pytest

from retirement_calculator import create_app
from retirement_calculator.config import Settings, reset_global_settings


class TestAppStartup:
    """Test cases for Flask application startup."""

    def test_app_creation_with_valid_config(self):
        """Test that app creates successfully from the environment."""
        reset_global_settings()

        with patch.dict(os.environ, {"SECRET_KEY": "valid-secret-key-123"}, clear=True):
            app = create_app()

            assert app is not None
            assert app.config["SECRET_KEY"] == "valid-secret-key-123"
            assert app.config["ENV"] == "development"
            assert app.config["DEBUG"] is True
            assert app.config["SOLVER_MAX_ITERATIONS"] == 10_000

    def test_app_creation_fails_with_placeholder_secret_key(self):
        """Test that app creation fails with placeholder SECRET_KEY."""
        reset_global_settings()

        with patch.dict(os.environ, {
            "SECRET_KEY": "your-secret-key-here-change-in-production"
        }, clear=True):
            with pytest.raises(Exception) as exc_info:
                create_app()

            assert "SECRET_KEY must be set to a secure value" in str(exc_info.value)

    def test_app_uses_explicit_settings(self):
        """Test that explicit settings override the environment."""
        settings = Settings(
            _env_file=None,
            SECRET_KEY="explicit-secret",
            APP_ENV="production",
            LOG_LEVEL="WARNING",
            SOLVER_TOLERANCE=0.5,
        )

        app = create_app(settings)

        assert app.config["SECRET_KEY"] == "explicit-secret"
        assert app.config["DEBUG"] is False
        assert app.config["TESTING"] is False
        assert app.config["SOLVER_TOLERANCE"] == 0.5
        assert app.logger.level == logging.WARNING

    def test_app_registers_blueprints(self, app):
        """Test that the health and projection blueprints are registered."""
        assert app.config["TESTING"] is True
        assert "health" in app.blueprints
        assert "projection" in app.blueprints
