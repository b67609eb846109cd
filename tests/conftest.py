"""
Pytest configuration and shared fixtures for the retirement calculator tests.
"""

import os
from unittest.mock import patch

import pytest

from retirement_calculator import create_app
from retirement_calculator.config import Settings, reset_global_settings
from retirement_calculator.models.inputs import RetirementInputs


@pytest.fixture(autouse=True)
def clean_settings():
    """Isolate every test from the environment and the cached global settings."""
    reset_global_settings()
    with patch.dict(os.environ, {"SECRET_KEY": "test-secret-key"}, clear=True):
        yield
    reset_global_settings()


@pytest.fixture
def settings():
    """Settings for the testing environment."""
    return Settings(_env_file=None, SECRET_KEY="test-secret-key", APP_ENV="testing")


@pytest.fixture
def app(settings):
    """Create a Flask app configured for testing."""
    return create_app(settings)


@pytest.fixture
def client(app):
    """Create a test client for the app."""
    return app.test_client()


@pytest.fixture
def reference_form():
    """Form fields for the reference scenario, as submitted by the calculator."""
    return {
        "currentAge": "35",
        "retirementAge": "66",
        "lifeExpectancy": "95",
        "currentSavings": "$30,000",
        "monthlyContribution": "500",
        "monthlyExpense": "3,000",
        "preRetirementReturn": "6",
        "postRetirementReturn": "5",
        "annualIncomeIncrease": "2",
        "annualInflation": "3%",
    }


@pytest.fixture
def reference_inputs(reference_form):
    """Validated inputs for the reference scenario."""
    return RetirementInputs.from_form(reference_form)
