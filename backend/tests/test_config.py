"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from ingress_validator.config import Settings


def test_defaults():
    settings = Settings()
    assert settings.ENABLE_ADVANCED_VALIDATION is False
    assert settings.LOG_LEVEL == "info"


def test_log_level_is_case_insensitive():
    assert Settings(LOG_LEVEL="DEBUG").LOG_LEVEL == "debug"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(LOG_LEVEL="verbose")
