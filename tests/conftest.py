"""
Shared fixtures for the modification review test suite.
"""

import pytest

from app.core.config import Settings
from app.services.change_review.analyzer import ChangeAnalysisService
from app.services.change_review.patterns import get_pattern_library


@pytest.fixture(scope="session")
def patterns():
    """Default pattern library."""
    return get_pattern_library()


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment, with short timeouts."""
    return Settings(
        _env_file=None,
        OPENAI_API_KEY=None,
        REASONING_TIMEOUT_SECS=0.2,
        REASONING_MAX_ATTEMPTS=2,
        FALLBACK_CONFIDENCE=0.5,
    )


@pytest.fixture
def make_service(patterns, test_settings):
    """Factory for a ChangeAnalysisService with optional fake clients."""

    def _make(reasoning=None, similarity=None, settings=None):
        return ChangeAnalysisService(
            patterns,
            reasoning=reasoning,
            similarity=similarity,
            settings=settings or test_settings,
        )

    return _make
