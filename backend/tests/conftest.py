"""Shared test fixtures and configuration."""
import pytest


@pytest.fixture(autouse=True)
def set_required_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set the Gemini API key for all tests and keep remove.bg unconfigured."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-gemini-key")
    monkeypatch.delenv("REMOVE_BG_API_KEY", raising=False)
    monkeypatch.delenv("REMOVE_BACKGROUND", raising=False)
    monkeypatch.delenv("GEMINI_IMAGE_MODEL", raising=False)
