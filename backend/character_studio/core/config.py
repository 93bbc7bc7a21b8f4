"""Configuration management using pydantic-settings."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Server settings. Every field has a default, so loading never fails."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "character-studio-api"

    # Server settings
    backend_host: str = "localhost"
    backend_port: int = 8000
    frontend_port: int = 3000


class Settings(ServerSettings):
    """Application settings loaded from environment variables."""

    # Gemini settings (API key required)
    gemini_api_key: str
    gemini_image_model: str = "gemini-2.0-flash-exp-image-generation"

    # remove.bg settings; an empty key disables background removal
    remove_bg_api_key: str = ""
    remove_bg_url: str = "https://api.remove.bg/v1.0/removebg"
    remove_bg_timeout: float = 30.0
    remove_background: bool = True

    @property
    def background_removal_enabled(self) -> bool:
        """True when removal is switched on and a remove.bg key is configured."""
        return self.remove_background and bool(self.remove_bg_api_key.strip())


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


@lru_cache
def get_server_settings() -> ServerSettings:
    """Return cached server settings; usable without provider API keys."""
    return ServerSettings()
