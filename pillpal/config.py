import os
from pydantic_settings import BaseSettings
from pydantic import Field


class ConfigurationError(Exception):
    """Raised when a required setting (e.g. provider credential) is missing."""


class Settings(BaseSettings):
    """
    Application settings with validation.
    Loaded from environment variables and the .env file.
    """

    # --- Model Configuration ---
    assistant_model: str = Field(
        default="gpt-4o-mini",
        description="Model answering page-aware assistant questions",
    )
    assistant_temperature: float = Field(
        default=0.7,
        description="Sampling temperature for assistant replies",
        ge=0.0,
        le=2.0,
    )
    schedule_model: str = Field(
        default="gpt-4o-mini",
        description="Model producing smart schedule suggestions",
    )

    # --- LLM Service Configuration ---
    llm_timeout: int = Field(
        default=30,
        description="Timeout in seconds for LLM calls",
        ge=5,
        le=120,
    )
    llm_max_retries: int = Field(
        default=1,
        description="Attempts per LLM call (1 means a single attempt, no retry)",
        ge=1,
        le=5,
    )

    # --- Adherence ---
    adherence_window_days: int = Field(
        default=30,
        description="Trailing window used for adherence statistics",
        ge=1,
        le=365,
    )

    # --- API Keys ---
    openai_api_key: str | None = Field(default=None, description="OpenAI API key")
    google_api_key: str | None = Field(
        default=None, description="Google API key for Gemini models"
    )

    # --- Supabase (Optional) ---
    supabase_url: str | None = Field(default=None, description="Supabase project URL")
    supabase_service_key: str | None = Field(
        default=None, description="Supabase service key"
    )

    # --- Logging ---
    log_level: str = Field(default="INFO", description="Root logging level")
    structured_logs: bool = Field(
        default=True, description="Emit JSON log lines instead of plain text"
    )

    class Config:
        """Pydantic config."""

        env_file = os.getenv("DOTENV_PATH", ".env")
        case_sensitive = False
        extra = "ignore"

    @property
    def supabase_enabled(self) -> bool:
        """True when both Supabase URL and key are configured."""
        return bool(self.supabase_url and self.supabase_service_key)

    def provider_api_key(self, model_name: str) -> str:
        """
        Returns the credential for the provider serving `model_name`.

        Raises:
            ConfigurationError: If the credential is not configured
        """
        if "gemini" in model_name:
            key, env_name = self.google_api_key, "GOOGLE_API_KEY"
        else:
            key, env_name = self.openai_api_key, "OPENAI_API_KEY"

        if not key:
            raise ConfigurationError(f"{env_name} is not set.")
        return key


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get or create settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If env vars are present but invalid
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def check_env_vars() -> Settings:
    """
    Validates settings and the assistant provider credential.

    Raises:
        ValidationError: If variables are invalid
        ConfigurationError: If the provider credential is missing
    """
    settings = get_settings()
    settings.provider_api_key(settings.assistant_model)
    return settings
