"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# Two sources, in priority order:
#
#   1. **Environment variables**: e.g., OPENAI_API_KEY=sk-abc123
#   2. **.env file**: key=value lines in the project root .env file
#
# Field ``openai_api_key`` maps to env var ``OPENAI_API_KEY``.
# Defaults apply when neither source defines the value.
#
# The .env file must never be committed.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """winescribe application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === LLM Providers ===
    # Empty string = "not configured"; provider selection in main.py skips
    # providers with empty keys.
    openai_api_key: str = ""
    openai_base_url: str = ""  # Custom base URL for OpenAI-compatible APIs
    anthropic_api_key: str = ""
    llm_timeout_seconds: float = 120.0

    # === Image Search ===
    # Optional. Without a key the image search endpoint serves static images.
    unsplash_access_key: str = ""

    # === Pipeline ===
    # Overall wall-clock budget for one /generate request (all stages).
    generation_timeout_seconds: float = 300.0

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"
    config_path: str = "config/config.yaml"
