"""Configuration loaded from environment (.env) and defaults."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Locate the project root .env file regardless of CWD
_THIS_DIR = Path(__file__).resolve().parent          # rta/
_PROJECT_ROOT = _THIS_DIR.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LLM provider: groq | openai | anthropic
    rta_llm_provider: str = "groq"

    # Groq (OpenAI-compatible endpoint)
    groq_api_key: str | None = None
    rta_groq_model: str = "llama-3.1-8b-instant"
    rta_groq_base_url: str = "https://api.groq.com/openai/v1"

    # OpenAI
    openai_api_key: str | None = None
    rta_openai_model: str = "gpt-4o-mini"

    # Anthropic
    anthropic_api_key: str | None = None
    rta_anthropic_model: str = "claude-3-5-sonnet-20241022"

    # Where reviews come from: manual (pasted text) | maps_link (Google Places)
    rta_review_source: str = "manual"
    google_places_api_key: str | None = None
    rta_max_place_reviews: int = 50

    # Image generation (Hugging Face inference)
    rta_enable_images: bool = True
    huggingface_api_key: str | None = None
    # Comma-separated, tried in order
    rta_image_models: str = (
        "Qwen/Qwen-Image-2512,"
        "stabilityai/stable-diffusion-xl-base-1.0,"
        "black-forest-labs/FLUX.1-schnell"
    )
    rta_hf_base_url: str = "https://router.huggingface.co/hf-inference/models"

    # Seconds, applied to every outbound HTTP call
    rta_http_timeout: float = 60.0

    # Marketing copy shape requested from the LLM: structured | plain
    rta_marketing_copy_format: str = "structured"

    # Reject questionnaire values outside the known option lists
    rta_strict_options: bool = True

    # CORS origins (comma-separated). Defaults to localhost dev.
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    cors_origin_regex: str | None = None

    port: int = 8000
    rta_log_level: str = "INFO"

    @property
    def image_model_list(self) -> list[str]:
        """Parse comma-separated candidate image models into an ordered list."""
        return [m.strip() for m in self.rta_image_models.split(",") if m.strip()]

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def uses_maps_link(self) -> bool:
        return self.rta_review_source.strip().lower() == "maps_link"


def get_settings() -> Settings:
    return Settings()
