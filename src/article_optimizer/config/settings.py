"""Configuration settings for the article optimizer."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Article CRUD API
    api_base_url: str = os.getenv("API_BASE_URL", "http://localhost:5000/api/articles")

    # API Keys
    serpapi_key: str = os.getenv("SERPAPI_KEY", "")
    gemini_api_key: str = os.getenv("GEMINI_API_KEY", "")
    anthropic_api_key: str = os.getenv("ANTHROPIC_API_KEY", "")

    # Rewrite model (LiteLLM id, or a claude-* id for the Anthropic SDK)
    rewrite_model: str = "gemini/gemini-2.5-flash"
    rewrite_max_tokens: int = 8192
    rewrite_temperature: float = 0.7

    # Reference search
    reference_limit: int = 2
    search_result_count: int = 10  # over-fetch so filtering still leaves enough

    # Content extraction
    request_timeout_seconds: float = 10.0
    render_timeout_ms: int = 10000
    min_container_chars: int = 200
    dynamic_fallback_chars: int = 100
    max_content_chars: int = 5000  # bounds what is sent to the rewrite step

    # Courtesy throttling
    reference_delay_seconds: float = 2.0
    article_delay_seconds: float = 5.0

    # Paths
    project_root: Path = Path(__file__).parent.parent.parent.parent
    output_dir: Path = project_root / "output" / "runs"

    class Config:
        env_file = ".env"
        extra = "ignore"


# Global settings instance
settings = Settings()
