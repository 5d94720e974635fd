"""Configuration management."""

import os
from pathlib import Path
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


class Config(BaseModel):
    """Application configuration."""

    # API Keys
    gemini_api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""),
        description="Google Generative Language API key"
    )

    # Endpoints
    api_base_url: str = Field(
        default_factory=lambda: os.getenv(
            "STUDIOFLOW_API_BASE_URL",
            "https://generativelanguage.googleapis.com/v1beta",
        ),
        description="Base URL of the generative language API"
    )
    text_model: str = Field(
        default="gemini-2.5-flash-preview-09-2025",
        description="Model used for text generation"
    )
    image_model: str = Field(
        default="imagen-4.0-generate-001",
        description="Model used for thumbnail generation"
    )
    tts_model: str = Field(
        default="gemini-2.5-flash-preview-tts",
        description="Model used for speech synthesis"
    )

    # Retry behaviour
    request_timeout: float = Field(
        default_factory=lambda: _env_float("STUDIOFLOW_REQUEST_TIMEOUT", 120.0),
        description="Per-request timeout in seconds"
    )
    max_attempts: int = Field(
        default=5,
        description="Attempts per remote call before giving up",
        ge=1
    )
    backoff_base: float = Field(
        default=1.0,
        description="Base backoff delay in seconds (doubled each attempt)"
    )
    backoff_jitter: float = Field(
        default=1.0,
        description="Upper bound of the random jitter added to each delay"
    )
    retry_budget: float = Field(
        default_factory=lambda: _env_float("STUDIOFLOW_RETRY_BUDGET", 30.0),
        description="Total seconds a single call may spend retrying"
    )

    # Paths
    projects_path: Path = Field(
        default_factory=lambda: Path(
            os.getenv("STUDIOFLOW_PROJECTS", str(Path.home() / ".studioflow" / "projects.yaml"))
        ),
        description="YAML file holding saved projects"
    )
    output_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("STUDIOFLOW_OUTPUT", "./output")),
        description="Directory for downloaded audio and thumbnails"
    )

    class Config:
        """Pydantic config."""
        frozen = False

    def validate_required(self) -> None:
        """Validate that required credentials are set."""
        if not self.gemini_api_key:
            raise ValueError("GEMINI_API_KEY not set")


# Global config instance
config = Config()
