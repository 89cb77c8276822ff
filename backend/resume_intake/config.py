from pydantic_settings import BaseSettings
from functools import lru_cache
import os


class Settings(BaseSettings):
    app_name: str = "Resume Intake API"
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"
    log_level: str = "INFO"

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:5173,http://localhost:5174"

    # AI/LLM Configuration
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    ai_max_retries: int = 2  # extra attempts after the first transport failure
    ai_retry_delay_sec: float = 1.0

    # Document rendering
    pdf_render_scale: float = 1.5
    composite_jpeg_quality: int = 92

    # Preview step
    preview_thumbnail_scale: float = 0.4
    preview_max_dimension: int = 1024  # Max width or height in pixels for image previews
    preview_jpeg_quality: int = 70

    # Ingestion
    max_upload_mb: int = 10
    auto_parse_default: bool = False

    class Config:
        env_file = ".env"
        extra = "ignore"
        # Make field names case-insensitive for environment variables
        case_sensitive = False

    def get_cors_origins(self) -> list:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
