"""
Configuration management for Job Finder.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Adzuna job search
    adzuna_app_id: str = ""
    adzuna_app_key: str = ""
    adzuna_base_url: str = "https://api.adzuna.com/v1/api/jobs"
    max_days_old: int = 7

    # AWS (resume storage + inference endpoints)
    aws_region: str = "eu-central-1"
    aws_s3_bucket_name: str = ""
    upload_endpoint_url: str = ""
    parse_endpoint_url: str = ""
    score_endpoint_url: str = ""

    # HTTP
    request_timeout: float = 30.0
    cors_origins: str = "http://localhost:3000"
    search_rate_limit: str = "30/minute"

    # Terminal client
    api_base_url: str = "http://localhost:8000"
    page_size: int = 15
    max_page_buttons: int = 5
    success_display_delay: float = 3.0

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


settings = Settings()
