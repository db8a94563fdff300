"""Configuration management using Pydantic Settings."""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Only load .env file in development (not Lambda/production)
        env_file=".env" if os.getenv("AWS_EXECUTION_ENV") is None else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # AWS Configuration
    aws_region: str = "us-east-2"
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_session_token: str | None = None  # Required for temporary credentials

    @field_validator("aws_access_key_id", "aws_secret_access_key", mode="before")
    @classmethod
    def convert_empty_string_to_none(cls, v):
        """Convert empty strings to None so boto3 can use IAM role in Lambda."""
        if v is None:
            return None
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    # DynamoDB Configuration
    dynamodb_endpoint_url: str | None = None
    dynamodb_table_accounts: str = "yuvi-accounts"
    dynamodb_table_sessions: str = "yuvi-sessions"
    dynamodb_table_api_keys: str = "yuvi-api-keys"
    dynamodb_table_pastes: str = "yuvi-pastes"

    # Application Configuration
    log_level: str = "INFO"
    api_title: str = "YUVI Paste API"
    api_version: str = "1.0.0"
    api_description: str = "API-first developer pastebin"

    # Identity
    allowed_email_domains: list[str] = ["gmail.com"]
    otp_length: int = 6
    otp_rejected_code: str = "000000"
    session_ttl_hours: int = 24

    @field_validator("allowed_email_domains", mode="after")
    @classmethod
    def normalize_domains(cls, v: list[str]) -> list[str]:
        """Lower-case domains and strip a leading '@'."""
        return [d.strip().lower().lstrip("@") for d in v if d.strip()]

    # API Keys
    api_key_prefix: str = "YUVI_"
    max_active_keys_per_account: int = 2
    # TokenHashIndex is eventually consistent; a miss is looked up once more
    key_lookup_retry_delay_seconds: float = 0.2

    # Pastes
    max_pastes_per_account: int = 10
    paste_id_length: int = 6
    max_title_length: int = 200
    max_paste_size_bytes: int = 256 * 1024  # 256KB

    # API Limits
    max_request_size_bytes: int = 512 * 1024  # 512KB

    # Rate Limiting
    default_rate_limit_per_minute: int = 100

    # Conditional write retries before giving up with 503
    write_retry_attempts: int = 5
    # First backoff ceiling for transaction conflicts; doubles per attempt
    write_retry_base_delay_seconds: float = 0.05


# Global settings instance
settings = Settings()
