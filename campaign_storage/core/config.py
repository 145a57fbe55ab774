"""Application configuration using Pydantic Settings."""

import re
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings
from typing import Optional
import os


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Service Identity
    SERVICE_NAME: str = "campaign-storage"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"  # development, staging, production

    # Logging Configuration
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_JSON: bool = True    # JSON logs (prod) vs pretty console (dev)
    DEBUG: bool = False      # Enable debug mode features

    # Storage Backend Configuration
    STORAGE_BACKEND: str = "s3"  # Options: "local" or "s3"
    STORAGE_PATH: str = os.path.join(os.getcwd(), "storage")

    # S3 Storage Configuration
    AWS_REGION: str = "us-east-1"
    AWS_S3_BUCKET_NAME: str = "campaign-assets-dev"
    AWS_ENDPOINT_URL: Optional[str] = None  # For MinIO or S3-compatible services

    # Campaign asset conventions
    SUPPORT_EMAIL: str = "support@deebly.co"
    SIGNED_URL_EXPIRY_SECONDS: int = 3600  # 1 hour

    @field_validator('STORAGE_BACKEND')
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Only the local filesystem and S3 backends exist."""
        v = v.strip().lower()
        if v not in ("local", "s3"):
            raise ValueError(f"STORAGE_BACKEND must be 'local' or 's3', got '{v}'")
        return v

    @field_validator('AWS_S3_BUCKET_NAME')
    @classmethod
    def validate_s3_bucket_name(cls, v: str) -> str:
        """Validate S3 bucket name follows AWS naming conventions.

        Rules:
        - 3-63 characters long
        - Lowercase letters, numbers, hyphens, and dots only
        - Must start and end with a letter or number
        - No consecutive dots
        - Not formatted as an IP address
        """
        if not v:  # Allow empty for local storage backend
            return v

        if not 3 <= len(v) <= 63:
            raise ValueError(f"S3 bucket name must be 3-63 characters long, got {len(v)}")

        if not re.match(r'^[a-z0-9][a-z0-9.-]*[a-z0-9]$', v):
            raise ValueError(
                f"S3 bucket name '{v}' must start/end with letter or number, "
                "and contain only lowercase letters, numbers, hyphens, and dots"
            )

        if '..' in v:
            raise ValueError("S3 bucket name cannot contain consecutive dots")

        if re.match(r'^\d+\.\d+\.\d+\.\d+$', v):
            raise ValueError("S3 bucket name cannot be formatted as an IP address")

        return v

    @field_validator('AWS_ENDPOINT_URL')
    @classmethod
    def validate_endpoint_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate AWS endpoint URL format if provided."""
        if v is None or v == "":
            return None

        if not re.match(r'^https?://.+', v):
            raise ValueError(
                f"AWS_ENDPOINT_URL must start with http:// or https://, got '{v}'"
            )

        return v

    @field_validator('SUPPORT_EMAIL')
    @classmethod
    def validate_support_email(cls, v: str) -> str:
        """The support contact is shown to end users in error messages."""
        if not re.match(r'^[^@\s]+@[^@\s]+\.[^@\s]+$', v):
            raise ValueError(f"SUPPORT_EMAIL must be an e-mail address, got '{v}'")
        return v

    @field_validator('SIGNED_URL_EXPIRY_SECONDS')
    @classmethod
    def validate_signed_url_expiry(cls, v: int) -> int:
        """Presigned URLs live between 1 second and 7 days."""
        if v < 1:
            raise ValueError("SIGNED_URL_EXPIRY_SECONDS must be at least 1 second")
        if v > 604800:
            raise ValueError("SIGNED_URL_EXPIRY_SECONDS cannot exceed 604800 seconds (7 days)")
        return v

    @model_validator(mode='after')
    def validate_s3_configuration(self):
        """Ensure S3 backend has required configuration."""
        if self.STORAGE_BACKEND == "s3":
            if not self.AWS_S3_BUCKET_NAME:
                raise ValueError(
                    "AWS_S3_BUCKET_NAME must be set when STORAGE_BACKEND=s3"
                )
            if not self.AWS_REGION:
                raise ValueError(
                    "AWS_REGION must be set when STORAGE_BACKEND=s3"
                )
        return self

    @property
    def is_debug_mode(self) -> bool:
        """Check if application is in debug mode."""
        return self.DEBUG or self.LOG_LEVEL.upper() == "DEBUG"

    @property
    def use_json_logs(self) -> bool:
        """Determine if JSON logging should be used.

        In production, always use JSON logs.
        In development, allow override via LOG_JSON setting.
        """
        if self.ENVIRONMENT == "production":
            return True
        if self.DEBUG:
            return self.LOG_JSON
        return True

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
