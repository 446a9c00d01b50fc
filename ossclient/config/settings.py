"""Client settings using Pydantic Settings."""

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from ..utils.constants import MIN_PART_SIZE


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    debug: bool = Field(default=False, alias="DEBUG")

    # Credentials
    oss_access_key_id: str = Field(default="", alias="OSS_ACCESS_KEY_ID")
    oss_access_key_secret: SecretStr = Field(
        default=SecretStr(""), alias="OSS_ACCESS_KEY_SECRET"
    )

    # Endpoint
    oss_endpoint: str = Field(
        default="https://oss-cn-hangzhou.aliyuncs.com", alias="OSS_ENDPOINT"
    )
    oss_bucket: str = Field(default="", alias="OSS_BUCKET")
    request_timeout: float = Field(default=60.0, gt=0, alias="OSS_REQUEST_TIMEOUT")

    # Multipart upload
    part_size: int = Field(default=MIN_PART_SIZE, alias="OSS_PART_SIZE")
    part_concurrency: int = Field(default=1, ge=1, alias="OSS_PART_CONCURRENCY")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("part_size")
    @classmethod
    def part_size_positive(cls, v: int) -> int:
        """Reject part sizes the planner would refuse anyway."""
        if v <= 0:
            raise ValueError("OSS_PART_SIZE must be a positive number of bytes")
        return v


# Global settings instance
settings = Settings()
