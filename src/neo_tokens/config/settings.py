"""
Token subsystem settings.

Loaded from `NEO_TOKENS_*` environment variables or a local .env file.
"""
import base64
import binascii
from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_KEY_LENGTHS = (16, 24, 32)

FOURTEEN_DAYS = 14 * 24 * 3600


def required_key_capacity(retention: int, rotation_interval: int) -> int:
    """Keys that can be alive at once under a rotation schedule.
    
    Rotations are at least `rotation_interval` apart, so at most
    `retention // rotation_interval + 1` superseded keys fall inside the
    retention window, plus the active key.
    """
    return retention // rotation_interval + 2


class TokenSettings(BaseSettings):
    """Settings for key management and token validity windows."""
    
    model_config = SettingsConfigDict(
        env_prefix="NEO_TOKENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    environment: str = Field(default="development")
    
    # Key management
    key: Optional[SecretStr] = Field(default=None, description="Base64 encoded AES key")
    require_configured_key: bool = Field(default=False)
    max_keys: int = Field(default=16, ge=1)  # fits 14 days retention with daily rotation
    
    # Validity windows (seconds)
    login_token_max_age_seconds: int = Field(default=FOURTEEN_DAYS, gt=0)  # cookie lifetime
    nonce_max_age_seconds: int = Field(default=300, gt=0)  # 5 minutes
    clock_skew_seconds: int = Field(default=0, ge=0)
    
    # Rotation (seconds)
    key_rotation_interval_seconds: int = Field(default=86400, gt=0)  # 1 day
    key_retention_seconds: int = Field(default=FOURTEEN_DAYS, gt=0)
    key_rotation_check_interval_seconds: float = Field(default=300, gt=0)
    
    @field_validator("key")
    @classmethod
    def validate_key(cls, value: Optional[SecretStr]) -> Optional[SecretStr]:
        if value is None or not value.get_secret_value().strip():
            return None
        try:
            raw = base64.b64decode(value.get_secret_value().strip(), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("key must be valid base64") from e
        if len(raw) not in VALID_KEY_LENGTHS:
            raise ValueError(f"key must decode to 16, 24 or 32 bytes, got {len(raw)}")
        return value
    
    @model_validator(mode="after")
    def validate_retention(self) -> "TokenSettings":
        if self.key_retention_seconds < self.login_token_max_age_seconds:
            raise ValueError(
                "key_retention_seconds must cover login_token_max_age_seconds, "
                "otherwise live login tokens lose their key"
            )
        capacity = required_key_capacity(
            self.key_retention_seconds, self.key_rotation_interval_seconds
        )
        if self.max_keys < capacity:
            raise ValueError(
                f"max_keys must be at least {capacity} to keep every key inside "
                "key_retention_seconds under the rotation schedule"
            )
        return self
    
    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")
    
    @property
    def allow_implicit_key_generation(self) -> bool:
        return not (self.is_production or self.require_configured_key)
    
    def key_bytes(self) -> Optional[bytes]:
        """Decoded configured key, or None when unset."""
        if self.key is None:
            return None
        return base64.b64decode(self.key.get_secret_value().strip(), validate=True)


@lru_cache()
def get_token_settings() -> TokenSettings:
    """Get cached token settings instance."""
    return TokenSettings()
