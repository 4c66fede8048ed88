"""
Authentication settings.

Thresholds and time windows are passed explicitly into each component so
that tests can override them per case.
"""

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field


class AuthSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    abuse_window_seconds: int = Field(default=3600, gt=0)
    abuse_max_for_ip: int = Field(default=50, gt=0)
    abuse_max_for_username: int = Field(default=7, gt=0)
    abuse_max_for_ip_and_username: int = Field(default=10, gt=0)

    reset_token_ttl_seconds: int = Field(default=10000, gt=0)
    store_retry_after_seconds: int = Field(default=5, ge=0)

    @property
    def abuse_window(self) -> timedelta:
        return timedelta(seconds=self.abuse_window_seconds)

    @property
    def reset_token_ttl(self) -> timedelta:
        return timedelta(seconds=self.reset_token_ttl_seconds)

    @classmethod
    def from_config(cls, config) -> "AuthSettings":
        return cls(
            bcrypt_rounds=config.BCRYPT_ROUNDS,
            abuse_window_seconds=config.ABUSE_WINDOW_SECONDS,
            abuse_max_for_ip=config.ABUSE_MAX_FOR_IP,
            abuse_max_for_username=config.ABUSE_MAX_FOR_USERNAME,
            abuse_max_for_ip_and_username=config.ABUSE_MAX_FOR_IP_AND_USERNAME,
            reset_token_ttl_seconds=config.RESET_TOKEN_TTL_SECONDS,
            store_retry_after_seconds=config.STORE_RETRY_AFTER_SECONDS,
        )
