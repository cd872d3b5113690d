"""
Configuration module for app-level AWS settings.

The workflow host either hands the app configuration to each invocation
or leaves it to the environment. Both paths are validated the same way
and produce a type-safe configuration object.
"""
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from services.sts_service import Credentials

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class Config:
    """Type-safe configuration object holding the app's base credentials."""

    access_key_id: str
    secret_access_key: str
    session_token: Optional[str] = None
    endpoint: Optional[str] = None
    log_level: str = "INFO"

    @property
    def credentials(self) -> Credentials:
        """Base credentials used when no role is assumed."""
        return Credentials(
            access_key_id=self.access_key_id,
            secret_access_key=self.secret_access_key,
            session_token=self.session_token,
        )

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create Config instance from environment variables.

        Raises:
            ValueError: If required environment variables are missing or invalid.
        """
        return cls._build(
            access_key_id=os.environ.get("AWS_ACCESS_KEY_ID"),
            secret_access_key=os.environ.get("AWS_SECRET_ACCESS_KEY"),
            session_token=os.environ.get("AWS_SESSION_TOKEN"),
            endpoint=os.environ.get("AWS_ENDPOINT_URL"),
            source="environment variable",
            names=("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY"),
        )

    @classmethod
    def from_app_config(cls, app_config: Mapping[str, Any]) -> "Config":
        """
        Create Config instance from the app config mapping supplied by the host.

        Args:
            app_config: Mapping with accessKeyId, secretAccessKey and the
                optional sessionToken and endpoint keys

        Raises:
            ValueError: If required keys are missing or invalid.
        """
        return cls._build(
            access_key_id=app_config.get("accessKeyId"),
            secret_access_key=app_config.get("secretAccessKey"),
            session_token=app_config.get("sessionToken"),
            endpoint=app_config.get("endpoint"),
            source="app config key",
            names=("accessKeyId", "secretAccessKey"),
        )

    @classmethod
    def _build(
        cls,
        access_key_id: Optional[str],
        secret_access_key: Optional[str],
        session_token: Optional[str],
        endpoint: Optional[str],
        source: str,
        names: tuple,
    ) -> "Config":
        if not access_key_id:
            raise ValueError(f"{names[0]} {source} is required")
        if not secret_access_key:
            raise ValueError(f"{names[1]} {source} is required")

        log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
        if log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {VALID_LOG_LEVELS}, got: {log_level}"
            )

        return cls(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token or None,
            endpoint=endpoint or None,
            log_level=log_level,
        )


_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance built from the environment.

    Returns:
        Config: The validated configuration object

    Raises:
        ValueError: If required environment variables are missing or invalid.
    """
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config
