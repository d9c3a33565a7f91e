"""Settings for querycodec."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import JSON_MEDIA_TYPE


class QueryCodecSettings(BaseSettings):
    """querycodec configuration settings."""

    LOG_LEVEL: str = "INFO"

    # Value codec
    QUERY_NESTED_ESCAPING: bool = False
    QUERY_STRICT_BOOLEANS: bool = False
    QUERY_MAX_DEPTH: Optional[int] = None

    # Optional dotted path to a hook: fn(text: str) -> callable, used for `f`-tagged scalars
    QUERY_CALLABLE_HOOK: Optional[str] = None

    # Request interceptor
    SYNC_AUTH_SCHEME: str = "AuthSession"
    SYNC_ACCEPT: str = JSON_MEDIA_TYPE
    SYNC_CONTENT_TYPE: str = JSON_MEDIA_TYPE

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = QueryCodecSettings()
