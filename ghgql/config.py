from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix='GHGQL_',
        extra='ignore',
        case_sensitive=False,
        env_file='.env',
        env_file_encoding='utf-8',
    )

    api_url: str = Field(default='https://api.github.com', min_length=8)
    http_timeout_seconds: float = Field(default=5.0, gt=0)
    user_agent: str = Field(default='ghgql/0.1', min_length=1)
    raise_for_status: bool = Field(
        default=False,
        description='Treat non-2xx upstream responses as fetch errors instead of data.',
    )

    debug: bool = False
    path: str = '/'
    host: str = '127.0.0.1'
    port: int = Field(default=8080, ge=1, le=65535)
    log_level: str = 'INFO'


@lru_cache()
def get_settings() -> Settings:
    return Settings()
