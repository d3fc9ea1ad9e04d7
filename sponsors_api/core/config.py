"""Application configuration via environment variables (pydantic-settings)."""

import re
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_UNIT_SECONDS = {"h": 3600.0, "m": 60.0, "s": 1.0, "ms": 0.001}


def parse_duration(value: str | int | float) -> float:
    """Parse a Go-style duration ("1h", "30m", "1h30m", "90s") into seconds.

    Bare numbers are taken as seconds.
    """
    if isinstance(value, (int, float)):
        seconds = float(value)
    else:
        text = value.strip()
        try:
            seconds = float(text)
        except ValueError:
            pos = 0
            seconds = 0.0
            for match in _DURATION_PART.finditer(text):
                if match.start() != pos:
                    break
                seconds += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
                pos = match.end()
            if not text or pos != len(text):
                raise ValueError(f"invalid duration: {value!r}")
    if seconds < 0:
        raise ValueError(f"duration must not be negative: {value!r}")
    return seconds


class Settings(BaseSettings):
    GITHUB_TOKEN: str = ""
    GITHUB_GRAPHQL_URL: str = "https://api.github.com/graphql"
    GITHUB_TIMEOUT: float = 30.0

    # Public base URL used in the markdown links
    URL: str = "http://localhost:3000"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Seconds; accepts "1h", "30m", "1h30m" or a plain number
    CACHE_TTL: float = 3600.0

    LOG_LEVEL: str = "INFO"
    PROJECT_NAME: str = "Sponsors API"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("CACHE_TTL", mode="before")
    @classmethod
    def _parse_cache_ttl(cls, value):
        return parse_duration(value)

    @property
    def base_url(self) -> str:
        return self.URL.rstrip("/")

    @property
    def github_enabled(self) -> bool:
        return bool(self.GITHUB_TOKEN)


@lru_cache
def get_settings():
    return Settings()

settings = get_settings()
