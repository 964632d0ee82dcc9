"""Configuration for the YouTube SEO workbench."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()



def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}



def _env_list(name: str) -> Tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class AppConfig:
    app_env: str
    secret_key: str
    youtube_api_key: str
    trust_proxy: bool

    samples_per_channel: int
    max_channels: int
    sample_limit: int
    top_keywords: int
    top_hashtags: int
    top_first_words: int
    recommended_hashtags: int
    keyword_highlights: int
    extra_stop_words: Tuple[str, ...]

    @staticmethod
    def from_env() -> "AppConfig":
        return AppConfig(
            app_env=os.getenv("APP_ENV", "development"),
            secret_key=os.getenv("SECRET_KEY", "dev-change-me"),
            youtube_api_key=os.getenv("YOUTUBE_API_KEY", ""),
            trust_proxy=_env_bool("TRUST_PROXY", True),
            samples_per_channel=int(os.getenv("SAMPLES_PER_CHANNEL", "25")),
            max_channels=int(os.getenv("MAX_CHANNELS", "10")),
            sample_limit=int(os.getenv("SAMPLE_LIMIT", "10")),
            top_keywords=int(os.getenv("TOP_KEYWORDS", "15")),
            top_hashtags=int(os.getenv("TOP_HASHTAGS", "10")),
            top_first_words=int(os.getenv("TOP_FIRST_WORDS", "10")),
            recommended_hashtags=int(os.getenv("RECOMMENDED_HASHTAGS", "5")),
            keyword_highlights=int(os.getenv("KEYWORD_HIGHLIGHTS", "8")),
            extra_stop_words=_env_list("EXTRA_STOP_WORDS"),
        )

    def to_flask_config(self) -> dict:
        return {
            "APP_ENV": self.app_env,
            "SECRET_KEY": self.secret_key,
            "YOUTUBE_API_KEY": self.youtube_api_key,
            "TRUST_PROXY": self.trust_proxy,
            "SAMPLES_PER_CHANNEL": self.samples_per_channel,
            "MAX_CHANNELS": self.max_channels,
            "SAMPLE_LIMIT": self.sample_limit,
            "TOP_KEYWORDS": self.top_keywords,
            "TOP_HASHTAGS": self.top_hashtags,
            "TOP_FIRST_WORDS": self.top_first_words,
            "RECOMMENDED_HASHTAGS": self.recommended_hashtags,
            "KEYWORD_HIGHLIGHTS": self.keyword_highlights,
            "EXTRA_STOP_WORDS": self.extra_stop_words,
        }
