from __future__ import annotations

from dataclasses import dataclass, field
import os


LANGUAGE_NAMES = {
    "id": "Indonesia",
    "en": "English",
    "zh-CN": "中文",
    "ja": "日本語",
    "ko": "한국어",
    "es": "Español",
    "fr": "Français",
    "hi": "Hindi",
    "ar": "العربية",
}


@dataclass(slots=True)
class RetryPolicy:
    max_attempts: int = 4
    initial_delay: float = 2.0
    backoff_factor: float = 1.5
    backoff_jitter: float = 0.25


@dataclass(slots=True)
class RateLimitSettings:
    max_requests_per_minute: int = 60
    window_seconds: float = 60.0
    poll_interval: float = 1.0


@dataclass(slots=True)
class PipelineSettings:
    max_batch_size: int = 80
    max_concurrent: int = 2
    request_delay: float = 0.1
    rate_limit_delay: float = 2.0
    network_cooldown: float = 1.0
    fallback_pacing_delay: float = 0.05
    fallback_pacing_threshold: int = 10
    delimiter: str = "\n___\n"


@dataclass(slots=True)
class EndpointSettings:
    url: str = field(default_factory=lambda: os.getenv("PAGETRANSLATE_ENDPOINT", "https://translate.googleapis.com/translate_a/single"))
    client: str = "gtx"
    timeout: float = 20.0
    proxy: str | None = field(default_factory=lambda: os.getenv("PAGETRANSLATE_PROXY"))


@dataclass(slots=True)
class AppSettings:
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    rate_limit: RateLimitSettings = field(default_factory=RateLimitSettings)
    pipeline: PipelineSettings = field(default_factory=PipelineSettings)
    endpoint: EndpointSettings = field(default_factory=EndpointSettings)
    default_source_lang: str = field(default_factory=lambda: os.getenv("PAGETRANSLATE_SOURCE", "id"))
    default_target_lang: str = field(default_factory=lambda: os.getenv("PAGETRANSLATE_TARGET", "en"))


SETTINGS = AppSettings()
