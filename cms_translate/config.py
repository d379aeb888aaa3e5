"""Configuration management for the translation orchestrator."""

import os
from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv

from .locales import is_supported

load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name, "").strip()
    return float(value) if value else None


@dataclass
class Config:
    """Application configuration."""

    # CMS API
    api_url: str = field(default_factory=lambda: os.getenv("CMS_API_URL", "http://localhost:5000"))
    api_token: str = field(default_factory=lambda: os.getenv("CMS_API_TOKEN", ""))
    # None means no client-side timeout; the server's own timeout applies
    request_timeout: Optional[float] = field(
        default_factory=lambda: _optional_float("CMS_REQUEST_TIMEOUT")
    )

    # Translation settings
    source_locale: str = field(default_factory=lambda: os.getenv("CMS_SOURCE_LOCALE", "en"))
    default_tiers: List[int] = field(
        default_factory=lambda: [
            int(t) for t in os.getenv("DEFAULT_TIERS", "1,2").split(",") if t.strip()
        ]
    )

    # Single-item polling
    poll_initial_delay: float = field(
        default_factory=lambda: float(os.getenv("POLL_INITIAL_DELAY", "3"))
    )
    poll_interval: float = field(
        default_factory=lambda: float(os.getenv("POLL_INTERVAL", "5"))
    )

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: os.getenv("LOG_FORMAT", "console"))

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []
        if not self.api_url:
            errors.append("CMS_API_URL is not set")
        elif not self.api_url.startswith(("http://", "https://")):
            errors.append("CMS_API_URL must start with http:// or https://")
        if self.request_timeout is not None and self.request_timeout <= 0:
            errors.append("CMS_REQUEST_TIMEOUT must be positive")
        if self.poll_initial_delay < 0:
            errors.append("POLL_INITIAL_DELAY must not be negative")
        if self.poll_interval <= 0:
            errors.append("POLL_INTERVAL must be positive")
        if not is_supported(self.source_locale):
            errors.append(f"CMS_SOURCE_LOCALE is not a supported locale: {self.source_locale}")
        bad_tiers = [t for t in self.default_tiers if t not in (1, 2, 3, 4)]
        if bad_tiers:
            errors.append(f"DEFAULT_TIERS contains invalid tiers: {bad_tiers}")
        if self.log_format not in ("console", "json"):
            errors.append("LOG_FORMAT must be 'console' or 'json'")
        return errors


# Global config instance
config = Config()
