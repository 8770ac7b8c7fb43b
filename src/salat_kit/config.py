"""Configuration management."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Self

from salat_kit.domain.models import GeoCoordinate


def _get_default_settings_path() -> Path:
    """Get default settings path."""
    return Path.home() / ".config" / "salat-kit" / "settings.json"


def _get_float(name: str) -> float | None:
    value = os.getenv(name)
    return float(value) if value else None


@dataclass
class AppConfig:
    """Application configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    # File paths
    settings_path: Path = field(default_factory=_get_default_settings_path)

    # Prayer engine: "pyislam" veya "fixed"
    prayer_provider: str = "pyislam"
    refresh_interval_seconds: float = 60.0
    locale: str = "tr_TR"

    # Kayıtlı konum yoksa kullanılacak varsayılan konum
    default_latitude: float | None = None
    default_longitude: float | None = None

    def __post_init__(self) -> None:
        """Değer doğrulaması."""
        if self.prayer_provider not in ("pyislam", "fixed"):
            raise ValueError(f"Geçersiz vakit sağlayıcı: {self.prayer_provider}")
        if self.refresh_interval_seconds <= 0:
            raise ValueError(f"Geçersiz yenileme aralığı: {self.refresh_interval_seconds}")

    @property
    def default_location(self) -> GeoCoordinate | None:
        """Ortam değişkenlerinden gelen varsayılan konum."""
        if self.default_latitude is None or self.default_longitude is None:
            return None
        return GeoCoordinate(latitude=self.default_latitude, longitude=self.default_longitude)

    @classmethod
    def from_env(cls) -> Self:
        """Load configuration from environment variables."""
        return cls(
            host=os.getenv("SALAT_KIT_HOST", "0.0.0.0"),
            port=int(os.getenv("SALAT_KIT_PORT", "8080")),
            log_level=os.getenv("SALAT_KIT_LOG_LEVEL", "INFO"),
            settings_path=Path(
                os.getenv("SALAT_KIT_SETTINGS_PATH", str(_get_default_settings_path()))
            ),
            prayer_provider=os.getenv("SALAT_KIT_PRAYER_PROVIDER", "pyislam").lower(),
            refresh_interval_seconds=float(os.getenv("SALAT_KIT_REFRESH_INTERVAL", "60")),
            locale=os.getenv("SALAT_KIT_LOCALE", "tr_TR"),
            default_latitude=_get_float("SALAT_KIT_DEFAULT_LAT"),
            default_longitude=_get_float("SALAT_KIT_DEFAULT_LNG"),
        )


_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get application configuration."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def setup_logging(level: str = "INFO") -> None:
    """Setup application logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
