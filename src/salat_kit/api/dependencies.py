"""Application state and dependencies."""

import logging
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from salat_kit.config import AppConfig, get_config
from salat_kit.domain.errors import LocationUnavailableError
from salat_kit.domain.models import GeoCoordinate, UserSettings
from salat_kit.infrastructure.event_bus import InMemoryEventBus
from salat_kit.infrastructure.prayer_calculator import (
    FixedPrayerCalculator,
    PyIslamPrayerCalculator,
    resolve_timezone,
)
from salat_kit.infrastructure.scheduler import APSchedulerAdapter
from salat_kit.infrastructure.settings_repository import JsonSettingsRepository
from salat_kit.infrastructure.sources import InMemoryHeadingSource, InMemoryLocationSource
from salat_kit.services.ports import PrayerTimeProviderPort
from salat_kit.services.prayer_service import PrayerService
from salat_kit.services.qibla_service import QiblaService
from salat_kit.services.refresh_service import RefreshService

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Application state container."""

    config: AppConfig
    settings: UserSettings
    settings_repository: JsonSettingsRepository
    event_bus: InMemoryEventBus
    scheduler_adapter: APSchedulerAdapter
    location_source: InMemoryLocationSource
    heading_source: InMemoryHeadingSource
    qibla_service: QiblaService
    prayer_service: PrayerService | None
    refresh_service: RefreshService | None
    started_at: datetime

    def require_prayer_service(self) -> PrayerService:
        """Vakit servisini döndür, konum yoksa hata ver."""
        if self.prayer_service is None:
            raise LocationUnavailableError("Vakit hesabı için konum bilgisi yok.")
        return self.prayer_service


def build_provider(
    config: AppConfig,
    settings: UserSettings,
    location: GeoCoordinate,
) -> PrayerTimeProviderPort:
    """Yapılandırmaya göre vakit hesaplayıcı oluştur."""
    tz: ZoneInfo = resolve_timezone(location)
    if config.prayer_provider == "fixed":
        return FixedPrayerCalculator(tz=tz)
    return PyIslamPrayerCalculator(
        location,
        method=settings.calculation_method,
        asr_juristic=settings.asr_juristic,
        tz=tz,
    )


def apply_location(state: AppState, location: GeoCoordinate) -> None:
    """Konum/hesaplama ayarı değişince vakit servislerini yeniden kur."""
    provider = build_provider(state.config, state.settings, location)

    if state.prayer_service is None:
        state.prayer_service = PrayerService(provider)
    else:
        state.prayer_service.update_provider(provider)

    if state.refresh_service is None:
        state.refresh_service = RefreshService(
            prayer_service=state.prayer_service,
            scheduler=state.scheduler_adapter,
            event_bus=state.event_bus,
            interval_seconds=state.config.refresh_interval_seconds,
        )

    if state.scheduler_adapter.is_running:
        state.refresh_service.restart()

    logger.info(f"Vakit servisi güncellendi: {state.prayer_service.timezone}")


# Global application state (singleton)
_app_state: AppState | None = None


async def initialize_app_state(config: AppConfig | None = None) -> AppState:
    """
    Initialize application state.

    Args:
        config: Uygulama yapılandırması (varsayılan: ortam değişkenleri)

    Returns:
        Initialized AppState
    """
    global _app_state

    if _app_state is not None:
        return _app_state

    config = config or get_config()

    # Repository ve ayarlar
    settings_repo = JsonSettingsRepository(config.settings_path)
    settings = await settings_repo.load()
    location = settings.location or config.default_location

    # Infrastructure
    event_bus = InMemoryEventBus()
    scheduler_adapter = APSchedulerAdapter()
    location_source = InMemoryLocationSource(initial=location, event_bus=event_bus)
    heading_source = InMemoryHeadingSource(event_bus=event_bus)

    # Services
    qibla_service = QiblaService(
        location_source=location_source,
        heading_source=heading_source,
        event_bus=event_bus,
    )

    _app_state = AppState(
        config=config,
        settings=settings,
        settings_repository=settings_repo,
        event_bus=event_bus,
        scheduler_adapter=scheduler_adapter,
        location_source=location_source,
        heading_source=heading_source,
        qibla_service=qibla_service,
        prayer_service=None,
        refresh_service=None,
        started_at=datetime.now(),
    )

    if location is not None:
        apply_location(_app_state, location)
    else:
        logger.warning("Konum bilgisi yok, PUT /api/location ile ayarlanmalı.")

    return _app_state


def get_app_state() -> AppState:
    """Get current application state."""
    if _app_state is None:
        raise RuntimeError("Application state not initialized")
    return _app_state


async def shutdown_app_state() -> None:
    """Shutdown application state."""
    global _app_state

    if _app_state is not None:
        if _app_state.refresh_service is not None:
            _app_state.refresh_service.stop()
        _app_state.scheduler_adapter.shutdown()
        _app_state = None
