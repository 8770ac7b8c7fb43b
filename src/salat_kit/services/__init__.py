"""Service layer - Business logic."""

from salat_kit.services.ports import (
    EventBusPort,
    HeadingSourcePort,
    LocationSourcePort,
    PrayerTimeProviderPort,
    SchedulerPort,
    SettingsRepositoryPort,
)
from salat_kit.services.prayer_service import (
    PrayerService,
    current_prayer,
    is_active,
    select_next,
)
from salat_kit.services.qibla_service import (
    QiblaService,
    QiblaSnapshot,
    compute_bearing,
    composite_rotation,
)
from salat_kit.services.refresh_service import RefreshService

__all__ = [
    "EventBusPort",
    "HeadingSourcePort",
    "LocationSourcePort",
    "PrayerService",
    "PrayerTimeProviderPort",
    "QiblaService",
    "QiblaSnapshot",
    "RefreshService",
    "SchedulerPort",
    "SettingsRepositoryPort",
    "composite_rotation",
    "compute_bearing",
    "current_prayer",
    "is_active",
    "select_next",
]
