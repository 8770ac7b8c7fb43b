"""Infrastructure layer - Adapters and implementations."""

from salat_kit.infrastructure.event_bus import InMemoryEventBus
from salat_kit.infrastructure.prayer_calculator import (
    FixedPrayerCalculator,
    PyIslamPrayerCalculator,
)
from salat_kit.infrastructure.scheduler import APSchedulerAdapter
from salat_kit.infrastructure.settings_repository import JsonSettingsRepository
from salat_kit.infrastructure.sources import InMemoryHeadingSource, InMemoryLocationSource

__all__ = [
    "APSchedulerAdapter",
    "FixedPrayerCalculator",
    "InMemoryEventBus",
    "InMemoryHeadingSource",
    "InMemoryLocationSource",
    "JsonSettingsRepository",
    "PyIslamPrayerCalculator",
]
