"""Domain layer - Business entities and value objects."""

from salat_kit.domain.errors import (
    EmptyInputError,
    LocationUnavailableError,
    NotFoundError,
    SalatKitError,
)
from salat_kit.domain.models import (
    KAABA,
    AsrJuristic,
    CalculationMethod,
    DailyPrayerTimes,
    GeoCoordinate,
    NextPrayerResult,
    PrayerInstant,
    PrayerKind,
    ThemeMode,
    UserSettings,
    normalize_degrees,
)

__all__ = [
    "KAABA",
    "AsrJuristic",
    "CalculationMethod",
    "DailyPrayerTimes",
    "EmptyInputError",
    "GeoCoordinate",
    "LocationUnavailableError",
    "NextPrayerResult",
    "NotFoundError",
    "PrayerInstant",
    "PrayerKind",
    "SalatKitError",
    "ThemeMode",
    "UserSettings",
    "normalize_degrees",
]
