"""Domain events for event-driven architecture."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from salat_kit.domain.models import GeoCoordinate, NextPrayerResult, PrayerKind


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base class for domain events."""

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True, kw_only=True)
class LocationUpdatedEvent(DomainEvent):
    """Yeni bir konum bilgisi geldiğinde."""

    coordinate: GeoCoordinate


@dataclass(frozen=True, kw_only=True)
class HeadingSampledEvent(DomainEvent):
    """Cihaz pusulasından yeni bir yön örneği geldiğinde."""

    heading: float


@dataclass(frozen=True, kw_only=True)
class QiblaBearingChangedEvent(DomainEvent):
    """Konum değişip kıble açısı yeniden hesaplandığında."""

    coordinate: GeoCoordinate
    bearing: float


@dataclass(frozen=True, kw_only=True)
class QiblaRotationChangedEvent(DomainEvent):
    """Gösterge dönüş açısı yeniden hesaplandığında."""

    bearing: float
    heading: float
    rotation: float


@dataclass(frozen=True, kw_only=True)
class PrayerTickEvent(DomainEvent):
    """Periyodik yenilemede her seferinde."""

    result: NextPrayerResult
    current: PrayerKind | None = None


@dataclass(frozen=True, kw_only=True)
class NextPrayerChangedEvent(DomainEvent):
    """Sıradaki vakit değiştiğinde."""

    result: NextPrayerResult
    previous: PrayerKind | None = None


@dataclass(frozen=True, kw_only=True)
class SettingsChangedEvent(DomainEvent):
    """Ayarlar değiştiğinde."""

    changed_fields: tuple[str, ...]
