"""Qibla bearing and compass rotation."""

import logging
import math
from dataclasses import dataclass

from salat_kit.domain.errors import LocationUnavailableError
from salat_kit.domain.events import QiblaBearingChangedEvent, QiblaRotationChangedEvent
from salat_kit.domain.models import KAABA, GeoCoordinate, normalize_degrees
from salat_kit.services.ports import EventBusPort, HeadingSourcePort, LocationSourcePort

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0

CARDINAL_DIRECTIONS = ("K", "KD", "D", "GD", "G", "GB", "B", "KB")


def compute_bearing(observer: GeoCoordinate, target: GeoCoordinate = KAABA) -> float:
    """
    Gözlemciden hedefe ilk büyük daire yönünü hesapla.

    Sonuç gerçek kuzeyden saat yönünde derece cinsindendir ve [0, 360)
    aralığındadır. Gözlemci hedefle çakışıksa atan2(0, 0) = 0 döner.

    Args:
        observer: Gözlemci konumu
        target: Hedef konum (varsayılan: Kabe)

    Returns:
        Yön açısı (derece)
    """
    phi_o = math.radians(observer.latitude)
    phi_t = math.radians(target.latitude)
    d_lambda = math.radians(target.longitude - observer.longitude)

    y = math.sin(d_lambda) * math.cos(phi_t)
    x = math.cos(phi_o) * math.sin(phi_t) - (
        math.sin(phi_o) * math.cos(phi_t) * math.cos(d_lambda)
    )

    return normalize_degrees(math.degrees(math.atan2(y, x)))


def composite_rotation(bearing: float, heading: float) -> float:
    """
    Göstergeye uygulanacak dönüş açısı.

    Cihaz `heading` yönüne bakarken yukarı bakan bir okun `bearing`
    yönünü göstermesi için gereken saat yönü dönüş. Yumuşatma yapılmaz.
    """
    return normalize_degrees(bearing - heading)


def great_circle_distance_km(a: GeoCoordinate, b: GeoCoordinate = KAABA) -> float:
    """Haversine ile iki nokta arası mesafe (km)."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_phi / 2.0) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    )
    return EARTH_RADIUS_KM * 2.0 * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))


def cardinal_direction(bearing: float) -> str:
    """8 yönlü pusula etiketi (K, KD, D, ...)."""
    index = int((normalize_degrees(bearing) + 22.5) // 45) % 8
    return CARDINAL_DIRECTIONS[index]


@dataclass(frozen=True)
class QiblaSnapshot:
    """Kıble durumunun anlık görüntüsü."""

    coordinate: GeoCoordinate
    bearing: float
    distance_km: float
    heading: float | None = None
    rotation: float | None = None


class QiblaService:
    """Konum ve pusula örneklerinden kıble yönünü güncel tutan servis."""

    def __init__(
        self,
        location_source: LocationSourcePort,
        heading_source: HeadingSourcePort | None = None,
        event_bus: EventBusPort | None = None,
        target: GeoCoordinate = KAABA,
    ) -> None:
        """
        Initialize qibla service.

        Args:
            location_source: Konum kaynağı
            heading_source: Pusula kaynağı (opsiyonel)
            event_bus: Event bus (opsiyonel)
            target: Hedef koordinat (varsayılan: Kabe)
        """
        self._event_bus = event_bus
        self._target = target
        self._coordinate: GeoCoordinate | None = None
        self._bearing: float | None = None
        self._heading: float | None = None
        self._rotation: float | None = None

        location_source.subscribe(self.on_location)
        if heading_source is not None:
            heading_source.subscribe(self.on_heading)

        # Kaynakta zaten bir değer varsa hemen kullan
        if (coordinate := location_source.latest()) is not None:
            self.on_location(coordinate)
        if heading_source is not None and (heading := heading_source.latest()) is not None:
            self.on_heading(heading)

    @property
    def target(self) -> GeoCoordinate:
        """Hedef koordinat."""
        return self._target

    @property
    def bearing(self) -> float | None:
        """Son hesaplanan kıble açısı."""
        return self._bearing

    @property
    def heading(self) -> float | None:
        """Son pusula örneği."""
        return self._heading

    @property
    def rotation(self) -> float | None:
        """Son hesaplanan gösterge dönüşü."""
        return self._rotation

    def on_location(self, coordinate: GeoCoordinate) -> None:
        """Yeni konumda kıble açısını yeniden hesapla."""
        self._coordinate = coordinate
        self._bearing = compute_bearing(coordinate, self._target)
        logger.info(
            f"Kıble açısı güncellendi: {self._bearing:.1f}° "
            f"({coordinate.latitude:.4f}, {coordinate.longitude:.4f})"
        )

        if self._event_bus:
            self._event_bus.publish(
                QiblaBearingChangedEvent(coordinate=coordinate, bearing=self._bearing)
            )

        if self._heading is not None:
            self._update_rotation()

    def on_heading(self, heading: float) -> None:
        """Yeni pusula örneğinde gösterge dönüşünü yeniden hesapla."""
        self._heading = normalize_degrees(heading)
        if self._bearing is not None:
            self._update_rotation()

    def _update_rotation(self) -> None:
        self._rotation = composite_rotation(self._bearing, self._heading)
        logger.debug(f"Gösterge dönüşü: {self._rotation:.1f}°")

        if self._event_bus:
            self._event_bus.publish(
                QiblaRotationChangedEvent(
                    bearing=self._bearing,
                    heading=self._heading,
                    rotation=self._rotation,
                )
            )

    def snapshot(self) -> QiblaSnapshot:
        """Mevcut durumu döndür."""
        if self._coordinate is None or self._bearing is None:
            raise LocationUnavailableError("Kıble hesabı için konum bilgisi yok.")
        return QiblaSnapshot(
            coordinate=self._coordinate,
            bearing=self._bearing,
            distance_km=great_circle_distance_km(self._coordinate, self._target),
            heading=self._heading,
            rotation=self._rotation,
        )
