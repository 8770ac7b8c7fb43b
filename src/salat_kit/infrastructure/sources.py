"""In-memory location and heading sources fed by the host application."""

import logging
from collections.abc import Callable

from salat_kit.domain.events import HeadingSampledEvent, LocationUpdatedEvent
from salat_kit.domain.models import GeoCoordinate, normalize_degrees
from salat_kit.services.ports import EventBusPort, HeadingSourcePort, LocationSourcePort

logger = logging.getLogger(__name__)


class InMemoryLocationSource(LocationSourcePort):
    """Dışarıdan itilen son konumu tutan kaynak."""

    def __init__(
        self,
        initial: GeoCoordinate | None = None,
        event_bus: EventBusPort | None = None,
    ) -> None:
        self._latest = initial
        self._event_bus = event_bus
        self._subscribers: list[Callable[[GeoCoordinate], None]] = []

    def latest(self) -> GeoCoordinate | None:
        """Bilinen son konum."""
        return self._latest

    def subscribe(self, handler: Callable[[GeoCoordinate], None]) -> None:
        """Yeni konumlara abone ol."""
        self._subscribers.append(handler)

    def push(self, coordinate: GeoCoordinate) -> None:
        """Yeni konumu kaydet ve abonelere bildir."""
        self._latest = coordinate
        logger.debug(f"Konum alındı: {coordinate.latitude:.4f}, {coordinate.longitude:.4f}")

        for handler in self._subscribers:
            handler(coordinate)

        if self._event_bus:
            self._event_bus.publish(LocationUpdatedEvent(coordinate=coordinate))


class InMemoryHeadingSource(HeadingSourcePort):
    """Dışarıdan itilen son pusula örneğini tutan kaynak."""

    def __init__(self, event_bus: EventBusPort | None = None) -> None:
        self._latest: float | None = None
        self._event_bus = event_bus
        self._subscribers: list[Callable[[float], None]] = []

    def latest(self) -> float | None:
        """Bilinen son yön."""
        return self._latest

    def subscribe(self, handler: Callable[[float], None]) -> None:
        """Yeni yön örneklerine abone ol."""
        self._subscribers.append(handler)

    def push(self, heading: float) -> None:
        """Yeni yön örneğini kaydet ve abonelere bildir."""
        self._latest = normalize_degrees(heading)

        for handler in self._subscribers:
            handler(self._latest)

        if self._event_bus:
            self._event_bus.publish(HeadingSampledEvent(heading=self._latest))
