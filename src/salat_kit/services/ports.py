"""Service layer interfaces (ports)."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from datetime import date, datetime

from salat_kit.domain.events import DomainEvent
from salat_kit.domain.models import DailyPrayerTimes, GeoCoordinate, UserSettings


class PrayerTimeProviderPort(ABC):
    """Günlük vakit hesaplama arayüzü (port)."""

    @abstractmethod
    def calculate(self, target_date: date) -> DailyPrayerTimes:
        """Belirtilen tarih için vakitleri hesapla."""

    @abstractmethod
    def calculate_range(self, start_date: date, days: int) -> list[DailyPrayerTimes]:
        """Belirtilen tarihten itibaren n gün için vakitleri hesapla."""


class LocationSourcePort(ABC):
    """Konum kaynağı arayüzü (port)."""

    @abstractmethod
    def latest(self) -> GeoCoordinate | None:
        """Bilinen son konum."""

    @abstractmethod
    def subscribe(self, handler: Callable[[GeoCoordinate], None]) -> None:
        """Yeni konumlara abone ol."""


class HeadingSourcePort(ABC):
    """Cihaz yönü (pusula) kaynağı arayüzü (port)."""

    @abstractmethod
    def latest(self) -> float | None:
        """Bilinen son yön (derece)."""

    @abstractmethod
    def subscribe(self, handler: Callable[[float], None]) -> None:
        """Yeni yön örneklerine abone ol."""


class SettingsRepositoryPort(ABC):
    """Ayarlar deposu arayüzü (port)."""

    @abstractmethod
    async def load(self) -> UserSettings:
        """Ayarları yükle."""

    @abstractmethod
    async def save(self, settings: UserSettings) -> None:
        """Ayarları kaydet."""


class SchedulerPort(ABC):
    """
    Zamanlayıcı arayüzü (port).

    Callback'ler coroutine fonksiyonlarıdır ve uygulamanın event loop'unda çalışır.
    """

    @abstractmethod
    def schedule_every(
        self,
        seconds: float,
        callback: Callable[[], Awaitable[None]],
        job_id: str,
    ) -> None:
        """Belirtilen aralıkla tekrar eden iş planla."""

    @abstractmethod
    def schedule_at(
        self,
        run_time: datetime,
        callback: Callable[[], Awaitable[None]],
        job_id: str,
    ) -> None:
        """Belirtilen zamanda çalıştırılacak iş planla."""

    @abstractmethod
    def cancel(self, job_id: str) -> bool:
        """Planlanmış işi iptal et."""

    @abstractmethod
    def get_scheduled_jobs(self) -> list[tuple[str, datetime]]:
        """Planlanmış işleri listele."""


class EventBusPort(ABC):
    """Event bus arayüzü (port)."""

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """Event yayınla."""

    @abstractmethod
    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: Callable[[DomainEvent], None],
    ) -> None:
        """Event tipine abone ol."""
