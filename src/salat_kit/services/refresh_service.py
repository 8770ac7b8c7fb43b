"""Periodic next-prayer refresh."""

import logging

from salat_kit.domain.events import NextPrayerChangedEvent, PrayerTickEvent
from salat_kit.domain.models import NextPrayerResult, PrayerKind
from salat_kit.services.ports import EventBusPort, SchedulerPort
from salat_kit.services.prayer_service import PrayerService

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = "next_prayer_refresh"
BOUNDARY_JOB_ID = "next_prayer_boundary"


class RefreshService:
    """Sıradaki vakti periyodik olarak yeniden hesaplayan servis."""

    def __init__(
        self,
        prayer_service: PrayerService,
        scheduler: SchedulerPort,
        event_bus: EventBusPort | None = None,
        interval_seconds: float = 60,
    ) -> None:
        """
        Initialize refresh service.

        Args:
            prayer_service: Vakit servisi
            scheduler: Zamanlayıcı adaptörü
            event_bus: Event bus (opsiyonel)
            interval_seconds: Yenileme aralığı (varsayılan: 60 saniye)
        """
        self._prayer_service = prayer_service
        self._scheduler = scheduler
        self._event_bus = event_bus
        self._interval = interval_seconds
        self._running = False
        self._last_result: NextPrayerResult | None = None
        self._current: PrayerKind | None = None

    @property
    def is_running(self) -> bool:
        """Yenileme planlı mı?"""
        return self._running

    @property
    def last_result(self) -> NextPrayerResult | None:
        """Son hesaplanan sıradaki vakit."""
        return self._last_result

    @property
    def current(self) -> PrayerKind | None:
        """Son hesaplanan geçerli vakit."""
        return self._current

    def tick(self) -> NextPrayerResult:
        """Sıradaki ve geçerli vakti yeniden hesapla ve yayınla."""
        now = self._prayer_service.now()
        result = self._prayer_service.get_next_prayer(now)
        self._current = self._prayer_service.get_current_prayer(now)

        previous = self._last_result
        changed = previous is None or previous.prayer != result.prayer
        self._last_result = result

        if self._event_bus:
            self._event_bus.publish(PrayerTickEvent(result=result, current=self._current))
            if changed:
                self._event_bus.publish(
                    NextPrayerChangedEvent(
                        result=result,
                        previous=previous.prayer.kind if previous else None,
                    )
                )

        if changed:
            logger.info(
                f"Sıradaki vakit: {result.prayer.kind.display_name} "
                f"({result.prayer.time_str}, kalan {result.countdown})"
            )
            if self._running:
                # Periyodik aralığı beklemeden vakit girer girmez yenile
                self._scheduler.schedule_at(
                    run_time=result.prayer.time,
                    callback=self._scheduled_tick,
                    job_id=BOUNDARY_JOB_ID,
                )
        return result

    async def _scheduled_tick(self) -> None:
        self.tick()

    def start(self) -> None:
        """Periyodik yenilemeyi başlat."""
        if self._running:
            logger.warning("Yenileme zaten çalışıyor.")
            return

        self._running = True
        self.tick()
        self._scheduler.schedule_every(
            seconds=self._interval,
            callback=self._scheduled_tick,
            job_id=REFRESH_JOB_ID,
        )
        logger.info(f"Yenileme başlatıldı ({self._interval:g} sn aralıkla).")

    def stop(self) -> None:
        """Periyodik yenilemeyi durdur."""
        if not self._running:
            return
        self._running = False
        self._scheduler.cancel(REFRESH_JOB_ID)
        self._scheduler.cancel(BOUNDARY_JOB_ID)
        logger.info("Yenileme durduruldu.")

    def restart(self) -> NextPrayerResult:
        """Ayar/konum değişiminden sonra yeniden başlat."""
        self.stop()
        self._last_result = None
        self.start()
        return self._last_result
