"""APScheduler based scheduler implementation."""

import inspect
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from apscheduler.jobstores.base import JobLookupError
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from salat_kit.services.ports import SchedulerPort

logger = logging.getLogger(__name__)


def _require_coroutine(callback: Callable[[], Awaitable[None]]) -> None:
    # AsyncIOExecutor düz fonksiyonları thread havuzuna gönderir
    if not inspect.iscoroutinefunction(callback):
        raise TypeError(f"Callback bir coroutine fonksiyonu olmalı: {callback!r}")


class APSchedulerAdapter(SchedulerPort):
    """APScheduler ile zamanlama adaptörü."""

    def __init__(self) -> None:
        """Initialize scheduler."""
        jobstores = {"default": MemoryJobStore()}
        self._scheduler = AsyncIOScheduler(jobstores=jobstores)
        self._started = False

    @property
    def is_running(self) -> bool:
        """Scheduler çalışıyor mu?"""
        return self._started

    def start(self) -> None:
        """Scheduler'ı başlat."""
        if not self._started:
            self._scheduler.start()
            self._started = True
            logger.info("APScheduler başlatıldı.")

    def shutdown(self) -> None:
        """Scheduler'ı kapat."""
        if self._started:
            self._scheduler.shutdown(wait=False)
            self._started = False
            logger.info("APScheduler kapatıldı.")

    def schedule_every(
        self,
        seconds: float,
        callback: Callable[[], Awaitable[None]],
        job_id: str,
    ) -> None:
        """Belirtilen aralıkla tekrar eden iş planla (coroutine, event loop üzerinde)."""
        _require_coroutine(callback)
        if not self._started:
            self.start()

        self._scheduler.add_job(
            callback,
            trigger=IntervalTrigger(seconds=seconds),
            id=job_id,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        logger.debug(f"Periyodik iş planlandı: {job_id} -> her {seconds:g} sn")

    def schedule_at(
        self,
        run_time: datetime,
        callback: Callable[[], Awaitable[None]],
        job_id: str,
    ) -> None:
        """Belirtilen zamanda çalıştırılacak iş planla."""
        _require_coroutine(callback)
        if not self._started:
            self.start()

        self._scheduler.add_job(
            callback,
            trigger=DateTrigger(run_date=run_time),
            id=job_id,
            replace_existing=True,
            misfire_grace_time=60,  # 1 dakika tolerans
        )
        logger.debug(f"İş planlandı: {job_id} -> {run_time}")

    def cancel(self, job_id: str) -> bool:
        """Planlanmış işi iptal et."""
        try:
            self._scheduler.remove_job(job_id)
        except JobLookupError:
            return False
        logger.debug(f"İş iptal edildi: {job_id}")
        return True

    def get_scheduled_jobs(self) -> list[tuple[str, datetime]]:
        """Planlanmış işleri listele."""
        result = [
            (job.id, job.next_run_time) for job in self._scheduler.get_jobs() if job.next_run_time
        ]
        return sorted(result, key=lambda x: x[1])
