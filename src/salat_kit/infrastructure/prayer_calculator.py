"""Prayer time provider implementations."""

import logging
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from pyIslam.praytimes import Prayer, PrayerConf
from timezonefinder import TimezoneFinder

from salat_kit.domain.models import (
    AsrJuristic,
    CalculationMethod,
    DailyPrayerTimes,
    GeoCoordinate,
)
from salat_kit.services.ports import PrayerTimeProviderPort

logger = logging.getLogger(__name__)


def resolve_timezone(coordinate: GeoCoordinate) -> ZoneInfo:
    """Koordinatın saat dilimini bul (bulunamazsa UTC)."""
    tz_name = TimezoneFinder().timezone_at(lat=coordinate.latitude, lng=coordinate.longitude)
    if tz_name is None:
        logger.warning(
            f"Saat dilimi bulunamadı ({coordinate.latitude}, {coordinate.longitude}), "
            "UTC kullanılıyor."
        )
        tz_name = "UTC"
    return ZoneInfo(tz_name)


class PyIslamPrayerCalculator(PrayerTimeProviderPort):
    """pyIslam ile astronomik vakit hesaplama."""

    def __init__(
        self,
        location: GeoCoordinate,
        *,
        method: CalculationMethod = CalculationMethod.MWL,
        asr_juristic: AsrJuristic = AsrJuristic.SHAFII,
        tz: ZoneInfo | None = None,
        rounding_seconds: int = 30,
    ) -> None:
        """
        Initialize calculator.

        Args:
            location: Konum
            method: İmsak/yatsı hesaplama metodu
            asr_juristic: İkindi hesaplama mezhebi
            tz: Saat dilimi (varsayılan: koordinattan bulunur)
            rounding_seconds: Yuvarlama saniyesi
        """
        self._location = location
        self._method = method
        self._asr_juristic = asr_juristic
        self._rounding_seconds = rounding_seconds
        self._tz = tz or resolve_timezone(location)

    @property
    def location(self) -> GeoCoordinate:
        """Konum bilgisi."""
        return self._location

    @property
    def timezone(self) -> ZoneInfo:
        """Timezone nesnesi."""
        return self._tz

    @property
    def timezone_name(self) -> str:
        """Timezone adı."""
        return self._tz.key

    def _utc_offset_hours(self, target_date: date) -> float:
        """Belirtilen gün için UTC offset (saat)."""
        offset = datetime.combine(target_date, time(12), tzinfo=self._tz).utcoffset()
        if offset is None:
            return 0.0
        return offset.total_seconds() / 3600

    def _round(self, time_obj: time, target_date: date) -> time:
        """Vakti dakikaya yuvarla."""
        dt = datetime.combine(target_date, time_obj) + timedelta(seconds=self._rounding_seconds)
        return dt.time().replace(second=0, microsecond=0)

    def calculate(self, target_date: date) -> DailyPrayerTimes:
        """Belirtilen tarih için vakitleri hesapla."""
        conf = PrayerConf(
            self._location.longitude,
            self._location.latitude,
            self._utc_offset_hours(target_date),
            self._method.value,
            self._asr_juristic.value,
        )
        prayer = Prayer(conf, target_date)

        return DailyPrayerTimes(
            date=target_date,
            fajr=self._round(prayer.fajr_time(), target_date),
            sunrise=self._round(prayer.sherook_time(), target_date),
            dhuhr=self._round(prayer.dohr_time(), target_date),
            asr=self._round(prayer.asr_time(), target_date),
            maghrib=self._round(prayer.maghreb_time(), target_date),
            isha=self._round(prayer.ishaa_time(), target_date),
        )

    def calculate_range(self, start_date: date, days: int) -> list[DailyPrayerTimes]:
        """Belirtilen tarihten itibaren n gün için vakitleri hesapla."""
        return [self.calculate(start_date + timedelta(days=i)) for i in range(days)]


class FixedPrayerCalculator(PrayerTimeProviderPort):
    """Her gün aynı saatleri döndüren hesaplayıcı (demo ve testler için)."""

    DEFAULT_TIMES = {
        "fajr": time(5, 30),
        "sunrise": time(7, 0),
        "dhuhr": time(12, 30),
        "asr": time(15, 45),
        "maghrib": time(18, 30),
        "isha": time(20, 0),
    }

    def __init__(self, tz: ZoneInfo | None = None, **times: time) -> None:
        self._tz = tz or ZoneInfo("UTC")
        self._times = {**self.DEFAULT_TIMES, **times}

    @property
    def timezone(self) -> ZoneInfo:
        """Timezone nesnesi."""
        return self._tz

    @property
    def timezone_name(self) -> str:
        """Timezone adı."""
        return self._tz.key

    def calculate(self, target_date: date) -> DailyPrayerTimes:
        """Belirtilen tarih için sabit vakitler."""
        return DailyPrayerTimes(date=target_date, **self._times)

    def calculate_range(self, start_date: date, days: int) -> list[DailyPrayerTimes]:
        """Belirtilen tarihten itibaren n gün için vakitler."""
        return [self.calculate(start_date + timedelta(days=i)) for i in range(days)]
