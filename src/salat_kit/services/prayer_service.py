"""Next-prayer selection and prayer windows."""

from collections.abc import Sequence
from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

from salat_kit.domain.errors import EmptyInputError, NotFoundError
from salat_kit.domain.models import (
    DailyPrayerTimes,
    NextPrayerResult,
    PrayerInstant,
    PrayerKind,
)
from salat_kit.services.ports import PrayerTimeProviderPort


def _elapsed(start: datetime, end: datetime) -> timedelta:
    """İki an arasındaki gerçek süre."""
    if start.tzinfo is not None and end.tzinfo is not None:
        return end.astimezone(timezone.utc) - start.astimezone(timezone.utc)
    return end - start


def _next_day(instant: datetime, reference: datetime) -> datetime:
    """`instant` saatini `reference` gününün ertesi gününe taşı."""
    tomorrow = reference.date() + timedelta(days=1)
    return instant.replace(year=tomorrow.year, month=tomorrow.month, day=tomorrow.day)


def select_next(prayers: Sequence[PrayerInstant], now: datetime) -> NextPrayerResult:
    """
    Sıradaki vakti ve kalan süreyi bul.

    Liste artan sırada ve `now` ile aynı güne ait olmalıdır. Günün son
    vakti de geçmişse ilk vakit (imsak) aynı saatle ertesi güne taşınır.

    Args:
        prayers: Bugünün sıralı vakitleri
        now: Şu anki zaman

    Returns:
        Sıradaki vakit ve kalan süre

    Raises:
        EmptyInputError: Liste boşsa
    """
    if not prayers:
        raise EmptyInputError("Vakit listesi boş.")

    for prayer in prayers:
        if prayer.time > now:
            return NextPrayerResult(prayer=prayer, time_remaining=_elapsed(now, prayer.time))

    first = prayers[0]
    shifted = PrayerInstant(kind=first.kind, time=_next_day(first.time, now))
    return NextPrayerResult(prayer=shifted, time_remaining=_elapsed(now, shifted.time))


def is_active(prayers: Sequence[PrayerInstant], target: PrayerKind, now: datetime) -> bool:
    """
    Belirtilen vakit şu anda geçerli mi?

    Vaktin penceresi bir sonraki vakte kadar sürer. Günün son vakti için
    pencere ertesi gün aynı saate kadar uzar.

    Raises:
        NotFoundError: Vakit listede yoksa
    """
    for index, prayer in enumerate(prayers):
        if prayer.kind == target:
            break
    else:
        raise NotFoundError(f"Vakit listede bulunamadı: {target.value}")

    start = prayer.time
    if index + 1 < len(prayers):
        end = prayers[index + 1].time
    else:
        end = start + timedelta(days=1)

    return start <= now < end


def current_prayer(prayers: Sequence[PrayerInstant], now: datetime) -> PrayerKind | None:
    """Penceresi `now` anını kapsayan vakit (ilk vakitten önce None)."""
    for prayer in prayers:
        if is_active(prayers, prayer.kind, now):
            return prayer.kind
    return None


class PrayerService:
    """Vakit hesaplayıcısı üzerinde sıradaki/geçerli vakit servisi."""

    def __init__(self, provider: PrayerTimeProviderPort, tz: tzinfo | None = None) -> None:
        """
        Initialize prayer service.

        Args:
            provider: Günlük vakitleri üreten hesaplayıcı
            tz: Vakitlerin yorumlanacağı saat dilimi (varsayılan: sağlayıcınınki veya UTC)
        """
        self._provider = provider
        if tz is None:
            tz = getattr(provider, "timezone", None) or ZoneInfo("UTC")
        self._tz = tz

    @property
    def provider(self) -> PrayerTimeProviderPort:
        """Vakit hesaplayıcı."""
        return self._provider

    @property
    def timezone(self) -> tzinfo:
        """Saat dilimi."""
        return self._tz

    def update_provider(self, provider: PrayerTimeProviderPort, tz: tzinfo | None = None) -> None:
        """Hesaplayıcıyı (örn. konum değişince) değiştir."""
        self._provider = provider
        self._tz = tz or getattr(provider, "timezone", None) or self._tz

    def now(self) -> datetime:
        """Servisin saat dilimindeki şu an."""
        return datetime.now(self._tz)

    def _localize(self, now: datetime | None) -> datetime:
        if now is None:
            return self.now()
        if now.tzinfo is None:
            return now.replace(tzinfo=self._tz)
        return now.astimezone(self._tz)

    def calculate(self, target_date: date) -> DailyPrayerTimes:
        """Belirtilen tarih için vakitler."""
        return self._provider.calculate(target_date)

    def calculate_range(self, start_date: date, days: int) -> list[DailyPrayerTimes]:
        """Belirtilen tarihten itibaren n gün için vakitler."""
        return self._provider.calculate_range(start_date, days)

    def today(self, now: datetime | None = None) -> list[PrayerInstant]:
        """Bugünün sıralı vakitleri."""
        now = self._localize(now)
        return self._provider.calculate(now.date()).instants(self._tz)

    def get_next_prayer(self, now: datetime | None = None) -> NextPrayerResult:
        """Sıradaki vakit ve kalan süre."""
        now = self._localize(now)
        return select_next(self.today(now), now)

    def is_prayer_active(self, kind: PrayerKind, now: datetime | None = None) -> bool:
        """
        Belirtilen vakit şu anda geçerli mi?

        Yalnızca bugünün listesine bakılır: gece yarısından sonra, imsaktan
        önce dünkü yatsı penceresi hesaba katılmaz ve sonuç False olur.
        """
        now = self._localize(now)
        return is_active(self.today(now), kind, now)

    def get_current_prayer(self, now: datetime | None = None) -> PrayerKind | None:
        """Şu anki vakit (gece yarısı ile imsak arasında None)."""
        now = self._localize(now)
        return current_prayer(self.today(now), now)
