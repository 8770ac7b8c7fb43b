"""Tests for next-prayer selection and prayer windows."""

from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

import pytest

from salat_kit.domain.errors import EmptyInputError, NotFoundError
from salat_kit.domain.models import DailyPrayerTimes, PrayerInstant, PrayerKind
from salat_kit.services.prayer_service import current_prayer, is_active, select_next

DAY = date(2024, 3, 10)


def at(hour: int, minute: int = 0, day: date = DAY, tz=None) -> datetime:
    """Build a datetime on the given day."""
    return datetime.combine(day, time(hour, minute), tzinfo=tz)


@pytest.fixture
def prayers() -> list[PrayerInstant]:
    """Sample day: 05:30, 07:00, 12:30, 15:45, 18:30, 20:00."""
    return DailyPrayerTimes(
        date=DAY,
        fajr=time(5, 30),
        sunrise=time(7, 0),
        dhuhr=time(12, 30),
        asr=time(15, 45),
        maghrib=time(18, 30),
        isha=time(20, 0),
    ).instants()


class TestSelectNext:
    """select_next tests."""

    def test_mid_morning(self, prayers: list[PrayerInstant]) -> None:
        """Test 10:00 selects Dhuhr with 2h30m left."""
        result = select_next(prayers, at(10))
        assert result.prayer.kind == PrayerKind.DHUHR
        assert result.prayer.time == at(12, 30)
        assert result.time_remaining == timedelta(hours=2, minutes=30)

    def test_before_first_prayer(self, prayers: list[PrayerInstant]) -> None:
        """Test after midnight selects today's Fajr."""
        result = select_next(prayers, at(0, 15))
        assert result.prayer.kind == PrayerKind.FAJR
        assert result.prayer.time == at(5, 30)
        assert result.time_remaining == timedelta(hours=5, minutes=15)

    def test_exactly_at_prayer_time_selects_following(
        self, prayers: list[PrayerInstant]
    ) -> None:
        """Test a prayer whose time equals now is not 'next'."""
        result = select_next(prayers, at(12, 30))
        assert result.prayer.kind == PrayerKind.ASR

    def test_wraps_to_tomorrow(self, prayers: list[PrayerInstant]) -> None:
        """Test 21:00 wraps to tomorrow's Fajr with 8h30m left."""
        result = select_next(prayers, at(21))
        assert result.prayer.kind == PrayerKind.FAJR
        assert result.prayer.time == at(5, 30, day=DAY + timedelta(days=1))
        assert result.time_remaining == timedelta(hours=8, minutes=30)

    def test_wraps_exactly_at_last_prayer(self, prayers: list[PrayerInstant]) -> None:
        """Test now equal to Isha wraps as well."""
        result = select_next(prayers, at(20))
        assert result.prayer.kind == PrayerKind.FAJR
        assert result.time_remaining == timedelta(hours=9, minutes=30)

    def test_wrap_across_month_end(self) -> None:
        """Test tomorrow is computed on the calendar."""
        last_day = date(2024, 2, 29)
        prayers = [
            PrayerInstant(kind=PrayerKind.FAJR, time=at(5, 30, day=last_day)),
            PrayerInstant(kind=PrayerKind.ISHA, time=at(20, day=last_day)),
        ]
        result = select_next(prayers, at(23, day=last_day))
        assert result.prayer.time == datetime(2024, 3, 1, 5, 30)

    def test_time_remaining_never_negative(self, prayers: list[PrayerInstant]) -> None:
        """Test remaining time over the whole day."""
        for minute in range(0, 24 * 60, 13):
            now = datetime.combine(DAY, time()) + timedelta(minutes=minute)
            assert select_next(prayers, now).time_remaining >= timedelta(0)

    def test_timezone_aware(self) -> None:
        """Test aware datetimes keep their tzinfo when wrapping."""
        tz = ZoneInfo("Europe/Istanbul")
        prayers = DailyPrayerTimes(
            date=DAY,
            fajr=time(5, 30),
            sunrise=time(7, 0),
            dhuhr=time(12, 30),
            asr=time(15, 45),
            maghrib=time(18, 30),
            isha=time(20, 0),
        ).instants(tz)

        result = select_next(prayers, at(21, tz=tz))
        assert result.prayer.time.tzinfo is tz
        assert result.time_remaining == timedelta(hours=8, minutes=30)

    def test_dst_change_uses_real_elapsed_time(self) -> None:
        """Test remaining time across a DST jump is absolute time."""
        tz = ZoneInfo("Europe/Paris")
        # 2024-03-31 02:00 -> 03:00 in Paris
        day = date(2024, 3, 30)
        prayers = [
            PrayerInstant(kind=PrayerKind.FAJR, time=at(5, 30, day=day, tz=tz)),
            PrayerInstant(kind=PrayerKind.ISHA, time=at(20, day=day, tz=tz)),
        ]
        result = select_next(prayers, at(21, day=day, tz=tz))
        assert result.time_remaining == timedelta(hours=7, minutes=30)

    def test_isha_after_midnight_is_still_ahead(self) -> None:
        """Test an Isha past midnight is still ahead at 23:30."""
        prayers = DailyPrayerTimes(
            date=DAY,
            fajr=time(1, 40),
            sunrise=time(3, 45),
            dhuhr=time(13, 10),
            asr=time(17, 40),
            maghrib=time(22, 35),
            isha=time(0, 5),
        ).instants()

        late = select_next(prayers, at(23, 30))
        assert late.prayer.kind == PrayerKind.ISHA
        assert late.prayer.time == at(0, 5, day=DAY + timedelta(days=1))
        assert late.time_remaining == timedelta(minutes=35)

    def test_empty_input(self) -> None:
        """Test empty list raises EmptyInputError."""
        with pytest.raises(EmptyInputError):
            select_next([], at(10))

    def test_empty_input_is_value_error(self) -> None:
        """Test the error is also a ValueError."""
        with pytest.raises(ValueError):
            select_next([], at(10))


class TestIsActive:
    """is_active tests."""

    def test_asr_window(self, prayers: list[PrayerInstant]) -> None:
        """Test Asr window is [15:45, 18:30)."""
        assert is_active(prayers, PrayerKind.ASR, at(17)) is True
        assert is_active(prayers, PrayerKind.ASR, at(19)) is False

    def test_window_is_half_open(self, prayers: list[PrayerInstant]) -> None:
        """Test start is inclusive and end exclusive."""
        assert is_active(prayers, PrayerKind.ASR, at(15, 45)) is True
        assert is_active(prayers, PrayerKind.ASR, at(18, 30)) is False
        assert is_active(prayers, PrayerKind.MAGHRIB, at(18, 30)) is True

    def test_before_prayer(self, prayers: list[PrayerInstant]) -> None:
        """Test a prayer is not active before its time."""
        assert is_active(prayers, PrayerKind.DHUHR, at(12, 29)) is False

    def test_last_prayer_extends_to_next_day(self, prayers: list[PrayerInstant]) -> None:
        """Test Isha window runs until the same clock time tomorrow."""
        tomorrow = DAY + timedelta(days=1)
        assert is_active(prayers, PrayerKind.ISHA, at(23)) is True
        assert is_active(prayers, PrayerKind.ISHA, at(4, day=tomorrow)) is True
        assert is_active(prayers, PrayerKind.ISHA, at(20, 1, day=tomorrow)) is False

    def test_missing_kind(self, prayers: list[PrayerInstant]) -> None:
        """Test NotFoundError for a kind absent from the list."""
        without_asr = [p for p in prayers if p.kind != PrayerKind.ASR]
        with pytest.raises(NotFoundError):
            is_active(without_asr, PrayerKind.ASR, at(17))

    def test_missing_kind_in_empty_list(self) -> None:
        """Test an empty list raises NotFoundError as well."""
        with pytest.raises(NotFoundError):
            is_active([], PrayerKind.FAJR, at(6))


class TestCurrentPrayer:
    """current_prayer tests."""

    @pytest.mark.parametrize(
        ("hour", "minute", "expected"),
        [
            (6, 0, PrayerKind.FAJR),
            (10, 0, PrayerKind.SUNRISE),
            (13, 0, PrayerKind.DHUHR),
            (17, 0, PrayerKind.ASR),
            (19, 0, PrayerKind.MAGHRIB),
            (23, 0, PrayerKind.ISHA),
        ],
    )
    def test_current(
        self, prayers: list[PrayerInstant], hour: int, minute: int, expected: PrayerKind
    ) -> None:
        """Test the prayer whose window covers now."""
        assert current_prayer(prayers, at(hour, minute)) == expected

    def test_before_first_prayer(self, prayers: list[PrayerInstant]) -> None:
        """Test nothing is active before today's first prayer."""
        assert current_prayer(prayers, at(3)) is None
