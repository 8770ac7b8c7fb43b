"""Domain models and value objects."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from enum import Enum
from typing import Self


def normalize_degrees(value: float) -> float:
    """Açıyı [0, 360) aralığına indir."""
    result = value % 360.0
    # -1e-15 % 360.0 == 360.0
    if result >= 360.0:
        return 0.0
    return result


class PrayerKind(str, Enum):
    """Günlük vakit türleri (kronolojik sırada)."""

    FAJR = "fajr"
    SUNRISE = "sunrise"
    DHUHR = "dhuhr"
    ASR = "asr"
    MAGHRIB = "maghrib"
    ISHA = "isha"

    @property
    def display_name(self) -> str:
        """Türkçe görüntüleme adı."""
        names = {
            PrayerKind.FAJR: "İmsak",
            PrayerKind.SUNRISE: "Güneş",
            PrayerKind.DHUHR: "Öğle",
            PrayerKind.ASR: "İkindi",
            PrayerKind.MAGHRIB: "Akşam",
            PrayerKind.ISHA: "Yatsı",
        }
        return names[self]

    @property
    def icon(self) -> str:
        """Emoji ikonu."""
        icons = {
            PrayerKind.FAJR: "🌙",
            PrayerKind.SUNRISE: "🌅",
            PrayerKind.DHUHR: "☀️",
            PrayerKind.ASR: "🌤️",
            PrayerKind.MAGHRIB: "🌇",
            PrayerKind.ISHA: "🌃",
        }
        return icons[self]


class CalculationMethod(int, Enum):
    """İmsak/yatsı açı hesaplama metotları (pyIslam numaralandırması)."""

    KARACHI = 1
    MWL = 2
    EGYPTIAN = 3
    UMM_AL_QURA = 4
    ISNA = 5

    @property
    def display_name(self) -> str:
        """Görüntüleme adı."""
        names = {
            CalculationMethod.KARACHI: "University of Islamic Sciences, Karachi",
            CalculationMethod.ISNA: "Islamic Society of North America",
            CalculationMethod.MWL: "Muslim World League",
            CalculationMethod.UMM_AL_QURA: "Umm al-Qura, Makkah",
            CalculationMethod.EGYPTIAN: "Egyptian General Authority of Survey",
        }
        return names[self]


class AsrJuristic(int, Enum):
    """İkindi hesaplama mezhebi."""

    SHAFII = 1
    HANAFI = 2


class ThemeMode(str, Enum):
    """Arayüz tema tercihi."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


@dataclass(frozen=True)
class GeoCoordinate:
    """Coğrafi koordinat (immutable value object)."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Koordinat doğrulaması."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(f"Geçersiz enlem: {self.latitude}")
        if not -180 <= self.longitude <= 180:
            raise ValueError(f"Geçersiz boylam: {self.longitude}")


# Kabe koordinatı
KAABA = GeoCoordinate(latitude=21.4225, longitude=39.8262)


@dataclass(frozen=True)
class PrayerInstant:
    """Belirli bir güne ait tek bir vakit anı."""

    kind: PrayerKind
    time: datetime

    @property
    def time_str(self) -> str:
        """HH:MM formatında."""
        return self.time.strftime("%H:%M")


@dataclass(frozen=True)
class NextPrayerResult:
    """Sıradaki vakit ve kalan süre."""

    prayer: PrayerInstant
    time_remaining: timedelta

    @property
    def countdown(self) -> str:
        """Kalan süre HH:MM:SS formatında."""
        total_seconds = max(int(self.time_remaining.total_seconds()), 0)
        hours, remainder = divmod(total_seconds, 3600)
        minutes, seconds = divmod(remainder, 60)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


@dataclass(frozen=True)
class DailyPrayerTimes:
    """Bir günün tüm vakitleri (vakit hesaplayıcının çıktısı)."""

    date: date
    fajr: time
    sunrise: time
    dhuhr: time
    asr: time
    maghrib: time
    isha: time

    def get_time(self, kind: PrayerKind) -> time:
        """Belirtilen vaktin saatini döndür."""
        mapping = {
            PrayerKind.FAJR: self.fajr,
            PrayerKind.SUNRISE: self.sunrise,
            PrayerKind.DHUHR: self.dhuhr,
            PrayerKind.ASR: self.asr,
            PrayerKind.MAGHRIB: self.maghrib,
            PrayerKind.ISHA: self.isha,
        }
        return mapping[kind]

    def instants(self, tz: tzinfo | None = None) -> list[PrayerInstant]:
        """
        Tüm vakitleri sıralı PrayerInstant listesi olarak döndür.

        İmsak'tan önceki bir saat gece yarısını geçmiş sayılır (yüksek
        enlemlerde 00:05 gibi bir yatsı) ve ertesi güne yazılır, böylece
        liste hem kronolojik hem de PrayerKind sırasında kalır.
        """
        result = []
        for kind in PrayerKind:
            clock = self.get_time(kind)
            day = self.date
            if kind is not PrayerKind.FAJR and clock < self.fajr:
                day += timedelta(days=1)
            result.append(PrayerInstant(kind=kind, time=datetime.combine(day, clock, tzinfo=tz)))
        return sorted(result, key=lambda p: p.time)

    def to_dict(self) -> dict[str, str]:
        """Dictionary olarak döndür."""
        data = {"date": self.date.isoformat()}
        for kind in PrayerKind:
            data[kind.value] = self.get_time(kind).strftime("%H:%M")
        return data


@dataclass
class UserSettings:
    """Kullanıcı tercihleri."""

    location: GeoCoordinate | None = None
    city: str = ""
    calculation_method: CalculationMethod = CalculationMethod.MWL
    asr_juristic: AsrJuristic = AsrJuristic.SHAFII
    theme: ThemeMode = ThemeMode.SYSTEM
    use_24h_clock: bool = True

    @property
    def time_format(self) -> str:
        """strftime saat formatı."""
        return "%H:%M" if self.use_24h_clock else "%I:%M %p"

    def to_dict(self) -> dict:
        """Dictionary olarak döndür."""
        return {
            "location": (
                {
                    "latitude": self.location.latitude,
                    "longitude": self.location.longitude,
                }
                if self.location is not None
                else None
            ),
            "city": self.city,
            "calculation_method": self.calculation_method.value,
            "asr_juristic": self.asr_juristic.value,
            "theme": self.theme.value,
            "use_24h_clock": self.use_24h_clock,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Dictionary'den oluştur."""
        location_data = data.get("location")
        location = None
        if location_data:
            location = GeoCoordinate(
                latitude=location_data["latitude"],
                longitude=location_data["longitude"],
            )
        return cls(
            location=location,
            city=data.get("city", ""),
            calculation_method=CalculationMethod(
                data.get("calculation_method", CalculationMethod.MWL.value)
            ),
            asr_juristic=AsrJuristic(data.get("asr_juristic", AsrJuristic.SHAFII.value)),
            theme=ThemeMode(data.get("theme", ThemeMode.SYSTEM.value)),
            use_24h_clock=data.get("use_24h_clock", True),
        )
