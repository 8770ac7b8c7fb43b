"""Pydantic schemas for API."""

from datetime import date, datetime
from typing import Annotated

from pydantic import BaseModel, Field

from salat_kit.domain.models import AsrJuristic, CalculationMethod, PrayerKind, ThemeMode


class LocationSchema(BaseModel):
    """Konum şeması."""

    latitude: Annotated[float, Field(ge=-90, le=90, description="Enlem")]
    longitude: Annotated[float, Field(ge=-180, le=180, description="Boylam")]
    city: str = Field(default="", description="Şehir adı")


class HeadingSampleSchema(BaseModel):
    """Pusula örneği."""

    heading: float = Field(description="Kuzeyden saat yönünde cihaz yönü (derece)")


class QiblaSchema(BaseModel):
    """Kıble yönü şeması."""

    latitude: float
    longitude: float
    bearing: float
    direction: str
    distance_km: float
    heading: float | None = None
    rotation: float | None = None


class SettingsSchema(BaseModel):
    """Tüm ayarlar şeması."""

    location: LocationSchema | None = None
    calculation_method: CalculationMethod = Field(default=CalculationMethod.MWL)
    asr_juristic: AsrJuristic = Field(default=AsrJuristic.SHAFII)
    theme: ThemeMode = Field(default=ThemeMode.SYSTEM)
    use_24h_clock: bool = True


class SettingsUpdateSchema(BaseModel):
    """Ayar güncelleme şeması (partial update)."""

    location: LocationSchema | None = None
    calculation_method: CalculationMethod | None = None
    asr_juristic: AsrJuristic | None = None
    theme: ThemeMode | None = None
    use_24h_clock: bool | None = None


class PrayerTimeSchema(BaseModel):
    """Tek vakit şeması."""

    kind: PrayerKind
    display_name: str
    icon: str
    time: str  # HH:MM formatında
    active: bool = False


class PrayerTimesSchema(BaseModel):
    """Günlük vakitler şeması."""

    date: date
    date_formatted: str
    hijri_date: str
    prayers: list[PrayerTimeSchema]


class NextPrayerSchema(BaseModel):
    """Sıradaki vakit şeması."""

    kind: PrayerKind
    display_name: str
    time: str
    date: date
    seconds_remaining: int
    countdown: str


class ActivePrayerSchema(BaseModel):
    """Vakit geçerlilik şeması."""

    kind: PrayerKind
    active: bool


class CurrentStateSchema(BaseModel):
    """Mevcut durum şeması."""

    current_time: str
    current_date: str
    hijri_date: str
    timezone: str
    location: LocationSchema
    current_prayer: PrayerKind | None
    current_prayer_display: str | None
    next_prayer: NextPrayerSchema
    qibla_bearing: float


class SystemStatusSchema(BaseModel):
    """Sistem durumu şeması."""

    version: str
    uptime: str
    scheduler_running: bool
    refresh_running: bool
    prayer_provider: str
    has_location: bool
    settings_path: str
    scheduled_jobs: dict[str, datetime] = Field(default_factory=dict)


class ApiResponse(BaseModel):
    """Genel API yanıt şeması."""

    success: bool
    message: str
    data: dict | list | None = None
