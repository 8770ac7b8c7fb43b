"""API Routes."""

from datetime import date, datetime
from typing import Annotated

from babel.dates import format_date
from fastapi import APIRouter, Depends, Query

from salat_kit import __version__
from salat_kit.api.dependencies import AppState, apply_location, get_app_state
from salat_kit.api.schemas import (
    ActivePrayerSchema,
    ApiResponse,
    CurrentStateSchema,
    HeadingSampleSchema,
    LocationSchema,
    NextPrayerSchema,
    PrayerTimeSchema,
    PrayerTimesSchema,
    QiblaSchema,
    SettingsSchema,
    SettingsUpdateSchema,
    SystemStatusSchema,
)
from salat_kit.domain.errors import LocationUnavailableError
from salat_kit.domain.events import SettingsChangedEvent
from salat_kit.domain.models import (
    GeoCoordinate,
    NextPrayerResult,
    PrayerKind,
    UserSettings,
)
from salat_kit.services.prayer_service import current_prayer
from salat_kit.services.qibla_service import (
    QiblaSnapshot,
    cardinal_direction,
    compute_bearing,
    great_circle_distance_km,
)

router = APIRouter()

DATE_PATTERN = "d MMMM yyyy, EEEE"

HIJRI_MONTHS = [
    "Muharrem",
    "Safer",
    "Rebiülevvel",
    "Rebiülahir",
    "Cemaziyelevvel",
    "Cemaziyelahir",
    "Recep",
    "Şaban",
    "Ramazan",
    "Şevval",
    "Zilkade",
    "Zilhicce",
]


def _get_hijri_date(gregorian: date) -> str:
    """Basit Hicri tarih hesaplama (tabular takvim, yaklaşık)."""
    jd = gregorian.toordinal() + 1721425
    l_val = jd - 1948440 + 10632
    n = (l_val - 1) // 10631
    l2 = l_val - 10631 * n + 354
    j = ((10985 - l2) // 5316) * ((50 * l2) // 17719) + (l2 // 5670) * ((43 * l2) // 15238)
    l3 = l2 - ((30 - j) // 15) * ((17719 * j) // 50) - (j // 16) * ((15238 * j) // 43) + 29
    month = (24 * l3) // 709
    day = l3 - (709 * month) // 24
    year = 30 * n + j - 30
    return f"{day} {HIJRI_MONTHS[month - 1]} {year}"


def _next_prayer_schema(result: NextPrayerResult) -> NextPrayerSchema:
    prayer = result.prayer
    return NextPrayerSchema(
        kind=prayer.kind,
        display_name=prayer.kind.display_name,
        time=prayer.time_str,
        date=prayer.time.date(),
        seconds_remaining=int(result.time_remaining.total_seconds()),
        countdown=result.countdown,
    )


def _qibla_schema(snapshot: QiblaSnapshot) -> QiblaSchema:
    return QiblaSchema(
        latitude=snapshot.coordinate.latitude,
        longitude=snapshot.coordinate.longitude,
        bearing=round(snapshot.bearing, 2),
        direction=cardinal_direction(snapshot.bearing),
        distance_km=round(snapshot.distance_km, 1),
        heading=snapshot.heading,
        rotation=round(snapshot.rotation, 2) if snapshot.rotation is not None else None,
    )


def _location_schema(state: AppState) -> LocationSchema:
    location = state.location_source.latest()
    if location is None:
        raise LocationUnavailableError("Konum bilgisi yok.")
    return LocationSchema(
        latitude=location.latitude,
        longitude=location.longitude,
        city=state.settings.city,
    )


# ============== State & Status ==============


@router.get("/status", response_model=SystemStatusSchema)
async def get_status(state: Annotated[AppState, Depends(get_app_state)]) -> SystemStatusSchema:
    """Sistem durumunu getir."""
    uptime = datetime.now() - state.started_at

    return SystemStatusSchema(
        version=__version__,
        uptime=str(uptime).split(".")[0],
        scheduler_running=state.scheduler_adapter.is_running,
        refresh_running=state.refresh_service is not None and state.refresh_service.is_running,
        prayer_provider=state.config.prayer_provider,
        has_location=state.location_source.latest() is not None,
        settings_path=str(state.settings_repository.file_path),
        scheduled_jobs=dict(state.scheduler_adapter.get_scheduled_jobs()),
    )


@router.get("/current", response_model=CurrentStateSchema)
async def get_current_state(
    state: Annotated[AppState, Depends(get_app_state)],
) -> CurrentStateSchema:
    """Mevcut durumu getir (saat, vakit, geri sayım, kıble)."""
    prayer_service = state.require_prayer_service()
    now = prayer_service.now()
    prayers = prayer_service.today(now)
    current = current_prayer(prayers, now)
    next_prayer = prayer_service.get_next_prayer(now)

    return CurrentStateSchema(
        current_time=now.strftime("%H:%M:%S"),
        current_date=format_date(now, DATE_PATTERN, locale=state.config.locale),
        hijri_date=_get_hijri_date(now.date()),
        timezone=str(prayer_service.timezone),
        location=_location_schema(state),
        current_prayer=current,
        current_prayer_display=current.display_name if current else None,
        next_prayer=_next_prayer_schema(next_prayer),
        qibla_bearing=round(state.qibla_service.snapshot().bearing, 2),
    )


# ============== Qibla ==============


@router.get("/qibla", response_model=QiblaSchema)
async def get_qibla(
    state: Annotated[AppState, Depends(get_app_state)],
    latitude: Annotated[float | None, Query(ge=-90, le=90)] = None,
    longitude: Annotated[float | None, Query(ge=-180, le=180)] = None,
) -> QiblaSchema:
    """Kıble yönünü getir (koordinat verilmezse son konum kullanılır)."""
    if latitude is not None and longitude is not None:
        coordinate = GeoCoordinate(latitude=latitude, longitude=longitude)
        bearing = compute_bearing(coordinate)
        return _qibla_schema(
            QiblaSnapshot(
                coordinate=coordinate,
                bearing=bearing,
                distance_km=great_circle_distance_km(coordinate),
            )
        )
    return _qibla_schema(state.qibla_service.snapshot())


@router.put("/location", response_model=ApiResponse)
async def update_location(
    location: LocationSchema,
    state: Annotated[AppState, Depends(get_app_state)],
) -> ApiResponse:
    """Konumu güncelle (kıble ve vakitler yeniden hesaplanır)."""
    coordinate = GeoCoordinate(latitude=location.latitude, longitude=location.longitude)

    state.settings.location = coordinate
    state.settings.city = location.city
    state.location_source.push(coordinate)
    apply_location(state, coordinate)
    await state.settings_repository.save(state.settings)

    return ApiResponse(
        success=True,
        message="Konum güncellendi.",
        data=_qibla_schema(state.qibla_service.snapshot()).model_dump(),
    )


@router.post("/heading", response_model=QiblaSchema)
async def post_heading(
    sample: HeadingSampleSchema,
    state: Annotated[AppState, Depends(get_app_state)],
) -> QiblaSchema:
    """Pusula örneği gönder, gösterge dönüşünü al."""
    state.heading_source.push(sample.heading)
    return _qibla_schema(state.qibla_service.snapshot())


# ============== Prayer Times ==============


@router.get("/times/today", response_model=PrayerTimesSchema)
async def get_today_times(state: Annotated[AppState, Depends(get_app_state)]) -> PrayerTimesSchema:
    """Bugünün vakitlerini getir."""
    prayer_service = state.require_prayer_service()
    now = prayer_service.now()
    prayers = prayer_service.today(now)
    current = current_prayer(prayers, now)
    time_format = state.settings.time_format

    return PrayerTimesSchema(
        date=now.date(),
        date_formatted=format_date(now, DATE_PATTERN, locale=state.config.locale),
        hijri_date=_get_hijri_date(now.date()),
        prayers=[
            PrayerTimeSchema(
                kind=prayer.kind,
                display_name=prayer.kind.display_name,
                icon=prayer.kind.icon,
                time=prayer.time.strftime(time_format),
                active=prayer.kind == current,
            )
            for prayer in prayers
        ],
    )


@router.get("/times/week", response_model=list[PrayerTimesSchema])
async def get_week_times(
    state: Annotated[AppState, Depends(get_app_state)],
) -> list[PrayerTimesSchema]:
    """Haftalık vakitleri getir."""
    prayer_service = state.require_prayer_service()
    now = prayer_service.now()
    time_format = state.settings.time_format

    result = []
    for times in prayer_service.calculate_range(now.date(), 7):
        result.append(
            PrayerTimesSchema(
                date=times.date,
                date_formatted=format_date(times.date, DATE_PATTERN, locale=state.config.locale),
                hijri_date=_get_hijri_date(times.date),
                prayers=[
                    PrayerTimeSchema(
                        kind=kind,
                        display_name=kind.display_name,
                        icon=kind.icon,
                        time=times.get_time(kind).strftime(time_format),
                    )
                    for kind in PrayerKind
                ],
            )
        )

    return result


@router.get("/next", response_model=NextPrayerSchema)
async def get_next_prayer(state: Annotated[AppState, Depends(get_app_state)]) -> NextPrayerSchema:
    """Sıradaki vakti ve kalan süreyi getir."""
    prayer_service = state.require_prayer_service()
    return _next_prayer_schema(prayer_service.get_next_prayer())


@router.get("/prayers/{kind}/active", response_model=ActivePrayerSchema)
async def get_prayer_active(
    kind: PrayerKind,
    state: Annotated[AppState, Depends(get_app_state)],
) -> ActivePrayerSchema:
    """Belirtilen vakit şu anda geçerli mi?"""
    prayer_service = state.require_prayer_service()
    return ActivePrayerSchema(kind=kind, active=prayer_service.is_prayer_active(kind))


# ============== Settings ==============


def _settings_schema(s: UserSettings) -> SettingsSchema:
    return SettingsSchema(
        location=(
            LocationSchema(
                latitude=s.location.latitude,
                longitude=s.location.longitude,
                city=s.city,
            )
            if s.location is not None
            else None
        ),
        calculation_method=s.calculation_method,
        asr_juristic=s.asr_juristic,
        theme=s.theme,
        use_24h_clock=s.use_24h_clock,
    )


@router.get("/settings", response_model=SettingsSchema)
async def get_settings(state: Annotated[AppState, Depends(get_app_state)]) -> SettingsSchema:
    """Mevcut ayarları getir."""
    return _settings_schema(state.settings)


@router.put("/settings", response_model=ApiResponse)
async def update_settings(
    update: SettingsUpdateSchema,
    state: Annotated[AppState, Depends(get_app_state)],
) -> ApiResponse:
    """Ayarları güncelle."""
    current = state.settings

    new_location = current.location
    new_city = current.city
    if update.location:
        new_location = GeoCoordinate(
            latitude=update.location.latitude,
            longitude=update.location.longitude,
        )
        new_city = update.location.city

    new_settings = UserSettings(
        location=new_location,
        city=new_city,
        calculation_method=update.calculation_method or current.calculation_method,
        asr_juristic=update.asr_juristic or current.asr_juristic,
        theme=update.theme or current.theme,
        use_24h_clock=update.use_24h_clock
        if update.use_24h_clock is not None
        else current.use_24h_clock,
    )
    state.settings = new_settings

    if update.location:
        state.location_source.push(new_location)

    # Vakit hesabını etkileyen bir değişiklik varsa yeniden kur
    engine_changed = (
        new_location != current.location
        or new_settings.calculation_method != current.calculation_method
        or new_settings.asr_juristic != current.asr_juristic
    )
    location = new_location or state.location_source.latest()
    if engine_changed and location is not None:
        apply_location(state, location)

    await state.settings_repository.save(new_settings)

    changed_fields = tuple(update.model_dump(exclude_none=True))
    if changed_fields:
        state.event_bus.publish(SettingsChangedEvent(changed_fields=changed_fields))

    return ApiResponse(
        success=True,
        message="Ayarlar güncellendi.",
        data=_settings_schema(new_settings).model_dump(mode="json"),
    )


# ============== Utility ==============


@router.get("/prayers")
async def get_prayer_kinds() -> list[dict[str, str]]:
    """Vakit isimlerini listele."""
    return [{"value": k.value, "display_name": k.display_name, "icon": k.icon} for k in PrayerKind]
