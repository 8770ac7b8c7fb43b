"""Command-line interface for Salat-Kit."""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from salat_kit import __version__


def _add_location_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--lat", type=float, required=True, help="Enlem")
    parser.add_argument("--lng", type=float, required=True, help="Boylam")


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="salat-kit",
        description="Kıble yönü ve namaz vakti aracı",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"salat-kit {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Komutlar")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Web sunucusunu başlat")
    serve_parser.add_argument(
        "--host",
        "-H",
        default="0.0.0.0",
        help="Sunucu adresi (varsayılan: 0.0.0.0)",
    )
    serve_parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=8080,
        help="Sunucu portu (varsayılan: 8080)",
    )
    serve_parser.add_argument(
        "--settings",
        "-s",
        type=Path,
        help="Ayar dosyası yolu",
    )
    serve_parser.add_argument(
        "--log-level",
        "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log seviyesi (varsayılan: INFO)",
    )

    # times command
    times_parser = subparsers.add_parser("times", help="Namaz vakitlerini göster")
    _add_location_args(times_parser)
    times_parser.add_argument(
        "--days",
        "-d",
        type=int,
        default=1,
        help="Kaç günlük (varsayılan: 1)",
    )
    times_parser.add_argument(
        "--fixed",
        action="store_true",
        help="Sabit demo vakitlerini kullan",
    )

    # next command
    next_parser = subparsers.add_parser("next", help="Sıradaki vakti göster")
    _add_location_args(next_parser)
    next_parser.add_argument(
        "--fixed",
        action="store_true",
        help="Sabit demo vakitlerini kullan",
    )

    # qibla command
    qibla_parser = subparsers.add_parser("qibla", help="Kıble yönünü göster")
    _add_location_args(qibla_parser)
    qibla_parser.add_argument(
        "--heading",
        type=float,
        help="Cihaz yönü (derece); verilirse gösterge dönüşü de hesaplanır",
    )

    return parser


def _build_prayer_service(args: argparse.Namespace):
    from salat_kit.domain.models import GeoCoordinate
    from salat_kit.infrastructure.prayer_calculator import (
        FixedPrayerCalculator,
        PyIslamPrayerCalculator,
        resolve_timezone,
    )
    from salat_kit.services.prayer_service import PrayerService

    location = GeoCoordinate(latitude=args.lat, longitude=args.lng)
    tz = resolve_timezone(location)
    if args.fixed:
        provider = FixedPrayerCalculator(tz=tz)
    else:
        provider = PyIslamPrayerCalculator(location, tz=tz)
    return PrayerService(provider, tz=tz)


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the web server."""
    import uvicorn

    from salat_kit.api.app import create_app
    from salat_kit.config import get_config, setup_logging

    setup_logging(args.log_level)

    config = replace(get_config(), host=args.host, port=args.port, log_level=args.log_level)
    if args.settings:
        config = replace(config, settings_path=args.settings)

    app = create_app(config)

    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def cmd_times(args: argparse.Namespace) -> None:
    """Show prayer times."""
    from salat_kit.domain.models import PrayerKind

    service = _build_prayer_service(args)
    now = service.now()
    times_list = service.calculate_range(now.date(), args.days)

    print(f"\n📍 Konum: {args.lat:.4f}, {args.lng:.4f}")
    print(f"🌍 Timezone: {service.timezone}")
    print()

    header = " ".join(f"{kind.display_name:>8}" for kind in PrayerKind)
    print("=" * 75)
    print(f"{'Tarih':<15} {header}")
    print("-" * 75)

    for times in times_list:
        row = " ".join(f"{times.get_time(kind).strftime('%H:%M'):>8}" for kind in PrayerKind)
        print(f"{times.date.strftime('%d.%m.%Y'):<15} {row}")

    print("=" * 75)


def cmd_next(args: argparse.Namespace) -> None:
    """Show the next prayer."""
    service = _build_prayer_service(args)
    now = service.now()
    result = service.get_next_prayer(now)
    current = service.get_current_prayer(now)

    print(f"\n🕐 Şu an: {now.strftime('%d.%m.%Y %H:%M')} ({service.timezone})")
    if current is not None:
        print(f"{current.icon} Geçerli vakit: {current.display_name}")
    prayer = result.prayer
    print(
        f"{prayer.kind.icon} Sıradaki vakit: {prayer.kind.display_name} "
        f"{prayer.time.strftime('%d.%m.%Y %H:%M')}"
    )
    print(f"⏳ Kalan süre: {result.countdown}")


def cmd_qibla(args: argparse.Namespace) -> None:
    """Show the qibla direction."""
    from salat_kit.domain.models import GeoCoordinate
    from salat_kit.services.qibla_service import (
        cardinal_direction,
        composite_rotation,
        compute_bearing,
        great_circle_distance_km,
    )

    location = GeoCoordinate(latitude=args.lat, longitude=args.lng)
    bearing = compute_bearing(location)

    print(f"\n📍 Konum: {args.lat:.4f}, {args.lng:.4f}")
    print(f"🕋 Kıble: {bearing:.1f}° ({cardinal_direction(bearing)})")
    print(f"📏 Kabe'ye uzaklık: {great_circle_distance_km(location):.0f} km")

    if args.heading is not None:
        rotation = composite_rotation(bearing, args.heading)
        print(f"🧭 Cihaz yönü: {args.heading:.1f}°, gösterge dönüşü: {rotation:.1f}°")


def main() -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        # Varsayılan olarak serve çalıştır
        args.command = "serve"
        args.host = "0.0.0.0"
        args.port = 8080
        args.settings = None
        args.log_level = "INFO"

    commands = {
        "serve": cmd_serve,
        "times": cmd_times,
        "next": cmd_next,
        "qibla": cmd_qibla,
    }

    cmd_func = commands.get(args.command)
    if cmd_func is None:
        parser.print_help()
        return 1

    try:
        cmd_func(args)
    except ValueError as e:
        print(f"❌ Hata: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
