"""Tests for the command-line interface."""

import sys

import pytest

from salat_kit.cli import create_parser, main


class TestParser:
    """Argument parser tests."""

    def test_qibla_arguments(self) -> None:
        """Test qibla command parsing."""
        args = create_parser().parse_args(
            ["qibla", "--lat", "51.5", "--lng", "-0.12", "--heading", "90"]
        )
        assert args.command == "qibla"
        assert args.lat == 51.5
        assert args.heading == 90.0

    def test_location_required(self) -> None:
        """Test missing coordinates are rejected."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["times", "--lat", "41.0"])


class TestCommands:
    """Command execution tests."""

    def test_qibla(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
        """Test qibla output for London with a device heading."""
        argv = ["salat-kit", "qibla", "--lat", "51.5074", "--lng", "-0.1278", "--heading", "19"]
        monkeypatch.setattr(sys, "argv", argv)
        assert main() == 0

        out = capsys.readouterr().out
        assert "Kıble: 119." in out
        assert "gösterge dönüşü: 100." in out

    def test_times_fixed(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        """Test fixed demo times for two days."""
        argv = ["salat-kit", "times", "--lat", "41.0082", "--lng", "28.9784", "--days", "2"]
        monkeypatch.setattr(sys, "argv", [*argv, "--fixed"])
        assert main() == 0

        out = capsys.readouterr().out
        assert "Europe/Istanbul" in out
        assert out.count("05:30") == 2

    def test_invalid_latitude(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        """Test out-of-range coordinates exit with code 2."""
        monkeypatch.setattr(sys, "argv", ["salat-kit", "qibla", "--lat", "95", "--lng", "0"])
        assert main() == 2
        assert "Hata" in capsys.readouterr().err
