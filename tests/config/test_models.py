"""Tests for config models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from gosym.config.models import LogOutputConfig, ScanOptions, SearchPathConfig
from gosym.symbols.kinds import KindMask, ObjectKind


class TestSearchPathConfig:
    """Search root derivation."""

    @pytest.mark.parametrize(
        ("gopath", "goroot", "expected"),
        [
            ("", None, []),
            ("/go", None, [Path("/go/src")]),
            ("/a::/b", None, [Path("/a/src"), Path("/b/src")]),
            ("/a", "/usr/lib/go", [Path("/a/src"), Path("/usr/lib/go/src")]),
            ("", "/usr/lib/go", [Path("/usr/lib/go/src")]),
        ],
    )
    def test_roots(self, gopath: str, goroot: str | None, expected: list[Path]) -> None:
        """GOPATH entries come first, empty entries are skipped, GOROOT is last."""
        assert SearchPathConfig(gopath=gopath, goroot=goroot).roots == expected


class TestScanOptions:
    """Per-run options."""

    def test_defaults(self) -> None:
        options = ScanOptions()

        assert not options.verbose
        assert not options.print_type
        assert not options.include_all
        assert options.kinds == KindMask.all()

    def test_frozen(self) -> None:
        """Options are immutable once built."""
        options = ScanOptions()

        with pytest.raises(ValidationError):
            options.verbose = True  # type: ignore[misc]

    def test_custom_mask(self) -> None:
        options = ScanOptions(kinds=KindMask.of([ObjectKind.FUNC]))

        assert ObjectKind.FUNC in options.kinds
        assert ObjectKind.VAR not in options.kinds


class TestLogOutputConfig:
    """Log destination validation."""

    @pytest.mark.parametrize("destination", ["stderr", "stdout"])
    def test_stream_destinations(self, destination: str) -> None:
        assert LogOutputConfig(destination=destination).destination == destination

    def test_relative_file_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LogOutputConfig(destination="logs/gosym.log")

    def test_absolute_file_accepted(self, tmp_path: Path) -> None:
        path = str(tmp_path / "gosym.log")

        assert LogOutputConfig(destination=path).destination == path
