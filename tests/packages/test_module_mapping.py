"""Tests for position -> import path mapping."""

from pathlib import Path

import pytest

from gosym.core.errors import InvariantError
from gosym.packages.module_mapping import PackageMapper, directory_to_import_path
from gosym.parsing.treesitter import Position


class TestDirectoryToImportPath:
    @pytest.mark.parametrize(
        ("directory", "roots", "expected"),
        [
            ("/go/src/example.com/foo", ["/go/src"], "example.com/foo"),
            ("/b/src/lib", ["/a/src", "/b/src"], "lib"),
            ("/tmp/scratch", ["/go/src"], "_/tmp/scratch"),
            ("/go/src", ["/go/src"], "_/go/src"),
        ],
    )
    def test_mapping(self, directory: str, roots: list[str], expected: str) -> None:
        assert directory_to_import_path(Path(directory), [Path(r) for r in roots]) == expected


class TestPackageMapper:
    """PackageMapper.owner_of tests."""

    def test_given_file_under_root_then_import_path(self, gopath: Path, write_package) -> None:
        directory = write_package("example.com/foo", {"foo.go": "package foo\n"})
        mapper = PackageMapper([gopath / "src"])

        owner = mapper.owner_of(Position(str(directory / "foo.go"), 1, 1))

        assert owner == "example.com/foo"

    def test_given_file_outside_roots_then_local_form(self, tmp_path: Path, gopath: Path) -> None:
        directory = tmp_path / "elsewhere"
        directory.mkdir()
        mapper = PackageMapper([gopath / "src"])

        owner = mapper.owner_of(Position(str(directory / "x.go"), 3, 1))

        assert owner == "_" + directory.resolve().as_posix()

    def test_given_empty_filename_then_invariant_error(self) -> None:
        mapper = PackageMapper([])

        with pytest.raises(InvariantError) as exc_info:
            mapper.owner_of(Position("", 1, 1))

        assert exc_info.value.message == "empty file name"

    def test_given_missing_directory_then_invariant_error(self, tmp_path: Path) -> None:
        mapper = PackageMapper([])
        filename = str(tmp_path / "gone" / "x.go")

        with pytest.raises(InvariantError) as exc_info:
            mapper.owner_of(Position(filename, 1, 1))

        assert exc_info.value.message == "cannot reverse-map filename to package"
        assert exc_info.value.details == {"filename": filename}

    def test_given_repeated_directory_then_memoized(self, gopath: Path, write_package) -> None:
        directory = write_package("example.com/foo", {"foo.go": "package foo\n"})
        mapper = PackageMapper([gopath / "src"])
        pos = Position(str(directory / "foo.go"), 1, 1)

        first = mapper.owner_of(pos)
        (directory / "foo.go").unlink()
        directory.rmdir()

        assert mapper.owner_of(pos) == first
