"""Tests for locating and loading Go packages."""

from pathlib import Path

import pytest

from gosym.config.models import SearchPathConfig
from gosym.core.errors import ErrorCode, PackageError
from gosym.packages.importer import GoImporter, is_go_source, is_local_path


class TestIsLocalPath:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [("./foo", True), ("../foo", True), ("/abs/foo", True), ("example.com/foo", False), ("fmt", False)],
    )
    def test_local_prefixes(self, path: str, expected: bool) -> None:
        assert is_local_path(path) is expected


class TestIsGoSource:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("foo.go", True),
            ("foo_test.go", False),
            ("_gen.go", False),
            (".hidden.go", False),
            ("README.md", False),
        ],
    )
    def test_file_filter(self, tmp_path: Path, name: str, expected: bool) -> None:
        path = tmp_path / name
        path.write_text("package foo\n")

        assert is_go_source(path) is expected

    def test_directory_is_not_source(self, tmp_path: Path) -> None:
        (tmp_path / "dir.go").mkdir()

        assert not is_go_source(tmp_path / "dir.go")


class TestGoImporter:
    """GoImporter.find and GoImporter.load."""

    def test_given_import_path_under_root_then_loaded(self, gopath: Path, write_package) -> None:
        write_package(
            "example.com/foo",
            {
                "b.go": "package foo\n\nfunc B() {}\n",
                "a.go": "package foo\n\nvar A = 1\n",
                "a_test.go": "package foo\n\nfunc TestX() {}\n",
            },
        )
        importer = GoImporter(SearchPathConfig(gopath=str(gopath)))

        package = importer.load("example.com/foo")

        assert package.name == "foo"
        assert [Path(f.path).name for f in package.files] == ["a.go", "b.go"]
        assert set(package.scope) == {"A", "B"}

    def test_given_roots_then_first_root_wins(self, tmp_path: Path) -> None:
        for root in ("one", "two"):
            directory = tmp_path / root / "src" / "lib"
            directory.mkdir(parents=True)
            (directory / "lib.go").write_text(f"package lib\n\nvar From{root.title()} = 1\n")
        search = SearchPathConfig(gopath=f"{tmp_path / 'one'}:{tmp_path / 'two'}")

        package = GoImporter(search).load("lib")

        assert "FromOne" in package.scope

    def test_given_goroot_then_searched_after_gopath(self, tmp_path: Path) -> None:
        directory = tmp_path / "goroot" / "src" / "fmt"
        directory.mkdir(parents=True)
        (directory / "print.go").write_text("package fmt\n\nfunc Println(a ...any) {}\n")
        search = SearchPathConfig(gopath=str(tmp_path / "gopath"), goroot=str(tmp_path / "goroot"))

        assert GoImporter(search).find("fmt") == directory

    def test_given_unknown_path_then_not_found(self, gopath: Path) -> None:
        importer = GoImporter(SearchPathConfig(gopath=str(gopath)))

        with pytest.raises(PackageError) as exc_info:
            importer.load("example.com/missing")

        assert exc_info.value.code == ErrorCode.PACKAGE_NOT_FOUND

    def test_given_only_test_files_then_no_go_files(self, gopath: Path, write_package) -> None:
        write_package("example.com/tests", {"x_test.go": "package tests\n"})
        importer = GoImporter(SearchPathConfig(gopath=str(gopath)))

        with pytest.raises(PackageError) as exc_info:
            importer.load("example.com/tests")

        assert exc_info.value.code == ErrorCode.PACKAGE_NO_GO_FILES

    def test_given_directory_path_then_loaded_directly(self, tmp_path: Path) -> None:
        directory = tmp_path / "scratch"
        directory.mkdir()
        (directory / "main.go").write_text("package main\n\nfunc main() {}\n")
        importer = GoImporter(SearchPathConfig())

        by_dir = importer.load(str(directory))
        by_local_path = importer.load("_" + directory.as_posix())

        assert by_dir.name == by_local_path.name == "main"

    def test_given_mixed_package_names_then_majority_wins(self, gopath: Path, write_package) -> None:
        write_package(
            "example.com/mixed",
            {
                "a.go": "package mixed\n",
                "b.go": "package mixed\n\nvar B = 1\n",
                "doc.go": "package other\n",
            },
        )
        importer = GoImporter(SearchPathConfig(gopath=str(gopath)))

        package = importer.load("example.com/mixed")

        assert package.name == "mixed"
        assert len(package.files) == 2
