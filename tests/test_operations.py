"""Tests for single-file operations, token replacement and bulk copy."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from fluentfs import FileAccessError
from fluentfs.fileset import FileSet
from fluentfs.fs import OnError, run_failable
from fluentfs.operations import resolve_destination
from fluentfs.paths import Directory, File


class TestResolveDestination:
    @pytest.mark.parametrize(
        ("destination", "expected"),
        [
            ("out", "out/web.config"),
            ("out/renamed.config", "out/renamed.config"),
        ],
    )
    def test_extension_decides_directory_or_file(self, destination: str, expected: str) -> None:
        assert Path(resolve_destination("src/web.config", destination)) == Path(expected)


class TestRunFailable:
    def test_fail_wraps_oserror(self) -> None:
        def boom() -> None:
            raise PermissionError("denied")

        with pytest.raises(FileAccessError, match="denied") as info:
            run_failable(OnError.FAIL, boom)
        assert isinstance(info.value.__cause__, PermissionError)

    def test_continue_logs_and_returns(self, caplog: pytest.LogCaptureFixture) -> None:
        def boom() -> None:
            raise OSError("disk gone")

        with caplog.at_level(logging.WARNING, logger="fluentfs.fs"):
            run_failable(OnError.CONTINUE, boom)
        assert "disk gone" in caplog.text

    def test_non_oserror_propagates(self) -> None:
        def bug() -> None:
            raise ValueError("not an I/O problem")

        with pytest.raises(ValueError):
            run_failable(OnError.CONTINUE, bug)


class TestFileOperations:
    def test_copy_to_directory(self, sample_tree: Path) -> None:
        out = sample_tree / "out"
        out.mkdir()
        File(str(sample_tree / "app.config")).copy.to(str(out))
        assert (out / "app.config").read_text() == "<configuration />"
        assert (sample_tree / "app.config").exists()

    def test_copy_to_file_path(self, sample_tree: Path) -> None:
        target = sample_tree / "other" / "copy.config"
        File(str(sample_tree / "app.config")).copy.to(target)
        assert target.read_text() == "<configuration />"

    def test_copy_missing_source_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileAccessError):
            File(str(tmp_path / "missing.txt")).copy.to(str(tmp_path / "dest.txt"))

    def test_copy_continue_on_error(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            File(str(tmp_path / "missing.txt")).copy.continue_on_error.to(str(tmp_path / "d.txt"))
        assert not (tmp_path / "d.txt").exists()
        assert "Continuing after error" in caplog.text

    def test_move(self, sample_tree: Path) -> None:
        File(str(sample_tree / "a.txt")).move.to(str(sample_tree / "other"))
        assert not (sample_tree / "a.txt").exists()
        assert (sample_tree / "other" / "a.txt").read_text() == "a"

    def test_move_continue_on_error(self, tmp_path: Path) -> None:
        File(str(tmp_path / "missing.txt")).move.continue_on_error.to(str(tmp_path / "x.txt"))
        assert not (tmp_path / "x.txt").exists()

    def test_rename(self, sample_tree: Path) -> None:
        File(str(sample_tree / "a.txt")).rename.to("renamed.txt")
        assert (sample_tree / "renamed.txt").read_text() == "a"
        assert not (sample_tree / "a.txt").exists()

    def test_rename_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileAccessError):
            File(str(tmp_path / "missing.txt")).rename.to("other.txt")


class TestTokenReplacement:
    def test_replace_token_and_write(self, tmp_path: Path) -> None:
        source = tmp_path / "web.config"
        source.write_text('<add connectionString="@ConnectionString@" name="@Name@" />')
        target = tmp_path / "out.config"

        (
            File(str(source))
            .copy.replace_token("ConnectionString")
            .with_value("Server=db")
            .replace_token("Name")
            .with_value("main")
            .to(str(target))
        )

        assert target.read_text() == '<add connectionString="Server=db" name="main" />'
        assert "@ConnectionString@" in source.read_text()

    def test_replaces_every_occurrence_only_when_delimited(self, tmp_path: Path) -> None:
        source = tmp_path / "t.txt"
        source.write_text("@x@ x @x@")
        target = tmp_path / "o.txt"
        File(str(source)).copy.replace_token("x").with_value("y").to(target)
        assert target.read_text() == "y x y"

    def test_unreadable_source_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileAccessError):
            File(str(tmp_path / "missing.txt")).copy.replace_token("x")


class TestDirectory:
    def test_sub_folder_and_file(self, tmp_path: Path) -> None:
        base = Directory(str(tmp_path))
        assert Path(base.sub_folder("stuff").path) == tmp_path / "stuff"
        assert Path(base.file("web.config").path) == tmp_path / "web.config"

    def test_files_with_pattern(self, sample_tree: Path) -> None:
        assert Directory(str(sample_tree)).files("*.dll") == [str(sample_tree / "app.dll")]

    def test_files_defaults_to_everything_in_directory(self, sample_tree: Path) -> None:
        names = [Path(p).name for p in Directory(str(sample_tree)).files()]
        assert names == ["a.txt", "app.config", "app.dll", "b.txt", "notes.md"]

    def test_create_and_delete(self, tmp_path: Path) -> None:
        target = Directory(str(tmp_path / "a" / "b"))
        target.create()
        assert (tmp_path / "a" / "b").is_dir()
        target.delete()
        assert not (tmp_path / "a" / "b").exists()

    def test_delete_missing_raises_unless_continuing(self, tmp_path: Path) -> None:
        missing = Directory(str(tmp_path / "nope"))
        with pytest.raises(FileAccessError):
            missing.delete()
        missing.delete(OnError.CONTINUE)


class TestCopyFileset:
    def test_copies_resolved_files(
        self, sample_tree: Path, tmp_path_factory: pytest.TempPathFactory
    ) -> None:
        dest = tmp_path_factory.mktemp("dest")
        fs = (
            FileSet()
            .include(Directory(str(sample_tree)))
            .recurse_all_subdirectories()
            .filter("*.txt")
        )
        copied = fs.copy.to(str(dest))
        assert len(copied) == 5
        names = sorted(p.name for p in dest.iterdir())
        assert names == ["a.txt", "b.txt", "c.txt", "d.txt", "e.txt"]

    def test_extensionless_files_land_in_destination(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        src.mkdir()
        (src / "Makefile").write_text("all:")
        dest = tmp_path / "dest"
        dest.mkdir()
        FileSet().include(str(src / "Makefile")).copy.to(dest)
        assert (dest / "Makefile").read_text() == "all:"

    def test_missing_literal_raises(self, tmp_path: Path) -> None:
        fs = FileSet().include(str(tmp_path / "ghost.dll"))
        with pytest.raises(FileAccessError):
            fs.copy.to(str(tmp_path))

    def test_continue_on_error_copies_the_rest(
        self, sample_tree: Path, tmp_path_factory: pytest.TempPathFactory
    ) -> None:
        dest = tmp_path_factory.mktemp("dest")
        fs = FileSet().include(str(sample_tree / "ghost.dll")).include(str(sample_tree / "a.txt"))
        fs.copy.continue_on_error.to(str(dest))
        assert (dest / "a.txt").read_text() == "a"

    def test_copy_flushes_pending(self, sample_tree: Path) -> None:
        fs = FileSet().include(Directory(str(sample_tree)))
        fs.copy
        assert fs.pending is None
        assert fs.inclusions == [str(sample_tree)]
