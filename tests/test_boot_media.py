from pathlib import Path

import pytest

from run_os_image.boot import resolve_boot_media, run_image_builder
from run_os_image.errors import ExternalCommandError, InvalidMediaError, MissingFileError


class TestResolveBootMedia:
    """Tests for classifying and validating the boot image."""

    def test_iso_boots_from_cdrom(self, boot_iso: Path):
        """An .iso is attached as a CD-ROM and booted from."""
        clause = resolve_boot_media(str(boot_iso))
        assert clause == ("-boot", "d", "-cdrom", str(boot_iso))

    def test_img_attached_as_raw_drive(self, boot_image: Path):
        """An .img is attached as a raw drive."""
        clause = resolve_boot_media(str(boot_image))
        assert clause == ("-drive", f"driver=raw,node-name=boot,file.driver=file,file.filename={boot_image}")

    def test_path_kept_verbatim(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """Relative paths are not expanded."""
        (tmp_path / "disk.img").write_bytes(b"")
        monkeypatch.chdir(tmp_path)
        assert resolve_boot_media("disk.img")[-1].endswith("file.filename=disk.img")

    @pytest.mark.parametrize("name", ["image.qcow2", "image.IMG", "image", "image.iso.bak"])
    def test_other_suffix_rejected(self, tmp_path: Path, name: str):
        """Existing files with any other suffix are invalid media."""
        path = tmp_path / name
        path.write_bytes(b"")
        with pytest.raises(InvalidMediaError, match="Invalid file"):
            resolve_boot_media(str(path))

    @pytest.mark.parametrize("name", ["missing.img", "missing.iso", "missing.qcow2"])
    def test_missing_file_rejected_regardless_of_suffix(self, tmp_path: Path, name: str):
        """A missing file is reported as missing whatever its suffix."""
        with pytest.raises(MissingFileError, match="does not exist"):
            resolve_boot_media(str(tmp_path / name))

    def test_directory_is_not_a_boot_file(self, tmp_path: Path):
        """A directory named like an image does not count as a file."""
        directory = tmp_path / "folder.img"
        directory.mkdir()
        with pytest.raises(MissingFileError):
            resolve_boot_media(str(directory))


class TestRunImageBuilder:
    """Tests for the firmware build step."""

    def _make_script(self, directory, body):
        directory.mkdir(parents=True)
        script = directory / "build.sh"
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(0o755)
        return script

    def test_runs_script_inside_directory(self, tmp_path: Path):
        """build.sh runs with the firmware directory as working directory."""
        ovmf_dir = tmp_path / "efi" / "ovmf"
        self._make_script(ovmf_dir, "pwd -P > built.txt")
        run_image_builder(str(ovmf_dir))
        assert (ovmf_dir / "built.txt").read_text().strip() == str(ovmf_dir.resolve())

    def test_failure_status_propagated(self, tmp_path: Path):
        """A failing build script's status becomes the error's exit code."""
        ovmf_dir = tmp_path / "ovmf"
        self._make_script(ovmf_dir, "exit 7")
        with pytest.raises(ExternalCommandError) as excinfo:
            run_image_builder(str(ovmf_dir))
        assert excinfo.value.exit_code == 7

    def test_signal_status_mapped(self, tmp_path: Path):
        """A build script killed by SIGTERM reports 143."""
        ovmf_dir = tmp_path / "ovmf"
        self._make_script(ovmf_dir, "kill -TERM $$")
        with pytest.raises(ExternalCommandError) as excinfo:
            run_image_builder(str(ovmf_dir))
        assert excinfo.value.exit_code == 143

    def test_missing_directory(self, tmp_path: Path):
        """A missing firmware directory exits 1."""
        with pytest.raises(ExternalCommandError) as excinfo:
            run_image_builder(str(tmp_path / "nope"))
        assert excinfo.value.exit_code == 1

    def test_missing_script(self, tmp_path: Path):
        """A firmware directory without build.sh exits 1."""
        with pytest.raises(ExternalCommandError) as excinfo:
            run_image_builder(str(tmp_path))
        assert excinfo.value.exit_code == 1
