from pathlib import Path

import pytest

from run_os_image.config import AudioVariant, Configuration, MachineProfile


@pytest.fixture
def boot_image(tmp_path: Path) -> Path:
    """An existing raw disk image."""
    path = tmp_path / "hhuTOSr.img"
    path.write_bytes(b"\x00" * 512)
    return path


@pytest.fixture
def boot_iso(tmp_path: Path) -> Path:
    """An existing CD-ROM image."""
    path = tmp_path / "hhuTOSr.iso"
    path.write_bytes(b"\x00" * 2048)
    return path


@pytest.fixture
def resolved_config() -> Configuration:
    """A configuration as it looks right before the command is built."""
    return Configuration(
        machine=MachineProfile.PC,
        audio=AudioVariant.MODERN,
        boot_device_args=("-drive", "driver=raw,node-name=boot,file.driver=file,file.filename=hhuTOSr.img"),
    )
