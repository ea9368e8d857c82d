import logging
import os
import subprocess

from . import config as app_config
from .errors import ExternalCommandError, InvalidMediaError, MissingFileError
from .process import exit_status

logger = logging.getLogger(__name__)


def _classify_boot_media(path):
    """Returns the QEMU boot device clause for an image path, by suffix."""
    if path.endswith(app_config.ISO_SUFFIX):
        return ("-boot", "d", "-cdrom", path)
    if path.endswith(app_config.IMG_SUFFIX):
        return ("-drive", app_config.RAW_DRIVE_TEMPLATE.format(path=path))
    return None


def resolve_boot_media(path):
    """
    Turns a boot image path into the QEMU boot device clause.

    `.iso` files are attached as a CD-ROM and booted from, `.img` files as a
    raw drive. A missing file is reported as such whatever its suffix.

    Args:
        path: Path to the image, as given on the command line.

    Returns:
        A tuple of QEMU arguments referencing `path` verbatim.

    Raises:
        MissingFileError: `path` is not an existing regular file.
        InvalidMediaError: `path` exists but is neither .iso nor .img.
    """
    clause = _classify_boot_media(path)
    if not os.path.isfile(path):
        raise MissingFileError(f"File '{path}' does not exist!")
    if clause is None:
        raise InvalidMediaError(f"Invalid file '{path}'!")
    logger.debug("Boot media %s resolved to %s", path, " ".join(clause))
    return clause


def run_image_builder(ovmf_dir):
    """Runs the firmware build script inside `ovmf_dir` and waits for it."""
    if not os.path.isdir(ovmf_dir):
        raise ExternalCommandError(f"Firmware directory not found: {ovmf_dir}")

    logger.debug("Running %s in %s", app_config.OVMF_BUILD_SCRIPT, ovmf_dir)
    try:
        result = subprocess.run([app_config.OVMF_BUILD_SCRIPT], cwd=ovmf_dir, check=False)
    except (FileNotFoundError, PermissionError) as e:
        raise ExternalCommandError(f"Could not run {app_config.OVMF_BUILD_SCRIPT} in {ovmf_dir}: {e}") from e

    if result.returncode != 0:
        status = exit_status(result.returncode)
        raise ExternalCommandError(
            f"{app_config.OVMF_BUILD_SCRIPT} failed with exit status {status}.",
            exit_code=status,
        )
