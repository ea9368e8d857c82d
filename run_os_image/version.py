import itertools
import logging
import re
import subprocess

from . import config as app_config
from .config import AudioVariant
from .errors import ExternalCommandError, VersionProbeError
from .process import exit_status

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r'version\s+(\d+(?:\.\d+)*)')
_DOTTED_RE = re.compile(r'\b(\d+(?:\.\d+)+)\b')


def get_qemu_version_string(qemu_executable):
    """Returns the first line of `<qemu> --version`."""
    try:
        result = subprocess.run([qemu_executable, "--version"], capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise ExternalCommandError(f"QEMU executable '{qemu_executable}' not found.") from e

    if result.returncode != 0:
        status = exit_status(result.returncode)
        raise ExternalCommandError(
            f"'{qemu_executable} --version' failed with exit status {status}.",
            exit_code=status,
        )
    lines = result.stdout.splitlines()
    return lines[0] if lines else ""


def parse_version(text):
    """
    Extracts a version number as a tuple of ints.

    Accepts the QEMU banner ("QEMU emulator version 6.2.0 (Debian 1:6.2+dfsg-2)")
    as well as a bare dotted version ("5.0.0").
    """
    match = _VERSION_RE.search(text) or _DOTTED_RE.search(text)
    if not match:
        raise VersionProbeError(f"Could not find a version number in '{text.strip()}'.")
    return tuple(int(part) for part in match.group(1).split('.'))


def compare_versions(left, right):
    """Compares two version tuples component-wise; returns -1, 0 or 1."""
    for a, b in itertools.zip_longest(left, right, fillvalue=0):
        if a != b:
            return -1 if a < b else 1
    return 0


def select_audio_variant(version):
    """Picks -audiodev for QEMU >= 5.0.0 and -soundhw below that."""
    if isinstance(version, str):
        version = parse_version(version)
    threshold = parse_version(app_config.AUDIODEV_MIN_VERSION)
    if compare_versions(version, threshold) < 0:
        return AudioVariant.LEGACY
    return AudioVariant.MODERN


def probe_audio_variant(qemu_executable):
    """Queries the installed QEMU and returns the audio variant it supports."""
    banner = get_qemu_version_string(qemu_executable)
    version = parse_version(banner)
    variant = select_audio_variant(version)
    logger.debug("QEMU reports %r, parsed %s, audio variant %s", banner, version, variant.name)
    return variant
