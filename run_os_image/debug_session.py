import logging
import os
import tempfile
from pathlib import Path

from . import config as app_config

logger = logging.getLogger(__name__)


def session_script_path(directory=None):
    """Returns the per-user location of the gdb bootstrap script."""
    directory = directory or tempfile.gettempdir()
    return Path(directory) / app_config.GDB_SCRIPT_TEMPLATE.format(uid=os.getuid())


def render_debug_session(port):
    """Returns the gdb commands attaching to QEMU's stub on `port`."""
    return (
        f"set architecture {app_config.GDB_ARCHITECTURE}\n"
        f"set disassembly-flavor {app_config.GDB_DISASSEMBLY_FLAVOR}\n"
        f"target remote {app_config.GDB_HOST}:{port}\n"
    )


def write_debug_session(port, directory=None):
    """
    Writes the gdb bootstrap script for `port` and returns its path.

    The file is shared by all runs of the same user, so two runs started
    at the same time overwrite each other's script.
    """
    path = session_script_path(directory)
    path.write_text(render_debug_session(port))
    logger.debug("Wrote gdb session script for port %s to %s", port, path)
    return path
