import logging
import subprocess

from . import config as app_config
from .errors import ExternalCommandError

logger = logging.getLogger(__name__)


def exit_status(returncode):
    """Maps a Popen return code to the status a shell reports; -N (signal N) becomes 128+N."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def is_detached(config):
    """QEMU runs in the background only for the default gdb port."""
    return config.debug_port == app_config.DETACHED_GDB_PORT


def launch(args, config):
    """
    Executes the QEMU command.

    In the foreground this blocks until QEMU exits and returns its exit
    status. When started for the default gdb port, QEMU is spawned in its
    own session and 0 is returned at once, so gdb can attach from the
    same shell; QEMU's exit status is never collected in that case.

    Args:
        args: The full argument list, executable first.
        config: The Configuration the arguments were built from.

    Returns:
        The exit status to hand back to the shell.
    """
    try:
        if is_detached(config):
            process = subprocess.Popen(args, start_new_session=True)
            logger.debug("Started QEMU in the background (pid %s)", process.pid)
            return 0

        process = subprocess.Popen(args)
        logger.debug("Started QEMU in the foreground (pid %s)", process.pid)
        try:
            process.wait()
        except KeyboardInterrupt:
            # SIGINT reached QEMU as well; report whatever it exits with.
            process.wait()
        logger.debug("QEMU exited with status %s", process.returncode)
        return exit_status(process.returncode)
    except FileNotFoundError as e:
        raise ExternalCommandError(f"QEMU executable '{args[0]}' not found.") from e
