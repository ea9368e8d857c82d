"""
Errors raised by the launcher stages.

Each stage raises; only `main.main` turns an error into a console message
and an exit status, taken from the error's `exit_code`.
"""


class LauncherError(Exception):
    """Base class for every failure that aborts a run."""

    exit_code = 1

    def __init__(self, message, exit_code=None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class UsageError(LauncherError):
    """Unknown flag, missing flag value or malformed option value."""


class InvalidMediaError(LauncherError):
    """The boot file has a suffix that is neither .iso nor .img."""


class MissingFileError(LauncherError):
    """The boot file does not exist."""


class InvalidMachineError(LauncherError):
    """Unrecognized --machine profile name."""


class VersionProbeError(LauncherError):
    """The emulator's --version output carried no usable version number."""


class ExternalCommandError(LauncherError):
    """
    An external step (firmware build, version query, emulator start) failed.

    `exit_code` is the failing command's own status so it can be propagated
    unchanged.
    """
