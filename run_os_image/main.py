import argparse
import logging
import re
import sys
from dataclasses import replace

from . import boot, command, console, debug_session, process, version
from .config import Configuration, MachineProfile
from .errors import InvalidMachineError, LauncherError, UsageError
from .logging_utils import configure_debug_log

logger = logging.getLogger(__name__)

USAGE = """Usage: run-os-image [OPTION...]
    Available options:
    -f, --file
        Set the .iso or .img file, which qemu should boot (Default: hhuTOSr.img)
    -m, --machine
        Set the machine profile, which qemu should emulate ([pc] | [pc-kvm]) (Default: pc)
    -r, --ram
        Set the amount of ram, which qemu should use (e.g. 256, 1G, ...) (Default: 128M)
    -c, --cpu
        Set the CPU model, which qemu should emulate (e.g. 486, pentium, pentium2, ...) (Default: qemu64)
    -d, --debug
        Set the port, on which qemu should listen for GDB clients (Default: disabled)
    -l, --log-file
        Write a timestamped debug log to the given file (Default: disabled)
    -h, --help
        Show this help message"""


class _LauncherArgumentParser(argparse.ArgumentParser):
    """argparse parser that raises UsageError instead of exiting with status 2."""

    def error(self, message):
        raise UsageError(message)

    def format_help(self):
        return USAGE + "\n"


def _machine_profile(name):
    profile = MachineProfile.from_cli_name(name)
    if profile is None:
        raise InvalidMachineError(f"Invalid machine '{name}'!")
    return profile


def _ram_quantity(value):
    if not value.strip():
        raise UsageError("RAM size must not be empty.")
    return value


PORT_PATTERN = re.compile(r"[0-9]+")


def _tcp_port(value):
    if not PORT_PATTERN.fullmatch(value) or not 0 < int(value) < 65536:
        raise UsageError(f"Invalid debug port '{value}'!")
    return value


# Every option takes exactly one value; -h/--help is added separately and takes none.
OPTION_TABLE = (
    (("-f", "--file"), "boot_file", str),
    (("-m", "--machine"), "machine", _machine_profile),
    (("-r", "--ram"), "ram", _ram_quantity),
    (("-c", "--cpu"), "cpu", str),
    (("-d", "--debug"), "debug_port", _tcp_port),
    (("-l", "--log-file"), "log_file", str),
)

# Not shown in the usage text; used to point at a different QEMU or firmware checkout.
SUPPRESSED_OPTIONS = ("qemu_executable", "ovmf_dir")


def build_parser():
    """Creates the command-line parser."""
    parser = _LauncherArgumentParser(prog="run-os-image", add_help=False, allow_abbrev=False)
    parser.add_argument("-h", "--help", action="help")
    for flags, dest, value_type in OPTION_TABLE:
        parser.add_argument(*flags, dest=dest, type=value_type, nargs=None, default=None)
    for dest in SUPPRESSED_OPTIONS:
        cli_arg = f"--{dest.replace('_', '-')}"
        parser.add_argument(cli_arg, dest=dest, default=None, help=argparse.SUPPRESS)
    return parser


def parse_args(argv=None):
    """
    Turns command-line flags into a Configuration.

    Options are applied in the order given; when one is repeated the last
    value wins. `--help` prints the usage text and exits with status 0.
    """
    namespace = build_parser().parse_args(argv)
    overrides = {key: value for key, value in vars(namespace).items() if value is not None}
    if "cpu" in overrides:
        overrides["cpu_overwritten"] = True
    config = replace(Configuration(), **overrides)
    logger.debug("Parsed configuration: %s", config)
    return config


def run(argv=None):
    """Runs the whole pipeline and returns the exit status for the shell."""
    config = parse_args(argv)
    configure_debug_log(config.log_file)

    config = replace(config, boot_device_args=boot.resolve_boot_media(config.boot_file))

    if config.debug_port:
        script_path = debug_session.write_debug_session(config.debug_port)
        console.info(f"QEMU will wait for gdb on port {config.debug_port}. Attach with: gdb -x {script_path}")

    boot.run_image_builder(config.ovmf_dir)

    config = replace(config, audio=version.probe_audio_variant(config.qemu_executable))

    args = command.build_qemu_args(config)
    logger.debug("QEMU command: %s", command.build_command(config))
    console.show_command(command.format_command(args))

    if process.is_detached(config):
        console.info("Starting QEMU in the background.")
    return process.launch(args, config)


def main(argv=None):
    """Parses command-line arguments and launches the VM."""
    try:
        status = run(argv)
    except UsageError as e:
        console.error(e.message)
        print(USAGE)
        sys.exit(e.exit_code)
    except LauncherError as e:
        console.error(e.message)
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)
    sys.exit(status)
