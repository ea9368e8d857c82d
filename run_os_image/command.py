import shlex
import subprocess

from . import config as app_config


def build_qemu_args(config):
    """Constructs the list of arguments for the QEMU command."""
    if config.audio is None:
        raise ValueError("Audio variant has not been probed yet.")
    if not config.boot_device_args:
        raise ValueError("Boot device has not been resolved yet.")

    args = [config.qemu_executable]
    if config.machine:
        args.extend(["-machine", config.machine.value])
    args.extend(["-m", config.ram, "-cpu", config.cpu, "-bios", config.bios_path])
    args.extend(app_config.BASE_ARGS)
    args.extend(config.boot_device_args)
    args.extend(config.audio.args)

    # -gdb and -S must follow the boot device and audio options.
    if config.debug_port:
        args.extend(["-gdb", f"tcp::{config.debug_port}", "-S"])
    return args


def build_command(config):
    """Returns the QEMU command as a single shell-quoted line."""
    return shlex.join(build_qemu_args(config))


def format_command(args):
    """Formats an argument list one option per line, for display."""
    formatted_command = f"{args[0]} \\\n"
    formatted_command += " \\\n".join([f"    {subprocess.list2cmdline([arg])}" for arg in args[1:]])
    return formatted_command
