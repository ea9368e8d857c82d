from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

# --- Global Configuration & Executable Paths ---

# The QEMU system emulator used to boot the image.
QEMU_EXECUTABLE = "qemu-system-x86_64"
# Directory containing the firmware build script, relative to the project root.
OVMF_DIR = "efi/ovmf"
# The script run inside OVMF_DIR before every launch. Takes no arguments.
OVMF_BUILD_SCRIPT = "./build.sh"
# The UEFI firmware image produced by the build script.
BIOS_PATH = "efi/ovmf/x64/OVMF.fd"
# The CPU model to emulate unless --cpu is given.
CPU_MODEL = "qemu64"
# The default amount of RAM to allocate to the virtual machine.
MEMORY = "128M"
# The image booted when --file is not given.
BOOT_FILE = "hhuTOSr.img"

# Arguments passed on every run, between the firmware and the boot device.
BASE_ARGS = ("-boot", "d", "-vga", "std", "-rtc", "base=localtime", "-device", "isa-debug-exit")

# --- Boot Media ---
ISO_SUFFIX = ".iso"
IMG_SUFFIX = ".img"
RAW_DRIVE_TEMPLATE = "driver=raw,node-name=boot,file.driver=file,file.filename={path}"

# --- Audio ---

# First QEMU release with -audiodev; older releases only know -soundhw.
AUDIODEV_MIN_VERSION = "5.0.0"

# --- GDB Remote Debugging ---

# The port QEMU is started in the background for, so gdb can attach from the same shell.
DETACHED_GDB_PORT = "1234"
GDB_HOST = "127.0.0.1"
GDB_ARCHITECTURE = "i386"
GDB_DISASSEMBLY_FLAVOR = "intel"
# Per-user file name of the gdb bootstrap script, inside the temp directory.
GDB_SCRIPT_TEMPLATE = "gdbcommands.{uid}"


class MachineProfile(Enum):
    """Machine profiles selectable with --machine."""
    PC = "pc"
    PC_KVM = "pc,accel=kvm,kernel-irqchip=split"

    @classmethod
    def from_cli_name(cls, name):
        for profile, cli_name in MACHINE_CLI_NAMES.items():
            if cli_name == name:
                return profile
        return None


MACHINE_CLI_NAMES = {
    MachineProfile.PC: "pc",
    MachineProfile.PC_KVM: "pc-kvm",
}


class AudioVariant(Enum):
    """PC speaker wiring, depending on what the installed QEMU understands."""
    LEGACY = ("-soundhw", "pcspk")
    MODERN = ("-audiodev", "id=pa,driver=pa", "-machine", "pcspk-audiodev=pa")

    @property
    def args(self):
        return list(self.value)


@dataclass(frozen=True)
class Configuration:
    """
    Everything needed to assemble one QEMU invocation.

    Created with defaults, then refined by each pipeline stage through
    `dataclasses.replace`. Nothing here outlives a single run.
    """
    bios_path: str = BIOS_PATH
    machine: Optional[MachineProfile] = MachineProfile.PC
    ram: str = MEMORY
    cpu: str = CPU_MODEL
    cpu_overwritten: bool = False
    audio: Optional[AudioVariant] = None
    boot_file: str = BOOT_FILE
    boot_device_args: Tuple[str, ...] = field(default_factory=tuple)
    debug_port: str = ""
    qemu_executable: str = QEMU_EXECUTABLE
    ovmf_dir: str = OVMF_DIR
    log_file: Optional[str] = None
