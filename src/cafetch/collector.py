"""System information collection for cafetch."""

import logging
import subprocess

from cafetch.host import Host, LocalHost
from cafetch.models import NOT_AVAILABLE, SystemSnapshot

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = "/etc/os-release"
CPUINFO_PATH = "/proc/cpuinfo"
UPTIME_PATH = "/proc/uptime"
MEMINFO_PATH = "/proc/meminfo"
DISK_PATH = "/"

SESSION_VARIABLES = {
    "hostname": "HOSTNAME",
    "user": "USER",
    "shell": "SHELL",
    "terminal": "TERM",
}

KIB_PER_MIB = 1024
BYTES_PER_GIB = 1024**3


def format_uptime(seconds: int) -> str:
    """Format whole seconds as 'Dd Hh Mm', dropping the days unit when zero."""
    seconds = max(seconds, 0)
    days = seconds // 86400
    hours = (seconds % 86400) // 3600
    minutes = (seconds % 3600) // 60
    if days > 0:
        return f"{days}d {hours}h {minutes}m"
    return f"{hours}h {minutes}m"


class SystemCollector:
    """
    Collects a SystemSnapshot from a Host.

    Every resolver is independent and never raises: an unreadable source
    is logged and replaced by its fallback value ("N/A" or zero).
    """

    def __init__(
        self,
        host: Host | None = None,
        *,
        os_release_path: str = OS_RELEASE_PATH,
        cpuinfo_path: str = CPUINFO_PATH,
        uptime_path: str = UPTIME_PATH,
        meminfo_path: str = MEMINFO_PATH,
        disk_path: str = DISK_PATH,
    ) -> None:
        """
        Initialize the SystemCollector.

        Args:
            host: Source of OS facts. Defaults to the local machine.
            os_release_path: OS release descriptor (key=value lines).
            cpuinfo_path: CPU info pseudo-file.
            uptime_path: Uptime pseudo-file.
            meminfo_path: Memory info pseudo-file.
            disk_path: Path whose filesystem is measured for disk usage.
        """
        self._host = host if host is not None else LocalHost()
        self._os_release_path = os_release_path
        self._cpuinfo_path = cpuinfo_path
        self._uptime_path = uptime_path
        self._meminfo_path = meminfo_path
        self._disk_path = disk_path

    def collect(self) -> SystemSnapshot:
        """Collect a snapshot of the current host state."""
        mem_total, mem_used = self.resolve_memory()
        disk_total, disk_used = self.resolve_disk()

        return SystemSnapshot(
            os_name=self.resolve_os_name(),
            kernel=self.resolve_kernel(),
            arch=self.resolve_arch(),
            hostname=self.resolve_env(SESSION_VARIABLES["hostname"]),
            user=self.resolve_env(SESSION_VARIABLES["user"]),
            shell=self.resolve_env(SESSION_VARIABLES["shell"]),
            terminal=self.resolve_env(SESSION_VARIABLES["terminal"]),
            cpu_model=self.resolve_cpu_model(),
            uptime=self.resolve_uptime(),
            mem_used_mb=mem_used,
            mem_total_mb=mem_total,
            disk_used_gb=disk_used,
            disk_total_gb=disk_total,
        )

    def resolve_os_name(self) -> str:
        """Get the PRETTY_NAME from os-release, or the platform identifier."""
        try:
            with self._host.open_text(self._os_release_path) as f:
                for line in f:
                    line = line.rstrip("\n")
                    if line.startswith("PRETTY_NAME="):
                        return line.removeprefix("PRETTY_NAME=").strip('"')
        except OSError as e:
            logger.debug("Cannot read %s: %s", self._os_release_path, e)
        else:
            logger.debug("No PRETTY_NAME in %s", self._os_release_path)
        return self._host.platform

    def resolve_kernel(self) -> str:
        """Get the kernel release from `uname -r`."""
        try:
            return self._host.run_command("uname", "-r").strip()
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("Kernel query failed: %s", e)
            return NOT_AVAILABLE

    def resolve_arch(self) -> str:
        """Get the CPU architecture reported by the runtime."""
        return self._host.machine or NOT_AVAILABLE

    def resolve_env(self, key: str) -> str:
        """Get an environment variable, treating unset and empty alike."""
        value = self._host.getenv(key)
        if not value:
            logger.debug("Environment variable %s is not set", key)
            return NOT_AVAILABLE
        return value

    def resolve_cpu_model(self) -> str:
        """Get the first 'model name' entry from cpuinfo."""
        try:
            with self._host.open_text(self._cpuinfo_path) as f:
                for line in f:
                    if line.startswith("model name"):
                        _, sep, model = line.partition(":")
                        if sep:
                            return model.strip()
        except OSError as e:
            logger.debug("Cannot read %s: %s", self._cpuinfo_path, e)
            return NOT_AVAILABLE

        logger.debug("No model name in %s", self._cpuinfo_path)
        return NOT_AVAILABLE

    def resolve_uptime(self) -> str:
        """Get the formatted uptime from the first field of the uptime file."""
        try:
            with self._host.open_text(self._uptime_path) as f:
                fields = f.read().split()
            seconds = float(fields[0])
            return format_uptime(int(seconds))
        except (OSError, ValueError, IndexError, OverflowError) as e:
            logger.debug("Cannot parse uptime from %s: %r", self._uptime_path, e)
            return NOT_AVAILABLE

    def resolve_memory(self) -> tuple[int, int]:
        """
        Get (total, used) memory in megabytes.

        Used memory is MemTotal minus MemAvailable. Both values are zero
        when meminfo cannot be read.
        """
        mem_total = 0
        mem_available = 0

        try:
            with self._host.open_text(self._meminfo_path) as f:
                for line in f:
                    fields = line.split()
                    if len(fields) < 2:
                        continue

                    # Values are in kB; an unparsable value counts as zero
                    try:
                        value = int(fields[1])
                    except ValueError:
                        value = 0

                    if line.startswith("MemTotal:"):
                        mem_total = value
                    elif line.startswith("MemAvailable:"):
                        mem_available = value

                    if mem_total > 0 and mem_available > 0:
                        break
        except OSError as e:
            logger.debug("Cannot read %s: %s", self._meminfo_path, e)
            return 0, 0

        if mem_total == 0:
            logger.debug("No MemTotal in %s", self._meminfo_path)
            return 0, 0

        total = mem_total // KIB_PER_MIB
        used = total - mem_available // KIB_PER_MIB
        return total, used

    def resolve_disk(self) -> tuple[int, int]:
        """Get (total, used) disk space in gigabytes, truncated."""
        try:
            total_bytes, free_bytes = self._host.disk_usage(self._disk_path)
        except OSError as e:
            logger.debug("Cannot stat filesystem at %s: %s", self._disk_path, e)
            return 0, 0

        used_bytes = total_bytes - free_bytes
        return int(total_bytes / BYTES_PER_GIB), int(used_bytes / BYTES_PER_GIB)


def collect_snapshot(host: Host | None = None) -> SystemSnapshot:
    """Collect a SystemSnapshot from the given host, or the local machine."""
    return SystemCollector(host).collect()
