"""Shared fixtures for cafetch tests."""

import io

import pytest

from cafetch.host import SourceUnavailable

GIB = 1024**3

OS_RELEASE = """\
NAME="Test OS"
VERSION="1.0"
ID=testos
PRETTY_NAME="Test OS 1.0"
HOME_URL="https://example.com/"
"""

CPUINFO = """\
processor\t: 0
vendor_id\t: GenuineIntel
cpu family\t: 6
model\t\t: 142
model name\t: Intel(R) Core(TM) i7-8550U CPU @ 1.80GHz
stepping\t: 10

processor\t: 1
model name\t: Some Other CPU
"""

MEMINFO = """\
MemTotal:        8000000 kB
MemFree:          500000 kB
MemAvailable:    2000000 kB
Buffers:          100000 kB
"""


class FakeHost:
    """In-memory Host used to drive the collector without touching the machine."""

    def __init__(
        self,
        files: dict[str, str] | None = None,
        env: dict[str, str] | None = None,
        commands: dict[tuple[str, ...], str] | None = None,
        disk: tuple[int, int] | None = None,
        platform: str = "linux",
        machine: str = "x86_64",
    ) -> None:
        self.files = dict(files or {})
        self.env = dict(env or {})
        self.commands = dict(commands or {})
        self.disk = disk
        self.opened: list[io.StringIO] = []
        self._platform = platform
        self._machine = machine

    def open_text(self, path: str) -> io.StringIO:
        if path not in self.files:
            raise FileNotFoundError(path)
        handle = io.StringIO(self.files[path])
        self.opened.append(handle)
        return handle

    def run_command(self, *args: str) -> str:
        if args not in self.commands:
            raise SourceUnavailable(f"{' '.join(args)} failed")
        return self.commands[args]

    def getenv(self, key: str) -> str | None:
        return self.env.get(key)

    def disk_usage(self, path: str) -> tuple[int, int]:
        if self.disk is None:
            raise OSError(f"statvfs failed for {path}")
        return self.disk

    @property
    def platform(self) -> str:
        return self._platform

    @property
    def machine(self) -> str:
        return self._machine


@pytest.fixture
def empty_host() -> FakeHost:
    """A host where every source is unavailable."""
    return FakeHost()


@pytest.fixture
def full_host() -> FakeHost:
    """A host where every source is readable."""
    return FakeHost(
        files={
            "/etc/os-release": OS_RELEASE,
            "/proc/cpuinfo": CPUINFO,
            "/proc/uptime": "90061.42 350000.10\n",
            "/proc/meminfo": MEMINFO,
        },
        env={
            "HOSTNAME": "box",
            "USER": "alice",
            "SHELL": "/bin/zsh",
            "TERM": "xterm-256color",
        },
        commands={("uname", "-r"): "6.8.0-45-generic\n"},
        disk=(100 * GIB, 40 * GIB),
    )


@pytest.fixture
def snapshot():
    """A fully populated SystemSnapshot."""
    from cafetch.models import SystemSnapshot

    return SystemSnapshot(
        os_name="Test OS 1.0",
        kernel="6.8.0-45-generic",
        arch="x86_64",
        hostname="box",
        user="alice",
        shell="/bin/zsh",
        terminal="xterm-256color",
        cpu_model="Test CPU @ 1.80GHz",
        uptime="1d 1h 1m",
        mem_used_mb=5859,
        mem_total_mb=7812,
        disk_used_gb=60,
        disk_total_gb=100,
    )
