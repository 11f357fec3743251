"""Data models for cafetch."""

from dataclasses import dataclass

NOT_AVAILABLE = "N/A"


@dataclass(slots=True, frozen=True)
class SystemSnapshot:
    """Immutable snapshot of the host, collected once per run."""

    os_name: str
    kernel: str
    arch: str
    hostname: str
    user: str
    shell: str
    terminal: str
    cpu_model: str
    uptime: str  # "1d 2h 3m" or "2h 3m"
    mem_used_mb: int
    mem_total_mb: int
    disk_used_gb: int
    disk_total_gb: int
