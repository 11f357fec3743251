"""Terminal rendering of a SystemSnapshot."""

import platform
from datetime import datetime
from enum import Enum

from rich.console import Console
from rich.text import Text

from cafetch.models import SystemSnapshot

LOGO_WIDTH = 20
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class Style(Enum):
    """Named style tokens, resolved to terminal styles only when printing."""

    PLAIN = ""
    BOLD = "bold"
    CYAN = "cyan"
    MAGENTA = "magenta"
    YELLOW = "yellow"
    GREEN = "green"


Segment = tuple[Style, str]
Line = tuple[Segment, ...]

BLANK: Line = ()

# A cup of coffee
LOGO: tuple[Line, ...] = (
    ((Style.CYAN, "     ( (  "),),
    ((Style.CYAN, "      ) ) "),),
    ((Style.YELLOW, "  ........ "),),
    ((Style.YELLOW, "  |      |]"),),
    ((Style.YELLOW, "  |      | "),),
    ((Style.YELLOW, "   ======  "),),
)


def percent(used: int, total: int) -> float:
    """Return used as a percentage of total, or 0.0 when total is zero."""
    if total <= 0:
        return 0.0
    return used / total * 100


def _field(style: Style, label: str, value: str) -> Line:
    return ((style, label), (Style.PLAIN, value))


def build_data_lines(snapshot: SystemSnapshot, now: datetime | None = None) -> list[Line]:
    """
    Build the labeled column of the report.

    Args:
        snapshot: Collected system facts.
        now: Render time shown on the last line. Defaults to the current time.
    """
    if now is None:
        now = datetime.now()

    mem_percent = percent(snapshot.mem_used_mb, snapshot.mem_total_mb)
    disk_percent = percent(snapshot.disk_used_gb, snapshot.disk_total_gb)

    return [
        ((Style.BOLD, f"{snapshot.user}@{snapshot.hostname}"),),
        ((Style.CYAN, "cafetch"), (Style.PLAIN, f" (Python {platform.python_version()})")),
        BLANK,
        _field(Style.YELLOW, "OS:     ", snapshot.os_name),
        _field(Style.YELLOW, "Kernel: ", snapshot.kernel),
        _field(Style.YELLOW, "Arch:   ", snapshot.arch),
        _field(Style.YELLOW, "Uptime: ", snapshot.uptime),
        BLANK,
        _field(Style.GREEN, "CPU:  ", snapshot.cpu_model),
        _field(
            Style.GREEN,
            "Mem:  ",
            f"{snapshot.mem_used_mb}MB / {snapshot.mem_total_mb}MB ({mem_percent:.1f}%)",
        ),
        _field(
            Style.GREEN,
            "Disk: ",
            f"{snapshot.disk_used_gb}GB / {snapshot.disk_total_gb}GB ({disk_percent:.1f}%)",
        ),
        BLANK,
        _field(Style.MAGENTA, "Shell: ", snapshot.shell),
        _field(Style.MAGENTA, "Term:  ", snapshot.terminal),
        _field(Style.MAGENTA, "Time:  ", now.strftime(TIME_FORMAT)),
    ]


def interleave(logo: list[Line] | tuple[Line, ...], data: list[Line]) -> list[tuple[Line, Line]]:
    """Pair logo and data lines, padding the shorter column with blank lines."""
    rows = max(len(logo), len(data))
    return [
        (
            logo[i] if i < len(logo) else BLANK,
            data[i] if i < len(data) else BLANK,
        )
        for i in range(rows)
    ]


def to_text(line: Line) -> Text:
    """Resolve a line's style tokens into a rich Text."""
    text = Text()
    for style, content in line:
        text.append(content, style=style.value)
    return text


def render_lines(snapshot: SystemSnapshot, now: datetime | None = None) -> list[Text]:
    """Render the report as one Text per output line."""
    rendered = []
    for logo_line, data_line in interleave(LOGO, build_data_lines(snapshot, now)):
        logo_text = to_text(logo_line)
        # Pad by visible width; styles carry no width
        logo_text.pad_right(max(0, LOGO_WIDTH - logo_text.cell_len))
        rendered.append(Text.assemble("  ", logo_text, "  ", to_text(data_line)))
    return rendered


def print_report(
    snapshot: SystemSnapshot,
    console: Console | None = None,
    now: datetime | None = None,
) -> None:
    """Print the report to standard output, or to the given console."""
    if console is None:
        console = Console(highlight=False, soft_wrap=True)
    for text in render_lines(snapshot, now):
        console.print(text)
