"""cafetch - command-line entry point."""

import logging
from importlib.metadata import PackageNotFoundError, version

import click

from cafetch.collector import collect_snapshot
from cafetch.presenter import print_report

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def _package_version() -> str:
    try:
        return version("cafetch")
    except PackageNotFoundError:
        return "unknown"


@click.command()
@click.option("-v", "--verbose", is_flag=True, help="Log unavailable sources to stderr.")
@click.version_option(version=_package_version(), prog_name="cafetch")
def main(verbose: bool) -> None:
    """Print a snapshot of this system next to a cup of coffee."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("cafetch").setLevel(logging.DEBUG if verbose else logging.WARNING)

    snapshot = collect_snapshot()
    logger.debug("Collected %s", snapshot)
    print_report(snapshot)


if __name__ == "__main__":
    main()
