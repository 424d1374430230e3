"""tradeperf CLI main entry point."""

import click

from tradeperf import __version__
from tradeperf.cli.commands import report_command


@click.group()
@click.version_option(version=__version__)
def main():
    """tradeperf - Trade journal performance analytics"""
    pass


# Register commands
main.add_command(report_command)


if __name__ == "__main__":
    main()
