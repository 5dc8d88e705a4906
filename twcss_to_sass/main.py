"""
The main entry point for the HTML to SCSS converter.
"""
import sys
import logging

from .utils.logger import LOGGER_NAME


def main():
    """Runs the command-line interface and exits with its status."""
    log = logging.getLogger(LOGGER_NAME)

    try:
        from .cli import run_cli
        sys.exit(run_cli())
    except Exception:
        log.exception("A critical error occurred while running the CLI.")
        sys.exit(1)


if __name__ == '__main__':
    main()
