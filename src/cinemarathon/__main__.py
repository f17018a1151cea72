"""Entry point for ``python -m cinemarathon``."""

import logging
import sys

from cinemarathon.cli.common.error_handler import EXIT_INTERRUPTED, handle_cli_error
from cinemarathon.cli.typer_app import app

logger = logging.getLogger(__name__)


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Command interrupted by user")
        sys.exit(EXIT_INTERRUPTED)
    except SystemExit:  # pylint: disable=try-except-raise
        raise
    # pylint: disable-next=broad-exception-caught
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, "cinemarathon-main")
        sys.exit(exit_code)
